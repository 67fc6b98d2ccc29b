"""
Taxonomie des erreurs de l'API Kavita.

Chaque echec d'appel est classe une seule fois par RequestExecutor :
- ConnectivityError : DNS, connexion refusee ou reinitialisee
- RequestTimeoutError : delai fixe depasse
- HttpStatusError : le serveur a repondu hors de la plage 2xx
- DeserializationError : le corps ne correspond pas au type attendu
- SessionNotConfiguredError : aucune adresse de serveur definie

PartialAggregationError n'est jamais levee vers l'appelant : l'agregateur
l'enregistre pour la bibliotheque en echec et continue.
"""

from typing import Optional


class KavitaApiError(Exception):
    """
    Erreur de base pour un appel a l'API Kavita.

    Attributes:
        method: Methode HTTP de l'appel en echec
        path: Chemin appele (avec parametres de requete)
    """

    def __init__(self, message: str, method: str = "", path: str = "") -> None:
        self.method = method
        self.path = path
        super().__init__(message)


class SessionNotConfiguredError(KavitaApiError):
    """Levee quand aucune adresse de serveur n'a ete definie."""

    def __init__(self, method: str = "", path: str = "") -> None:
        super().__init__(
            "Adresse du serveur non definie. Appeler set_target() d'abord.",
            method,
            path,
        )


class ConnectivityError(KavitaApiError):
    """Le serveur est injoignable (DNS, refus, reinitialisation)."""


class RequestTimeoutError(KavitaApiError):
    """
    L'appel a depasse le delai fixe.

    Attributes:
        timeout: Delai applique en secondes
    """

    def __init__(self, method: str, path: str, timeout: Optional[float] = None) -> None:
        self.timeout = timeout
        super().__init__(f"Delai depasse pour {method} {path} ({timeout}s)", method, path)


class HttpStatusError(KavitaApiError):
    """
    Le serveur a renvoye un statut hors de la plage 2xx.

    Attributes:
        status_code: Code HTTP recu
        body: Corps de la reponse (texte brut)
    """

    def __init__(self, method: str, path: str, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API Error: {path} returned {status_code}", method, path)


class DeserializationError(KavitaApiError):
    """
    Le corps de la reponse ne correspond pas au type attendu.

    Attributes:
        payload: Corps recu, tronque pour le journal
    """

    def __init__(self, method: str, path: str, payload: str, reason: str = "") -> None:
        self.payload = payload
        self.reason = reason
        super().__init__(f"Reponse illisible pour {method} {path}: {reason}", method, path)


class PartialAggregationError(KavitaApiError):
    """
    Echec d'une bibliotheque pendant l'agregation.

    Attributes:
        library_id: Bibliotheque abandonnee
        library_name: Nom de la bibliotheque
        cause: Erreur d'origine
    """

    def __init__(self, library_id: int, library_name: str, cause: Exception) -> None:
        self.library_id = library_id
        self.library_name = library_name
        self.cause = cause
        method = getattr(cause, "method", "")
        path = getattr(cause, "path", "")
        super().__init__(
            f"Bibliotheque {library_name} (ID: {library_id}) ignoree: {cause}",
            method,
            path,
        )
