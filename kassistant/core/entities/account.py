"""Modeles d'authentification et d'utilisateurs Kavita."""

from datetime import datetime
from typing import Optional

from kassistant.core.entities.base import KavitaModel


class LoginRequest(KavitaModel):
    """Corps de POST /api/Account/login."""

    username: str
    password: str


class UserDto(KavitaModel):
    """
    Utilisateur courant tel que renvoye par le login.

    Le champ token est le jeton Bearer a attacher aux appels suivants ;
    il est absent des reponses qui ne proviennent pas du login.
    """

    id: int = 0
    username: str = ""
    email: Optional[str] = None
    token: Optional[str] = None
    refresh_token: Optional[str] = None
    api_key: Optional[str] = None


class User(KavitaModel):
    """Compte utilisateur (administration)."""

    id: int
    username: str = ""
    email: Optional[str] = None
    is_admin: bool = False
    is_pending: bool = False
    created: Optional[datetime] = None
    last_active: Optional[datetime] = None
