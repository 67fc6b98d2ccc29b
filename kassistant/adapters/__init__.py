"""
Couche adaptateurs (infrastructure).

Les adaptateurs implementent les ports definis dans core/ports/ et fournissent
des implementations concretes pour les systemes externes.

Sous-packages :
- api/ : Client HTTP du serveur Kavita (session, executeur, journal, facade)
- cli/ : Interface ligne de commande (Typer + Rich)

Modules :
- credential_store : identifiants sauvegardes (JSON local)
- openapi_catalog : description OpenAPI optionnelle (introspection)
"""
