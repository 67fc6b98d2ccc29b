"""
Objets valeur immutables.

- PaginatedResult : enveloppe de pagination (generique)
- RequestEnvelope / ResponseEnvelope : une requete et sa reponse
"""

from kassistant.core.value_objects.envelopes import RequestEnvelope, ResponseEnvelope
from kassistant.core.value_objects.pagination import PaginatedResult

__all__ = [
    "PaginatedResult",
    "RequestEnvelope",
    "ResponseEnvelope",
]
