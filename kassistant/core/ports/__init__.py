"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

- ISeriesSource : enumeration des bibliotheques et pages de series
"""

from kassistant.core.ports.series_source import ISeriesSource

__all__ = ["ISeriesSource"]
