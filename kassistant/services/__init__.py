"""
Couche application (services).

- SeriesAggregatorService : vue unifiee des series de toutes les bibliotheques
- DiagnosticsService : suite de verifications des endpoints Kavita
"""
