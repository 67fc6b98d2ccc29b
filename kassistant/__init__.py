"""
KAssistant - Client de bureau pour un serveur de bibliotheque Kavita.

Ce package expose l'API REST de Kavita via des appels types et fournit
une couche d'orchestration (execution des requetes, journalisation,
agregation des series de toutes les bibliotheques).

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (modeles, ports, objets valeur)
- services/ : Couche application (agregation, diagnostics)
- adapters/ : Couche infrastructure (CLI, client HTTP Kavita, stockage local)
"""
