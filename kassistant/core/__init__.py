"""
Couche domaine (core).

Contient les modeles du serveur Kavita, les ports (interfaces abstraites)
et les objets valeur. Cette couche n'a AUCUNE dependance vers le transport
HTTP ni vers la CLI.

Sous-packages :
- entities/ : Modeles Kavita (Library, Series, UserDto, ...)
- ports/ : Interfaces abstraites definissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (pagination, enveloppes)
"""
