"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), et objets valeur.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, HTTP).

Sous-packages :
- entities/ : Entités métier (TrackedTitle, ResolvedScheduleEntry, CalendarWindow)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (ProviderRecord, RawDate, ScheduleSettings)
"""
