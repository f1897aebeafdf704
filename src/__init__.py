"""
Airdates - Moteur de calendrier des sorties de séries et de films.

Ce package résout, pour une liste de titres suivis, la date à laquelle
chaque épisode ou film devient visible pour le spectateur, en croisant
plusieurs fournisseurs de métadonnées (TMDB, TVMaze, Trakt).

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (résolution, agrégation, fenêtrage)
- adapters/ : Couche infrastructure (CLI, clients API, fournisseurs)
"""
