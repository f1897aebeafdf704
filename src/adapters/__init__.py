"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- api/ : Clients HTTP des fournisseurs (TMDB, TVMaze, Trakt)
- providers/ : Adaptateurs de fournisseurs (JSON brut -> ProviderRecord)
- watchlist/ : Source des titres suivis (fichier JSON)
- cli/ : Interface ligne de commande (Typer)

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
Cela permet de changer les implémentations sans affecter la logique métier.
"""
