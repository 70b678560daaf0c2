"""
Preparation d'un manifeste de dataset wakeword equilibre entre sources.

Les sous-modules exposent les briques de base :
- config : lecture/validation des parametres (CLI + environnement).
- sources : resolution des sources (fichier, dossier, chemin absent).
- selection : selection diversifiee et reproductible par source.
- manifest : ecriture/relecture de dataset.json et des listes plates.

Comment l'utiliser (vue rapide):
- generer un manifeste via wakeword_manifest/cli/generate_dataset.py
- passer dataset.json / positives.txt / negatives.txt a l'entrainement
"""

__all__ = [
    "config",
    "manifest",
    "selection",
    "sources",
]
