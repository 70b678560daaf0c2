"""
Selection diversifiee des echantillons par source.

Pourquoi: eviter qu'une grosse collection ecrase les petites dans le dataset.
Comment: melange deterministe par source, passe "plancher" (minimum garanti
par source), puis remplissage round-robin jusqu'a la limite.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Mapping, Optional, Sequence

import numpy as np

logger = logging.getLogger(__name__)

# numpy n'accepte que des seeds >= 0.
SEED_MODULUS = 2**64


def create_rng(seed: int) -> np.random.Generator:
    """
    Construit le generateur pseudo-aleatoire d'un run.

    Pourquoi: rendre la selection reproductible sans etat global.
    Comment: np.random.default_rng avec une seed explicite; le meme objet
    est passe aux selections positives puis negatives. Toute seed entiere
    est acceptee: les negatives sont ramenees modulo 2**64.
    """
    return np.random.default_rng(int(seed) % SEED_MODULUS)


def shuffled(files: Sequence[str], rng: np.random.Generator) -> deque[str]:
    """Permutation d'un pool (et de lui seul), sous forme de file."""
    order = rng.permutation(len(files))
    return deque(files[int(i)] for i in order)


def select_diverse(
    pools: Mapping[str, Sequence[str]],
    max_total: Optional[int],
    min_per_source: int,
    rng: np.random.Generator,
) -> list[str]:
    """
    Construit la liste de selection a partir des pools par source.

    Pourquoi: garantir une contribution minimale de chaque source non vide,
    puis repartir equitablement la capacite restante.
    Comment:
    - les pools vides sont ignores;
    - chaque pool est melange independamment, dans l'ordre des sources;
    - passe plancher: min(min_per_source, taille, capacite restante) par source;
    - remplissage: un element par source et par tour, arret immediat a la
      limite ou quand un tour n'ajoute rien.
    L'ordre retourne est l'ordre d'ajout.
    """
    # Curseurs explicites (source, file restante), ordre d'entree conserve.
    queues: list[tuple[str, deque[str]]] = [
        (source, shuffled(files, rng)) for source, files in pools.items() if files
    ]
    if not queues:
        return []

    remaining: Optional[int] = max_total
    selection: list[str] = []

    # Passe plancher, bornee par la capacite restante.
    if min_per_source > 0:
        for source, queue in queues:
            take = min(min_per_source, len(queue))
            if remaining is not None:
                take = min(take, remaining)
                remaining -= take
            selection.extend(queue.popleft() for _ in range(take))
        logger.debug("Passe plancher: %d element(s)", len(selection))

    # Remplissage round-robin.
    while remaining is None or remaining > 0:
        progressed = False
        for source, queue in queues:
            if remaining is not None and remaining <= 0:
                break
            if not queue:
                continue
            selection.append(queue.popleft())
            progressed = True
            if remaining is not None:
                remaining -= 1
        if not progressed:
            break

    logger.debug("Selection: %d element(s) sur %d source(s)", len(selection), len(queues))
    return selection
