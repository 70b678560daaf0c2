"""
Lecture et validation des parametres de generation du dataset.

Pourquoi: rejeter une configuration invalide avant toute E/S disque.
Comment: les options CLI priment, l'environnement sert de valeur par defaut
(memes variables que le script de lancement de l'entrainement).
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_SEED = 42

# Variables d'environnement reconnues, par champ.
ENV_POSITIVE_SOURCES = "POSITIVE_SOURCES"
ENV_NEGATIVE_SOURCES = "NEGATIVE_SOURCES"
ENV_MAX_POSITIVES = "MAX_POSITIVE_SAMPLES"
ENV_MAX_NEGATIVES = "MAX_NEGATIVE_SAMPLES"
ENV_MIN_PER_SOURCE = "MIN_PER_SOURCE"
ENV_SEED = "DATASET_SEED"


class ConfigError(ValueError):
    """Configuration invalide: aucune sortie ne doit etre ecrite."""


@dataclass(frozen=True)
class DatasetConfig:
    """Configuration complete et validee d'un run."""

    output_dir: Path
    wake_phrase: str
    positive_sources: list[str]
    negative_sources: list[str]
    max_positives: Optional[int]
    max_negatives: Optional[int]
    min_per_source: int
    seed: int


def parse_sources(raw_sources: Optional[str]) -> list[str]:
    """
    Decoupe une liste de sources separees par des virgules.

    Pourquoi: les sources arrivent en une seule chaine (CLI ou env).
    Comment: split, trim, puis suppression des entrees vides; l'ordre est garde.
    """
    if not raw_sources:
        return []
    return [s.strip() for s in raw_sources.split(",") if s.strip()]


def parse_optional_count(value: Optional[str], label: str) -> Optional[int]:
    """
    Convertit une valeur CLI en entier positif ou nul, ou None si vide.

    Pourquoi: "" veut dire "non renseigne" pour les limites optionnelles.
    Comment: int() puis controle du signe; l'erreur nomme le champ fautif.
    """
    if value is None:
        return None
    value = str(value).strip()
    if value == "":
        return None
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigError(f"{label} doit etre un entier (recu {value!r})") from exc
    if parsed < 0:
        raise ConfigError(f"{label} doit etre >= 0 (recu {parsed})")
    return parsed


def parse_seed(value: Optional[str]) -> int:
    """Seed entiere, DEFAULT_SEED si absente."""
    if value is None or str(value).strip() == "":
        return DEFAULT_SEED
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise ConfigError(f"seed doit etre un entier (recu {value!r})") from exc


def _pick(cli_value: Optional[str], environ: Mapping[str, str], key: str) -> Optional[str]:
    # Option CLI explicite > variable d'environnement.
    if cli_value is not None:
        return cli_value
    return environ.get(key)


def load_config(args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None) -> DatasetConfig:
    """
    Construit une DatasetConfig a partir des arguments et de l'environnement.

    Pourquoi: centraliser toutes les validations avant de toucher au disque.
    Comment: fusion CLI/env champ par champ, puis controles; leve ConfigError.
    """
    if environ is None:
        environ = os.environ

    positive_sources = parse_sources(_pick(args.positive_sources, environ, ENV_POSITIVE_SOURCES))
    negative_sources = parse_sources(_pick(args.negative_sources, environ, ENV_NEGATIVE_SOURCES))
    if not positive_sources:
        raise ConfigError("Aucune source positive fournie.")
    if not negative_sources:
        raise ConfigError("Aucune source negative fournie.")

    wake_phrase = args.wake_phrase or ""
    if not wake_phrase.strip():
        raise ConfigError("wake-phrase ne peut pas etre vide.")

    max_positives = parse_optional_count(_pick(args.max_positives, environ, ENV_MAX_POSITIVES), "max-positives")
    max_negatives = parse_optional_count(_pick(args.max_negatives, environ, ENV_MAX_NEGATIVES), "max-negatives")
    min_per_source = parse_optional_count(_pick(args.min_per_source, environ, ENV_MIN_PER_SOURCE), "min-per-source")
    seed = parse_seed(_pick(args.seed, environ, ENV_SEED))

    return DatasetConfig(
        output_dir=Path(args.output_dir).expanduser(),
        wake_phrase=wake_phrase,
        positive_sources=positive_sources,
        negative_sources=negative_sources,
        max_positives=max_positives,
        max_negatives=max_negatives,
        min_per_source=min_per_source or 0,
        seed=seed,
    )
