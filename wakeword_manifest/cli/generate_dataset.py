"""
CLI de generation du manifeste de dataset wakeword.

Pourquoi: produire en une commande un dataset equilibre entre sources,
reproductible, avant de lancer l'entrainement.
Comment: validation de la config, resolution des sources, selection
positive puis negative avec le meme RNG, ecriture, resume sur stdout.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from wakeword_manifest.config import ConfigError, DatasetConfig, load_config
from wakeword_manifest.manifest import DatasetManifest, ManifestPaths, build_manifest, write_manifest
from wakeword_manifest.selection import create_rng, select_diverse
from wakeword_manifest.sources import resolve_sources

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """
    Construit le parser d'arguments.

    Pourquoi: exposer le contrat attendu par le script d'entrainement.
    Comment: les valeurs numeriques restent des chaines ("" = non renseigne)
    et sont validees dans wakeword_manifest.config.
    """
    parser = argparse.ArgumentParser(description="Génère un manifeste de dataset diversifié pour l'entraînement wakeword.")
    parser.add_argument("--output-dir", required=True, help="Dossier de sortie (dataset.json, positives.txt, negatives.txt)")
    parser.add_argument("--wake-phrase", required=True, help="Phrase d'activation")
    parser.add_argument("--positive-sources", default=None, help="Sources positives séparées par des virgules (env POSITIVE_SOURCES)")
    parser.add_argument("--negative-sources", default=None, help="Sources négatives séparées par des virgules (env NEGATIVE_SOURCES)")
    parser.add_argument("--max-positives", default=None, help="Nombre max de positifs, vide = illimité")
    parser.add_argument("--max-negatives", default=None, help="Nombre max de négatifs, vide = illimité")
    parser.add_argument("--min-per-source", default=None, help="Minimum garanti par source non vide")
    parser.add_argument("--seed", default=None, help="Seed RNG pour reproductibilité (défaut 42)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Logs détaillés sur stderr")
    return parser


def configure_logging(verbose: bool) -> None:
    # stderr seulement: stdout est reserve au resume JSON.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def generate_dataset(config: DatasetConfig) -> tuple[DatasetManifest, ManifestPaths]:
    """
    Execute un run complet a partir d'une configuration validee.

    Pourquoi: garder l'orchestration testable sans passer par argparse.
    Comment: un seul RNG, consomme d'abord par les positifs puis les negatifs.
    """
    rng = create_rng(config.seed)

    positive_pools = resolve_sources(config.positive_sources)
    negative_pools = resolve_sources(config.negative_sources)

    positives = select_diverse(positive_pools, config.max_positives, config.min_per_source, rng)
    negatives = select_diverse(negative_pools, config.max_negatives, config.min_per_source, rng)

    manifest = build_manifest(
        wake_phrase=config.wake_phrase,
        positives=positives,
        negatives=negatives,
        positive_pools=positive_pools,
        negative_pools=negative_pools,
        min_per_source=config.min_per_source,
        max_positives=config.max_positives,
        max_negatives=config.max_negatives,
    )
    paths = write_manifest(manifest, config.output_dir)
    return manifest, paths


def print_summary(manifest: DatasetManifest) -> None:
    """Affiche le bloc summary en JSON sur stdout."""
    print(json.dumps(manifest.summary(), indent=2, ensure_ascii=False))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Point d'entree CLI.

    Retourne 0 en cas de succes, 1 si la configuration est invalide
    (dans ce cas rien n'est ecrit sur disque).
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args)
    except ConfigError as exc:
        print(f"Erreur de configuration: {exc}", file=sys.stderr)
        return 1

    manifest, paths = generate_dataset(config)
    logger.info(
        "%d positif(s), %d négatif(s) -> %s",
        len(manifest.positives),
        len(manifest.negatives),
        paths.manifest.parent,
    )
    print_summary(manifest)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
