"""
Manifeste du dataset: structure, ecriture et relecture.

Pourquoi: tracer ce qui a ete selectionne et a partir de quelles sources,
et fournir les listes plates consommees par l'entrainement.
Comment: dataset.json (cles stables) + positives.txt / negatives.txt.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from wakeword_manifest.sources import candidate_counts

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "dataset.json"
POSITIVES_FILENAME = "positives.txt"
NEGATIVES_FILENAME = "negatives.txt"


class ManifestError(ValueError):
    """Manifeste illisible ou incomplet."""


@dataclass
class DatasetManifest:
    """
    Manifeste d'un run de selection.

    Pourquoi: garder ensemble les listes et les statistiques de provenance.
    Comment: listes ordonnees + compteurs par source + parametres echoes.
    """

    wake_phrase: str
    positives: list[str]
    negatives: list[str]
    positive_sources: dict[str, int] = field(default_factory=dict)
    negative_sources: dict[str, int] = field(default_factory=dict)
    min_per_source: int = 0
    max_positives: Optional[int] = None
    max_negatives: Optional[int] = None

    def summary(self) -> dict:
        return {
            "positive_sources": dict(self.positive_sources),
            "negative_sources": dict(self.negative_sources),
            "selected_positives": len(self.positives),
            "selected_negatives": len(self.negatives),
            "min_per_source": int(self.min_per_source),
            "max_positives": self.max_positives,
            "max_negatives": self.max_negatives,
        }

    def to_dict(self) -> dict:
        return {
            "wake_phrase": self.wake_phrase,
            "positives": list(self.positives),
            "negatives": list(self.negatives),
            "summary": self.summary(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DatasetManifest":
        """
        Reconstruit un manifeste depuis son dict JSON.

        Les compteurs selected_* sont derives des listes, pas relus.
        """
        try:
            summary = data["summary"]
            return cls(
                wake_phrase=str(data["wake_phrase"]),
                positives=_path_list(data["positives"], "positives"),
                negatives=_path_list(data["negatives"], "negatives"),
                positive_sources={str(k): int(v) for k, v in summary["positive_sources"].items()},
                negative_sources={str(k): int(v) for k, v in summary["negative_sources"].items()},
                min_per_source=int(summary.get("min_per_source", 0)),
                max_positives=_optional_int(summary.get("max_positives")),
                max_negatives=_optional_int(summary.get("max_negatives")),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            if isinstance(exc, ManifestError):
                raise
            raise ManifestError(f"Manifeste incomplet ou invalide: {exc}") from exc


def _path_list(value, key: str) -> list[str]:
    # Une chaine serait sinon decoupee en caracteres.
    if not isinstance(value, list):
        raise ManifestError(f"{key} doit etre une liste de chemins")
    return [str(p) for p in value]


def _optional_int(value) -> Optional[int]:
    return None if value is None else int(value)


def build_manifest(
    wake_phrase: str,
    positives: list[str],
    negatives: list[str],
    positive_pools: dict[str, list[str]],
    negative_pools: dict[str, list[str]],
    min_per_source: int,
    max_positives: Optional[int],
    max_negatives: Optional[int],
) -> DatasetManifest:
    """Assemble le manifeste; les pools vides restent avec un compteur a 0."""
    return DatasetManifest(
        wake_phrase=wake_phrase,
        positives=list(positives),
        negatives=list(negatives),
        positive_sources=candidate_counts(positive_pools),
        negative_sources=candidate_counts(negative_pools),
        min_per_source=min_per_source,
        max_positives=max_positives,
        max_negatives=max_negatives,
    )


@dataclass
class ManifestPaths:
    """Chemins des trois fichiers produits."""

    manifest: Path
    positives: Path
    negatives: Path


def write_list(path: Path, entries: Iterable[str]) -> None:
    """
    Ecrit une liste plate, un chemin par ligne, en UTF-8.

    Chaque ligne se termine par un saut de ligne, la derniere comprise.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        for item in entries:
            handle.write(f"{item}\n")


def write_manifest(manifest: DatasetManifest, output_dir: Path) -> ManifestPaths:
    """
    Ecrit dataset.json puis positives.txt puis negatives.txt.

    Pourquoi: un seul point d'ecriture pour les trois artefacts.
    Comment: les fichiers existants sont ecrases. Pas d'ecriture atomique:
    si une ecriture echoue (OSError), les fichiers deja ecrits restent.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = ManifestPaths(
        manifest=output_dir / MANIFEST_FILENAME,
        positives=output_dir / POSITIVES_FILENAME,
        negatives=output_dir / NEGATIVES_FILENAME,
    )

    with paths.manifest.open("w", encoding="utf-8") as handle:
        json.dump(manifest.to_dict(), handle, indent=2, ensure_ascii=False)
        handle.write("\n")
    write_list(paths.positives, manifest.positives)
    write_list(paths.negatives, manifest.negatives)

    logger.info("Manifeste ecrit: %s", paths.manifest)
    return paths


def load_manifest(path: Path) -> DatasetManifest:
    """
    Relit un dataset.json produit par write_manifest.

    Pourquoi: l'outillage aval utilise le manifeste comme index du dataset.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ManifestError(f"JSON invalide dans {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"Objet JSON attendu dans {path}")
    return DatasetManifest.from_dict(data)
