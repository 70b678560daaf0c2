"""
Resolution des sources audio (fichier, dossier ou chemin absent).

Pourquoi: transformer des specificateurs heterogenes en listes de candidats.
Comment: un fichier compte pour lui-meme, un dossier est parcouru
recursivement (extensions audio uniquement), un chemin absent donne un pool vide.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

# Extensions reconnues comme audio (comparaison insensible a la casse).
AUDIO_EXTS = {".wav", ".flac", ".mp3", ".ogg", ".m4a"}

KIND_FILE = "file"
KIND_DIRECTORY = "directory"
KIND_MISSING = "missing"


@dataclass
class ResolvedSource:
    """Une source resolue: son type et ses fichiers candidats."""

    specifier: str
    kind: str
    files: list[str] = field(default_factory=list)


def is_audio_file(path: Path) -> bool:
    return path.suffix.lower() in AUDIO_EXTS


def list_audio_files(directory: Path) -> list[str]:
    """
    Liste triee des fichiers audio d'un dossier, recursivement.

    Pourquoi: ordre stable pour la reproductibilite, quel que soit le FS.
    Comment: os.walk sans suivre les liens symboliques de dossiers, donc
    un cycle de liens ne peut pas bloquer le parcours.
    """
    found: list[str] = []
    for root, dirs, files in os.walk(directory, followlinks=False):
        dirs.sort()
        for name in sorted(files):
            candidate = Path(root) / name
            if is_audio_file(candidate) and candidate.is_file():
                found.append(str(candidate))
    return found


def resolve_source(specifier: str) -> ResolvedSource:
    """
    Resout un specificateur en ResolvedSource.

    Un fichier existant est retenu quelle que soit son extension.
    """
    path = Path(specifier).expanduser()
    if path.is_file():
        return ResolvedSource(specifier, KIND_FILE, [str(path)])
    if path.is_dir():
        return ResolvedSource(specifier, KIND_DIRECTORY, list_audio_files(path))
    # Ni fichier ni dossier: pas une erreur, juste zero candidat.
    logger.warning("Source introuvable, ignoree: %s", specifier)
    return ResolvedSource(specifier, KIND_MISSING, [])


def resolve_sources(specifiers: Iterable[str]) -> dict[str, list[str]]:
    """
    Resout une liste ordonnee de specificateurs en pools.

    Pourquoi: le selecteur et le manifeste travaillent sur un mapping
    source -> fichiers qui respecte l'ordre d'entree.
    Comment: resolve_source pour chacun, insertion dans un dict ordonne.
    Les doublons entre sources ne sont pas supprimes.
    """
    pools: dict[str, list[str]] = {}
    for specifier in specifiers:
        resolved = resolve_source(specifier)
        logger.info("Source %s (%s): %d candidat(s)", specifier, resolved.kind, len(resolved.files))
        pools[specifier] = resolved.files
    return pools


def candidate_counts(pools: dict[str, list[str]]) -> dict[str, int]:
    """Nombre de candidats par source, pour le resume du manifeste."""
    return {source: len(files) for source, files in pools.items()}
