from pathlib import Path

import pytest

from wakeword_manifest import config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        config.ENV_POSITIVE_SOURCES,
        config.ENV_NEGATIVE_SOURCES,
        config.ENV_MAX_POSITIVES,
        config.ENV_MAX_NEGATIVES,
        config.ENV_MIN_PER_SOURCE,
        config.ENV_SEED,
    ):
        monkeypatch.delenv(key, raising=False)


def make_audio_dir(root: Path, name: str, count: int, ext: str = ".wav") -> Path:
    directory = root / name
    directory.mkdir(parents=True, exist_ok=True)
    for i in range(count):
        (directory / f"{name}_{i:03d}{ext}").write_bytes(b"")
    return directory


@pytest.fixture
def audio_dirs(tmp_path):
    """Sources A (5 fichiers), B (2 fichiers) et C (absente)."""
    a = make_audio_dir(tmp_path, "A", 5)
    b = make_audio_dir(tmp_path, "B", 2)
    c = tmp_path / "C"
    return a, b, c
