import os

import pytest

from tests.conftest import make_audio_dir
from wakeword_manifest.sources import (
    KIND_DIRECTORY,
    KIND_FILE,
    KIND_MISSING,
    candidate_counts,
    list_audio_files,
    resolve_source,
    resolve_sources,
)


def test_directory_is_scanned_recursively_with_audio_extensions_only(tmp_path):
    root = tmp_path / "data"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "a.wav").write_bytes(b"")
    (root / "sub" / "b.FLAC").write_bytes(b"")
    (root / "sub" / "deeper" / "c.Mp3").write_bytes(b"")
    (root / "sub" / "d.ogg").write_bytes(b"")
    (root / "sub" / "e.m4a").write_bytes(b"")
    (root / "notes.txt").write_bytes(b"")
    (root / "sub" / "f.wav.bak").write_bytes(b"")

    files = list_audio_files(root)

    names = sorted(os.path.basename(f) for f in files)
    assert names == ["a.wav", "b.FLAC", "c.Mp3", "d.ogg", "e.m4a"]
    assert files == list_audio_files(root)


def test_single_file_source_ignores_extension(tmp_path):
    target = tmp_path / "clip.txt"
    target.write_text("not audio", encoding="utf-8")

    resolved = resolve_source(str(target))

    assert resolved.kind == KIND_FILE
    assert resolved.files == [str(target)]


def test_missing_source_yields_empty_pool(tmp_path, caplog):
    missing = tmp_path / "nope"

    resolved = resolve_source(str(missing))

    assert resolved.kind == KIND_MISSING
    assert resolved.files == []
    assert "nope" in caplog.text


def test_resolve_sources_preserves_order_and_keeps_missing(audio_dirs):
    a, b, c = audio_dirs
    specifiers = [str(b), str(c), str(a)]

    pools = resolve_sources(specifiers)

    assert list(pools) == specifiers
    assert candidate_counts(pools) == {str(b): 2, str(c): 0, str(a): 5}
    assert resolve_source(str(a)).kind == KIND_DIRECTORY


def test_pools_are_not_deduplicated_across_sources(tmp_path):
    directory = make_audio_dir(tmp_path, "shared", 2)
    single = directory / "shared_000.wav"

    pools = resolve_sources([str(directory), str(single)])

    assert str(single) in pools[str(directory)]
    assert pools[str(single)] == [str(single)]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks indisponibles")
def test_symlink_cycle_does_not_hang(tmp_path):
    root = make_audio_dir(tmp_path, "loop", 1)
    try:
        os.symlink(root, root / "self", target_is_directory=True)
    except OSError:
        pytest.skip("creation de symlink refusee")

    files = list_audio_files(root)

    assert files == [str(root / "loop_000.wav")]
