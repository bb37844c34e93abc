"""Tests for copying auxiliary assets alongside reknitted pages."""

from __future__ import annotations

import typing as typ

import pytest

from reknit.config import CopyJob
from reknit.copy_jobs import copy_dependency
from reknit.paths import PathResolver

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def resolver(tmp_path: Path) -> PathResolver:
    return PathResolver(tmp_path, roots={"site": tmp_path})


def test_plain_file_copy_creates_parents(tmp_path: Path, resolver: PathResolver) -> None:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "client.js").write_text("let a = 1;\n", encoding="utf-8")

    target = copy_dependency(
        CopyJob(source="%site/src/client.js", target="%site/docs/js/client.js"),
        resolver,
    )

    assert target == tmp_path / "docs" / "js" / "client.js"
    assert target.read_text(encoding="utf-8") == "let a = 1;\n"


def test_directory_copy_merges_into_existing_target(
    tmp_path: Path, resolver: PathResolver
) -> None:
    source = tmp_path / "node_modules" / "leaflet" / "dist"
    (source / "images").mkdir(parents=True)
    (source / "leaflet.css").write_text("css", encoding="utf-8")
    (source / "images" / "marker.png").write_bytes(b"\x89PNG")
    existing = tmp_path / "docs" / "leaflet"
    existing.mkdir(parents=True)
    (existing / "keep.txt").write_text("keep", encoding="utf-8")

    copy_dependency(
        CopyJob(source="node_modules/leaflet/dist", target="docs/leaflet"), resolver
    )

    assert (existing / "leaflet.css").read_text(encoding="utf-8") == "css"
    assert (existing / "images" / "marker.png").read_bytes() == b"\x89PNG"
    assert (existing / "keep.txt").exists()


def test_replacement_copy_replaces_first_occurrence_only(
    tmp_path: Path, resolver: PathResolver
) -> None:
    (tmp_path / "style.css").write_text(
        "a { background: url(../img/a.png); }\nb { background: url(../img/b.png); }\n",
        encoding="utf-8",
    )

    target = copy_dependency(
        CopyJob(
            source="style.css",
            target="docs/css/style.css",
            replace_source="../img/",
            replace_target="img/",
        ),
        resolver,
    )

    assert target.read_text(encoding="utf-8") == (
        "a { background: url(img/a.png); }\nb { background: url(../img/b.png); }\n"
    )


def test_replacement_missing_from_source_is_logged(
    tmp_path: Path, resolver: PathResolver, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / "a.txt").write_text("unchanged", encoding="utf-8")

    target = copy_dependency(
        CopyJob(source="a.txt", target="b.txt", replace_source="zzz"), resolver
    )

    assert target.read_text(encoding="utf-8") == "unchanged"
    assert "'zzz' does not occur" in caplog.text


def test_missing_source_raises(resolver: PathResolver) -> None:
    with pytest.raises(FileNotFoundError, match="absent.js"):
        copy_dependency(CopyJob(source="absent.js", target="docs/absent.js"), resolver)
