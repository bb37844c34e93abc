"""Tests for ``%root/`` path reference resolution."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from reknit.paths import PathResolutionError, PathResolver, split_reference


def test_split_reference() -> None:
    assert split_reference("%site/docs/a.html") == ("site", "docs/a.html")
    assert split_reference("%site") == ("site", "")
    assert split_reference("docs/a.html") is None
    assert split_reference("100%/x") is None


def test_named_roots_and_relative_paths(tmp_path: Path) -> None:
    vendor = tmp_path / "node_modules"
    resolver = PathResolver(tmp_path, roots={"site": tmp_path, "vendor": vendor})

    assert resolver.resolve("%site/docs/a.html") == tmp_path / "docs" / "a.html"
    assert resolver.resolve("%vendor") == vendor
    assert resolver.resolve("docs/a.html") == tmp_path / "docs" / "a.html"
    assert resolver.resolve(tmp_path / "abs.html") == tmp_path / "abs.html"


def test_package_root_resolves_to_package_directory(tmp_path: Path) -> None:
    resolver = PathResolver(tmp_path)

    resolved = resolver.resolve("%json/decoder.py")

    assert resolved == Path(json.__file__).parent / "decoder.py"


def test_configured_root_shadows_package(tmp_path: Path) -> None:
    resolver = PathResolver(tmp_path, roots={"json": tmp_path})

    assert resolver.resolve("%json/x") == tmp_path / "x"


def test_unknown_root_raises(tmp_path: Path) -> None:
    resolver = PathResolver(tmp_path, roots={"site": tmp_path})

    with pytest.raises(PathResolutionError, match="reknit_unknown_root"):
        resolver.resolve("%reknit_unknown_root/file.js")
