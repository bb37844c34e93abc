"""Read knitted HTML into BeautifulSoup trees and write merged pages back."""

from __future__ import annotations

import logging
import typing as typ

from bs4 import BeautifulSoup, Doctype

from ._constants import DOCTYPE

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

HTML_PARSER = "html.parser"


def parse_document(path: Path) -> BeautifulSoup:
    """Parse the HTML file at ``path`` into a mutable DOM tree.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    """
    if not path.exists():
        msg = f"HTML document '{path}' not found."
        raise FileNotFoundError(msg)
    return BeautifulSoup(path.read_text(encoding="utf-8"), HTML_PARSER)


def serialize_document(document: BeautifulSoup) -> str:
    """Return ``document`` as markup headed by an HTML5 doctype.

    Only the ``<html>`` element is emitted, so any doctype or stray text the
    template carried outside it is replaced by the single leading doctype.
    Documents without an ``<html>`` element keep every node but their doctype.
    """
    root = document.find("html")
    if root is not None:
        return DOCTYPE + str(root)
    body = "".join(
        str(node) for node in document.contents if not isinstance(node, Doctype)
    )
    return DOCTYPE + body


def write_file(path: Path, data: str) -> Path:
    """Write ``data`` to ``path`` as UTF-8, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data, encoding="utf-8")
    logger.info("Written %d bytes to %s", path.stat().st_size, path)
    return path


__all__ = ["HTML_PARSER", "parse_document", "serialize_document", "write_file"]
