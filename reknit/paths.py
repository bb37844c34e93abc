"""Resolve symbolic path references used in reknit configuration files.

Configuration entries may point at files with a ``%<root>/`` prefix, for
example ``%site/src/html/template.html`` or ``%leaflet_assets/dist/leaflet.js``.
The root is looked up first among the named roots registered by the config
(the project itself is always registered), then among importable Python
packages, whose directory is used as the root. Plain relative paths resolve
against the project base directory.

Examples
--------
>>> from pathlib import Path
>>> resolver = PathResolver(Path("/srv/site"), roots={"site": Path("/srv/site")})
>>> resolver.resolve("%site/docs/index.html").as_posix()
'/srv/site/docs/index.html'
>>> resolver.resolve("docs/index.html").as_posix()
'/srv/site/docs/index.html'
"""

from __future__ import annotations

import importlib.util
import re
import typing as typ
from pathlib import Path

REFERENCE_PATTERN = re.compile(r"^%(?P<root>[A-Za-z_][\w.-]*)(?:/(?P<rest>.*))?$")


class PathResolutionError(ValueError):
    """Raised when a ``%root/`` reference names an unknown root."""


def split_reference(ref: str) -> tuple[str, str] | None:
    """Return ``(root, remainder)`` for a ``%root/...`` reference, else None."""
    match = REFERENCE_PATTERN.match(ref)
    if not match:
        return None
    return match.group("root"), match.group("rest") or ""


def _package_dir(name: str) -> Path | None:
    """Return the directory of an importable package named ``name``."""
    try:
        spec = importlib.util.find_spec(name)
    except (ImportError, ValueError):
        return None
    if spec is None:
        return None
    if spec.submodule_search_locations:
        return Path(next(iter(spec.submodule_search_locations)))
    if spec.origin and spec.origin not in {"built-in", "frozen"}:
        return Path(spec.origin).parent
    return None


class PathResolver:
    """Map configuration path strings onto filesystem paths."""

    def __init__(
        self, base_dir: Path, *, roots: typ.Mapping[str, Path] | None = None
    ) -> None:
        self.base_dir = base_dir
        self.roots: dict[str, Path] = dict(roots or {})

    def resolve(self, ref: str | Path) -> Path:
        """Resolve ``ref`` into a filesystem path.

        Raises
        ------
        PathResolutionError
            If ``ref`` uses a ``%root/`` prefix that is neither a registered
            root nor an importable package.
        """
        text = str(ref)
        parts = split_reference(text)
        if parts is None:
            path = Path(text).expanduser()
            return path if path.is_absolute() else self.base_dir / path
        root, rest = parts
        root_dir = self.roots.get(root) or _package_dir(root)
        if root_dir is None:
            known = ", ".join(sorted(self.roots)) or "none"
            msg = (
                f"Cannot resolve '{text}': '{root}' is not a configured root "
                f"({known}) or an importable package."
            )
            raise PathResolutionError(msg)
        return root_dir / rest if rest else root_dir


__all__ = ["PathResolutionError", "PathResolver", "split_reference"]
