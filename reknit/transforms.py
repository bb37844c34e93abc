"""Load and run per-document transform plugins.

A transform is any callable accepting ``(template, container)``: the merged
template document and the knitted ``.main-container`` element, before the
container is moved into the template. Transforms are referenced from the
build configuration either by import path (``"package.module:function"``) or
by a Python source file plus function name, and run one after another in the
configured order.

Examples
--------
>>> from reknit.config import TransformSpec
>>> spec = TransformSpec(func="loads", module="json")
>>> load_transform(spec).__name__
'loads'
"""

from __future__ import annotations

import asyncio
import hashlib
import importlib
import importlib.util
import inspect
import logging
import sys
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from types import ModuleType

    from bs4 import BeautifulSoup, Tag

    from .config import TransformSpec
    from .paths import PathResolver

    Transform = cabc.Callable[[BeautifulSoup, Tag], object]

logger = logging.getLogger(__name__)


class TransformError(RuntimeError):
    """Raised when a configured transform cannot be loaded."""


def _load_module_from_file(ref: str, resolver: PathResolver | None) -> ModuleType:
    """Import the Python source file named by ``ref`` under a private name."""
    path = resolver.resolve(ref) if resolver else Path(ref)
    if not path.is_file():
        msg = f"Transform file '{path}' not found."
        raise TransformError(msg)
    digest = hashlib.sha1(str(path.resolve()).encode("utf-8")).hexdigest()[:12]  # noqa: S324
    name = f"_reknit_transform_{path.stem}_{digest}"
    if name in sys.modules:
        return sys.modules[name]
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot import transform file '{path}'."
        raise TransformError(msg)
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[name]
        raise
    return module


def load_transform(
    spec: TransformSpec, resolver: PathResolver | None = None
) -> Transform:
    """Return the callable referenced by ``spec``.

    Raises
    ------
    TransformError
        If the module or file cannot be found, or the named attribute is
        missing or not callable.
    """
    if spec.module:
        try:
            module = importlib.import_module(spec.module)
        except ImportError as exc:
            msg = f"Cannot import transform module '{spec.module}': {exc}"
            raise TransformError(msg) from exc
    else:
        module = _load_module_from_file(spec.file or "", resolver)

    transform = getattr(module, spec.func, None)
    if transform is None:
        msg = f"Transform '{spec.label}' not found."
        raise TransformError(msg)
    if not callable(transform):
        msg = f"Transform '{spec.label}' is not callable."
        raise TransformError(msg)
    return transform


def run_transforms(
    specs: cabc.Sequence[TransformSpec],
    template: BeautifulSoup,
    container: Tag,
    *,
    resolver: PathResolver | None = None,
) -> None:
    """Load and apply each transform in order, finishing one before the next.

    A transform returning an awaitable is run to completion on a fresh event
    loop before the following transform is loaded.
    """
    for spec in specs:
        transform = load_transform(spec, resolver)
        logger.info("Applying transform %s", spec.label)
        result = transform(template, container)
        if inspect.isawaitable(result):
            asyncio.run(_await(result))


async def _await(awaitable: cabc.Awaitable[object]) -> object:
    """Await ``awaitable`` so ``asyncio.run`` can drive any awaitable."""
    return await awaitable


__all__ = ["TransformError", "load_transform", "run_transforms"]
