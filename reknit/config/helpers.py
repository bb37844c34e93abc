"""Utility helpers shared by the reknit configuration loader."""

from __future__ import annotations

import typing as typ

from .models import ReknitConfigError, TransformSpec


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str, context: str) -> str:
    """Return ``payload[key]`` as a non-empty string or raise."""
    value = _optional_str(payload.get(key))
    if value is None:
        msg = f"{context} is missing '{key}'."
        raise ReknitConfigError(msg)
    return value


def _build_transform_spec(entry: object, context: str) -> TransformSpec:
    """Build a TransformSpec from a ``module:func`` string or a mapping."""
    match entry:
        case str() as text:
            module, sep, func = text.strip().partition(":")
            if not sep or not module or not func:
                msg = f"{context}: transform '{text}' must look like 'module:function'."
                raise ReknitConfigError(msg)
            return TransformSpec(func=func, module=module)
        case dict():
            func = _require_str(entry, "func", context)
            module = _optional_str(entry.get("module"))
            file = _optional_str(entry.get("file"))
            if bool(module) == bool(file):
                msg = f"{context}: transform '{func}' needs exactly one of 'module' or 'file'."
                raise ReknitConfigError(msg)
            return TransformSpec(func=func, module=module, file=file)
        case _:
            msg = f"{context}: transforms must be strings or mappings, got {entry!r}."
            raise ReknitConfigError(msg)


def _build_pane_handlers(
    value: object, context: str
) -> dict[str, dict[str, typ.Any]] | None:
    """Return pane handler mappings keyed by pane name, preserving order."""
    if value is None:
        return None
    if not isinstance(value, dict):
        msg = f"{context}: 'pane_handlers' must be a mapping."
        raise ReknitConfigError(msg)
    handlers: dict[str, dict[str, typ.Any]] = {}
    for key, handler in value.items():
        if not isinstance(handler, dict):
            msg = f"{context}: pane handler '{key}' must be a mapping."
            raise ReknitConfigError(msg)
        handlers[str(key)] = dict(handler)
    return handlers


__all__ = [
    "_build_pane_handlers",
    "_build_transform_spec",
    "_optional_str",
    "_require_str",
]
