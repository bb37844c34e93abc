"""Merge pane handler config with side-data and inject it into the template.

Each scrolly pane can carry a handler mapping in the build configuration
(which client-side component drives the pane, and its options). Data exported
alongside the knitted report, ``<key>-plotData.json``, is merged over the
handler, minus fields the page script derives itself. The merged mapping is
published to the page as ``<namespace>.scrollyPaneHandlers`` in a script
appended to the template head.

Examples
--------
>>> from pathlib import Path
>>> integrate_pane_handler({"type": "map"}, "Status", Path("/nonexistent"))
{'type': 'map'}
>>> render_pane_handler_script({"Status": {"type": "map"}}, namespace="maxwell")
'maxwell.scrollyPaneHandlers = {"Status": {"type": "map"}};\\n'
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import msgspec.json
from jinja2 import Environment, FileSystemLoader

from ._constants import CENSORED_PLOT_DATA_KEYS, DEFAULT_NAMESPACE, PLOT_DATA_TEMPLATE
from .merger import TemplateStructureError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _build_environment(templates_dir: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=False,  # noqa: S701 - renders JavaScript, not HTML
        keep_trailing_newline=True,
    )
    env.policies["json.dumps_kwargs"] = {"sort_keys": False}
    return env


_ENV = _build_environment(TEMPLATES_DIR)


def plot_data_path(data_dir: Path, key: str) -> Path:
    """Return the conventional side-data file path for pane ``key``."""
    return data_dir / PLOT_DATA_TEMPLATE.format(key=key)


def censor_keys(
    payload: cabc.Mapping[str, typ.Any] | None, keys: cabc.Iterable[str]
) -> dict[str, typ.Any]:
    """Return a copy of ``payload`` without ``keys``; None yields an empty dict."""
    excluded = set(keys)
    return {key: value for key, value in (payload or {}).items() if key not in excluded}


def integrate_pane_handler(
    handler: cabc.Mapping[str, typ.Any], key: str, data_dir: Path
) -> dict[str, typ.Any]:
    """Merge the side-data for pane ``key`` over its handler mapping.

    Parameters
    ----------
    handler : Mapping[str, Any]
        Handler fields from the build configuration.
    key : str
        Pane key; selects ``<data_dir>/<key>-plotData.json``.
    data_dir : Path
        Directory holding the side-data files.

    Returns
    -------
    dict[str, Any]
        Handler fields overlaid with the loaded data, minus the
        ``palette`` and ``taxa`` fields. When the file is missing the handler
        fields are returned unchanged.

    Raises
    ------
    msgspec.DecodeError
        If the side-data file exists but is not valid JSON.
    TypeError
        If the side-data file does not hold a JSON object.
    """
    path = plot_data_path(data_dir, key)
    plot_data: dict[str, typ.Any] | None = None
    if path.exists():
        plot_data = msgspec.json.decode(path.read_bytes())
        if not isinstance(plot_data, dict):
            msg = f"plotData file '{path}' must hold a JSON object."
            raise TypeError(msg)
    else:
        logger.warning("plotData file for pane %s not found", key)
    return {**handler, **censor_keys(plot_data, CENSORED_PLOT_DATA_KEYS)}


def integrate_pane_handlers(
    handlers: cabc.Mapping[str, cabc.Mapping[str, typ.Any]], data_dir: Path
) -> dict[str, dict[str, typ.Any]]:
    """Apply :func:`integrate_pane_handler` to every pane, preserving order."""
    return {
        key: integrate_pane_handler(handler, key, data_dir)
        for key, handler in handlers.items()
    }


def render_pane_handler_script(
    handlers: cabc.Mapping[str, typ.Any], *, namespace: str = DEFAULT_NAMESPACE
) -> str:
    """Render the JavaScript assignment publishing ``handlers``."""
    template = _ENV.get_template("pane_handlers.js.jinja")
    return template.render(namespace=namespace, handlers=handlers)


def attach_pane_handlers(
    template: BeautifulSoup,
    handlers: cabc.Mapping[str, cabc.Mapping[str, typ.Any]] | None,
    *,
    data_dir: Path,
    namespace: str = DEFAULT_NAMESPACE,
) -> Tag | None:
    """Append a script publishing the integrated handlers to the template head.

    Returns the created ``<script>`` element, or ``None`` when no handler
    mapping is configured. An empty mapping still publishes an empty object.

    Raises
    ------
    TemplateStructureError
        If the template has no ``<head>``.
    """
    if handlers is None:
        return None
    head = template.select_one("head")
    if head is None:
        msg = "Error in template structure - no <head> element"
        raise TemplateStructureError(msg)
    integrated = integrate_pane_handlers(handlers, data_dir)
    script = template.new_tag("script")
    script.string = render_pane_handler_script(integrated, namespace=namespace)
    head.append(script)
    return script


__all__ = [
    "attach_pane_handlers",
    "censor_keys",
    "integrate_pane_handler",
    "integrate_pane_handlers",
    "plot_data_path",
    "render_pane_handler_script",
]
