"""Load reknit build configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from reknit._constants import DEFAULT_NAMESPACE, DEFAULT_ROOT_NAME

from .helpers import (
    _build_pane_handlers,
    _build_transform_spec,
    _optional_str,
    _require_str,
)
from .models import CopyJob, JobOptions, ReknitConfig, ReknitConfigError, ReknitJob


def load_reknit_config(path: Path) -> ReknitConfig:
    """Load the YAML (or JSON) file describing reknit and copy jobs.

    Parameters
    ----------
    path : Path
        Filesystem path to the build configuration, for example
        ``config/reknit.yaml``.

    Returns
    -------
    ReknitConfig
        Jobs with defaults applied, the project base directory, and the named
        roots available to ``%root/`` path references.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ReknitConfigError
        If required fields are missing or malformed.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_reknit_config(Path("config/reknit.yaml"))  # doctest: +SKIP
    >>> [job.outfile for job in config.reknit_jobs]  # doctest: +SKIP
    ['%site/docs/Status.html']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}
    if not isinstance(defaults, dict):
        msg = "'defaults' must be a mapping."
        raise ReknitConfigError(msg)

    config_dir = path.resolve().parent
    base_dir = (config_dir / str(defaults.get("base_dir", "."))).resolve()
    root_name = _optional_str(defaults.get("name")) or DEFAULT_ROOT_NAME
    roots = _build_roots(raw.get("roots") or {}, base_dir)
    roots[root_name] = base_dir

    job_defaults = _JobDefaults(
        template=_optional_str(defaults.get("template")),
        plot_data_dir=_optional_str(defaults.get("plot_data_dir"))
        or f"%{root_name}/viz_data",
        namespace=_optional_str(defaults.get("namespace")) or DEFAULT_NAMESPACE,
    )

    jobs_raw = raw.get("reknit_jobs") or []
    if not isinstance(jobs_raw, list):
        msg = "'reknit_jobs' must be a list."
        raise ReknitConfigError(msg)
    jobs = [
        _build_reknit_job(index, payload, job_defaults)
        for index, payload in enumerate(jobs_raw)
    ]

    copies_raw = raw.get("copy_jobs") or []
    if not isinstance(copies_raw, list):
        msg = "'copy_jobs' must be a list."
        raise ReknitConfigError(msg)
    copy_jobs = [
        _build_copy_job(index, payload) for index, payload in enumerate(copies_raw)
    ]

    return ReknitConfig(
        base_dir=base_dir, reknit_jobs=jobs, copy_jobs=copy_jobs, roots=roots
    )


@dc.dataclass(slots=True)
class _JobDefaults:
    """Internal container for job default values."""

    template: str | None
    plot_data_dir: str
    namespace: str


def _build_roots(payload: object, base_dir: Path) -> dict[str, Path]:
    """Return named roots, resolving relative entries against ``base_dir``."""
    if not isinstance(payload, dict):
        msg = "'roots' must be a mapping of names to directories."
        raise ReknitConfigError(msg)
    roots: dict[str, Path] = {}
    for name, value in payload.items():
        directory = Path(str(value)).expanduser()
        roots[str(name)] = directory if directory.is_absolute() else base_dir / directory
    return roots


def _build_reknit_job(
    index: int, payload: object, defaults: _JobDefaults
) -> ReknitJob:
    """Build a ReknitJob for one ``reknit_jobs`` entry using defaults."""
    context = f"Reknit job #{index}"
    if not isinstance(payload, dict):
        msg = f"{context} must be a mapping."
        raise ReknitConfigError(msg)
    infile = _require_str(payload, "infile", context)
    outfile = _require_str(payload, "outfile", context)
    options_raw = payload.get("options") or {}
    if not isinstance(options_raw, dict):
        msg = f"{context}: 'options' must be a mapping."
        raise ReknitConfigError(msg)

    template = _optional_str(options_raw.get("template")) or defaults.template
    if not template:
        msg = f"{context} ('{infile}') has no template and no default template is set."
        raise ReknitConfigError(msg)

    transforms_raw = options_raw.get("transforms") or []
    if not isinstance(transforms_raw, list):
        msg = f"{context}: 'transforms' must be a list."
        raise ReknitConfigError(msg)

    options = JobOptions(
        template=template,
        transforms=[_build_transform_spec(entry, context) for entry in transforms_raw],
        pane_handlers=_build_pane_handlers(options_raw.get("pane_handlers"), context),
        plot_data_dir=_optional_str(options_raw.get("plot_data_dir"))
        or defaults.plot_data_dir,
        namespace=_optional_str(options_raw.get("namespace")) or defaults.namespace,
    )
    return ReknitJob(infile=infile, outfile=outfile, options=options)


def _build_copy_job(index: int, payload: object) -> CopyJob:
    """Build a CopyJob for one ``copy_jobs`` entry."""
    context = f"Copy job #{index}"
    if not isinstance(payload, dict):
        msg = f"{context} must be a mapping."
        raise ReknitConfigError(msg)
    replace_source = payload.get("replace_source")
    replace_target = payload.get("replace_target")
    return CopyJob(
        source=_require_str(payload, "source", context),
        target=_require_str(payload, "target", context),
        replace_source=str(replace_source) if replace_source else None,
        replace_target=str(replace_target) if replace_target is not None else "",
    )


__all__ = ["load_reknit_config"]
