"""Cyclopts CLI entrypoint for reknitting knitted HTML into the site template.

The ``reknit`` console script reads the build configuration (by default
``config/reknit.yaml``), merges each knitted report into its page template,
and copies the auxiliary assets the published pages depend on. Every written
path is printed so CI logs show what changed.

Examples
--------
Run every job and copy job:

>>> from reknit.cli import main
>>> main()  # doctest: +SKIP

Rebuild a single report without copying assets:

>>> from reknit.cli import app
>>> app(
...     ["build", "--job", "%site/Status.html", "--skip-copy"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_reknit_config
from .logs import configure_logging
from .pipeline import ReknitRunner

DEFAULT_CONFIG = Path("config/reknit.yaml")

app = App(name="reknit", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure(verbose: bool) -> None:
    configure_logging(logging.DEBUG if verbose else logging.INFO)


@app.command(help="Merge knitted HTML documents into the page template.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to build config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    job: typ.Annotated[
        str | None,
        Parameter(help="Only run the job with this infile", env_var="INPUT_JOB"),
    ] = None,
    skip_copy: typ.Annotated[
        bool, Parameter(help="Do not run copy jobs", env_var="INPUT_SKIP_COPY")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Log debug detail")] = False,
) -> None:
    """Run the configured reknit jobs, then the copy jobs.

    Parameters
    ----------
    config : Path, optional
        Path to the ``reknit.yaml`` build configuration (overridable via
        ``INPUT_CONFIG``).
    job : str or None, optional
        ``infile`` of a single job to run; when ``None`` (default) every job
        runs.
    skip_copy : bool, optional
        Skip the copy jobs.
    verbose : bool, optional
        Log at DEBUG rather than INFO.

    Raises
    ------
    KeyError
        If ``job`` does not name a configured job.
    """
    _configure(verbose)
    build_config = load_reknit_config(config)
    runner = ReknitRunner(build_config)
    selected = [build_config.get_job(job)] if job else None
    for path in runner.run_reknit_jobs(selected):
        print(f"wrote {_format_path(path)}")
    if not skip_copy:
        for path in runner.run_copy_jobs():
            print(f"wrote {_format_path(path)}")


@app.command(name="copy", help="Copy auxiliary assets without reknitting documents.")
def copy_assets(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to build config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    verbose: typ.Annotated[bool, Parameter(help="Log debug detail")] = False,
) -> None:
    """Run only the copy jobs from the build configuration."""
    _configure(verbose)
    runner = ReknitRunner(load_reknit_config(config))
    for path in runner.run_copy_jobs():
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `reknit` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
