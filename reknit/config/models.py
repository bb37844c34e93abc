"""Typed dataclasses describing reknit build configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from reknit._constants import DEFAULT_NAMESPACE
from reknit.paths import PathResolver


class ReknitConfigError(ValueError):
    """Raised when the build configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class TransformSpec:
    """Reference to a transform plugin callable.

    Exactly one of ``module`` (a dotted import path) or ``file`` (a path
    reference to a Python source file) is set; ``func`` names the callable.
    """

    func: str
    module: str | None = None
    file: str | None = None

    @property
    def label(self) -> str:
        """Return a human-readable ``origin:func`` label for diagnostics."""
        return f"{self.module or self.file}:{self.func}"


@dc.dataclass(slots=True)
class JobOptions:
    """Per-job options controlling how a knitted document is merged."""

    template: str
    transforms: list[TransformSpec] = dc.field(default_factory=list)
    pane_handlers: dict[str, dict[str, typ.Any]] | None = None
    plot_data_dir: str = "viz_data"
    namespace: str = DEFAULT_NAMESPACE


@dc.dataclass(slots=True)
class ReknitJob:
    """A single source document to merge into its template."""

    infile: str
    outfile: str
    options: JobOptions


@dc.dataclass(slots=True)
class CopyJob:
    """Copy an auxiliary file, optionally replacing one substring on the way."""

    source: str
    target: str
    replace_source: str | None = None
    replace_target: str = ""


@dc.dataclass(slots=True)
class ReknitConfig:
    """Resolved build configuration: jobs, copy jobs, and path roots."""

    base_dir: Path
    reknit_jobs: list[ReknitJob]
    copy_jobs: list[CopyJob] = dc.field(default_factory=list)
    roots: dict[str, Path] = dc.field(default_factory=dict)

    def resolver(self) -> PathResolver:
        """Return a :class:`PathResolver` bound to this config's roots."""
        return PathResolver(self.base_dir, roots=self.roots)

    def get_job(self, infile: str) -> ReknitJob:
        """Return the job whose ``infile`` matches ``infile``."""
        for job in self.reknit_jobs:
            if job.infile == infile:
                return job
        available = ", ".join(job.infile for job in self.reknit_jobs)
        msg = f"Unknown job '{infile}'. Known jobs: {available}"
        raise KeyError(msg)


__all__ = [
    "CopyJob",
    "JobOptions",
    "ReknitConfig",
    "ReknitConfigError",
    "ReknitJob",
    "TransformSpec",
]
