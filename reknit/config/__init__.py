"""Load and validate the reknit build configuration.

This subpackage parses the project's ``reknit.yaml`` file (JSON is accepted
as well, being valid YAML 1.2), applies job defaults, registers the named
roots used by ``%root/`` path references, and produces typed dataclasses
(:class:`ReknitConfig`, :class:`ReknitJob`, :class:`CopyJob`) that the build
pipeline consumes. The primary entry point is :func:`load_reknit_config`.

Examples
--------
>>> from pathlib import Path
>>> from reknit.config import load_reknit_config
>>> config = load_reknit_config(Path("config/reknit.yaml"))  # doctest: +SKIP
>>> config.reknit_jobs[0].options.namespace  # doctest: +SKIP
'maxwell'
"""

from .loader import load_reknit_config
from .models import (
    CopyJob,
    JobOptions,
    ReknitConfig,
    ReknitConfigError,
    ReknitJob,
    TransformSpec,
)

__all__ = [
    "CopyJob",
    "JobOptions",
    "ReknitConfig",
    "ReknitConfigError",
    "ReknitJob",
    "TransformSpec",
    "load_reknit_config",
]
