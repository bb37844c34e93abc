"""Copy auxiliary assets (scripts, stylesheets, images) next to the output."""

from __future__ import annotations

import logging
import shutil
import typing as typ

from .documents import write_file

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import CopyJob
    from .paths import PathResolver

logger = logging.getLogger(__name__)


def copy_dependency(job: CopyJob, resolver: PathResolver) -> Path:
    """Copy ``job.source`` to ``job.target`` and return the target path.

    When ``job.replace_source`` is set the source is read as UTF-8 text, its
    first occurrence of ``replace_source`` is replaced by ``replace_target``,
    and the result is written to the target. Otherwise the file is copied as
    is, or the whole tree when the source is a directory, merging into any
    existing target directory.

    Raises
    ------
    FileNotFoundError
        If the source does not exist.
    """
    source = resolver.resolve(job.source)
    target = resolver.resolve(job.target)
    if not source.exists():
        msg = f"Copy source '{source}' not found."
        raise FileNotFoundError(msg)

    if job.replace_source:
        text = source.read_text(encoding="utf-8")
        if job.replace_source not in text:
            logger.warning("'%s' does not occur in %s", job.replace_source, source)
        replaced = text.replace(job.replace_source, job.replace_target, 1)
        return write_file(target, replaced)

    if source.is_dir():
        shutil.copytree(source, target, dirs_exist_ok=True)
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)
    logger.info("Copied %s to %s", source, target)
    return target


__all__ = ["copy_dependency"]
