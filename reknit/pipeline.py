"""Run reknit jobs: merge knitted documents into templates, then copy assets.

This module ties the pieces together. :func:`reknit_file` handles one
document: it parses the knitted source and its template, moves the widgets
into per-section panes, carries over the heading and title, applies transform
plugins, drops the remaining content into the template's content slot,
publishes pane handler data, and writes the result. :class:`ReknitRunner`
applies every configured job in order and then the copy jobs.

Example
-------
>>> from pathlib import Path
>>> from reknit.config import load_reknit_config
>>> from reknit.pipeline import ReknitRunner
>>> config = load_reknit_config(Path("config/reknit.yaml"))  # doctest: +SKIP
>>> ReknitRunner(config).run()  # doctest: +SKIP
[PosixPath('/srv/site/docs/Status.html'), ...]
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import SOURCE_CONTAINER_SELECTOR, TEMPLATE_CONTENT_SELECTOR
from .copy_jobs import copy_dependency
from .documents import parse_document, serialize_document, write_file
from .merger import (
    TemplateStructureError,
    hide_leaflet_widgets,
    move_plotly_widgets,
    transfer_node_content,
)
from .pane_handlers import attach_pane_handlers
from .transforms import run_transforms

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import ReknitConfig, ReknitJob
    from .paths import PathResolver

logger = logging.getLogger(__name__)


def reknit_file(job: ReknitJob, resolver: PathResolver) -> Path:
    """Merge ``job.infile`` into its template and write ``job.outfile``.

    Parameters
    ----------
    job : ReknitJob
        The job to run; paths may use ``%root/`` references.
    resolver : PathResolver
        Resolves the job's path references.

    Returns
    -------
    Path
        The written output path.

    Raises
    ------
    FileNotFoundError
        If the source or template document is missing.
    TemplateStructureError
        If the source lacks ``.main-container`` or the template lacks one of
        its anchors. Nothing is written in that case.
    """
    options = job.options
    infile = resolver.resolve(job.infile)
    logger.info("Reknitting %s", infile)
    document = parse_document(infile)
    container = document.select_one(SOURCE_CONTAINER_SELECTOR)
    if container is None:
        msg = f"Source document '{infile}' has no {SOURCE_CONTAINER_SELECTOR} element"
        raise TemplateStructureError(msg)
    sections = hide_leaflet_widgets(container)
    template = parse_document(resolver.resolve(options.template))
    move_plotly_widgets(template, sections, container)

    transfer_node_content(document, template, "h1")
    transfer_node_content(document, template, "title")

    run_transforms(options.transforms, template, container, resolver=resolver)

    target = template.select_one(TEMPLATE_CONTENT_SELECTOR)
    if target is None:
        msg = (
            "Error in template structure - content pane not found with class "
            f"{TEMPLATE_CONTENT_SELECTOR.lstrip('.')}"
        )
        raise TemplateStructureError(msg)
    target.append(container)

    attach_pane_handlers(
        template,
        options.pane_handlers,
        data_dir=resolver.resolve(options.plot_data_dir),
        namespace=options.namespace,
    )
    return write_file(resolver.resolve(job.outfile), serialize_document(template))


class ReknitRunner:
    """Run every configured reknit job, then every copy job, in order."""

    def __init__(self, config: ReknitConfig) -> None:
        self.config = config
        self.resolver = config.resolver()

    def run(self, *, include_copies: bool = True) -> list[Path]:
        """Run all jobs and return the written paths in execution order."""
        written = self.run_reknit_jobs()
        if include_copies:
            written.extend(self.run_copy_jobs())
        return written

    def run_reknit_jobs(self, jobs: list[ReknitJob] | None = None) -> list[Path]:
        """Run ``jobs`` (all configured jobs by default) one at a time."""
        selected = self.config.reknit_jobs if jobs is None else jobs
        return [reknit_file(job, self.resolver) for job in selected]

    def run_copy_jobs(self) -> list[Path]:
        """Run the configured copy jobs one at a time."""
        return [copy_dependency(job, self.resolver) for job in self.config.copy_jobs]


__all__ = ["ReknitRunner", "reknit_file"]
