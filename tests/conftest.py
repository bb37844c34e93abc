"""Shared markup and site-tree fixtures for the reknit test suite.

The knitted report mirrors what ``rmarkdown::html_document`` emits: a
``.main-container`` holding ``.section.level2`` blocks, some with Leaflet maps,
Plotly widgets, and ``.data-pane`` figures. The template carries the anchors
the merger relies on (``.mxcw-data``, ``.mxcw-content``, ``h1``, ``title``).
"""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest
from bs4 import BeautifulSoup

if typ.TYPE_CHECKING:
    from pathlib import Path

KNITTED_HTML = dedent(
    """\
    <!DOCTYPE html>
    <html>
    <head><meta charset="utf-8"><title>Reporting Status</title></head>
    <body>
    <div class="container-fluid main-container">
    <h1 class="title toc-ignore">Reporting Status of <em>Vascular</em> Plants</h1>
    <div id="intro" class="section level2">
    <h2>Introduction</h2>
    <p>Records gathered by community scientists.</p>
    <div id="intro-plot" class="html-widget plotly"></div>
    </div>
    <div id="status" class="section level2">
    <h2>Reporting status</h2>
    <div id="status-map" class="leaflet html-widget" style="width:100%;height:400px;"></div>
    <div class="figure"><div id="status-table" class="data-pane"></div><p class="caption">Taxa by status</p></div>
    </div>
    <div id="richness" class="section level2">
    <h2>Species richness</h2>
    <div id="richness-map" class="html-widget leaflet" style="height:400px"></div>
    <div id="richness-plot" class="html-widget plotly"></div>
    </div>
    </div>
    </body>
    </html>
    """
)

TEMPLATE_HTML = dedent(
    """\
    <!DOCTYPE html>
    <html lang="en">
    <head><meta charset="utf-8"><title>Template title</title><script src="js/client.js"></script></head>
    <body>
    <header class="mxcw-header"><h1>Template heading</h1></header>
    <div class="mxcw-container">
    <div class="mxcw-content"></div>
    <div class="mxcw-data"></div>
    </div>
    </body>
    </html>
    """
)

SiteTree = dict[str, "Path"]


@pytest.fixture
def knitted() -> BeautifulSoup:
    """Return the knitted report parsed with the same parser as the pipeline."""
    return BeautifulSoup(KNITTED_HTML, "html.parser")


@pytest.fixture
def template() -> BeautifulSoup:
    """Return the page template parsed with the same parser as the pipeline."""
    return BeautifulSoup(TEMPLATE_HTML, "html.parser")


@pytest.fixture
def site(tmp_path: Path) -> SiteTree:
    """Lay out a small project: report, template, side-data, and config dir."""
    (tmp_path / "src" / "html").mkdir(parents=True)
    (tmp_path / "viz_data").mkdir()
    (tmp_path / "config").mkdir()
    report = tmp_path / "Status.html"
    report.write_text(KNITTED_HTML, encoding="utf-8")
    template_path = tmp_path / "src" / "html" / "template.html"
    template_path.write_text(TEMPLATE_HTML, encoding="utf-8")
    return {
        "root": tmp_path,
        "report": report,
        "template": template_path,
        "viz_data": tmp_path / "viz_data",
        "config": tmp_path / "config" / "reknit.yaml",
    }
