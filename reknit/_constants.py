"""Selectors and literal values shared across the reknit pipeline.

Keeping the class names in one place lets the merger, the pane-handler
integrator, and the tests agree on the markup contract between knitted
documents and the page template.

Examples
--------
>>> from reknit import _constants
>>> _constants.PLOT_DATA_TEMPLATE.format(key="Status")
'Status-plotData.json'
>>> _constants.SECTION_SELECTOR
'.section.level2'
"""

SOURCE_CONTAINER_SELECTOR = ".main-container"
SECTION_SELECTOR = ".section.level2"
LEAFLET_SELECTOR = ".html-widget.leaflet"
PLOTLY_SELECTOR = ".html-widget.plotly"
DATA_PANE_SELECTOR = ".data-pane"
FIGURE_SELECTOR = ".figure"

TEMPLATE_DATA_SELECTOR = ".mxcw-data"
TEMPLATE_CONTENT_SELECTOR = ".mxcw-content"
WIDGET_PANE_CLASS = "mxcw-widgetPane"
SECTION_INDEX_ATTR = "data-section-index"

PLOT_DATA_TEMPLATE = "{key}-plotData.json"
CENSORED_PLOT_DATA_KEYS = ("palette", "taxa")

DEFAULT_NAMESPACE = "maxwell"
DEFAULT_ROOT_NAME = "site"
DOCTYPE = "<!DOCTYPE html>"
