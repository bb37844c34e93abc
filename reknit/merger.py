"""Merge a knitted document's widgets and content into the page template.

Knitted R Markdown output holds each scrolly section as a
``.section.level2`` block. Sections containing a Leaflet map become panes of
the scrolling layout; the Plotly widgets and ``.data-pane`` figures that
belong to those sections are lifted out of the prose and re-homed inside
``.mxcw-data`` in the template, one ``.mxcw-widgetPane`` per section, so the
page script can show them alongside the map.

Elements are moved by reference: after a merge the source tree no longer holds
them.

Examples
--------
>>> from bs4 import BeautifulSoup
>>> source = BeautifulSoup(
...     '<div class="main-container"><div class="section level2">'
...     '<div class="html-widget leaflet" style="width:100%"></div>'
...     '<div class="html-widget plotly"></div></div></div>',
...     "html.parser",
... )
>>> template = BeautifulSoup('<div class="mxcw-data"></div>', "html.parser")
>>> container = source.select_one(".main-container")
>>> sections = hide_leaflet_widgets(container)
>>> panes = move_plotly_widgets(template, sections, container)
>>> panes[0].select_one(".plotly")["data-section-index"]
'0'
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import (
    DATA_PANE_SELECTOR,
    FIGURE_SELECTOR,
    LEAFLET_SELECTOR,
    PLOTLY_SELECTOR,
    SECTION_INDEX_ATTR,
    SECTION_SELECTOR,
    TEMPLATE_DATA_SELECTOR,
    WIDGET_PANE_CLASS,
)

if typ.TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)


class TemplateStructureError(ValueError):
    """Raised when a template or source document lacks a required anchor."""


def _closest(tag: Tag, selector: str) -> Tag | None:
    """Return the nearest element matching ``selector``, ``tag`` included."""
    return tag.css.closest(selector)


def _section_index(sections: list[Tag], section: Tag | None) -> int:
    """Return the first index holding ``section`` by identity, or -1."""
    if section is None:
        return -1
    for index, candidate in enumerate(sections):
        if candidate is section:
            return index
    return -1


def hide_leaflet_widgets(container: Tag) -> list[Tag]:
    """Strip inline styles from Leaflet widgets and return their sections.

    Parameters
    ----------
    container : Tag
        The ``.main-container`` element of the knitted document.

    Returns
    -------
    list[Tag]
        The ``.section.level2`` element enclosing each Leaflet widget, in
        document order. A section holding several maps appears once per map.
        Maps outside any section are logged and left out.
    """
    widgets = container.select(LEAFLET_SELECTOR)
    sections: list[Tag] = []
    for widget in widgets:
        widget.attrs.pop("style", None)
        section = _closest(widget, SECTION_SELECTOR)
        if section is None:
            logger.warning("Ignoring Leaflet widget outside any %s", SECTION_SELECTOR)
            continue
        sections.append(section)
    logger.info("Found %d sections holding Leaflet widgets", len(sections))
    return sections


def figures_to_move(container: Tag) -> list[Tag]:
    """Return the ``.data-pane`` elements, widened to an enclosing ``.figure``."""
    widened: list[Tag] = []
    for to_move in container.select(DATA_PANE_SELECTOR):
        figure = _closest(to_move, FIGURE_SELECTOR)
        widened.append(figure or to_move)
    return widened


def move_plotly_widgets(
    template: BeautifulSoup, sections: list[Tag], container: Tag
) -> list[Tag]:
    """Move Plotly widgets and data-pane figures into per-section widget panes.

    Parameters
    ----------
    template : BeautifulSoup
        The template document receiving the widgets.
    sections : list[Tag]
        Sections returned by :func:`hide_leaflet_widgets`; pane ``N`` is
        created for ``sections[N]``.
    container : Tag
        The ``.main-container`` element of the knitted document.

    Returns
    -------
    list[Tag]
        The created ``.mxcw-widgetPane`` elements, one per section.

    Raises
    ------
    TemplateStructureError
        If the template has no ``.mxcw-data`` element.

    Notes
    -----
    Each moved element is prepended to its pane and tagged with a
    ``data-section-index`` attribute. Elements whose nearest section is not in
    ``sections`` stay where they are and are logged.
    """
    data = template.select_one(TEMPLATE_DATA_SELECTOR)
    if data is None:
        msg = (
            "Error in template structure - data pane not found with class "
            f"{TEMPLATE_DATA_SELECTOR.lstrip('.')}"
        )
        raise TemplateStructureError(msg)

    panes: list[Tag] = []
    for _section in sections:
        pane = template.new_tag("div", attrs={"class": WIDGET_PANE_CLASS})
        data.append(pane)
        panes.append(pane)

    plotlys = container.select(PLOTLY_SELECTOR)
    logger.info(
        "Found %d Plotly widgets in %d heading sections", len(plotlys), len(sections)
    )
    to_datas = figures_to_move(container)
    logger.info("Found %d elements to move to data pane", len(to_datas))

    for position, to_move in enumerate([*plotlys, *to_datas]):
        index = _section_index(sections, _closest(to_move, SECTION_SELECTOR))
        if index == -1:
            logger.warning(
                "Ignoring widget at index %d since it has no sibling map", position
            )
            continue
        logger.debug("Moving widget at index %d into pane %d", position, index)
        to_move[SECTION_INDEX_ATTR] = str(index)
        panes[index].insert(0, to_move)
    return panes


def transfer_node_content(
    source: BeautifulSoup, template: BeautifulSoup, selector: str
) -> None:
    """Replace the template node's children with the source node's, then drop it.

    Raises
    ------
    TemplateStructureError
        If either document has no element matching ``selector``.
    """
    source_node = source.select_one(selector)
    if source_node is None:
        msg = f"Source document has no element matching '{selector}'"
        raise TemplateStructureError(msg)
    template_node = template.select_one(selector)
    if template_node is None:
        msg = f"Error in template structure - no element matching '{selector}'"
        raise TemplateStructureError(msg)
    template_node.clear()
    for child in list(source_node.contents):
        template_node.append(child)
    source_node.decompose()


__all__ = [
    "TemplateStructureError",
    "figures_to_move",
    "hide_leaflet_widgets",
    "move_plotly_widgets",
    "transfer_node_content",
]
