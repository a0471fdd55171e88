"""Document helpers for the host page the options panel is injected into.

The renderer only needs a handful of DOM calls (``createElement``,
``createElementNS``, ``setAttribute``, ``appendChild``, ``getElementById``),
all of which ``xml.dom.minidom`` provides. Any object exposing the same
methods can stand in for a real browser document.
"""

from __future__ import annotations

from typing import Any, Protocol
from xml.dom import minidom

HTML_NS = "http://www.w3.org/1999/xhtml"
XUL_NS = "http://www.mozilla.org/keymaster/gatekeeper/there.is.only.xul"

DEFAULT_ANCHOR_ID = "detail-downloads"


class Element(Protocol):
    parentNode: Any

    def setAttribute(self, name: str, value: str) -> None: ...

    def getAttribute(self, name: str) -> str: ...

    def appendChild(self, child: Any) -> Any: ...


class Document(Protocol):
    def createElement(self, tag_name: str) -> Any: ...

    def createElementNS(self, namespace_uri: str | None, qualified_name: str) -> Any: ...

    def getElementById(self, element_id: str) -> Any: ...


def new_addon_document(anchor_id: str = DEFAULT_ANCHOR_ID) -> minidom.Document:
    """Build a minimal add-on detail page with the settings anchor in place.

    The anchor row sits inside ``detail-rows``; settings are appended to
    that container, after the anchor.
    """
    impl = minidom.getDOMImplementation()
    doc = impl.createDocument(XUL_NS, "page", None)
    page = doc.documentElement
    page.setAttribute("xmlns", XUL_NS)
    page.setAttribute("xmlns:html", HTML_NS)

    rows = doc.createElement("rows")
    rows.setAttribute("id", "detail-rows")
    rows.setIdAttribute("id")
    anchor = doc.createElement("row")
    anchor.setAttribute("id", anchor_id)
    anchor.setIdAttribute("id")
    rows.appendChild(anchor)
    page.appendChild(rows)
    return doc


def parse_document(text: str) -> minidom.Document:
    """Parse XML text, registering every ``id`` attribute for ``getElementById``."""
    doc = minidom.parseString(text)
    for element in doc.getElementsByTagName("*"):
        if element.hasAttribute("id"):
            element.setIdAttribute("id")
    return doc


def document_to_xml(doc: minidom.Document) -> str:
    return doc.documentElement.toprettyxml(indent="  ")


def find_settings(root: Any, addon_id: str | None = None) -> list[Any]:
    """Return ``setting`` elements under *root*, optionally for one add-on."""
    found = []
    for element in root.getElementsByTagName("setting"):
        if addon_id is None or element.getAttribute("data-jetpack-id") == addon_id:
            found.append(element)
    return found
