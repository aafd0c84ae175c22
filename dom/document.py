"""HTML document wrapper used by optimizer transformers.

Markup is parsed through Scrapy's Selector so that queries behave the same
way as in spiders; the underlying lxml tree is mutated in place.
"""

import logging
import re
from typing import Any

from html5lib import getTreeWalker
from html5lib.serializer import HTMLSerializer
from scrapy.selector import Selector

logger = logging.getLogger(__name__)

VIEWPORT_XPATH = './/meta[@name="viewport"]'

# A doctype before the root element, optionally after a BOM and comments
_SOURCE_DOCTYPE_RE = re.compile(r"^\ufeff?\s*(?:<!--.*?-->\s*)*<!doctype", re.IGNORECASE | re.DOTALL)


class Document:
    """Mutable HTML document with head/body accessors.

    Attributes:
        root: The <html> lxml element.
        has_source_doctype: Whether the parsed markup declared a doctype.
    """

    def __init__(self, root: Any, has_source_doctype: bool = False) -> None:
        """Initialize document around an existing lxml root element.

        Args:
            root: lxml.html element for the <html> node.
            has_source_doctype: Emit the parsed doctype when serializing.
        """
        self.root = root
        self.has_source_doctype = has_source_doctype

    @classmethod
    def from_html(cls, html: str | bytes) -> "Document":
        """Parse markup into a document.

        Args:
            html: HTML source as text or UTF-8 bytes.

        Returns:
            Parsed Document.
        """
        if isinstance(html, bytes):
            html = html.decode("utf-8", errors="replace")
        selector = Selector(text=html, type="html")
        return cls(selector.root, bool(_SOURCE_DOCTYPE_RE.match(html)))

    @property
    def head(self) -> Any:
        """Return the <head> element, creating it when the markup had none."""
        head = self.root.find("head")
        if head is None:
            logger.debug("Document has no <head>, creating one")
            head = self.create_element("head")
            self.root.insert(0, head)
        return head

    @property
    def body(self) -> Any:
        """Return the <body> element, creating it when the markup had none."""
        body = self.root.find("body")
        if body is None:
            logger.debug("Document has no <body>, creating one")
            body = self.create_element("body")
            self.root.append(body)
        return body

    @property
    def viewport(self) -> Any | None:
        """Return the viewport <meta> element in head, or None."""
        matches = self.xpath(VIEWPORT_XPATH, self.head)
        return matches[0] if matches else None

    def xpath(self, query: str, context: Any | None = None) -> list[Any]:
        """Evaluate an XPath query.

        Args:
            query: XPath expression.
            context: Context node (defaults to the document root).

        Returns:
            List of matching nodes in document order.
        """
        node = self.root if context is None else context
        return list(node.xpath(query))

    def create_element(self, tag: str, attributes: dict[str, str] | None = None) -> Any:
        """Create a detached element owned by this document's parser."""
        return self.root.makeelement(tag, attributes or {})

    def insert_after(self, reference: Any | None, element: Any) -> None:
        """Insert element as the next sibling of reference.

        Falls back to appending to head when reference is missing or detached.

        Args:
            reference: Node to insert after (may be None).
            element: Element to insert.
        """
        if reference is None or reference.getparent() is None:
            self.head.append(element)
            return

        # Keep the reference's trailing whitespace pattern on the new sibling
        element.tail = reference.tail
        reference.addnext(element)

    def to_html(self) -> str:
        """Serialize the document.

        Attribute values are written as parsed; libxml2's HTML serializer
        would percent-encode URI attributes. The doctype is written only when
        the source declared one, since libxml2 adds a default one otherwise.
        """
        walker = getTreeWalker("lxml")
        serializer = HTMLSerializer(
            quote_attr_values="always",
            omit_optional_tags=False,
            inject_meta_charset=False,
        )
        html = serializer.render(walker(self.root))

        doctype = self.root.getroottree().docinfo.doctype
        if self.has_source_doctype and doctype:
            return f"{doctype}\n{html}"
        return html
