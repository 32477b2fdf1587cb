from __future__ import annotations

import html
from html.parser import HTMLParser
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ...application.urls import ApiRoutes
from ...domain.errors import BinderError
from ...domain.interfaces import ContentBinder
from ...domain.models import Chunk
from ..logging import get_logger

NAME_ATTR = "data-blackstar-name"
ID_ATTR = "data-blackstar-id"
EDIT_LINK_CLASS = "blackstar-edit-link"

# Elements that never have content or an end tag.
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

Attrs = List[Tuple[str, Optional[str]]]
Selector = Callable[[Chunk], Optional[str]]

logger = get_logger("blackstar_client.binder")


def _render_starttag(tag: str, attrs: Attrs, self_closing: bool = False) -> str:
    parts = [tag]
    for k, v in attrs:
        parts.append(k if v is None else f'{k}="{html.escape(v, quote=True)}"')
    return f"<{' '.join(parts)}{' /' if self_closing else ''}>"


def chunk_markup(chunk: Chunk) -> str:
    """HTML placed inside a bound element: ``html`` if present, else escaped ``value``."""
    if chunk.html is not None:
        return chunk.html
    if chunk.value is None:
        return ""
    return html.escape(str(chunk.value))


class _PassThroughParser(HTMLParser):
    """Re-emits a document token by token; subclasses hook element boundaries."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self.out: List[str] = []

    def render(self, document: str) -> str:
        if not isinstance(document, str):
            raise BinderError(f"Expected an HTML string, got {type(document).__name__}")
        self.feed(document)
        self.close()
        return "".join(self.out)

    def emit(self, text: str) -> None:
        self.out.append(text)

    def handle_startendtag(self, tag, attrs):
        self.emit(self.get_starttag_text() or _render_starttag(tag, attrs, self_closing=True))

    def handle_data(self, data):
        self.emit(data)

    def handle_entityref(self, name):
        self.emit(f"&{name};")

    def handle_charref(self, name):
        self.emit(f"&#{name};")

    def handle_comment(self, data):
        self.emit(f"<!--{data}-->")

    def handle_decl(self, decl):
        self.emit(f"<!{decl}>")

    def handle_pi(self, data):
        self.emit(f"<?{data}>")

    def unknown_decl(self, data):
        self.emit(f"<![{data}]>")


# Start tags that end an open element whose own end tag was omitted.
_BLOCK_STARTS = frozenset({
    "address", "article", "aside", "blockquote", "details", "div", "dl", "fieldset",
    "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6",
    "header", "hgroup", "hr", "main", "menu", "nav", "ol", "p", "pre", "section",
    "table", "ul",
})
IMPLIED_END_BY = {
    "p": _BLOCK_STARTS,
    "li": frozenset({"li"}),
    "dt": frozenset({"dt", "dd"}),
    "dd": frozenset({"dt", "dd"}),
    "option": frozenset({"option", "optgroup"}),
    "tr": frozenset({"tr"}),
    "td": frozenset({"td", "th", "tr"}),
    "th": frozenset({"td", "th", "tr"}),
}


def _pop_through(stack: List[str], tag: str) -> None:
    """Drop the innermost ``tag`` and everything opened after it."""
    for i in range(len(stack) - 1, -1, -1):
        if stack[i] == tag:
            del stack[i:]
            return


class _BindParser(_PassThroughParser):
    """Replaces the content of the first element targeted by each chunk.

    A bound element ends at its matching end tag, at a start tag that
    implicitly closes it (``<p>``, ``<li>``, ...), when one of its ancestors
    closes, or at the end of the document. Its closing tag is always written.
    """

    def __init__(self, targets: Dict[str, Chunk], key_attr: str) -> None:
        super().__init__()
        self._targets = targets
        self._key_attr = key_attr
        self._ancestors: List[str] = []
        self._skip_tag: Optional[str] = None
        self._skip_open: List[str] = []
        self.bound: List[Chunk] = []

    def _end_skip(self) -> None:
        self.emit(f"</{self._skip_tag}>")
        self._skip_tag = None
        self._skip_open = []

    def _closes_bound(self, tag: str) -> bool:
        if tag not in IMPLIED_END_BY.get(self._skip_tag, ()):
            return False
        # <p> holds no block content; any block start ends it.
        return self._skip_tag == "p" or not self._skip_open

    def handle_starttag(self, tag, attrs):
        if self._skip_tag is not None:
            if not self._closes_bound(tag):
                if tag not in VOID_ELEMENTS:
                    self._skip_open.append(tag)
                return
            self._end_skip()
        key = dict(attrs).get(self._key_attr)
        chunk = self._targets.pop(key, None) if key is not None else None
        if chunk is None:
            self.emit(self.get_starttag_text() or _render_starttag(tag, attrs))
            if tag not in VOID_ELEMENTS:
                self._ancestors.append(tag)
            return
        attrs = [(k, v) for k, v in attrs if k != ID_ATTR]
        if chunk.id is not None:
            attrs.append((ID_ATTR, str(chunk.id)))
        self.emit(_render_starttag(tag, attrs))
        self.bound.append(chunk)
        if tag in VOID_ELEMENTS:
            return
        self.emit(chunk_markup(chunk))
        self._skip_tag = tag

    def handle_endtag(self, tag):
        if self._skip_tag is not None:
            if tag in self._skip_open:
                _pop_through(self._skip_open, tag)
                return
            if tag == self._skip_tag:
                self._end_skip()
                return
            if tag not in self._ancestors:
                return
            self._end_skip()
        _pop_through(self._ancestors, tag)
        self.emit(f"</{tag}>")

    def close(self):
        super().close()
        if self._skip_tag is not None:
            self._end_skip()

    def handle_startendtag(self, tag, attrs):
        if self._skip_tag is None:
            super().handle_startendtag(tag, attrs)

    def handle_data(self, data):
        if self._skip_tag is None:
            super().handle_data(data)

    def handle_entityref(self, name):
        if self._skip_tag is None:
            super().handle_entityref(name)

    def handle_charref(self, name):
        if self._skip_tag is None:
            super().handle_charref(name)

    def handle_comment(self, data):
        if self._skip_tag is None:
            super().handle_comment(data)


class _EditLinkParser(_PassThroughParser):
    """Appends an edit link just before the end tag of every ``data-blackstar-id`` element."""

    def __init__(self, routes: ApiRoutes) -> None:
        super().__init__()
        self._routes = routes
        self._open: List[Tuple[str, Optional[str]]] = []
        self.decorated = 0

    def _link(self, chunk_id: str) -> str:
        href = html.escape(self._routes.edit_url(chunk_id), quote=True)
        return f' <a class="{EDIT_LINK_CLASS}" target="_admin" href="{href}">edit</a>'

    def handle_starttag(self, tag, attrs):
        self.emit(self.get_starttag_text() or _render_starttag(tag, attrs))
        if tag in VOID_ELEMENTS:
            return
        self._open.append((tag, dict(attrs).get(ID_ATTR)))

    def handle_endtag(self, tag):
        if any(t == tag for t, _ in self._open):
            while self._open:
                open_tag, chunk_id = self._open.pop()
                if chunk_id is not None:
                    self.emit(self._link(chunk_id))
                    self.decorated += 1
                if open_tag == tag:
                    break
        self.emit(f"</{tag}>")


class HtmlBinder(ContentBinder):
    """Binds chunk content into an HTML document string.

    By default a chunk fills the first element whose ``data-blackstar-name``
    equals its name. A ``selector`` returning an element ``id`` overrides the
    match. Bound elements get ``data-blackstar-id``; with edit controls on,
    each also gets an edit link into the CMS.
    """

    def __init__(self, routes: ApiRoutes, show_edit_controls: bool = False) -> None:
        self._routes = routes
        self._show_edit_controls = show_edit_controls

    def bind(self, chunks: Sequence[Chunk], document: str, selector: Optional[Selector] = None) -> str:
        key_attr = "id" if selector else NAME_ATTR
        targets: Dict[str, Chunk] = {}
        for chunk in chunks:
            key = selector(chunk) if selector else chunk.name
            if key:
                targets[key] = chunk
        parser = _BindParser(targets, key_attr)
        out = parser.render(document)
        logger.info("Bind | chunks=%d | bound=%d", len(chunks), len(parser.bound))
        return self.add_edit_links(out)

    def add_edit_links(self, document: str) -> str:
        if not self._show_edit_controls:
            return document
        parser = _EditLinkParser(self._routes)
        out = parser.render(document)
        logger.debug("Edit links | decorated=%d", parser.decorated)
        return out
