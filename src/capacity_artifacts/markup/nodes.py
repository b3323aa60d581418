# src/capacity_artifacts/markup/nodes.py
"""
Small node/attribute tree with ONE deterministic serializer.

Rules (the byte contract depends on them):
- attributes serialize in insertion order, values always double-quoted
- text is HTML-escaped; Raw is emitted verbatim (trusted static CSS only)
- an element whose children include any Text/Raw renders inline
- otherwise each child goes on its own line, indented two spaces per level
- SVG elements without children self-close (`<circle .../>`)
- HTML void elements render as `<meta ...>`
- output uses "\n" line endings only
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

INDENT = "  "

HTML_VOID = frozenset({"meta", "link", "br", "hr", "img"})
SVG_TAGS = frozenset({
    "svg", "g", "defs", "linearGradient", "stop", "rect", "line",
    "circle", "path", "text",
})


@dataclass
class Text:
    value: str


@dataclass
class Raw:
    value: str


@dataclass
class Comment:
    value: str


@dataclass
class Element:
    tag: str
    attrs: List[Tuple[str, str]] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)

    def append(self, *nodes: Optional["Node"]) -> "Element":
        for node in nodes:
            if node is not None:
                self.children.append(node)
        return self

    def extend(self, nodes: Iterable[Optional["Node"]]) -> "Element":
        return self.append(*nodes)


Node = Union[Element, Text, Raw, Comment]


def el(tag: str, *children: Union["Node", str, None], **attrs) -> Element:
    """
    Build an element. Keyword attrs keep call order; a trailing underscore
    is stripped (class_) and remaining underscores become hyphens
    (fill_opacity -> fill-opacity). Strings become Text; None is skipped.
    """
    attr_list = [(_attr_name(k), _attr_value(v)) for k, v in attrs.items() if v is not None]
    node = Element(tag, attr_list)
    for child in children:
        if child is None:
            continue
        node.children.append(Text(child) if isinstance(child, str) else child)
    return node


def _attr_name(key: str) -> str:
    return key.rstrip("_").replace("_", "-")


def _attr_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# ------------------------------------------------------------
# Serializer
# ------------------------------------------------------------
def serialize(node: Node, depth: int = 0) -> str:
    if isinstance(node, Text):
        return html.escape(node.value, quote=False)
    if isinstance(node, Raw):
        return node.value
    if isinstance(node, Comment):
        return f"<!-- {node.value} -->"
    return _serialize_element(node, depth)


def _open_tag(node: Element) -> str:
    attrs = "".join(f' {k}="{html.escape(v, quote=True)}"' for k, v in node.attrs)
    return f"<{node.tag}{attrs}"


def _serialize_element(node: Element, depth: int) -> str:
    head = _open_tag(node)

    if not node.children:
        if node.tag in HTML_VOID:
            return head + ">"
        if node.tag in SVG_TAGS:
            return head + "/>"
        return f"{head}></{node.tag}>"

    if any(isinstance(c, (Text, Raw)) for c in node.children):
        inner = "".join(serialize(c, depth) for c in node.children)
        return f"{head}>{inner}</{node.tag}>"

    pad = INDENT * (depth + 1)
    lines = [head + ">"]
    for child in node.children:
        lines.append(pad + serialize(child, depth + 1))
    lines.append(INDENT * depth + f"</{node.tag}>")
    return "\n".join(lines)


def render_document(root: Element, doctype: str = "<!DOCTYPE html>") -> str:
    """Serialize a full document: doctype line, tree, trailing newline."""
    return f"{doctype}\n{serialize(root)}\n"
