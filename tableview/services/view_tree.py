"""Immutable markup tree produced by the view composer.

Nodes only describe structure. Interactive nodes carry a symbolic ``event``
and its ``payload``; binding those to a transport is left to whoever
serializes or hosts the tree.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Text:
    value: Any

    is_text = True


@dataclass(frozen=True)
class Node:
    tag: str
    attrs: tuple[tuple[str, str], ...] = ()
    children: tuple[Node | Text, ...] = ()
    event: str | None = None
    payload: str | None = None

    is_text = False

    def attr(self, name: str, default: str | None = None) -> str | None:
        for key, val in self.attrs:
            if key == name:
                return val
        return default

    @property
    def classes(self) -> list[str]:
        return (self.attr("class") or "").split()

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def html_attrs(self) -> dict[str, str]:
        attrs = dict(self.attrs)
        if self.event is not None:
            attrs["data-event"] = self.event
        if self.payload is not None:
            attrs["data-value"] = self.payload
        return attrs

    def walk(self) -> Iterator[Node]:
        yield self
        for child in self.children:
            if isinstance(child, Node):
                yield from child.walk()

    def find_all(
        self,
        tag: str | None = None,
        cls: str | None = None,
        event: str | None = None,
        predicate: Callable[[Node], bool] | None = None,
    ) -> list[Node]:
        found = []
        for node in self.walk():
            if tag is not None and node.tag != tag:
                continue
            if cls is not None and not node.has_class(cls):
                continue
            if event is not None and node.event != event:
                continue
            if predicate is not None and not predicate(node):
                continue
            found.append(node)
        return found

    def find(
        self, tag: str | None = None, cls: str | None = None, event: str | None = None
    ) -> Node | None:
        matches = self.find_all(tag=tag, cls=cls, event=event)
        return matches[0] if matches else None

    def text_content(self) -> str:
        parts = []
        for child in self.children:
            if isinstance(child, Text):
                parts.append("" if child.value is None else str(child.value))
            else:
                parts.append(child.text_content())
        return "".join(parts)


def el(
    tag: str,
    *children: Node | Text | str | None,
    event: str | None = None,
    payload: Any = None,
    **attrs: Any,
) -> Node:
    """Build a node; ``class_`` maps to ``class`` and ``None`` attrs/children are dropped.

    Keyword underscores become dashes so ``data_method`` yields ``data-method``.
    """
    pairs = []
    for key, val in attrs.items():
        if val is None:
            continue
        name = "class" if key == "class_" else key.replace("_", "-")
        pairs.append((name, str(val)))
    kids: list[Node | Text] = []
    for child in children:
        if child is None:
            continue
        kids.append(child if isinstance(child, (Node, Text)) else Text(child))
    return Node(
        tag=tag,
        attrs=tuple(pairs),
        children=tuple(kids),
        event=event,
        payload=None if payload is None else str(payload),
    )
