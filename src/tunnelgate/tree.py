"""
Indented tree of text lines used to render settings summaries.
"""

from typing import Any, Iterator


class Node:
    """A titled node holding ordered child nodes."""

    def __init__(self, title: str):
        self.title = title
        self.children: list["Node"] = []

    def append(self, title: str) -> "Node":
        """Append a child with the given title and return it."""
        child = Node(title)
        self.children.append(child)
        return child

    def appendf(self, fmt: str, *args: Any) -> "Node":
        """Append a child titled with a %-formatted string."""
        return self.append(fmt % args if args else fmt)

    def add(self, node: "Node") -> "Node":
        """Attach an existing node as the last child."""
        self.children.append(node)
        return node

    def lines(self) -> Iterator[str]:
        yield self.title
        yield from self._child_lines("")

    def _child_lines(self, prefix: str) -> Iterator[str]:
        last = len(self.children) - 1
        for i, child in enumerate(self.children):
            branch, indent = ("└── ", "    ") if i == last else ("├── ", "│   ")
            yield prefix + branch + child.title
            yield from child._child_lines(prefix + indent)

    def __str__(self) -> str:
        return "\n".join(self.lines())

    def __repr__(self) -> str:
        return f"Node({self.title!r}, children={len(self.children)})"
