# flightrec/core/groups.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .schema import Schema


@dataclass(slots=True)
class GroupNode:
    """
    One level of the signal hierarchy built from slash-separated group paths.

    - name: last path segment ("" for the root)
    - path: full path from the root ("" for the root)
    - description: looked up in Schema.group_descriptions by full path
    - children: sub-groups in first-seen order
    - signals: indices (into Schema.signals) of signals placed directly here
    """
    name: str = ""
    path: str = ""
    description: str = ""
    children: dict[str, "GroupNode"] = field(default_factory=dict, repr=False)
    signals: list[int] = field(default_factory=list)

    def __iter__(self) -> Iterator["GroupNode"]:
        return iter(self.children.values())

    def child(self, name: str, descriptions: dict[str, str]) -> "GroupNode":
        node = self.children.get(name)
        if node is None:
            path = f"{self.path}/{name}" if self.path else name
            node = GroupNode(name=name, path=path, description=descriptions.get(path, ""))
            self.children[name] = node
        return node

    def find(self, path: str) -> "GroupNode | None":
        node: GroupNode | None = self
        for part in (p for p in path.split("/") if p):
            node = node.children.get(part)
            if node is None:
                return None
        return node

    def signal_indices(self, *, recursive: bool = True) -> list[int]:
        """Signal indices in tree order (own signals first, then children)."""
        out = list(self.signals)
        if recursive:
            for sub in self.children.values():
                out.extend(sub.signal_indices(recursive=True))
        return out

    def walk(self) -> Iterator["GroupNode"]:
        """Depth-first over this node and all sub-groups."""
        yield self
        for sub in self.children.values():
            yield from sub.walk()


def build_group_tree(schema: Schema) -> GroupNode:
    root = GroupNode()
    descriptions = dict(schema.group_descriptions)
    for index, sig in enumerate(schema.signals):
        node = root
        for part in sig.group_segments:
            node = node.child(part, descriptions)
        node.signals.append(index)
    return root
