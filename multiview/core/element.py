from __future__ import annotations

from typing import List, Optional, Set


class Element:
    """
    Attachable UI surface.

    The core never touches a real DOM. It only needs something it can
    show/hide, tag with CSS-like classes and append children to. The Dash
    adapter (multiview.ui) reads these attributes to build components.
    """

    def __init__(self, name: str = "div", classes: Optional[Set[str]] = None) -> None:
        self.name = name
        self.classes: Set[str] = set(classes or ())
        self.visible = True
        self.text: str = ""
        self.children: List[Element] = []

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def append(self, child: Element) -> Element:
        if child not in self.children:
            self.children.append(child)
        return child

    def add_class(self, name: str) -> None:
        self.classes.add(name)

    def remove_class(self, name: str) -> None:
        self.classes.discard(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def __repr__(self) -> str:
        return f"Element({self.name!r}, classes={sorted(self.classes)}, visible={self.visible})"
