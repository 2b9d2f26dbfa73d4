from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol
import xml.etree.ElementTree as ET

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


class RenderTarget(Protocol):
    """Drawing surface the geoms write into.

    Elements are opaque handles owned by the target; attribute values are
    always strings.
    """

    def create_element(self, kind: str, parent: Any | None = None) -> Any:
        ...

    def set_attribute(self, element: Any, name: str, value: str) -> None:
        ...

    def set_text(self, element: Any, text: str) -> None:
        ...


class ElementTreeTarget:
    """Headless target building an ``xml.etree`` tree."""

    def __init__(self) -> None:
        self.roots: list[ET.Element] = []

    def create_element(self, kind: str, parent: ET.Element | None = None) -> ET.Element:
        if parent is None:
            element = ET.Element(kind)
            self.roots.append(element)
            return element
        return ET.SubElement(parent, kind)

    def set_attribute(self, element: ET.Element, name: str, value: str) -> None:
        element.set(name, value)

    def set_text(self, element: ET.Element, text: str) -> None:
        element.text = text

    def to_markup(self, element: ET.Element | None = None) -> str:
        root = element if element is not None else self._single_root()
        return ET.tostring(root, encoding="unicode")

    def write(self, path: str | Path, element: ET.Element | None = None) -> Path:
        out_path = Path(path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(self.to_markup(element) + "\n", encoding="utf-8")
        return out_path

    def _single_root(self) -> ET.Element:
        if len(self.roots) != 1:
            raise ValueError(f"expected exactly one root element, found {len(self.roots)}")
        return self.roots[0]
