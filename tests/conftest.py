"""Pytest configuration ensuring local packages are importable, plus a fake DOM."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from pagepath import ComponentBuilder, PageObject  # noqa: E402
from pagepath.errors import ElementNotFoundError  # noqa: E402


class FakeElement:
    """Element whose descendants are keyed by the selector value that finds them."""

    def __init__(self, text: str = "", *, delay: float = 0.0) -> None:
        self.text = text
        self.delay = delay
        self.children: Dict[str, List["FakeElement"]] = {}
        self.text_reads = 0

    def add(self, selector: str, *elements: "FakeElement") -> "FakeElement":
        self.children.setdefault(selector, []).extend(elements)
        return self

    async def find_element(self, locator: Any) -> "FakeElement":
        if self.delay:
            await asyncio.sleep(self.delay)
        matches = self.children.get(locator.value, [])
        if not matches:
            raise ElementNotFoundError(f"no such element: {locator.value}")
        return matches[0]

    async def find_elements(self, locator: Any) -> List["FakeElement"]:
        if self.delay:
            await asyncio.sleep(self.delay)
        return list(self.children.get(locator.value, []))

    async def get_text(self) -> str:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.text_reads += 1
        return self.text

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"FakeElement({self.text!r})"


class FakeDriver:
    def __init__(self, root: FakeElement, scripts: Optional[Dict[str, Any]] = None) -> None:
        self.root = root
        self.scripts = scripts or {}
        self.executed: List[Any] = []

    async def find_element(self, locator: Any) -> FakeElement:
        if locator.value == "html":
            return self.root
        return await self.root.find_element(locator)

    async def find_elements(self, locator: Any) -> List[FakeElement]:
        return await self.root.find_elements(locator)

    async def execute_script(self, script: Any) -> Any:
        self.executed.append(script)
        return self.scripts[script]


SINGLE_ELEMENT_SCRIPT = "document.querySelector('.single-element')"
COLLECTION_TEXTS = ["First", "Second", "Third", "Third Third", "Last"]


def build_dom() -> FakeElement:
    root = FakeElement("html")
    root.add(".single-element", FakeElement("text of single element"))

    container = FakeElement("container")
    container.add(
        ".child-item",
        FakeElement("text of first child item"),
        FakeElement("text of second child item"),
    )
    root.add(".container", container)

    root.add("ol > li", *(FakeElement(text) for text in COLLECTION_TEXTS))

    components = FakeElement("list")
    for label in ("1", "2", "3"):
        component = FakeElement(f"component {label}")
        component.add("div", FakeElement(label))
        components.add(".l-component", component)
    root.add(".list-components", components)
    return root


def build_page(driver: Optional[FakeDriver] = None) -> PageObject:
    page = PageObject(driver)

    child_component = ComponentBuilder("child component", ".l-component", is_collection=True)
    child_component.define_element("child element", "div")
    component2 = ComponentBuilder("component2", ".list-components")
    component2.define_component("child component", child_component)
    page.define_component("component2", component2)

    page.define_element("single element", ".single-element")

    component = ComponentBuilder("component", ".container")
    component.define_element("child element", ".child-item")
    page.define_component("component", component)

    page.define_collection("collection", "ol > li")
    page.define_element("single element js", SINGLE_ELEMENT_SCRIPT, selector_type="js")
    return page


@pytest.fixture
def dom() -> FakeElement:
    return build_dom()


@pytest.fixture
def driver(dom: FakeElement) -> FakeDriver:
    single = dom.children[".single-element"][0]
    return FakeDriver(dom, scripts={SINGLE_ELEMENT_SCRIPT: single})


@pytest.fixture
def page(driver: FakeDriver) -> PageObject:
    return build_page(driver)
