"""Playwright adapter for the resolver's driver interface."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from playwright.async_api import ElementHandle, Frame, JSHandle, Page

from .errors import ElementNotFoundError, UnsupportedLocatorError
from .selectors import LocatorInvocation

log = logging.getLogger(__name__)

_ENGINE_PREFIX = {
    "css selector": "css=",
    "xpath": "xpath=",
}


def to_playwright_selector(locator: LocatorInvocation) -> str:
    prefix = _ENGINE_PREFIX.get(locator.using)
    if prefix is None:
        raise UnsupportedLocatorError(
            f"Locator strategy '{locator.using}' is not supported by Playwright",
            details=locator.as_dict(),
        )
    return f"{prefix}{locator.value}"


class PlaywrightElement:
    """Wraps a Playwright ``ElementHandle``."""

    def __init__(self, handle: ElementHandle) -> None:
        self.handle = handle

    async def find_element(self, locator: LocatorInvocation) -> "PlaywrightElement":
        selector = to_playwright_selector(locator)
        handle = await self.handle.query_selector(selector)
        if handle is None:
            raise ElementNotFoundError(f"No element matches {selector}")
        return PlaywrightElement(handle)

    async def find_elements(self, locator: LocatorInvocation) -> List["PlaywrightElement"]:
        handles = await self.handle.query_selector_all(to_playwright_selector(locator))
        return [PlaywrightElement(handle) for handle in handles]

    async def get_text(self) -> str:
        return await self.handle.inner_text()

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"PlaywrightElement({self.handle!r})"


class PlaywrightDriver:
    """Exposes a Playwright page or frame as a resolver driver."""

    def __init__(self, page: Page | Frame) -> None:
        self.page = page

    async def find_element(self, locator: LocatorInvocation) -> PlaywrightElement:
        selector = to_playwright_selector(locator)
        handle = await self.page.query_selector(selector)
        if handle is None:
            raise ElementNotFoundError(f"No element matches {selector}")
        return PlaywrightElement(handle)

    async def find_elements(self, locator: LocatorInvocation) -> List[PlaywrightElement]:
        handles = await self.page.query_selector_all(to_playwright_selector(locator))
        return [PlaywrightElement(handle) for handle in handles]

    async def execute_script(self, script: str) -> Any:
        """Evaluate ``script`` and unwrap element or element-array results."""
        result = await self.page.evaluate_handle(script)
        element = result.as_element()
        if element is not None:
            return PlaywrightElement(element)
        elements = await self._unwrap_array(result)
        if elements is not None:
            await result.dispose()
            return elements
        value = await result.json_value()
        await result.dispose()
        return value

    async def _unwrap_array(self, result: JSHandle) -> Optional[List[PlaywrightElement]]:
        is_array = await result.evaluate("(value) => Array.isArray(value)")
        if not is_array:
            return None
        properties = await result.get_properties()
        indexed = sorted((int(key), value) for key, value in properties.items() if key.isdigit())
        elements: List[PlaywrightElement] = []
        for _, handle in indexed:
            element = handle.as_element()
            if element is None:
                log.debug("Skipping non-element entry in script result")
                continue
            elements.append(PlaywrightElement(element))
        return elements
