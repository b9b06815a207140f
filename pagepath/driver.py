"""Capability interface the resolver expects from an automation driver."""

from __future__ import annotations

from typing import Any, List, Protocol, runtime_checkable

from .selectors import LocatorInvocation


@runtime_checkable
class ElementHandle(Protocol):
    async def find_element(self, locator: LocatorInvocation) -> "ElementHandle": ...

    async def find_elements(self, locator: LocatorInvocation) -> List["ElementHandle"]: ...

    async def get_text(self) -> str: ...


@runtime_checkable
class Driver(Protocol):
    async def find_element(self, locator: LocatorInvocation) -> ElementHandle: ...

    async def find_elements(self, locator: LocatorInvocation) -> List[ElementHandle]: ...

    async def execute_script(self, script: Any) -> Any: ...
