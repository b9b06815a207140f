"""Page object combining a definition registry with a live driver."""

from __future__ import annotations

from typing import Any, Optional

from .config import ResolverConfig
from .driver import Driver
from .dsl.registry import DefinitionRegistry
from .errors import DriverNotSetError
from .resolver import PathResolver, Scope
from .structured_logging import ResolutionTrace


class PageObject(DefinitionRegistry):
    """Register elements, collections and components, then resolve paths.

    Example::

        page = PageObject(driver)
        page.define_collection("collection", "ol > li")
        item = await page.get_element("#2 of collection")
    """

    def __init__(
        self,
        driver: Optional[Driver] = None,
        config: Optional[ResolverConfig] = None,
        trace: Optional[ResolutionTrace] = None,
    ) -> None:
        self.config = config or ResolverConfig()
        super().__init__(
            suggestion_limit=self.config.suggestion_limit,
            suggestion_cutoff=self.config.suggestion_cutoff,
        )
        self.driver = driver
        self._owns_trace = trace is None and self.config.trace_root is not None
        if self._owns_trace:
            trace = ResolutionTrace.in_directory(self.config.trace_root)
        self.trace = trace

    def close(self) -> None:
        """Close the trace opened from ``config.trace_root``; a passed-in trace is left alone."""
        if self._owns_trace and self.trace is not None:
            self.trace.close()

    def __enter__(self) -> "PageObject":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def set_driver(self, driver: Driver) -> "PageObject":
        """Set the driver used by ``get_element``; must happen before resolving."""
        self.driver = driver
        return self

    def resolver(self) -> PathResolver:
        if self.driver is None:
            raise DriverNotSetError("Driver is not set; call set_driver() first")
        return PathResolver(self, self.driver, self.config, trace=self.trace)

    async def get_element(self, path: str, root: Optional[Scope] = None) -> Scope:
        return await self.resolver().resolve(path, root=root)
