"""Asynchronous resolution of locator paths against a definition tree."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple, Union

from .config import ResolverConfig
from .driver import Driver
from .dsl.models import Definition
from .dsl.registry import DefinitionRegistry
from .dsl.steps import Step, ThisStep
from .dsl.tokens import parse
from .errors import InvalidModifierError, NoMatchError
from .filters import filter_collection
from .selectors import Invocation, LocatorInvocation, ScriptInvocation, to_locator
from .structured_logging import ResolutionTrace

log = logging.getLogger(__name__)

Handle = Any
Scope = Union[Handle, List[Handle]]


class PathResolver:
    """Resolve paths such as ``"all #Third in collection > #1 of this"``.

    Steps run strictly in sequence; a fan-out over a collection scope may run
    its per-member lookups concurrently but always keeps document order.
    """

    def __init__(
        self,
        registry: DefinitionRegistry,
        driver: Driver,
        config: Optional[ResolverConfig] = None,
        trace: Optional[ResolutionTrace] = None,
    ) -> None:
        self.registry = registry
        self.driver = driver
        self.config = config or ResolverConfig()
        self._owns_trace = trace is None and self.config.trace_root is not None
        if self._owns_trace:
            trace = ResolutionTrace.in_directory(self.config.trace_root)
        self.trace = trace

    def close(self) -> None:
        """Close the trace if this resolver opened it."""
        if self._owns_trace and self.trace is not None:
            self.trace.close()

    def __enter__(self) -> "PathResolver":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    async def resolve(self, path: str, root: Optional[Scope] = None) -> Scope:
        steps = parse(path)
        scope = root if root is not None else await self._root()
        definition: Optional[Definition] = None

        for position, step in enumerate(steps, start=1):
            try:
                scope, definition = await self.apply_step(step, scope, definition)
            except Exception as exc:
                self._record(path, position, step, None, error=f"{type(exc).__name__}: {exc}")
                raise
            size = len(scope) if isinstance(scope, list) else 1
            log.debug("Step %d/%d %s %r -> %d handle(s)", position, len(steps), step.kind, step.alias, size)
            self._record(path, position, step, size)
        return scope

    async def apply_step(
        self, step: Step, scope: Scope, definition: Optional[Definition]
    ) -> Tuple[Scope, Optional[Definition]]:
        """Apply one step; returns the new scope and the last resolved definition."""
        if isinstance(step, ThisStep):
            return scope, definition

        if step.is_this:
            if not isinstance(scope, list):
                raise InvalidModifierError(
                    "Modifiers on 'this' require a collection scope",
                    details={"step": step.model_dump()},
                )
            return await self._narrow(scope, step), definition

        target = self.registry.lookup(step.alias, definition)
        if step.has_modifier and not target.is_collection:
            raise InvalidModifierError(
                f"'{target.alias}' is not a collection and cannot be filtered",
                details={"alias": target.alias, "step": step.model_dump()},
            )
        invocation = to_locator(target)
        materialized = await self._materialize(invocation, target, scope)
        if step.has_modifier:
            if not isinstance(materialized, list):
                materialized = [materialized]
            materialized = await self._narrow(materialized, step)
        return materialized, target

    async def _root(self) -> Handle:
        return await self.driver.find_element(LocatorInvocation("css selector", self.config.root_selector))

    async def _materialize(self, invocation: Invocation, definition: Definition, scope: Scope) -> Scope:
        if isinstance(invocation, ScriptInvocation):
            return await invocation(self.driver)

        if definition.is_collection:
            async def find(element: Handle) -> Any:
                return list(await element.find_elements(invocation))
        else:
            async def find(element: Handle) -> Any:
                return await element.find_element(invocation)

        if not isinstance(scope, list):
            return await find(scope)

        results = await self._fan_out(scope, find)
        if definition.is_collection:
            return [handle for group in results for handle in group]
        return results

    async def _fan_out(
        self, scope: Sequence[Handle], find: Callable[[Handle], Awaitable[Any]]
    ) -> List[Any]:
        if self.config.concurrent_fan_out:
            # A failing member cancels its siblings; the driver error surfaces unwrapped.
            try:
                async with asyncio.TaskGroup() as group:
                    tasks = [group.create_task(find(element)) for element in scope]
            except BaseExceptionGroup as failures:
                raise failures.exceptions[0]
            return [task.result() for task in tasks]
        results: List[Any] = []
        for element in scope:
            results.append(await find(element))
        return results

    async def _narrow(self, elements: List[Handle], step: Step) -> Scope:
        result = await filter_collection(
            elements, step, parallel_text_reads=self.config.parallel_text_reads
        )
        if result is None:
            text = step.text
            raise NoMatchError(
                f"No element in '{step.alias or 'this'}' matches {text.mode} text '{text.value}'",
                details={"alias": step.alias, "mode": text.mode, "value": text.value},
            )
        return result

    def _record(
        self, path: str, position: int, step: Step, size: Optional[int], error: Optional[str] = None
    ) -> None:
        if self.trace is None:
            return
        self.trace.log_step(
            path=path, step=position, kind=step.kind, alias=step.alias, scope_size=size, error=error
        )
