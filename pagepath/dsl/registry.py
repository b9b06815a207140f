"""Registration API for page-object definition trees."""

from __future__ import annotations

import difflib
from typing import Any, Dict, Iterator, List, Optional, Union

from ..errors import AliasNotFoundError, DuplicateAliasError
from .models import (
    DEFAULT_SELECTOR_TYPE,
    CollectionDefinition,
    ComponentDefinition,
    Definition,
    ElementDefinition,
)

DEFAULT_SUGGESTION_LIMIT = 3
DEFAULT_SUGGESTION_CUTOFF = 0.6


class DefinitionRegistry:
    """Holds the root children of a definition tree and resolves aliases."""

    def __init__(
        self,
        *,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
        suggestion_cutoff: float = DEFAULT_SUGGESTION_CUTOFF,
    ) -> None:
        self._definitions: Dict[str, Definition] = {}
        self.suggestion_limit = suggestion_limit
        self.suggestion_cutoff = suggestion_cutoff

    def define_element(self, alias: str, selector: Any, selector_type: Optional[str] = None) -> ElementDefinition:
        definition = ElementDefinition(alias=alias, selector=selector, selector_type=selector_type)
        self._add(definition)
        return definition

    def define_collection(
        self, alias: str, selector: Any, selector_type: Optional[str] = None
    ) -> CollectionDefinition:
        definition = CollectionDefinition(alias=alias, selector=selector, selector_type=selector_type)
        self._add(definition)
        return definition

    def define_component(
        self, alias: str, component: Union["ComponentBuilder", ComponentDefinition]
    ) -> ComponentDefinition:
        if isinstance(component, ComponentBuilder):
            component = component.build()
        if not isinstance(component, ComponentDefinition):
            raise TypeError("component must be a ComponentBuilder or ComponentDefinition")
        definition = component.with_alias(alias)
        self._add(definition)  # type: ignore[arg-type]
        return definition  # type: ignore[return-value]

    def _add(self, definition: Definition) -> None:
        if definition.alias in self._definitions:
            raise DuplicateAliasError(definition.alias)
        self._definitions[definition.alias] = definition

    def lookup(self, alias: str, scope: Optional[Definition] = None) -> Definition:
        """Resolve ``alias`` among the root children or the children of ``scope``."""
        if scope is None:
            candidates = self._definitions
            definition = candidates.get(alias)
        else:
            candidates = scope.children
            definition = scope.child(alias)
        if definition is None:
            raise AliasNotFoundError(alias, self.suggest(alias, list(candidates)))
        return definition

    def suggest(self, alias: str, candidates: List[str]) -> List[str]:
        if self.suggestion_limit <= 0:
            return []
        return difflib.get_close_matches(
            alias, candidates, n=self.suggestion_limit, cutoff=self.suggestion_cutoff
        )

    def aliases(self) -> List[str]:
        return list(self._definitions)

    def __contains__(self, alias: str) -> bool:  # pragma: no cover - trivial
        return alias in self._definitions

    def __iter__(self) -> Iterator[Definition]:  # pragma: no cover - trivial
        return iter(self._definitions.values())


class ComponentBuilder(DefinitionRegistry):
    """Mutable builder for a component; ``build()`` freezes it into a definition."""

    def __init__(
        self,
        alias: str,
        selector: Any,
        selector_type: Optional[str] = None,
        is_collection: bool = False,
    ) -> None:
        super().__init__()
        self.alias = alias
        self.selector = selector
        self.selector_type = selector_type or DEFAULT_SELECTOR_TYPE
        self.is_collection = is_collection

    def build(self) -> ComponentDefinition:
        return ComponentDefinition(
            alias=self.alias,
            selector=self.selector,
            selector_type=self.selector_type,
            is_collection=self.is_collection,
            members=tuple(self._definitions.values()),
        )
