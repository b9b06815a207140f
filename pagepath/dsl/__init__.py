"""Definition tree, step models and the locator path tokenizer."""

from .models import (
    SELECTOR_TYPES,
    CollectionDefinition,
    ComponentDefinition,
    Definition,
    ElementDefinition,
)
from .registry import ComponentBuilder, DefinitionRegistry
from .steps import (
    BetweenIndex,
    ExactIndex,
    GreaterThanIndex,
    IndexSpec,
    IndexStep,
    LessThanIndex,
    LookupStep,
    Step,
    TextSpec,
    TextStep,
    ThisStep,
)
from .tokens import parse

__all__ = [
    "SELECTOR_TYPES",
    "BetweenIndex",
    "CollectionDefinition",
    "ComponentBuilder",
    "ComponentDefinition",
    "Definition",
    "DefinitionRegistry",
    "ElementDefinition",
    "ExactIndex",
    "GreaterThanIndex",
    "IndexSpec",
    "IndexStep",
    "LessThanIndex",
    "LookupStep",
    "Step",
    "TextSpec",
    "TextStep",
    "ThisStep",
    "parse",
]
