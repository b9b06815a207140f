"""Locator path query engine for page-object element trees."""

from .config import ResolverConfig, load_config
from .dsl import ComponentBuilder, DefinitionRegistry, parse
from .errors import (
    AliasNotFoundError,
    DriverNotSetError,
    DuplicateAliasError,
    ElementNotFoundError,
    ErrorCode,
    IndexOutOfRangeError,
    InvalidModifierError,
    LocatorPathError,
    MalformedPathError,
    NoMatchError,
    UnknownStrategyError,
    UnsupportedLocatorError,
)
from .page import PageObject
from .resolver import PathResolver
from .selectors import LocatorInvocation, ScriptInvocation, to_locator

__all__ = [
    "AliasNotFoundError",
    "ComponentBuilder",
    "DefinitionRegistry",
    "DriverNotSetError",
    "DuplicateAliasError",
    "ElementNotFoundError",
    "ErrorCode",
    "IndexOutOfRangeError",
    "InvalidModifierError",
    "LocatorInvocation",
    "LocatorPathError",
    "MalformedPathError",
    "NoMatchError",
    "PageObject",
    "PathResolver",
    "ResolverConfig",
    "ScriptInvocation",
    "UnknownStrategyError",
    "UnsupportedLocatorError",
    "load_config",
    "parse",
    "to_locator",
]
