"""Error taxonomy for locator path resolution."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ErrorCode(Enum):
    """Standardized error codes for path resolution failures."""

    # Path grammar
    MALFORMED_PATH = "MALFORMED_PATH"
    INVALID_MODIFIER = "INVALID_MODIFIER"

    # Definition tree
    ALIAS_NOT_FOUND = "ALIAS_NOT_FOUND"
    DUPLICATE_ALIAS = "DUPLICATE_ALIAS"
    UNKNOWN_STRATEGY = "UNKNOWN_STRATEGY"

    # Collection filtering
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    NO_MATCH = "NO_MATCH"

    # Driver wiring
    DRIVER_NOT_SET = "DRIVER_NOT_SET"
    UNSUPPORTED_LOCATOR = "UNSUPPORTED_LOCATOR"


class LocatorPathError(Exception):
    code: ErrorCode = ErrorCode.MALFORMED_PATH

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details:
            result["details"] = self.details
        return result


class MalformedPathError(LocatorPathError):
    code = ErrorCode.MALFORMED_PATH

    def __init__(self, message: str, *, path: str, segment: Optional[str] = None):
        super().__init__(message, details={"path": path, "segment": segment})
        self.path = path
        self.segment = segment


class InvalidModifierError(LocatorPathError):
    code = ErrorCode.INVALID_MODIFIER


class UnknownStrategyError(LocatorPathError):
    code = ErrorCode.UNKNOWN_STRATEGY

    def __init__(self, selector_type: str, *, alias: Optional[str] = None):
        super().__init__(
            f"Selector type {selector_type} is not defined",
            details={"selector_type": selector_type, "alias": alias},
        )
        self.selector_type = selector_type


class AliasNotFoundError(LocatorPathError):
    code = ErrorCode.ALIAS_NOT_FOUND

    def __init__(self, alias: str, suggestions: Iterable[str] = ()):
        self.alias = alias
        self.suggestions: List[str] = list(suggestions)
        message = f"There is no such element: '{alias}'"
        if self.suggestions:
            message += "\nDid you mean:\n" + "\n".join(self.suggestions)
        super().__init__(message, details={"alias": alias, "suggestions": self.suggestions})


class DuplicateAliasError(LocatorPathError):
    code = ErrorCode.DUPLICATE_ALIAS

    def __init__(self, alias: str):
        super().__init__(f"Alias '{alias}' is already defined", details={"alias": alias})
        self.alias = alias


class IndexOutOfRangeError(LocatorPathError):
    code = ErrorCode.INDEX_OUT_OF_RANGE

    def __init__(self, index: Any, size: int):
        super().__init__(
            f"Index {index} is out of range for collection of {size} element(s)",
            details={"index": index, "size": size},
        )
        self.index = index
        self.size = size


class NoMatchError(LocatorPathError):
    code = ErrorCode.NO_MATCH


class DriverNotSetError(LocatorPathError):
    code = ErrorCode.DRIVER_NOT_SET


class UnsupportedLocatorError(LocatorPathError):
    code = ErrorCode.UNSUPPORTED_LOCATOR


class ElementNotFoundError(LookupError):
    """Raised by driver adapters when a single element lookup finds nothing."""
