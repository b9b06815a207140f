"""Typed definition tree for registered page elements."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

SELECTOR_TYPES: Tuple[str, ...] = ("css", "xpath", "js", "android", "ios", "accessibilityId")
DEFAULT_SELECTOR_TYPE = "css"

ScriptSelector = Callable[..., Any]


class DefinitionBase(BaseModel):
    """Fields shared by every node of the definition tree."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    alias: str
    selector: Union[str, ScriptSelector]
    # Kept as a plain string; unsupported values surface from the selector mapper.
    selector_type: str = DEFAULT_SELECTOR_TYPE

    @field_validator("alias")
    @classmethod
    def _validate_alias(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("alias must not be empty")
        if ">" in value:
            raise ValueError("alias must not contain '>'")
        if value == "this":
            raise ValueError("'this' is reserved")
        return value

    @field_validator("selector_type", mode="before")
    @classmethod
    def _default_selector_type(cls, value: Any) -> Any:
        return DEFAULT_SELECTOR_TYPE if value is None else value

    @property
    def is_collection(self) -> bool:
        return False

    @property
    def children(self) -> Dict[str, "Definition"]:
        return {}

    def child(self, alias: str) -> Optional["Definition"]:
        return None

    def aliases(self) -> List[str]:
        return []

    def with_alias(self, alias: str) -> "Definition":
        # Rebuilt through validation so the alias gets the same checks as at registration.
        fields = {name: getattr(self, name) for name in type(self).model_fields}
        fields["alias"] = alias
        return type(self)(**fields)  # type: ignore[return-value]


class ElementDefinition(DefinitionBase):
    kind: Literal["element"] = "element"


class CollectionDefinition(DefinitionBase):
    kind: Literal["collection"] = "collection"

    @property
    def is_collection(self) -> bool:
        return True


class ComponentDefinition(DefinitionBase):
    """A sub-tree of definitions, optionally repeated as a collection."""

    kind: Literal["component"] = "component"
    collection: bool = Field(default=False, alias="is_collection")
    members: Tuple["Definition", ...] = Field(default=())

    _index: Dict[str, "Definition"] = PrivateAttr(default_factory=dict)

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _check_unique_aliases(self) -> "ComponentDefinition":
        seen = set()
        for member in self.members:
            if member.alias in seen:
                raise ValueError(f"duplicate alias '{member.alias}' in component '{self.alias}'")
            seen.add(member.alias)
        return self

    def model_post_init(self, __context: Any) -> None:
        self._index = {member.alias: member for member in self.members}

    @property
    def is_collection(self) -> bool:
        return self.collection

    @property
    def children(self) -> Dict[str, "Definition"]:
        return dict(self._index)

    def child(self, alias: str) -> Optional["Definition"]:
        return self._index.get(alias)

    def aliases(self) -> List[str]:
        return [member.alias for member in self.members]


Definition = Union[ElementDefinition, CollectionDefinition, ComponentDefinition]

ComponentDefinition.model_rebuild()
