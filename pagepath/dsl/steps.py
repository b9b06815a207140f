"""Parsed navigation steps produced by the path tokenizer."""

from __future__ import annotations

import re
from typing import Any, Literal, Optional, Pattern, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

IndexAlias = Literal["FIRST", "LAST"]
TextMode = Literal["partial", "exact", "regex"]


class ExactIndex(BaseModel):
    """Single 1-based position, or one of the FIRST/LAST aliases."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["exact"] = "exact"
    value: Union[int, IndexAlias]


class BetweenIndex(BaseModel):
    """Inclusive 1-based range ``start-end``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["between"] = "between"
    start: int = Field(ge=0)
    end: int = Field(ge=0)


class GreaterThanIndex(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["greater_than"] = "greater_than"
    value: int = Field(ge=0)


class LessThanIndex(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["less_than"] = "less_than"
    value: int = Field(ge=0)


IndexSpec = Union[ExactIndex, BetweenIndex, GreaterThanIndex, LessThanIndex]


class TextSpec(BaseModel):
    """Text predicate applied to the rendered text of each element."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: TextMode
    value: str

    _pattern: Optional[Pattern[str]] = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        if self.mode == "regex":
            self._pattern = re.compile(self.value)

    @property
    def pattern(self) -> Optional[Pattern[str]]:
        return self._pattern

    def matches(self, text: str) -> bool:
        if self.mode == "partial":
            return self.value in text
        if self.mode == "exact":
            return text == self.value
        pattern = self._pattern if self._pattern is not None else re.compile(self.value)
        return pattern.search(text) is not None


class StepBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    # ``None`` addresses the current scope (the ``this`` keyword).
    alias: Optional[str] = None

    @property
    def is_this(self) -> bool:
        return self.alias is None

    @property
    def index(self) -> Optional[IndexSpec]:
        return None

    @property
    def text(self) -> Optional[TextSpec]:
        return None

    @property
    def cardinality_all(self) -> bool:
        return False

    @property
    def has_modifier(self) -> bool:
        return self.index is not None or self.text is not None


class LookupStep(StepBase):
    """Plain alias lookup: ``component``."""

    kind: Literal["lookup"] = "lookup"
    alias: str

    @field_validator("alias")
    @classmethod
    def _require_alias(cls, value: str) -> str:
        if not value:
            raise ValueError("alias must not be empty")
        return value


class ThisStep(StepBase):
    """Bare ``this``; leaves the scope untouched."""

    kind: Literal["this"] = "this"

    @model_validator(mode="after")
    def _no_alias(self) -> "ThisStep":
        if self.alias is not None:
            raise ValueError("this step carries no alias")
        return self


class IndexStep(StepBase):
    """``#N of alias`` and the range forms."""

    kind: Literal["index"] = "index"
    index_spec: IndexSpec = Field(discriminator="kind")

    @property
    def index(self) -> Optional[IndexSpec]:
        return self.index_spec


class TextStep(StepBase):
    """``[all ]#text in alias``, ``@text`` and ``/regex/`` forms."""

    kind: Literal["text"] = "text"
    text_spec: TextSpec
    all_matches: bool = False

    @property
    def text(self) -> Optional[TextSpec]:
        return self.text_spec

    @property
    def cardinality_all(self) -> bool:
        return self.all_matches


Step = Union[LookupStep, ThisStep, IndexStep, TextStep]
