"""Tokenizer turning a locator path into typed navigation steps.

Grammar (segments separated by ``>``, each trimmed)::

    this
    #<N|FIRST|LAST> of <alias|this>
    #<N-M|>N|<N> of <alias|this>
    [all ]<#text|@text|/regex/> in <alias|this>
    <alias>

Indices are kept 1-based here; conversion happens in the collection filter.
"""

from __future__ import annotations

import re
from typing import List, Optional

from ..errors import InvalidModifierError, MalformedPathError
from .steps import (
    BetweenIndex,
    ExactIndex,
    GreaterThanIndex,
    IndexStep,
    LessThanIndex,
    LookupStep,
    Step,
    TextSpec,
    TextStep,
    ThisStep,
)

SEPARATOR = ">"
THIS = "this"

_EXACT_INDEX_RE = re.compile(r"^#(?P<value>\d+|FIRST|LAST) of (?P<alias>.+)$")
_RANGE_INDEX_RE = re.compile(
    r"^#(?:(?P<start>\d+)-(?P<end>\d+)|>(?P<gt>\d+)|<(?P<lt>\d+)) of (?P<alias>.+)$"
)
# Greedy token so that text containing " in " splits at the last occurrence.
_TEXT_RE = re.compile(
    r"^(?P<all>all )?(?:/(?P<regex>.+)/|(?P<sigil>[#@])(?P<text>.+)) in (?P<alias>.+)$"
)
_MODIFIER_PREFIXES = ("#", "@", "/")
_SIGIL_ONLY = frozenset(_MODIFIER_PREFIXES + tuple("all " + sigil for sigil in _MODIFIER_PREFIXES))


def parse(path: str) -> List[Step]:
    """Parse ``path`` into an ordered list of steps.

    Raises :class:`MalformedPathError` if any segment fits none of the
    recognized shapes. Nothing is resolved when parsing fails.
    """
    if not isinstance(path, str) or not path.strip():
        raise MalformedPathError("Locator path must be a non-empty string", path=str(path))

    # '>' also opens the greater-than range and may lead a text token; see _rejoin_range_segments.
    segments = _rejoin_range_segments(path.split(SEPARATOR))
    steps: List[Step] = []
    for raw in segments:
        steps.append(parse_segment(raw.strip(), path=path))
    return steps


def parse_segment(segment: str, *, path: Optional[str] = None) -> Step:
    """Parse a single trimmed segment."""
    source = path if path is not None else segment
    if not segment:
        raise MalformedPathError("Empty segment in locator path", path=source, segment=segment)

    if segment == THIS:
        return ThisStep()

    match = _EXACT_INDEX_RE.match(segment)
    if match:
        raw_value = match.group("value")
        value = raw_value if raw_value in ("FIRST", "LAST") else int(raw_value)
        return IndexStep(alias=_target(match.group("alias")), index_spec=ExactIndex(value=value))

    match = _RANGE_INDEX_RE.match(segment)
    if match:
        alias = _target(match.group("alias"))
        if match.group("start") is not None:
            spec = BetweenIndex(start=int(match.group("start")), end=int(match.group("end")))
        elif match.group("gt") is not None:
            spec = GreaterThanIndex(value=int(match.group("gt")))
        else:
            spec = LessThanIndex(value=int(match.group("lt")))
        return IndexStep(alias=alias, index_spec=spec)

    if segment.startswith("all ") and (
        _EXACT_INDEX_RE.match(segment[4:]) or _RANGE_INDEX_RE.match(segment[4:])
    ):
        raise InvalidModifierError(
            f"'all' cannot be combined with an index modifier: '{segment}'",
            details={"path": source, "segment": segment},
        )

    match = _TEXT_RE.match(segment)
    if match:
        if match.group("regex") is not None:
            try:
                re.compile(match.group("regex"))
            except re.error as exc:
                raise MalformedPathError(
                    f"Invalid regular expression in segment '{segment}': {exc}",
                    path=source,
                    segment=segment,
                ) from exc
            text_spec = TextSpec(mode="regex", value=match.group("regex"))
        else:
            mode = "partial" if match.group("sigil") == "#" else "exact"
            text_spec = TextSpec(mode=mode, value=match.group("text"))
        return TextStep(
            alias=_target(match.group("alias")),
            text_spec=text_spec,
            all_matches=match.group("all") is not None,
        )

    if segment.startswith(_MODIFIER_PREFIXES) or segment.startswith("all "):
        raise MalformedPathError(f"Cannot parse segment '{segment}'", path=source, segment=segment)

    return LookupStep(alias=segment)


def _target(alias: str) -> Optional[str]:
    alias = alias.strip()
    return None if alias == THIS else alias


def _rejoin_range_segments(pieces: List[str]) -> List[str]:
    """Glue a '>' that directly follows a modifier sigil back into its segment.

    Covers "#>N of x", "#>text in x", "@>text in x", "/>/ in x" and their "all "
    forms. A '>' anywhere else inside a token still separates segments.
    """
    joined: List[str] = []
    for piece in pieces:
        if joined and joined[-1].strip() in _SIGIL_ONLY:
            joined[-1] = joined[-1] + SEPARATOR + piece
        else:
            joined.append(piece)
    return joined
