"""Index and text filtering over resolved element collections."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Sequence, Union

from .dsl.steps import (
    BetweenIndex,
    ExactIndex,
    GreaterThanIndex,
    IndexSpec,
    LessThanIndex,
    Step,
    TextSpec,
)
from .errors import IndexOutOfRangeError, InvalidModifierError

log = logging.getLogger(__name__)

Handle = Any
FilterResult = Union[Handle, List[Handle], None]


def filter_by_index(elements: Sequence[Handle], spec: IndexSpec) -> Union[Handle, List[Handle]]:
    """Select by 1-based position. Exact positions yield one handle, ranges a list."""
    if isinstance(spec, ExactIndex):
        size = len(elements)
        if spec.value == "LAST":
            position = size - 1
        elif spec.value == "FIRST":
            position = 0
        else:
            position = spec.value - 1
        if position < 0 or position >= size:
            raise IndexOutOfRangeError(spec.value, size)
        return elements[position]
    if isinstance(spec, BetweenIndex):
        return [el for i, el in enumerate(elements) if spec.start - 1 <= i <= spec.end - 1]
    if isinstance(spec, GreaterThanIndex):
        return [el for i, el in enumerate(elements) if i > spec.value - 1]
    if isinstance(spec, LessThanIndex):
        return [el for i, el in enumerate(elements) if i < spec.value - 1]
    raise InvalidModifierError(f"Unsupported index modifier: {spec!r}")


async def read_texts(elements: Sequence[Handle], *, parallel: bool = False) -> List[str]:
    """Read rendered text of each element, returned in document order."""
    if parallel:
        return list(await asyncio.gather(*(element.get_text() for element in elements)))
    texts: List[str] = []
    for element in elements:
        texts.append(await element.get_text())
    return texts


async def filter_by_text(
    elements: Sequence[Handle],
    spec: TextSpec,
    *,
    all_matches: bool = False,
    parallel: bool = False,
) -> FilterResult:
    """Keep elements whose text satisfies ``spec``.

    Returns the first match (or ``None``) unless ``all_matches`` is set, in
    which case the full ordered list of matches is returned.
    """
    texts = await read_texts(elements, parallel=parallel)
    matched = [element for element, text in zip(elements, texts) if spec.matches(text)]
    log.debug("Text filter %s=%r matched %d of %d", spec.mode, spec.value, len(matched), len(elements))
    if all_matches:
        return matched
    return matched[0] if matched else None


async def filter_collection(
    elements: Sequence[Handle], step: Step, *, parallel_text_reads: bool = False
) -> FilterResult:
    if step.index is not None:
        return filter_by_index(elements, step.index)
    if step.text is not None:
        return await filter_by_text(
            elements,
            step.text,
            all_matches=step.cardinality_all,
            parallel=parallel_text_reads,
        )
    return list(elements)
