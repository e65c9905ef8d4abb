"""
Fan-out helpers shared by the topic and image aggregators.

Every enabled source is called concurrently; each call is wrapped so that it
always resolves to a SourceResult. Failures are logged at the merge barrier
and never reach the caller.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Hashable, Iterable, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")


@dataclass
class SourceResult:
    """Outcome of one source call: items on success, the exception otherwise."""

    source: str
    items: list[Any] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def _call(name: str, call: Awaitable[list[T]]) -> SourceResult:
    try:
        return SourceResult(source=name, items=list(await call))
    except Exception as e:
        return SourceResult(source=name, error=e)


async def collect(
    sources: Sequence[S],
    call: Callable[[S], Awaitable[list[T]]],
) -> list[SourceResult]:
    """
    Run ``call(source)`` for every enabled source concurrently.

    Results come back in source order regardless of completion order.
    """
    active = [source for source in sources if source.enabled]
    results = await asyncio.gather(*(_call(source.name, call(source)) for source in active))

    for result in results:
        if not result.ok:
            logger.warning("Source %s failed: %s", result.source, result.error)
    return list(results)


def merge_unique(results: Iterable[SourceResult], key: Callable[[T], Hashable]) -> list[T]:
    """Concatenate result items in order, keeping the first item per key."""
    seen = set()
    merged = []
    for result in results:
        for item in result.items:
            item_key = key(item)
            if item_key in seen:
                continue
            seen.add(item_key)
            merged.append(item)
    return merged
