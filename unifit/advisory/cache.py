"""Advisory memoization.

One entry and at most one in-flight fetch per advisory kind. An entry is valid
while its fingerprint matches the fingerprint of the current inputs and it has
not been invalidated. A refresh that finds a fetch already running joins it
instead of starting another.

Fetch failures store the kind's fallback payload, which is then cached like any
other result until the inputs change or the kind is invalidated. A fetch that
started before an invalidation never answers a refresh requested after it.
"""

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from unifit.schemas.advisory import AdvisoryKind


@dataclass(frozen=True)
class AdvisorySource:
    """How to produce one advisory kind.

    Attributes:
        inputs: Returns the current inputs of the advisory
        fingerprint: Maps inputs to a hashable fingerprint
        fetch: Coroutine producing the payload from inputs
        fallback: Returns the payload to use when fetch fails
    """

    inputs: Callable[[], Any]
    fingerprint: Callable[[Any], Hashable]
    fetch: Callable[[Any], Awaitable[Any]]
    fallback: Callable[[], Any]


@dataclass(frozen=True)
class AdvisoryCacheEntry:
    kind: AdvisoryKind
    fingerprint: Hashable
    payload: Any
    is_fallback: bool = False


@dataclass(frozen=True)
class _InFlightFetch:
    generation: int
    fingerprint: Hashable
    task: asyncio.Task

    def answers(self, generation: int, fingerprint: Hashable) -> bool:
        return self.generation == generation and self.fingerprint == fingerprint


class AdvisoryCache:
    def __init__(self, sources: dict[AdvisoryKind, AdvisorySource]) -> None:
        self._sources = dict(sources)
        self._entries: dict[AdvisoryKind, AdvisoryCacheEntry] = {}
        self._in_flight: dict[AdvisoryKind, _InFlightFetch] = {}
        self._generations: dict[AdvisoryKind, int] = dict.fromkeys(self._sources, 0)

    def _source(self, kind: AdvisoryKind) -> AdvisorySource:
        try:
            return self._sources[kind]
        except KeyError:
            raise ValueError(f"No advisory source registered for {kind}") from None

    def _current_entry(self, kind: AdvisoryKind) -> AdvisoryCacheEntry | None:
        entry = self._entries.get(kind)
        if entry is None:
            return None
        source = self._source(kind)
        if entry.fingerprint != source.fingerprint(source.inputs()):
            logger.debug("advisory_cache: Entry stale", kind=kind.value)
            return None
        return entry

    def entry(self, kind: AdvisoryKind) -> AdvisoryCacheEntry | None:
        """Current entry for kind, or None if absent or stale."""
        return self._current_entry(kind)

    def get(self, kind: AdvisoryKind) -> Any | None:
        """Cached payload for kind, or None if there is no valid entry."""
        entry = self._current_entry(kind)
        if entry is None:
            return None
        logger.debug("advisory_cache: Cache hit", kind=kind.value, is_fallback=entry.is_fallback)
        return entry.payload

    def is_in_flight(self, kind: AdvisoryKind) -> bool:
        return kind in self._in_flight

    async def refresh(self, kind: AdvisoryKind) -> Any:
        """Make sure kind has an entry and return its payload.

        No fetch is issued when a valid entry exists, fallback entries
        included. A fetch already in flight is joined rather than duplicated.
        A fetch started before the last invalidation, or for inputs that have
        since changed, is waited out and then a fresh one is started, so there
        is still one fetch at a time.
        """
        source = self._source(kind)
        while True:
            entry = self._current_entry(kind)
            if entry is not None:
                return entry.payload

            in_flight = self._in_flight.get(kind)
            if in_flight is None or in_flight.task.done():
                in_flight = self._start_fetch(kind, source)
                return await asyncio.shield(in_flight.task)

            if in_flight.answers(self._generations[kind], source.fingerprint(source.inputs())):
                logger.debug("advisory_cache: Joining in-flight fetch", kind=kind.value)
                return await asyncio.shield(in_flight.task)

            logger.debug("advisory_cache: Waiting out fetch for outdated inputs", kind=kind.value)
            await asyncio.wait({in_flight.task})

    def _start_fetch(self, kind: AdvisoryKind, source: AdvisorySource) -> _InFlightFetch:
        generation = self._generations[kind]
        inputs = source.inputs()
        fingerprint = source.fingerprint(inputs)
        fetch = self._fetch(kind, source, inputs, fingerprint, generation)
        in_flight = _InFlightFetch(generation, fingerprint, asyncio.get_running_loop().create_task(fetch))
        self._in_flight[kind] = in_flight

        def _clear(task: asyncio.Task) -> None:
            current = self._in_flight.get(kind)
            if current is not None and current.task is task:
                del self._in_flight[kind]

        in_flight.task.add_done_callback(_clear)
        return in_flight

    async def _fetch(
        self,
        kind: AdvisoryKind,
        source: AdvisorySource,
        inputs: Any,
        fingerprint: Hashable,
        generation: int,
    ) -> Any:
        logger.debug("advisory_cache: Fetching", kind=kind.value)
        try:
            payload = await source.fetch(inputs)
            is_fallback = False
        except Exception as e:
            logger.warning(
                "advisory_cache: Fetch failed, using fallback",
                kind=kind.value,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            payload = source.fallback()
            is_fallback = True

        if self._generations[kind] != generation:
            logger.info("advisory_cache: Invalidated during fetch, result not stored", kind=kind.value)
            return payload

        self._entries[kind] = AdvisoryCacheEntry(
            kind=kind,
            fingerprint=fingerprint,
            payload=payload,
            is_fallback=is_fallback,
        )
        logger.debug("advisory_cache: Cache set", kind=kind.value, is_fallback=is_fallback)
        return payload

    def invalidate(self, kind: AdvisoryKind) -> None:
        self._entries.pop(kind, None)
        self._generations[kind] = self._generations.get(kind, 0) + 1
        logger.debug("advisory_cache: Invalidated", kind=kind.value)

    def invalidate_all(self) -> None:
        for kind in self._sources:
            self.invalidate(kind)
        logger.debug("advisory_cache: Cache cleared")
