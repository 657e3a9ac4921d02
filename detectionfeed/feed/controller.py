"""Two-stage fetch orchestration for a host's detection feed.

FetchController resolves a device id to alert ids, hydrates them, and owns
the resulting FetchState plus the ExpansionSet of the list it feeds.

Staleness guard: every load is tagged with a generation number. A newer
load (or a rebind to different inputs) bumps the generation, and any
resolution whose tag is no longer current is dropped without touching
state or expansion.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import replace

import structlog

from detectionfeed.feed.expansion import ExpansionSet
from detectionfeed.feed.shaping import describe_failure, device_filter
from detectionfeed.models.state import FetchPhase, FetchState
from detectionfeed.observability.metrics import feed_loads_total
from detectionfeed.service.base import AlertService

_log = structlog.get_logger(component="feed.controller")

StateListener = Callable[[FetchState], None]


class FetchController:
    """Owns the fetch lifecycle and expansion state for one rendered feed.

    Args:
        on_change: Called with the new FetchState after every committed
                   transition. Listener errors are logged, never raised.
        expansion: Initial expansion set. Defaults to empty.
    """

    def __init__(
        self,
        on_change: StateListener | None = None,
        expansion: ExpansionSet | None = None,
    ) -> None:
        self._state = FetchState()
        self._expansion = expansion if expansion is not None else ExpansionSet()
        self._on_change = on_change
        self._generation = 0
        self._bound: tuple[AlertService | None, str | None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def expansion(self) -> ExpansionSet:
        return self._expansion

    def is_expanded(self, composite_id: str) -> bool:
        return self._expansion.is_expanded(composite_id)

    def toggle(self, composite_id: str) -> None:
        """Flip one row's expanded state (user interaction)."""
        self._expansion = self._expansion.toggle(composite_id)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self, client: AlertService | None, device_id: str | None) -> None:
        """Run the query and hydration stages for *device_id*.

        Does nothing at all when either input is missing. Never raises for
        service failures: they become a FAILED state.
        """
        if client is None or not device_id:
            _log.debug("feed_load_skipped", has_client=client is not None, device_id=device_id)
            return

        self._generation += 1
        generation = self._generation
        self._commit(FetchState(phase=FetchPhase.LOADING))
        _log.info("feed_load_started", device_id=device_id, generation=generation)

        stage = "query"
        try:
            ids = list(await client.query_ids(device_filter(device_id)))
            if self._is_stale(generation):
                self._drop_stale(device_id, generation, stage)
                return

            if not ids:
                # Empty batches are never sent to the hydration stage.
                self._commit(FetchState(phase=FetchPhase.READY))
                feed_loads_total.labels(outcome="empty").inc()
                _log.info("feed_ready", device_id=device_id, count=0)
                return

            # Most recent detection is opened before hydration completes.
            self._expansion = self._expansion.expand_default(ids[0])
            _log.debug(
                "feed_query_resolved",
                device_id=device_id,
                count=len(ids),
                default_expanded=ids[0],
            )

            stage = "hydrate"
            records = await client.hydrate(ids)
        except Exception as exc:  # noqa: BLE001
            if self._is_stale(generation):
                self._drop_stale(device_id, generation, stage)
                return
            message = describe_failure(exc)
            _log.warning(
                "feed_load_failed",
                device_id=device_id,
                stage=stage,
                error=message,
                error_type=type(exc).__name__,
            )
            self._commit(replace(self._state, phase=FetchPhase.FAILED, error_message=message))
            feed_loads_total.labels(outcome="failed").inc()
            return

        if self._is_stale(generation):
            self._drop_stale(device_id, generation, stage)
            return

        self._commit(FetchState(phase=FetchPhase.READY, records=tuple(records)))
        feed_loads_total.labels(outcome="ready").inc()
        _log.info("feed_ready", device_id=device_id, count=len(records))

    def bind(self, client: AlertService | None, device_id: str | None) -> asyncio.Task[None] | None:
        """Reload when the (client, device_id) pair changes.

        Returns the scheduled load task, or None when the inputs are
        unchanged or incomplete. Any change invalidates in-flight loads, and
        a change of device clears the expansion set.
        Must be called from a running event loop.
        """
        if self._bound is not None and self._bound[0] is client and self._bound[1] == device_id:
            return None
        if self._bound is not None and self._bound[1] != device_id:
            self._expansion = ExpansionSet()
        self._bound = (client, device_id)
        self._generation += 1

        if client is None or not device_id:
            return None
        task = asyncio.create_task(self.load(client, device_id), name=f"feed-load-{device_id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def aclose(self) -> None:
        """Cancel loads scheduled by ``bind`` and wait for them to finish."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    def _drop_stale(self, device_id: str, generation: int, stage: str) -> None:
        feed_loads_total.labels(outcome="stale").inc()
        _log.debug(
            "feed_stale_response_dropped",
            device_id=device_id,
            generation=generation,
            current_generation=self._generation,
            stage=stage,
        )

    def _commit(self, state: FetchState) -> None:
        self._state = state
        if self._on_change is None:
            return
        try:
            self._on_change(state)
        except Exception as exc:  # noqa: BLE001
            _log.error("feed_listener_error", phase=state.phase.value, error=str(exc))
