"""High-level async monitor polling the data source."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import aiohttp

from pygesbox._transport import HttpTransport, Transport
from pygesbox.alignment import Aligner
from pygesbox.config import GesboxConfig
from pygesbox.exceptions import GesboxError, GesboxMalformedDataError, GesboxNetworkError
from pygesbox.ingestion.samples import parse_samples
from pygesbox.models.sample import SourceId
from pygesbox.models.snapshot import MonitorSnapshot
from pygesbox.presentation import build_chart_series, build_table_rows, format_status
from pygesbox.store import SampleStore
from pygesbox.summary import evaluate_summary

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def build_snapshot(
    raw: list[Any],
    config: GesboxConfig,
    *,
    fetched_at: datetime | None = None,
) -> MonitorSnapshot:
    """Run the normalize, align, summarize and present steps on one payload."""
    samples = parse_samples(raw, config.fields)
    store = SampleStore.from_samples(samples, accumulate=config.accumulate_deltas)
    rows = Aligner.from_config(config).align(store)
    summary = evaluate_summary(store.a, store.b, alert_threshold_percent=config.alert_threshold_percent)
    return MonitorSnapshot(
        rows=rows,
        summary=summary,
        table=build_table_rows(rows),
        chart=build_chart_series(rows, label_a=config.fields.source_a, label_b=config.fields.source_b),
        sample_counts=store.counts(),
        fetched_at=fetched_at or _utcnow(),
    )


class VolumeMonitor:
    """Async poller reconciling the two sources on every refresh.

    Usage::

        async with VolumeMonitor(config) as monitor:
            snapshot = await monitor.refresh()
            print(monitor.status)

    Each refresh is all-or-nothing: a failed fetch or a malformed payload
    leaves the previous snapshot in place and only updates ``status``.
    """

    def __init__(
        self,
        config: GesboxConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        on_snapshot: Callable[[MonitorSnapshot], None] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._external_transport = transport is not None
        self._on_snapshot = on_snapshot
        self._clock = clock
        self._lock = asyncio.Lock()
        self._snapshot: MonitorSnapshot | None = None
        self._last_error: GesboxError | None = None
        self._status = format_status(None)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> VolumeMonitor:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def config(self) -> GesboxConfig:
        return self._config

    @property
    def snapshot(self) -> MonitorSnapshot | None:
        """Last successfully published snapshot."""
        return self._snapshot

    @property
    def status(self) -> str:
        return self._status

    @property
    def last_error(self) -> GesboxError | None:
        return self._last_error

    @property
    def is_refreshing(self) -> bool:
        return self._lock.locked()

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise GesboxError("Monitor not initialized. Use 'async with VolumeMonitor(...) as monitor:'")
        return self._transport

    # ------------------------------------------------------------------
    # Refresh cycle
    # ------------------------------------------------------------------

    async def refresh(self) -> MonitorSnapshot | None:
        """Fetch, align and summarize once, then publish the result.

        If a refresh is already in flight this call is skipped and the
        current snapshot is returned.

        Raises
        ------
        GesboxNetworkError
            If the fetch fails or times out.
        GesboxMalformedDataError
            If the payload cannot be turned into samples.
        """
        transport = self._require_transport()
        if self._lock.locked():
            _logger.debug("Refresh already in progress; skipping")
            return self._snapshot

        async with self._lock:
            try:
                raw = await transport.fetch_raw()
                snapshot = build_snapshot(raw, self._config, fetched_at=self._clock())
            except (GesboxNetworkError, GesboxMalformedDataError) as exc:
                self._last_error = exc
                self._status = format_status(self._snapshot, exc)
                _logger.warning("Refresh failed: %s", exc)
                raise

            self._snapshot = snapshot
            self._last_error = None
            self._status = format_status(snapshot)
            _logger.info(
                "Refresh complete: %d rows (A=%d, B=%d samples), alert=%s",
                len(snapshot.rows),
                snapshot.sample_counts.get(SourceId.A, 0),
                snapshot.sample_counts.get(SourceId.B, 0),
                snapshot.summary.alert,
            )

        if self._on_snapshot is not None:
            try:
                self._on_snapshot(snapshot)
            except Exception:
                _logger.debug("on_snapshot callback failed", exc_info=True)
        return snapshot

    async def run(self, *, iterations: int | None = None) -> None:
        """Refresh now, then every ``poll_interval`` seconds.

        Failed cycles are logged and retried on the next tick; the loop
        only ends after *iterations* cycles (runs forever when ``None``)
        or when cancelled.
        """
        count = 0
        while True:
            try:
                await self.refresh()
            except (GesboxNetworkError, GesboxMalformedDataError):
                # Already reported through status; the next poll is the retry.
                pass
            count += 1
            if iterations is not None and count >= iterations:
                return
            await asyncio.sleep(self._config.poll_interval)
