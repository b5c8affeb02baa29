from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Sequence

from ..core.constants import DEFAULT_POLL_INTERVAL_SECONDS
from ..core.exceptions import ApiError, SessionExpiredError
from .board import AttendanceBoard
from .model import AttendanceRecord

logger = logging.getLogger(__name__)

Fetch = Callable[[], Sequence[AttendanceRecord]]


class AttendancePoller:
    """Keeps an AttendanceBoard fresh while its screen is active.

    Each tick runs its fetch on a separate worker thread, so ticks never wait for
    each other; the board's sequence guard drops results that arrive out of order.
    """

    def __init__(
        self,
        board: AttendanceBoard,
        fetch: Fetch,
        *,
        interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        on_refresh: Optional[Callable[[AttendanceBoard], None]] = None,
        on_error: Optional[Callable[[ApiError], None]] = None,
        on_expired: Optional[Callable[[SessionExpiredError], None]] = None,
    ):
        self._board = board
        self._fetch = fetch
        self._interval = float(interval)
        self._on_refresh = on_refresh
        self._on_error = on_error
        self._on_expired = on_expired
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="attendance-poller", daemon=True)
        self._thread.start()
        logger.info("Attendance polling started (every %.1fs)", self._interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Attendance polling stopped")

    def refresh_now(self) -> bool:
        """Run one fetch synchronously (first load); returns whether it was applied."""
        return self._refresh(self._board.begin_refresh())

    def _loop(self) -> None:
        # First tick fires immediately, then every interval until stopped.
        while not self._stop.is_set():
            seq = self._board.begin_refresh()
            threading.Thread(target=self._refresh, args=(seq,), name=f"attendance-fetch-{seq}", daemon=True).start()
            self._stop.wait(self._interval)

    def _refresh(self, seq: int) -> bool:
        try:
            records = self._fetch()
        except SessionExpiredError as e:
            # Credentials are gone; further ticks would fail the same way.
            logger.warning("Attendance refresh #%s rejected, stopping: %s", seq, e)
            if self._on_expired and not self._stop.is_set():
                self._on_expired(e)
            self._stop.set()
            return False
        except ApiError as e:
            logger.warning("Attendance refresh #%s failed: %s", seq, e)
            if self._on_error and not self._stop.is_set():
                self._on_error(e)
            return False

        if self._stop.is_set():
            return False

        applied = self._board.apply_refresh(seq, records)
        if not applied:
            logger.debug("Discarding stale attendance refresh #%s", seq)
        elif self._on_refresh:
            self._on_refresh(self._board)
        return applied
