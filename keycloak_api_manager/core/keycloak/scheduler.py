"""Background token refresh."""
from __future__ import annotations
import logging
import math
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL_MS = 30000


def compute_refresh_interval(token_lifespan: Any) -> float:
    """Return the refresh interval in milliseconds.

    Half the token lifespan (given in seconds); DEFAULT_REFRESH_INTERVAL_MS when the
    lifespan is missing, not a number, or not positive.
    """
    if isinstance(token_lifespan, bool):
        return DEFAULT_REFRESH_INTERVAL_MS
    try:
        seconds = float(token_lifespan)
    except (TypeError, ValueError):
        return DEFAULT_REFRESH_INTERVAL_MS
    if not math.isfinite(seconds) or seconds <= 0:
        return DEFAULT_REFRESH_INTERVAL_MS
    return seconds * 1000 / 2


def _log_refresh_error(exc: BaseException) -> None:
    logger.warning("[refresh] Token refresh failed: %s", exc)


class RefreshScheduler:
    """Recurring task running on a daemon thread.

    The thread never keeps the interpreter alive. A failing tick is reported
    to on_error and the loop keeps going.

    Usage:
        scheduler = RefreshScheduler(lambda: client.authenticate(grant), 150000)
        scheduler.start()
        ...
        scheduler.cancel()
    """

    def __init__(
        self,
        callback: Callable[[], Any],
        interval_ms: float,
        on_error: Optional[Callable[[BaseException], Any]] = None,
        name: str = "keycloak-token-refresh",
    ):
        self.callback = callback
        self.interval_ms = interval_ms
        self.on_error = on_error or _log_refresh_error
        self.name = name
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000

    @property
    def active(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.debug("[refresh] Scheduled every %.1fs", self.interval_seconds)

    def cancel(self) -> None:
        """Stop future ticks. Safe to call more than once."""
        if self._stop_event.is_set():
            return
        self._stop_event.set()
        logger.debug("[refresh] Scheduler cancelled")

    def _run(self) -> None:
        while not self._stop_event.wait(timeout=self.interval_seconds):
            self.tick()

    def tick(self) -> None:
        """Run the callback once, routing failures to on_error."""
        try:
            self.callback()
        except Exception as exc:
            try:
                self.on_error(exc)
            except Exception:
                logger.exception("[refresh] Error callback raised")
