"""Coalescing of bursty redraw triggers."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass
class _PendingCall:
    args: Tuple[Any, ...]
    kwargs: dict[str, Any]


class RedrawDebouncer:
    """Collapse a burst of calls into one delayed call with the latest arguments.

    Parameters
    ----------
    callback:
        Callable to execute, typically a calculator ``render``.
    delay_ms:
        Quiet period in milliseconds. Each new call restarts it.

    Notes
    -----
    Coalescing is an optimization only; calling the callback directly gives the
    same final picture because a redraw is idempotent.
    """

    def __init__(self, callback: Callable[..., Any], *, delay_ms: int) -> None:
        if delay_ms <= 0:
            raise ValueError("delay_ms must be > 0")
        self._callback = callback
        self._delay_s = delay_ms / 1000.0
        self._lock = threading.Lock()
        self._pending: Optional[_PendingCall] = None
        self._timer: Optional[threading.Timer] = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            self._pending = _PendingCall(args=args, kwargs=dict(kwargs))
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self._delay_s, self._on_timer)
            timer.daemon = True
            self._timer = timer
            timer.start()

    def _take_pending_locked(self) -> Optional[_PendingCall]:
        call, self._pending = self._pending, None
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return call

    def _on_timer(self) -> None:
        with self._lock:
            call = self._take_pending_locked()
        self._run(call)

    def flush(self) -> None:
        """Run the pending call now, if any."""
        with self._lock:
            call = self._take_pending_locked()
        self._run(call)

    def cancel(self) -> None:
        """Drop the pending call without running it."""
        with self._lock:
            self._take_pending_locked()

    def _run(self, call: Optional[_PendingCall]) -> None:
        if call is None:
            return
        try:
            self._callback(*call.args, **call.kwargs)
        except Exception:
            logger.exception("RedrawDebouncer callback failed")


__all__ = ["RedrawDebouncer"]
