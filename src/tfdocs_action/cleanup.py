"""Ordered cleanup actions bound to process exit.

CleanupStack collects finalizers from independent components (for example
the git identity restore for user.name and for user.email) and runs all of
them when the ``with`` block exits, whether that happens normally, through
an exception, or through SIGINT/SIGTERM.

Guarantees:
- Registering an action never replaces an earlier one
- Actions run in registration order
- Each action runs exactly once, even if run() is called again
- A failing action does not prevent the remaining actions from running
- SIGINT/SIGTERM arriving while the actions run is logged and ignored

Public API:
    CleanupStack: Context manager holding the actions
    CleanupError: Raised after all actions ran if any of them failed
    Interrupted: Raised in the main thread when SIGINT/SIGTERM arrives
"""

import logging
import signal
import threading
from collections.abc import Callable, Iterable
from types import FrameType
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class CleanupError(Exception):
    """Raised when one or more cleanup actions fail."""

    def __init__(self, failures: list[tuple[str, Exception]]):
        self.failures = failures
        names = ", ".join(name for name, _ in failures)
        super().__init__(f"{len(failures)} cleanup action(s) failed: {names}")


class Interrupted(KeyboardInterrupt):
    """Raised when the process receives a termination signal."""

    def __init__(self, signum: int):
        self.signum = signum
        super().__init__(f"Received signal {signal.Signals(signum).name}")

    @property
    def exit_code(self) -> int:
        """Shell convention: 128 + signal number."""
        return 128 + self.signum


class CleanupStack:
    """Run registered cleanup actions once, in order, at scope exit.

    Example:
        >>> with CleanupStack() as cleanups:
        ...     cleanups.register(print, "first")
        ...     cleanups.register(print, "second")
        first
        second
    """

    def __init__(self, signals: Iterable[int] = DEFAULT_SIGNALS):
        self._signals = tuple(signals)
        self._actions: list[tuple[Callable[..., Any], tuple[Any, ...], dict[str, Any]]] = []
        self._previous_handlers: dict[int, Any] = {}

    def __len__(self) -> int:
        return len(self._actions)

    def register(self, action: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Append an action; it runs after every action registered before it.

        Args:
            action: Callable to run at exit
            *args: Positional arguments for the action
            **kwargs: Keyword arguments for the action
        """
        self._actions.append((action, args, kwargs))
        logger.debug(f"Registered cleanup action {_describe(action)}")

    def run(self) -> None:
        """Run and discard all pending actions in registration order.

        Raises:
            CleanupError: If any action raised (after all actions ran)
        """
        failures: list[tuple[str, Exception]] = []
        interrupt: KeyboardInterrupt | None = None
        while self._actions:
            action, args, kwargs = self._actions.pop(0)
            name = _describe(action)
            try:
                action(*args, **kwargs)
            except Exception as e:
                logger.error(f"Cleanup action {name} failed: {e}")
                failures.append((name, e))
            except KeyboardInterrupt as e:
                # Finish the remaining actions first, then re-raise
                logger.warning(f"Cleanup action {name} interrupted, continuing cleanup")
                interrupt = interrupt or e

        if interrupt is not None:
            raise interrupt
        if failures:
            raise CleanupError(failures)

    def __enter__(self) -> "CleanupStack":
        # signal.signal only works in the main thread
        if threading.current_thread() is threading.main_thread():
            for signum in self._signals:
                self._previous_handlers[signum] = signal.signal(signum, self._handle_signal)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # A second signal must not cut the cleanup short
        for signum in self._previous_handlers:
            signal.signal(signum, self._ignore_signal)
        try:
            self.run()
        finally:
            for signum, handler in self._previous_handlers.items():
                signal.signal(signum, handler)
            self._previous_handlers.clear()

    def _handle_signal(self, signum: int, frame: FrameType | None) -> None:
        logger.warning(f"Received signal {signal.Signals(signum).name}, running cleanup")
        raise Interrupted(signum)

    def _ignore_signal(self, signum: int, frame: FrameType | None) -> None:
        logger.warning(f"Received signal {signal.Signals(signum).name} during cleanup, ignored")


def _describe(action: Callable[..., Any]) -> str:
    return getattr(action, "__qualname__", None) or repr(action)


__all__ = ["CleanupError", "CleanupStack", "Interrupted"]
