#!/usr/bin/env python3
"""
Signal handler for query cancellation.

Turns SIGINT or SIGTERM into a cancellation flag that the hydration pipeline
checks before every upstream request.
"""

import logging
import signal
import threading
from typing import Callable, Optional

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "signal_handler",
        "description": "Signal handler for query cancellation",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class ShutdownCoordinator:
    """Coordinates query cancellation on SIGINT/SIGTERM.

    The flag is a threading.Event so scope workers can poll it safely.
    """

    def __init__(self) -> None:
        """Initialize the shutdown coordinator."""
        self._cancelled = threading.Event()
        self._shutdown_callback: Optional[Callable[[], None]] = None
        self._original_sigint_handler = None
        self._original_sigterm_handler = None

    def is_shutdown_requested(self) -> bool:
        """Check if cancellation has been requested.

        Suitable as the cancel_check of a table query.

        Returns:
            True if cancellation was requested
        """
        return self._cancelled.is_set()

    def request_shutdown(self) -> None:
        """Request cancellation and run the registered callback once."""
        if self._cancelled.is_set():
            return
        self._cancelled.set()

        if self._shutdown_callback is not None:
            try:
                self._shutdown_callback()
            except Exception as e:
                logger.error(f"Error during shutdown callback: {e}")

    def register_shutdown_callback(self, callback: Callable[[], None]) -> None:
        """Register a callback to be called on cancellation.

        Args:
            callback: Function to call when cancellation is requested
        """
        self._shutdown_callback = callback

    def setup_signal_handlers(self) -> None:
        """Setup signal handlers for SIGINT and SIGTERM."""
        # Store original handlers
        self._original_sigint_handler = signal.signal(signal.SIGINT, self._signal_handler)
        self._original_sigterm_handler = signal.signal(signal.SIGTERM, self._signal_handler)

    def restore_signal_handlers(self) -> None:
        """Restore original signal handlers."""
        if self._original_sigint_handler is not None:
            signal.signal(signal.SIGINT, self._original_sigint_handler)
        if self._original_sigterm_handler is not None:
            signal.signal(signal.SIGTERM, self._original_sigterm_handler)

    def _signal_handler(self, signum: int, frame) -> None:
        """Handle SIGINT and SIGTERM signals.

        Args:
            signum: Signal number
            frame: Current stack frame
        """
        logger.warning(f"Received signal {signum}, cancelling query after in-flight requests")
        self.request_shutdown()

        # A second signal falls through to the original handler
        self.restore_signal_handlers()


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
