"""Application layer - Circular dependency detection."""

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator, List, Optional

from tether_di.domain import ResolutionContext


class ResolutionTracker:
    """Tracks the active resolution chain of each thread.

    A ResolutionContext is created when the outermost resolve call on a thread
    starts and discarded when that call returns or fails. Nested resolutions
    push onto the same context, so an identifier appearing twice is a cycle.
    A container and all of its scopes share one tracker.

    Attributes:
        _local: Thread-local storage holding the current context.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _get_context(self) -> Optional[ResolutionContext]:
        return getattr(self._local, "context", None)

    @contextmanager
    def track(self, identifier: Hashable) -> Iterator[ResolutionContext]:
        """Push an identifier for the duration of the block.

        Args:
            identifier: The identifier being resolved.

        Raises:
            CircularDependencyError: If the identifier is already in the chain.

        Example:
            >>> tracker = ResolutionTracker()
            >>> with tracker.track(ServiceA):
            ...     with tracker.track(ServiceB):
            ...         with tracker.track(ServiceA):  # Raises CircularDependencyError
            ...             pass
        """
        context = self._get_context()
        if context is None:
            context = ResolutionContext()
            self._local.context = context

        # A failed push implies a non-empty chain owned by an outer frame
        context.push(identifier)

        try:
            yield context
        finally:
            context.pop()
            if context.is_empty:
                self._discard()

    def current_chain(self) -> List[Hashable]:
        """Return the calling thread's active chain, outermost first."""
        context = self._get_context()
        return context.chain() if context is not None else []

    def _discard(self) -> None:
        if hasattr(self._local, "context"):
            del self._local.context
