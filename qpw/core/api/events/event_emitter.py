"""Event emitter implementation using Observer Pattern."""
from typing import Dict, List, Callable, Optional

from ...logging import get_logger


class EventEmitter:
    """
    Event emitter using Observer Pattern.

    A failing handler is logged and does not stop the remaining handlers
    or the emitting call.
    """

    def __init__(self, logger_name: str = 'qpw.events'):
        """Initializes event emitter."""
        self._events: Dict[str, List[Callable]] = {}
        self._logger = get_logger(logger_name)

    def on(self, event: str, callback: Callable) -> 'EventEmitter':
        """Registers an event handler."""
        self._events.setdefault(event, []).append(callback)
        return self

    def emit(self, event: str, *args, **kwargs) -> int:
        """
        Emits an event.

        Returns:
            Number of handlers called
        """
        handlers = list(self._events.get(event, []))
        for callback in handlers:
            try:
                callback(*args, **kwargs)
            except Exception as e:
                self._logger.error(f"Handler for '{event}' failed: {e}")
        return len(handlers)

    def off(self, event: str, callback: Optional[Callable] = None) -> 'EventEmitter':
        """Removes an event handler (all handlers if callback is None)."""
        if event not in self._events:
            return self

        if callback is None:
            del self._events[event]
        else:
            self._events[event] = [cb for cb in self._events[event] if cb != callback]

        return self

    def listeners(self, event: str) -> List[Callable]:
        """Returns the handlers registered for an event."""
        return list(self._events.get(event, []))
