from collections import defaultdict
import logging
from typing import Callable, DefaultDict, List, Type


Handler = Callable[[object], None]


class EventBus:
    """In-process publish/subscribe; a failing handler never blocks the others."""

    def __init__(self) -> None:
        self._handlers: DefaultDict[Type[object], List[tuple[int, int, Handler]]] = defaultdict(list)
        self._sequence = 0
        self._last_errors: List[Exception] = []
        self._logger = logging.getLogger(__name__)

    def subscribe(self, event_type: Type[object], handler: Handler, *, priority: int = 100) -> None:
        rows = self._handlers[event_type]
        rows.append((int(priority), self._sequence, handler))
        rows.sort(key=lambda row: (row[0], row[1]))
        self._sequence += 1

    def subscribe_many(self, event_types, handler: Handler, *, priority: int = 100) -> None:
        for event_type in event_types:
            self.subscribe(event_type, handler, priority=priority)

    def has_subscribers(self, event_type: Type[object]) -> bool:
        return bool(self._handlers.get(event_type))

    def publish(self, event: object) -> None:
        self._last_errors = []
        event_type = type(event)
        for priority, _, handler in list(self._handlers.get(event_type, ())):
            try:
                handler(event)
            except Exception as exc:
                self._last_errors.append(exc)
                self._logger.exception(
                    "Event handler failed and was isolated",
                    extra={
                        "event_type": event_type.__name__,
                        "handler": getattr(handler, "__qualname__", repr(handler)),
                        "priority": priority,
                    },
                )

    def last_publish_errors(self) -> List[Exception]:
        return list(self._last_errors)
