"""
Machine event log.

Events are ordinary log records whose structured payload travels in
``extra={"details": {...}}``. A ``RingBufferHandler`` keeps the most recent
ones in memory so a controller can report its own history.
"""
import logging
import threading
from collections import deque
from typing import Deque, Dict, List, Optional, Union

FORMAT = "%(asctime)s %(levelname)s %(message)s"


class RingBufferHandler(logging.Handler):
    def __init__(self, max_entries: int = 200):
        super().__init__()
        self._events: Deque[Dict] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    @property
    def max_entries(self) -> int:
        return self._events.maxlen

    def resize(self, max_entries: int) -> None:
        """Change capacity, keeping the newest events that still fit."""
        with self._lock:
            if max_entries != self._events.maxlen:
                self._events = deque(self._events, maxlen=max_entries)

    def emit(self, record: logging.LogRecord) -> None:
        event = {
            "event": record.getMessage(),
            "level": record.levelname,
            "ts": record.created,
            "details": getattr(record, "details", {}),
        }
        with self._lock:
            self._events.append(event)

    def get_events(self) -> List[Dict]:
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


def ring_buffer(logger: logging.Logger) -> Optional[RingBufferHandler]:
    return next((h for h in logger.handlers if isinstance(h, RingBufferHandler)), None)


def create_logger(name: str, ring_size: int, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Return the named logger with a ring buffer of ``ring_size`` attached.

    Calling it again for the same name reuses the existing handler but
    applies the new level and ring size.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    handler = ring_buffer(logger)
    if handler is None:
        handler = RingBufferHandler(max_entries=ring_size)
        handler.setFormatter(logging.Formatter(FORMAT))
        logger.addHandler(handler)
    else:
        handler.resize(ring_size)
    return logger
