"""
In-memory registry of generated curves.

Every generation request produces a new :class:`StoredCurve` under a
fresh identifier; entries are never patched in place.  The registry is
an ``OrderedDict`` used as an LRU: reading an entry marks it as
recently used and inserting beyond ``capacity`` drops the oldest one.
A reentrant lock guards the dictionary so concurrent request handlers
can share one registry.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Dict, Optional

from ..config import MAX_CURVE_ENTRIES
from .curve import Curve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredCurve:
    """A generated curve together with the request that produced it.

    Attributes:
        curve_id: Hex identifier assigned on insertion.
        curve: The generated curve.
        trace_point: Trace point position used for generation.
        request: Normalised generation parameters, echoed back to clients.
    """

    curve_id: str
    curve: Curve
    trace_point: Any = None
    request: Dict[str, Any] = field(default_factory=dict)


class CurveStore:
    """Bounded LRU mapping of curve id to :class:`StoredCurve`."""

    def __init__(self, capacity: int = MAX_CURVE_ENTRIES) -> None:
        self.capacity = capacity
        self._entries: "OrderedDict[str, StoredCurve]" = OrderedDict()
        self._lock = RLock()

    def add(self, curve: Curve, trace_point: Any = None, request: Optional[Dict[str, Any]] = None) -> StoredCurve:
        """Store ``curve`` under a new identifier and return the entry."""
        entry = StoredCurve(uuid.uuid4().hex, curve, trace_point, dict(request or {}))
        with self._lock:
            self._entries[entry.curve_id] = entry
            self._entries.move_to_end(entry.curve_id)
            while len(self._entries) > self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("CurveStore: evicted %s", evicted)
        return entry

    def get(self, curve_id: str) -> Optional[StoredCurve]:
        with self._lock:
            entry = self._entries.get(curve_id)
            if entry is not None:
                self._entries.move_to_end(curve_id)
            return entry

    def remove(self, curve_id: str) -> bool:
        with self._lock:
            return self._entries.pop(curve_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, curve_id: object) -> bool:
        with self._lock:
            return curve_id in self._entries


# Process-wide registry used by the HTTP routes.
curve_store = CurveStore()


__all__ = ["StoredCurve", "CurveStore", "curve_store"]
