# src/esg_dashboard/pipeline/snapshot.py
from __future__ import annotations

import copy
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Snapshot:
    data: Dict[str, Any]
    insights: Tuple[str, ...] = ()


class DatasetSnapshot:
    """
    The dataset every dashboard page reads.

    Writers swap the whole Snapshot under a lock; readers get whatever
    Snapshot was current when they called `get()` and never see a
    half-applied upload. Stored data is deep-copied on the way in so later
    mutation by the writer cannot leak into readers. `get()` hands out the
    shared Snapshot, so callers that pass data onwards copy it first.
    """

    def __init__(self, data: Dict[str, Any], insights: Sequence[str] = ()) -> None:
        self._lock = threading.Lock()
        self._current = Snapshot(copy.deepcopy(data), tuple(insights))

    def get(self) -> Snapshot:
        return self._current

    def replace(self, data: Dict[str, Any], insights: Sequence[str] = ()) -> Snapshot:
        new = Snapshot(copy.deepcopy(data), tuple(insights))
        with self._lock:
            self._current = new
        return new

    def set_insights(
        self, insights: Sequence[str], expected: Optional[Snapshot] = None
    ) -> Snapshot:
        """
        Attach insights to the current data.

        With `expected`, nothing changes if another upload replaced the
        snapshot in the meantime; the current snapshot is returned instead.
        """
        with self._lock:
            if expected is not None and self._current is not expected:
                return self._current
            self._current = Snapshot(self._current.data, tuple(insights))
            return self._current
