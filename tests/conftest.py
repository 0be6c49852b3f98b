import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from gridstash.events import InventoryEvent  # noqa: E402


class EventRecorder:
    """Collects (event, args) pairs fired by a manager."""

    def __init__(self, manager) -> None:
        self.calls = []
        for event in InventoryEvent:
            manager.events.subscribe(event, self._make(event))

    def _make(self, event):
        def _record(*args):
            self.calls.append((event, args))
        _record.__name__ = f"record_{event.name.lower()}"
        return _record

    def of(self, event):
        return [args for ev, args in self.calls if ev == event]

    def names(self):
        return [ev for ev, _ in self.calls]


@pytest.fixture
def recorder_for():
    return EventRecorder
