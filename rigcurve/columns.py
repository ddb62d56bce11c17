# rigcurve/columns.py
from enum import Enum


class Column(Enum):
    """Fixed rig output channels, in file order. ``.value`` is the UI label."""
    ELAPSED_TIME = "Elapsed Time"
    SCAN_TIME = "Scan Time"
    DISPLAY_1 = "Display 1"
    LOAD_1 = "Load 1"
    LOAD_2 = "Load 2"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> "Column":
        return cls(label)

    @classmethod
    def labels(cls) -> list[str]:
        return [c.value for c in cls]


DEFAULT_X = Column.DISPLAY_1
LOAD_COLUMNS = (Column.LOAD_1, Column.LOAD_2)
