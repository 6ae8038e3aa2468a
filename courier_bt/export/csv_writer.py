"""CSV export of the robot trajectory."""

import csv
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import TickState

FIELDNAMES = ['tick', 'x', 'y', 'facing', 'has_package', 'result']


class CSVWriter:
    """
    Exports one row per tick, written incrementally.

    Output format:
        tick,x,y,facing,has_package,result
        1,2,1,East,1,1
        ...
    """

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.file: Optional[object] = None
        self.writer: Optional[csv.DictWriter] = None
        self._is_open = False

    def open(self) -> None:
        """Initialize file and write header."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.output_path, 'w', newline='')
        self.writer = csv.DictWriter(self.file, fieldnames=FIELDNAMES)
        self.writer.writeheader()
        self._is_open = True

    def append(self, state: "TickState") -> None:
        """Write the row for one tick."""
        if not self._is_open:
            self.open()
        self.writer.writerow(state.to_csv_row())
        self.file.flush()

    def close(self) -> None:
        """Close file handle."""
        if self.file:
            self.file.close()
            self.file = None
            self.writer = None
            self._is_open = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
