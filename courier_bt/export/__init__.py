"""I/O package for the courier simulation."""

from .csv_writer import CSVWriter
from .narrator import Narrator
from .visualizer import Visualizer
from .reporter import Reporter

__all__ = ['CSVWriter', 'Narrator', 'Visualizer', 'Reporter']
