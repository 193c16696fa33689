"""Time-series alignment of the two sample sequences."""

from pygesbox.alignment.aligner import Aligner
from pygesbox.alignment.strategies import AlignmentStrategy, align

__all__ = ["Aligner", "AlignmentStrategy", "align"]
