"""Data models for samples, aligned rows and display output."""

from pygesbox.models.aligned import AlignedRow
from pygesbox.models.presentation import ChartSeries, TableRow
from pygesbox.models.sample import Sample, SourceId
from pygesbox.models.snapshot import MonitorSnapshot
from pygesbox.models.summary import Summary

__all__ = [
    "AlignedRow",
    "ChartSeries",
    "MonitorSnapshot",
    "Sample",
    "SourceId",
    "Summary",
    "TableRow",
]
