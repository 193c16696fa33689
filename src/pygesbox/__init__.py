"""pygesbox - Reconcile and compare two cumulative volume sensors."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pygesbox")
except PackageNotFoundError:
    __version__ = "0+local"
from pygesbox.alignment import Aligner, AlignmentStrategy, align
from pygesbox.config import FieldMapping, GesboxConfig
from pygesbox.exceptions import (
    GesboxConfigError,
    GesboxError,
    GesboxMalformedDataError,
    GesboxNetworkError,
)
from pygesbox.ingestion import decode_payload, parse_samples
from pygesbox.models import (
    AlignedRow,
    ChartSeries,
    MonitorSnapshot,
    Sample,
    SourceId,
    Summary,
    TableRow,
)
from pygesbox.monitor import VolumeMonitor, build_snapshot
from pygesbox.presentation import build_chart_series, build_table_rows, format_status
from pygesbox.store import SampleStore
from pygesbox.summary import discrepancy_ratio, evaluate_summary

__all__ = [
    "__version__",
    "AlignedRow",
    "Aligner",
    "AlignmentStrategy",
    "ChartSeries",
    "FieldMapping",
    "GesboxConfig",
    "GesboxConfigError",
    "GesboxError",
    "GesboxMalformedDataError",
    "GesboxNetworkError",
    "MonitorSnapshot",
    "Sample",
    "SampleStore",
    "SourceId",
    "Summary",
    "TableRow",
    "VolumeMonitor",
    "align",
    "build_chart_series",
    "build_snapshot",
    "build_table_rows",
    "decode_payload",
    "discrepancy_ratio",
    "evaluate_summary",
    "format_status",
    "parse_samples",
]
