"""Producer/consumer scan pipeline: traverse, hand off, batch, report."""

from pathscan.pipeline.coordinator import ScanCoordinator, run_scan
from pathscan.pipeline.models import FileRecord, ScanResult, ScanState

__all__ = ["FileRecord", "ScanCoordinator", "ScanResult", "ScanState", "run_scan"]
