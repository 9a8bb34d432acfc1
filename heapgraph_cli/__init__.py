"""HeapGraph CLI: retention analysis for managed-runtime heap snapshots."""

__version__ = "0.3.0"
