"""Public exports for JSON persistence and CSV export."""

from .export import export_stats_csv
from .store import PersistenceStore, StorageError

__all__ = [
    "PersistenceStore",
    "StorageError",
    "export_stats_csv",
]
