from .spreadsheets import read_records, read_sources, SOURCE_SHEETS
from .write import write_checklist, write_manifest, write_anomalies, ANOMALIES_FILE

__all__ = [
    "read_records",
    "read_sources",
    "SOURCE_SHEETS",
    "write_checklist",
    "write_manifest",
    "write_anomalies",
    "ANOMALIES_FILE",
]
