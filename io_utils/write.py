from pathlib import Path
from typing import Callable, Iterable, Dict, Any, List, Sequence
import csv
import json

from checklist.pipeline import ChecklistTables
from dwc.mapper import (
    DatasetMetadata,
    descriptor_to_dwc,
    distribution_to_dwc,
    reference_to_dwc,
    species_profile_to_dwc,
    taxon_to_dwc,
    vernacular_name_to_dwc,
)
from dwc.schema import ARCHIVE_FILES
from qc import ANOMALY_COLUMNS, QualityReport

ANOMALIES_FILE = "anomalies.csv"

_EXTENSION_WRITERS: Dict[str, Callable[[Any], Dict[str, str]]] = {
    "vernacularname": vernacular_name_to_dwc,
    "speciesprofile": species_profile_to_dwc,
    "distribution": distribution_to_dwc,
    "references": reference_to_dwc,
    "description": descriptor_to_dwc,
}


def write_manifest(output_dir: Path, meta: Dict[str, Any]) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = output_dir / "manifest.json"
    manifest_path.write_text(json.dumps(meta, indent=2))


def write_csv(path: Path, columns: Sequence[str], rows: Iterable[Dict[str, Any]]) -> int:
    """Write ``rows`` to ``path`` with ``columns`` as header, returning the row count."""
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(columns), lineterminator="\n")
        writer.writeheader()
        for row in rows:
            writer.writerow({k: row.get(k, "") for k in columns})
            count += 1
    return count


def write_anomalies(output_dir: Path, report: QualityReport) -> Path:
    path = output_dir / ANOMALIES_FILE
    write_csv(path, ANOMALY_COLUMNS, (a.to_dict() for a in report))
    return path


def write_checklist(
    output_dir: Path, tables: ChecklistTables, metadata: DatasetMetadata
) -> List[Path]:
    """Write the Taxon core, its extensions and the anomaly report."""
    written: List[Path] = []
    core = ARCHIVE_FILES["taxon"]
    write_csv(
        output_dir / core.filename, core.terms, (taxon_to_dwc(t, metadata) for t in tables.taxa)
    )
    written.append(output_dir / core.filename)
    for name, rows in tables.extensions().items():
        archive_file = ARCHIVE_FILES[name]
        to_dwc = _EXTENSION_WRITERS[name]
        write_csv(
            output_dir / archive_file.filename,
            archive_file.terms,
            (to_dwc(row) for row in rows),
        )
        written.append(output_dir / archive_file.filename)
    written.append(write_anomalies(output_dir, tables.report))
    return written
