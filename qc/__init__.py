"""Quality control helpers for the checklist build.

Problems that should not stop a build are collected as :class:`Anomaly`
records and written to ``anomalies.csv`` next to the Darwin Core files.

``find_duplicate_ids``
    Report taxon identifiers shared by more than one Taxon core row.

``check_referential_integrity``
    Report extension rows whose ``taxonID`` is not present in the core.

``flag_realm_mismatch``
    Report taxa whose realm disagrees with the constant species profile
    (every taxon is published as terrestrial).

``flag_invalid_event_dates``
    Report distribution rows whose ``eventDate`` is not a year or a year
    interval running forward in time.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from dwc.validators import validate_event_date

ANOMALY_COLUMNS = ["kind", "table", "row", "scientific_name", "message"]

TERRESTRIAL_REALM = "terrestrial"


@dataclass(frozen=True)
class Anomaly:
    """A data-quality problem tied to one source or output row.

    ``row`` is the 1-based data row in ``table`` (header excluded) or
    ``None`` when the problem spans several rows.
    """

    kind: str
    table: str
    row: Optional[int]
    scientific_name: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        data["row"] = "" if self.row is None else str(self.row)
        return data


@dataclass
class QualityReport:
    """Anomalies gathered over one run."""

    anomalies: List[Anomaly] = field(default_factory=list)

    def extend(self, anomalies: Iterable[Anomaly]) -> None:
        self.anomalies.extend(anomalies)

    def counts(self) -> Dict[str, int]:
        return dict(Counter(a.kind for a in self.anomalies))

    def __len__(self) -> int:
        return len(self.anomalies)

    def __iter__(self):
        return iter(self.anomalies)


def find_duplicate_ids(taxa: Sequence) -> List[Anomaly]:
    """Return one ``identifier_collision`` anomaly per repeated ``taxon_id``."""

    counts = Counter(t.taxon_id for t in taxa)
    anomalies: List[Anomaly] = []
    reported: set[str] = set()
    for idx, taxon in enumerate(taxa, start=1):
        if counts[taxon.taxon_id] > 1 and taxon.taxon_id not in reported:
            reported.add(taxon.taxon_id)
            names = sorted({t.scientific_name for t in taxa if t.taxon_id == taxon.taxon_id})
            anomalies.append(
                Anomaly(
                    kind="identifier_collision",
                    table="taxon",
                    row=idx,
                    scientific_name=taxon.scientific_name,
                    message=(
                        f"{taxon.taxon_id} is shared by {counts[taxon.taxon_id]} rows "
                        f"({'; '.join(names)})"
                    ),
                )
            )
    return anomalies


def check_referential_integrity(taxa: Sequence, table: str, rows: Sequence) -> List[Anomaly]:
    """Report rows of ``table`` whose ``taxon_id`` is missing from ``taxa``.

    Rows with an empty ``taxon_id`` are skipped: the joiner already reported
    them as ``unmatched_name``.
    """

    known = {t.taxon_id for t in taxa}
    anomalies: List[Anomaly] = []
    for idx, row in enumerate(rows, start=1):
        if row.taxon_id and row.taxon_id not in known:
            anomalies.append(
                Anomaly(
                    kind="dangling_taxon_id",
                    table=table,
                    row=idx,
                    scientific_name="",
                    message=f"taxonID {row.taxon_id} does not exist in the taxon core",
                )
            )
    return anomalies


def flag_realm_mismatch(records: Sequence) -> List[Anomaly]:
    """Report taxa recorded in a realm other than terrestrial."""

    anomalies: List[Anomaly] = []
    for idx, record in enumerate(records, start=1):
        realm = (record.realm or "").strip().lower()
        if realm and realm != TERRESTRIAL_REALM:
            anomalies.append(
                Anomaly(
                    kind="realm_mismatch",
                    table="taxa",
                    row=idx,
                    scientific_name=record.scientific_name,
                    message=f"realm '{record.realm}' but species profile marks taxon as terrestrial",
                )
            )
    return anomalies


def flag_invalid_event_dates(distributions: Sequence) -> List[Anomaly]:
    anomalies: List[Anomaly] = []
    for idx, row in enumerate(distributions, start=1):
        if not validate_event_date(row.event_date):
            anomalies.append(
                Anomaly(
                    kind="invalid_event_date",
                    table="distribution",
                    row=idx,
                    scientific_name="",
                    message=f"eventDate '{row.event_date}' is not a year or year interval",
                )
            )
    return anomalies


__all__ = [
    "ANOMALY_COLUMNS",
    "Anomaly",
    "QualityReport",
    "find_duplicate_ids",
    "check_referential_integrity",
    "flag_realm_mismatch",
    "flag_invalid_event_dates",
]
