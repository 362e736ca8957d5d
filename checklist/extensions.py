"""Attach taxon identifiers to the extension tables.

Extension rows are joined to the Taxon core on the exact scientific name of
an accepted taxon.  A row whose name has no accepted match is kept with an
empty ``taxon_id`` and reported, so that a spelling mismatch between sheets
shows up in the anomaly report instead of silently shrinking the export.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from dwc.normalize import normalize_language
from qc import Anomaly

from .errors import VocabularyError
from .models import (
    Distribution,
    RawReferenceRecord,
    RawTaxonRecord,
    RawVernacularNameRecord,
    Reference,
    ResolvedTaxon,
    SpeciesProfile,
    TaxonomicStatus,
    VernacularName,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaxonIndex:
    """Scientific name to taxon identifier, for accepted taxa only."""

    ids: Dict[str, str]

    @classmethod
    def from_taxa(cls, taxa: Sequence[ResolvedTaxon]) -> "TaxonIndex":
        ids: Dict[str, str] = {}
        for taxon in taxa:
            if taxon.taxonomic_status is TaxonomicStatus.ACCEPTED:
                ids.setdefault(taxon.scientific_name, taxon.taxon_id)
        return cls(ids)

    def lookup(self, scientific_name: str, table: str, row: int) -> Tuple[str, List[Anomaly]]:
        """Return the identifier for ``scientific_name`` and any join anomaly."""
        taxon_id = self.ids.get(scientific_name)
        if taxon_id is not None:
            return taxon_id, []
        logger.warning("%s row %d: no accepted taxon named '%s'", table, row, scientific_name)
        return "", [
            Anomaly(
                kind="unmatched_name",
                table=table,
                row=row,
                scientific_name=scientific_name,
                message="scientific name does not match any accepted taxon",
            )
        ]


def event_date(first_observation: str | None, last_observation: str | None) -> str:
    """Return ``first`` or the ``first/last`` interval when a last year exists."""

    first = first_observation or ""
    if not last_observation:
        return first
    return f"{first}/{last_observation}"


def _language_code(
    record: RawVernacularNameRecord, row_number: int
) -> Tuple[str | None, List[Anomaly]]:
    """Recode the language name; an unknown one is reported and left empty."""

    if not record.language:
        return None, []
    try:
        return normalize_language(record.language), []
    except VocabularyError as e:
        logger.warning("vernacular_names row %d: %s", row_number, e.message)
        return None, [
            Anomaly(
                kind="unknown_language",
                table="vernacular_names",
                row=row_number,
                scientific_name=record.scientific_name,
                message=e.message,
            )
        ]


def join_vernacular_names(
    records: Sequence[RawVernacularNameRecord], index: TaxonIndex
) -> Tuple[Tuple[VernacularName, ...], Tuple[Anomaly, ...]]:
    rows: List[VernacularName] = []
    anomalies: List[Anomaly] = []
    for row_number, record in enumerate(records, start=1):
        taxon_id, found = index.lookup(record.scientific_name, "vernacular_names", row_number)
        anomalies.extend(found)
        language, found = _language_code(record, row_number)
        anomalies.extend(found)
        rows.append(
            VernacularName(
                taxon_id=taxon_id,
                vernacular_name=record.vernacular_name,
                language=language,
            )
        )
    return tuple(rows), tuple(anomalies)


def join_species_profiles(
    records: Sequence[RawTaxonRecord], index: TaxonIndex
) -> Tuple[Tuple[SpeciesProfile, ...], Tuple[Anomaly, ...]]:
    """One terrestrial, non-marine, non-freshwater profile per taxon."""

    rows: List[SpeciesProfile] = []
    anomalies: List[Anomaly] = []
    for row_number, record in enumerate(records, start=1):
        taxon_id, found = index.lookup(record.scientific_name, "taxa", row_number)
        anomalies.extend(found)
        rows.append(SpeciesProfile(taxon_id=taxon_id))
    return tuple(rows), tuple(anomalies)


def join_distributions(
    records: Sequence[RawTaxonRecord], index: TaxonIndex
) -> Tuple[Tuple[Distribution, ...], Tuple[Anomaly, ...]]:
    rows: List[Distribution] = []
    anomalies: List[Anomaly] = []
    for row_number, record in enumerate(records, start=1):
        taxon_id, found = index.lookup(record.scientific_name, "taxa", row_number)
        anomalies.extend(found)
        rows.append(
            Distribution(
                taxon_id=taxon_id,
                occurrence_status=record.occurrence_status,
                event_date=event_date(record.first_observation, record.last_observation),
                source=record.source_distribution,
                occurrence_remarks=record.occurrence_remarks,
            )
        )
    return tuple(rows), tuple(anomalies)


def join_references(
    records: Sequence[RawReferenceRecord], index: TaxonIndex
) -> Tuple[Tuple[Reference, ...], Tuple[Anomaly, ...]]:
    rows: List[Reference] = []
    anomalies: List[Anomaly] = []
    for row_number, record in enumerate(records, start=1):
        taxon_id, found = index.lookup(record.scientific_name, "references", row_number)
        anomalies.extend(found)
        rows.append(
            Reference(
                taxon_id=taxon_id,
                identifier=record.identifier,
                bibliographic_citation=record.reference,
            )
        )
    return tuple(rows), tuple(anomalies)


__all__ = [
    "TaxonIndex",
    "event_date",
    "join_vernacular_names",
    "join_species_profiles",
    "join_distributions",
    "join_references",
]
