"""Compose the checklist build from raw spreadsheet records.

:func:`build_checklist` takes the four raw tables and returns every output
table at once.  Nothing is written here: fatal errors propagate before the
caller gets a chance to write partial output, and non-fatal problems are
returned in the :class:`~qc.QualityReport`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Sequence, Tuple

from qc import (
    QualityReport,
    check_referential_integrity,
    flag_invalid_event_dates,
    flag_realm_mismatch,
)

from .descriptions import build_descriptions
from .extensions import (
    TaxonIndex,
    join_distributions,
    join_references,
    join_species_profiles,
    join_vernacular_names,
)
from .identifiers import DEFAULT_SHORTNAME
from .models import (
    Descriptor,
    Distribution,
    RawReferenceRecord,
    RawSynonymRecord,
    RawTaxonRecord,
    RawVernacularNameRecord,
    Reference,
    ResolvedTaxon,
    SpeciesProfile,
    VernacularName,
)
from .taxa import RankLookup, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawTables:
    taxa: Tuple[RawTaxonRecord, ...]
    synonyms: Tuple[RawSynonymRecord, ...] = ()
    vernacular_names: Tuple[RawVernacularNameRecord, ...] = ()
    references: Tuple[RawReferenceRecord, ...] = ()


@dataclass(frozen=True)
class ChecklistTables:
    taxa: Tuple[ResolvedTaxon, ...]
    vernacular_names: Tuple[VernacularName, ...]
    species_profiles: Tuple[SpeciesProfile, ...]
    distributions: Tuple[Distribution, ...]
    references: Tuple[Reference, ...]
    descriptions: Tuple[Descriptor, ...]
    report: QualityReport = field(default_factory=QualityReport)

    def extensions(self) -> Dict[str, Sequence[Any]]:
        """Extension rows keyed by archive file name."""
        return {
            "vernacularname": self.vernacular_names,
            "speciesprofile": self.species_profiles,
            "distribution": self.distributions,
            "references": self.references,
            "description": self.descriptions,
        }

    def row_counts(self) -> Dict[str, int]:
        counts = {"taxon": len(self.taxa)}
        counts.update({name: len(rows) for name, rows in self.extensions().items()})
        return counts


def build_checklist(
    raw: RawTables,
    *,
    rank_lookup: RankLookup,
    shortname: str = DEFAULT_SHORTNAME,
    pro_parte_names: Iterable[str] = (),
) -> ChecklistTables:
    """Run identifier generation, taxon resolution and the extension joins."""

    report = QualityReport()

    resolution = resolve(
        raw.taxa,
        raw.synonyms,
        shortname=shortname,
        rank_lookup=rank_lookup,
        pro_parte_names=pro_parte_names,
    )
    report.extend(resolution.anomalies)
    index = TaxonIndex.from_taxa(resolution.taxa)

    vernacular_names, anomalies = join_vernacular_names(raw.vernacular_names, index)
    report.extend(anomalies)
    species_profiles, anomalies = join_species_profiles(raw.taxa, index)
    report.extend(anomalies)
    distributions, anomalies = join_distributions(raw.taxa, index)
    report.extend(anomalies)
    report.extend(flag_invalid_event_dates(distributions))
    references, anomalies = join_references(raw.references, index)
    report.extend(anomalies)
    descriptions, anomalies = build_descriptions(raw.taxa, index)
    report.extend(anomalies)
    report.extend(flag_realm_mismatch(raw.taxa))

    tables = ChecklistTables(
        taxa=resolution.taxa,
        vernacular_names=vernacular_names,
        species_profiles=species_profiles,
        distributions=distributions,
        references=references,
        descriptions=descriptions,
    )
    for name, rows in tables.extensions().items():
        report.extend(check_referential_integrity(tables.taxa, name, rows))
    tables = replace(tables, report=report)

    logger.info(
        "Built checklist: %s",
        ", ".join(f"{name}={count}" for name, count in tables.row_counts().items()),
    )
    if report:
        logger.warning("%d anomalies found: %s", len(report), report.counts())
    return tables


__all__ = ["RawTables", "ChecklistTables", "build_checklist"]
