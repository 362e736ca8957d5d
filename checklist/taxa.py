"""Build the Taxon core from accepted names and synonyms.

Accepted taxa reference themselves through ``acceptedNameUsageID``.
Synonyms inherit the higher classification of the accepted taxon named in
their ``synonym_of`` column and get one of three synonym statuses:

* ``proParteSynonym`` when the same synonym name points to more than one
  accepted name, or when it is listed in the configured exceptions;
* ``homotypicSynonym`` when the remarks read ``original name``;
* ``heterotypicSynonym`` otherwise.

A pro parte synonym would otherwise produce one identifier for several
rows, so each of its occurrences gets a positional suffix (``:1``, ``:2``,
...) following the order in which the accepted names first appear in the
synonym sheet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from qc import Anomaly, find_duplicate_ids

from .identifiers import DEFAULT_SHORTNAME, generate_id, suffix_id
from .models import RawSynonymRecord, RawTaxonRecord, ResolvedTaxon, TaxonomicStatus

logger = logging.getLogger(__name__)

HOMOTYPIC_REMARK = "original name"

RankLookup = Callable[[str], str]


@dataclass(frozen=True)
class TaxonResolution:
    taxa: Tuple[ResolvedTaxon, ...]
    anomalies: Tuple[Anomaly, ...]

    def accepted(self) -> Tuple[ResolvedTaxon, ...]:
        return tuple(t for t in self.taxa if t.taxonomic_status is TaxonomicStatus.ACCEPTED)


def synonym_status(remarks: str | None, pro_parte: bool) -> TaxonomicStatus:
    """Return the status of a synonym; pro parte wins over the remarks."""

    if pro_parte:
        return TaxonomicStatus.PRO_PARTE_SYNONYM
    if remarks == HOMOTYPIC_REMARK:
        return TaxonomicStatus.HOMOTYPIC_SYNONYM
    return TaxonomicStatus.HETEROTYPIC_SYNONYM


def _cached(rank_lookup: RankLookup) -> RankLookup:
    @lru_cache(maxsize=None)
    def lookup(name: str) -> str:
        return rank_lookup(name) or ""

    return lookup


def resolve_accepted(
    accepted: Sequence[RawTaxonRecord],
    *,
    shortname: str = DEFAULT_SHORTNAME,
    rank_lookup: RankLookup,
) -> Tuple[ResolvedTaxon, ...]:
    """Turn each accepted record into a self-referencing Taxon row."""

    taxa: List[ResolvedTaxon] = []
    for record in accepted:
        taxon_id = generate_id(record.scientific_name, shortname=shortname)
        taxa.append(
            ResolvedTaxon(
                taxon_id=taxon_id,
                accepted_name_usage_id=taxon_id,
                scientific_name=record.scientific_name,
                accepted_name_usage=record.scientific_name,
                taxonomic_status=TaxonomicStatus.ACCEPTED,
                class_=record.class_,
                order=record.order,
                family=record.family,
                genus=record.genus,
                taxon_rank=rank_lookup(record.scientific_name),
                taxonomic_remarks=record.taxon_remarks,
            )
        )
    return tuple(taxa)


def _unique_synonyms(
    synonyms: Sequence[RawSynonymRecord],
) -> Tuple[List[Tuple[int, RawSynonymRecord]], List[Anomaly]]:
    """Drop repeated (name, synonym_of) pairs, keeping source row numbers."""

    seen: set[Tuple[str, str]] = set()
    unique: List[Tuple[int, RawSynonymRecord]] = []
    anomalies: List[Anomaly] = []
    for row, record in enumerate(synonyms, start=1):
        key = (record.scientific_name, record.synonym_of)
        if key in seen:
            anomalies.append(
                Anomaly(
                    kind="duplicate_synonym",
                    table="synonyms",
                    row=row,
                    scientific_name=record.scientific_name,
                    message=f"synonym of '{record.synonym_of}' is listed more than once",
                )
            )
            continue
        seen.add(key)
        unique.append((row, record))
    return unique, anomalies


def resolve_synonyms(
    synonyms: Sequence[RawSynonymRecord],
    accepted: Sequence[RawTaxonRecord],
    *,
    shortname: str = DEFAULT_SHORTNAME,
    rank_lookup: RankLookup,
    pro_parte_names: Iterable[str] = (),
) -> Tuple[Tuple[ResolvedTaxon, ...], Tuple[Anomaly, ...]]:
    """Resolve synonym records against the accepted taxa."""

    unique, anomalies = _unique_synonyms(synonyms)

    accepted_by_name: Dict[str, RawTaxonRecord] = {}
    for record in accepted:
        accepted_by_name.setdefault(record.scientific_name, record)

    # Accepted names per synonym name, in order of first appearance
    targets: Dict[str, List[str]] = {}
    for _, record in unique:
        targets.setdefault(record.scientific_name, []).append(record.synonym_of)

    pro_parte = {name for name, accepted_names in targets.items() if len(accepted_names) > 1}
    pro_parte.update(pro_parte_names)
    if pro_parte:
        logger.info("Pro parte synonyms: %s", ", ".join(sorted(pro_parte)))

    taxa: List[ResolvedTaxon] = []
    for row, record in unique:
        base_id = generate_id(record.scientific_name, shortname=shortname)
        group = targets[record.scientific_name]
        taxon_id = (
            suffix_id(base_id, group.index(record.synonym_of) + 1) if len(group) > 1 else base_id
        )

        parent = accepted_by_name.get(record.synonym_of)
        if parent is None:
            anomalies.append(
                Anomaly(
                    kind="unresolved_synonym",
                    table="synonyms",
                    row=row,
                    scientific_name=record.scientific_name,
                    message=f"synonym_of '{record.synonym_of}' does not match any accepted taxon",
                )
            )

        taxa.append(
            ResolvedTaxon(
                taxon_id=taxon_id,
                accepted_name_usage_id=generate_id(record.synonym_of, shortname=shortname),
                scientific_name=record.scientific_name,
                accepted_name_usage=record.synonym_of,
                taxonomic_status=synonym_status(
                    record.remarks, record.scientific_name in pro_parte
                ),
                class_=parent.class_ if parent else None,
                order=parent.order if parent else None,
                family=parent.family if parent else None,
                genus=parent.genus if parent else None,
                taxon_rank=rank_lookup(record.scientific_name),
                taxonomic_remarks=record.remarks,
            )
        )
    return tuple(taxa), tuple(anomalies)


def _hidden_collisions(
    accepted_taxa: Sequence[ResolvedTaxon], synonym_taxa: Sequence[ResolvedTaxon]
) -> List[Anomaly]:
    """Report accepted names reused as pro parte synonyms.

    The positional suffix keeps every ``taxon_id`` distinct, so
    :func:`qc.find_duplicate_ids` cannot see that the synonym rows share the
    base identifier of the accepted row.
    """

    accepted_ids = {t.scientific_name: t.taxon_id for t in accepted_taxa}
    reported: set[str] = set()
    anomalies: List[Anomaly] = []
    for idx, taxon in enumerate(synonym_taxa, start=len(accepted_taxa) + 1):
        name = taxon.scientific_name
        base_id = accepted_ids.get(name)
        if base_id is None or taxon.taxon_id == base_id or name in reported:
            continue
        reported.add(name)
        anomalies.append(
            Anomaly(
                kind="identifier_collision",
                table="taxon",
                row=idx,
                scientific_name=name,
                message=f"{base_id} is both an accepted taxon and a pro parte synonym",
            )
        )
    return anomalies


def resolve(
    accepted: Sequence[RawTaxonRecord],
    synonyms: Sequence[RawSynonymRecord],
    *,
    shortname: str = DEFAULT_SHORTNAME,
    rank_lookup: RankLookup,
    pro_parte_names: Iterable[str] = (),
) -> TaxonResolution:
    """Return the Taxon core: accepted taxa followed by their synonyms.

    Identifier collisions are reported, not overwritten; every row is kept.
    An accepted name that is also a pro parte synonym counts as a collision
    even though its suffixed ids are distinct.
    """

    lookup = _cached(rank_lookup)
    accepted_taxa = resolve_accepted(accepted, shortname=shortname, rank_lookup=lookup)
    synonym_taxa, anomalies = resolve_synonyms(
        synonyms,
        accepted,
        shortname=shortname,
        rank_lookup=lookup,
        pro_parte_names=pro_parte_names,
    )
    taxa = accepted_taxa + synonym_taxa
    collisions = find_duplicate_ids(taxa) + _hidden_collisions(accepted_taxa, synonym_taxa)
    for anomaly in collisions:
        logger.warning("Identifier collision: %s", anomaly.message)
    logger.info(
        "Resolved %d accepted taxa and %d synonyms", len(accepted_taxa), len(synonym_taxa)
    )
    return TaxonResolution(taxa=taxa, anomalies=anomalies + tuple(collisions))


__all__ = [
    "HOMOTYPIC_REMARK",
    "TaxonResolution",
    "synonym_status",
    "resolve_accepted",
    "resolve_synonyms",
    "resolve",
]
