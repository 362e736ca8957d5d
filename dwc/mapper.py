from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Type, TypeVar

from checklist.errors import MissingFieldError
from checklist.models import (
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

from .validators import validate_minimal_fields

logger = logging.getLogger(__name__)

_NON_WORD_RE = re.compile(r"[^0-9a-z]+")

# Cleaned column names that collide with Python keywords
_RESERVED_COLUMNS = {"class": "class_"}

R = TypeVar("R")

TAXON_REQUIRED = ("scientific_name", "first_observation")
SYNONYM_REQUIRED = ("scientific_name", "synonym_of")
VERNACULAR_NAME_REQUIRED = ("scientific_name", "vernacular_name")
REFERENCE_REQUIRED = ("scientific_name",)

# Constant values for the distribution and taxon files
KINGDOM = "Animalia"
PHYLUM = "Mollusca"
NOMENCLATURAL_CODE = "ICZN"
LOCATION_ID = "ISO_3166-2:BE"
LOCALITY = "Belgium"
COUNTRY_CODE = "BE"
ESTABLISHMENT_MEANS = "introduced"


@dataclass(frozen=True)
class DatasetMetadata:
    """Dataset level values repeated on every Taxon core row."""

    dataset_id: str = ""
    dataset_name: str = ""
    institution_code: str = "RBINS"
    rights_holder: str = ""
    license: str = ""
    language: str = "en"

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "DatasetMetadata":
        dataset_cfg = cfg.get("dataset", {})
        return cls(
            dataset_id=dataset_cfg.get("dataset_id", ""),
            dataset_name=dataset_cfg.get("dataset_name", ""),
            institution_code=dataset_cfg.get("institution_code", "RBINS"),
            rights_holder=dataset_cfg.get("rights_holder", ""),
            license=dataset_cfg.get("license", ""),
            language=dataset_cfg.get("language", "en"),
        )


def clean_column(name: str) -> str:
    """Return a snake_case column name, e.g. ``"First observation"`` -> ``first_observation``."""

    cleaned = _NON_WORD_RE.sub("_", str(name).strip().lower()).strip("_")
    return _RESERVED_COLUMNS.get(cleaned, cleaned)


def clean_value(value: Any) -> str | None:
    """Return ``value`` as a stripped string or ``None`` when empty.

    Spreadsheet readers return years as numbers; integral floats are written
    without their decimal part.
    """

    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def map_records(
    rows: Iterable[Mapping[str, Any]],
    model: Type[R],
    required: Iterable[str],
    table: str,
) -> Tuple[R, ...]:
    """Translate spreadsheet rows into ``model`` instances.

    Column names are cleaned with :func:`clean_column`; columns that are not
    fields of ``model`` are ignored.  Completely empty rows are skipped.  A
    row missing one of the ``required`` values aborts the mapping with
    :class:`~checklist.errors.MissingFieldError`.
    """

    required = tuple(required)
    fields = set(model.model_fields)
    records: List[R] = []
    for row_number, row in enumerate(rows, start=1):
        data = {clean_column(k): clean_value(v) for k, v in row.items()}
        if not any(data.values()):
            continue
        missing = validate_minimal_fields(data, required)
        if missing:
            raise MissingFieldError(
                f"{table} row {row_number}: missing required value(s) {', '.join(missing)}"
            )
        records.append(model(**{k: v for k, v in data.items() if k in fields and v is not None}))
    logger.debug("Mapped %d %s rows", len(records), table)
    return tuple(records)


def map_taxon_records(rows: Iterable[Mapping[str, Any]]) -> Tuple[RawTaxonRecord, ...]:
    return map_records(rows, RawTaxonRecord, TAXON_REQUIRED, "taxa")


def map_synonym_records(rows: Iterable[Mapping[str, Any]]) -> Tuple[RawSynonymRecord, ...]:
    return map_records(rows, RawSynonymRecord, SYNONYM_REQUIRED, "synonyms")


def map_vernacular_name_records(
    rows: Iterable[Mapping[str, Any]],
) -> Tuple[RawVernacularNameRecord, ...]:
    return map_records(rows, RawVernacularNameRecord, VERNACULAR_NAME_REQUIRED, "vernacular_names")


def map_reference_records(rows: Iterable[Mapping[str, Any]]) -> Tuple[RawReferenceRecord, ...]:
    return map_records(rows, RawReferenceRecord, REFERENCE_REQUIRED, "references")


def _bool(value: bool) -> str:
    return "true" if value else "false"


def taxon_to_dwc(taxon: ResolvedTaxon, metadata: DatasetMetadata) -> Dict[str, str]:
    """Return a Taxon core row keyed by Darwin Core term."""

    return {
        "taxonID": taxon.taxon_id,
        "acceptedNameUsageID": taxon.accepted_name_usage_id,
        "scientificName": taxon.scientific_name,
        "acceptedNameUsage": taxon.accepted_name_usage,
        "kingdom": KINGDOM,
        "phylum": PHYLUM,
        "class": taxon.class_ or "",
        "order": taxon.order or "",
        "family": taxon.family or "",
        "genus": taxon.genus or "",
        "taxonRank": taxon.taxon_rank or "",
        "nomenclaturalCode": NOMENCLATURAL_CODE,
        "taxonomicStatus": taxon.taxonomic_status.value,
        "taxonRemarks": taxon.taxonomic_remarks or "",
        "language": metadata.language,
        "license": metadata.license,
        "rightsHolder": metadata.rights_holder,
        "datasetID": metadata.dataset_id,
        "institutionCode": metadata.institution_code,
        "datasetName": metadata.dataset_name,
    }


def vernacular_name_to_dwc(row: VernacularName) -> Dict[str, str]:
    return {
        "taxonID": row.taxon_id,
        "vernacularName": row.vernacular_name,
        "language": row.language or "",
    }


def species_profile_to_dwc(row: SpeciesProfile) -> Dict[str, str]:
    return {
        "taxonID": row.taxon_id,
        "isMarine": _bool(row.is_marine),
        "isFreshwater": _bool(row.is_freshwater),
        "isTerrestrial": _bool(row.is_terrestrial),
    }


def distribution_to_dwc(row: Distribution) -> Dict[str, str]:
    return {
        "taxonID": row.taxon_id,
        "locationID": LOCATION_ID,
        "locality": LOCALITY,
        "countryCode": COUNTRY_CODE,
        "occurrenceStatus": row.occurrence_status or "",
        "establishmentMeans": ESTABLISHMENT_MEANS,
        "eventDate": row.event_date or "",
        "source": row.source or "",
        "occurrenceRemarks": row.occurrence_remarks or "",
    }


def reference_to_dwc(row: Reference) -> Dict[str, str]:
    return {
        "taxonID": row.taxon_id,
        "identifier": row.identifier or "",
        "bibliographicCitation": row.bibliographic_citation or "",
    }


def descriptor_to_dwc(row: Descriptor) -> Dict[str, str]:
    return {
        "taxonID": row.taxon_id,
        "description": row.description,
        "type": row.type.value,
        "language": row.language,
    }
