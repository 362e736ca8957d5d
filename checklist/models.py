"""Record models flowing through the checklist pipeline.

Raw models mirror one row of a source spreadsheet after column names have
been cleaned by :mod:`dwc.mapper`.  Resolved models carry the taxon
identifier and are what the Darwin Core writers consume.  All models are
frozen: every pipeline step returns new tuples of records rather than
editing the ones it received.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TaxonomicStatus(str, Enum):
    """Darwin Core ``taxonomicStatus`` values produced by the resolver."""

    ACCEPTED = "accepted"
    HOMOTYPIC_SYNONYM = "homotypicSynonym"
    HETEROTYPIC_SYNONYM = "heterotypicSynonym"
    PRO_PARTE_SYNONYM = "proParteSynonym"


class DescriptorType(str, Enum):
    """Description extension ``type`` labels, one per unpivoted field."""

    NATIVE_RANGE = "native range"
    PATHWAY = "pathway"
    DEGREE_OF_ESTABLISHMENT = "degree of establishment"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class RawTaxonRecord(_Record):
    """One accepted species from the taxa sheet."""

    scientific_name: str
    class_: Optional[str] = None
    order: Optional[str] = None
    family: Optional[str] = None
    genus: Optional[str] = None
    native_range: Optional[str] = None
    introduction_pathway: Optional[str] = None
    degree_of_establishment: Optional[str] = None
    occurrence_status: Optional[str] = None
    first_observation: str
    last_observation: Optional[str] = None
    source_distribution: Optional[str] = None
    realm: Optional[str] = None
    occurrence_remarks: Optional[str] = None
    taxon_remarks: Optional[str] = None


class RawSynonymRecord(_Record):
    scientific_name: str
    synonym_of: str
    remarks: Optional[str] = None


class RawVernacularNameRecord(_Record):
    scientific_name: str
    vernacular_name: str
    language: Optional[str] = None


class RawReferenceRecord(_Record):
    scientific_name: str
    identifier: Optional[str] = None
    reference: Optional[str] = None


class ResolvedTaxon(_Record):
    """A row of the Taxon core.

    ``accepted_name_usage_id`` equals ``taxon_id`` for accepted taxa.
    """

    taxon_id: str
    accepted_name_usage_id: str
    scientific_name: str
    accepted_name_usage: str
    taxonomic_status: TaxonomicStatus
    class_: Optional[str] = None
    order: Optional[str] = None
    family: Optional[str] = None
    genus: Optional[str] = None
    taxon_rank: Optional[str] = None
    taxonomic_remarks: Optional[str] = None


class VernacularName(_Record):
    taxon_id: str
    vernacular_name: str
    language: Optional[str] = None


class SpeciesProfile(_Record):
    taxon_id: str
    is_marine: bool = False
    is_freshwater: bool = False
    is_terrestrial: bool = True


class Distribution(_Record):
    taxon_id: str
    occurrence_status: Optional[str] = None
    event_date: Optional[str] = None
    source: Optional[str] = None
    occurrence_remarks: Optional[str] = None


class Reference(_Record):
    taxon_id: str
    identifier: Optional[str] = None
    bibliographic_citation: Optional[str] = None


class Descriptor(_Record):
    taxon_id: str
    type: DescriptorType
    description: str
    language: str = "en"


__all__ = [
    "TaxonomicStatus",
    "DescriptorType",
    "RawTaxonRecord",
    "RawSynonymRecord",
    "RawVernacularNameRecord",
    "RawReferenceRecord",
    "ResolvedTaxon",
    "VernacularName",
    "SpeciesProfile",
    "Distribution",
    "Reference",
    "Descriptor",
]
