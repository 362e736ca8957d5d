"""Darwin Core terms written by the checklist export.

Each output file is described by an :class:`ArchiveFile`: its file name,
row type and the ordered list of terms used both as CSV header and as
``meta.xml`` field list.  The first column of every file is ``taxonID``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

DWC_NS = "http://rs.tdwg.org/dwc/terms/"
DCTERMS_NS = "http://purl.org/dc/terms/"
GBIF_NS = "http://rs.gbif.org/terms/1.0/"

TAXON_TERMS: List[str] = [
    "taxonID",
    "acceptedNameUsageID",
    "scientificName",
    "acceptedNameUsage",
    "kingdom",
    "phylum",
    "class",
    "order",
    "family",
    "genus",
    "taxonRank",
    "nomenclaturalCode",
    "taxonomicStatus",
    "taxonRemarks",
    "language",
    "license",
    "rightsHolder",
    "datasetID",
    "institutionCode",
    "datasetName",
]

VERNACULAR_NAME_TERMS: List[str] = ["taxonID", "vernacularName", "language"]

SPECIES_PROFILE_TERMS: List[str] = ["taxonID", "isMarine", "isFreshwater", "isTerrestrial"]

DISTRIBUTION_TERMS: List[str] = [
    "taxonID",
    "locationID",
    "locality",
    "countryCode",
    "occurrenceStatus",
    "establishmentMeans",
    "eventDate",
    "source",
    "occurrenceRemarks",
]

REFERENCE_TERMS: List[str] = ["taxonID", "identifier", "bibliographicCitation"]

DESCRIPTION_TERMS: List[str] = ["taxonID", "description", "type", "language"]

# Terms outside the Darwin Core namespace
TERM_NAMESPACES: Dict[str, str] = {
    "language": DCTERMS_NS,
    "license": DCTERMS_NS,
    "rightsHolder": DCTERMS_NS,
    "identifier": DCTERMS_NS,
    "bibliographicCitation": DCTERMS_NS,
    "description": DCTERMS_NS,
    "type": DCTERMS_NS,
    "source": DCTERMS_NS,
    "vernacularName": DWC_NS,
    "isMarine": GBIF_NS,
    "isFreshwater": GBIF_NS,
    "isTerrestrial": GBIF_NS,
}


def term_uri(term: str) -> str:
    """Return the full URI for a term written by this project."""

    return f"{TERM_NAMESPACES.get(term, DWC_NS)}{term}"


@dataclass(frozen=True)
class ArchiveFile:
    """One data file of the Darwin Core Archive."""

    name: str
    filename: str
    row_type: str
    terms: List[str]


TAXON_FILE = ArchiveFile("taxon", "taxon.csv", f"{DWC_NS}Taxon", TAXON_TERMS)

EXTENSION_FILES: List[ArchiveFile] = [
    ArchiveFile(
        "vernacularname", "vernacularname.csv", f"{GBIF_NS}VernacularName", VERNACULAR_NAME_TERMS
    ),
    ArchiveFile(
        "speciesprofile", "speciesprofile.csv", f"{GBIF_NS}SpeciesProfile", SPECIES_PROFILE_TERMS
    ),
    ArchiveFile("distribution", "distribution.csv", f"{GBIF_NS}Distribution", DISTRIBUTION_TERMS),
    ArchiveFile("references", "references.csv", f"{GBIF_NS}Reference", REFERENCE_TERMS),
    ArchiveFile("description", "description.csv", f"{GBIF_NS}Description", DESCRIPTION_TERMS),
]

ARCHIVE_FILES: Dict[str, ArchiveFile] = {f.name: f for f in [TAXON_FILE, *EXTENSION_FILES]}
