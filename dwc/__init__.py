from .schema import (
    ArchiveFile,
    ARCHIVE_FILES,
    EXTENSION_FILES,
    TAXON_FILE,
    term_uri,
)
from .mapper import (
    DatasetMetadata,
    clean_column,
    clean_value,
    map_records,
    map_taxon_records,
    map_synonym_records,
    map_vernacular_name_records,
    map_reference_records,
)
from .normalize import (
    normalize_language,
    normalize_pathway,
    normalize_degree_of_establishment,
    most_established_stage,
)
from .validators import validate_minimal_fields, validate_event_date
from .archive import build_manifest, build_meta_xml, create_archive, create_versioned_bundle

__all__ = [
    "ArchiveFile",
    "ARCHIVE_FILES",
    "EXTENSION_FILES",
    "TAXON_FILE",
    "term_uri",
    "DatasetMetadata",
    "clean_column",
    "clean_value",
    "map_records",
    "map_taxon_records",
    "map_synonym_records",
    "map_vernacular_name_records",
    "map_reference_records",
    "normalize_language",
    "normalize_pathway",
    "normalize_degree_of_establishment",
    "most_established_stage",
    "validate_minimal_fields",
    "validate_event_date",
    "build_manifest",
    "build_meta_xml",
    "create_archive",
    "create_versioned_bundle",
]
