"""Shared fixtures: a small slice of the alien molluscs checklist."""

import pytest

from checklist.models import (
    RawReferenceRecord,
    RawSynonymRecord,
    RawTaxonRecord,
    RawVernacularNameRecord,
)
from checklist.pipeline import RawTables

RANKS = {
    "Cernuella virgata (Da Costa, 1778)": "species",
    "Cernuella cisalpina (Rossmässler, 1837)": "species",
    "Arion vulgaris Moquin-Tandon, 1855": "species",
    "Helix balteata Pollonera, 1892": "species",
    "Helix virgata Da Costa, 1778": "species",
    "Arion lusitanicus auct. non Mabille, 1868": "species",
}


@pytest.fixture
def rank_lookup():
    """Offline stand-in for the GBIF name parser."""
    return lambda name: RANKS.get(name, "")


@pytest.fixture
def accepted():
    return (
        RawTaxonRecord(
            scientific_name="Cernuella virgata (Da Costa, 1778)",
            class_="Gastropoda",
            order="Stylommatophora",
            family="Geomitridae",
            genus="Cernuella",
            native_range="Europe | Northern Africa",
            introduction_pathway="contaminant on plants | hitchhikers on ship",
            degree_of_establishment="C1 - C3",
            occurrence_status="present",
            first_observation="1950",
            last_observation="2000",
            source_distribution="Vervust et al. 2019",
            realm="terrestrial",
        ),
        RawTaxonRecord(
            scientific_name="Cernuella cisalpina (Rossmässler, 1837)",
            class_="Gastropoda",
            order="Stylommatophora",
            family="Geomitridae",
            genus="Cernuella",
            native_range="Europe",
            introduction_pathway="horticulture",
            degree_of_establishment="D2, E",
            occurrence_status="present",
            first_observation="1987",
            realm="terrestrial",
        ),
        RawTaxonRecord(
            scientific_name="Arion vulgaris Moquin-Tandon, 1855",
            class_="Gastropoda",
            order="Stylommatophora",
            family="Arionidae",
            genus="Arion",
            native_range="Europe | Asia",
            introduction_pathway="contaminant nursery material",
            degree_of_establishment="E",
            occurrence_status="present",
            first_observation="1974",
            last_observation="",
            realm="terrestrial",
        ),
    )


@pytest.fixture
def synonyms():
    return (
        RawSynonymRecord(
            scientific_name="Helix balteata Pollonera, 1892",
            synonym_of="Cernuella virgata (Da Costa, 1778)",
        ),
        RawSynonymRecord(
            scientific_name="Helix virgata Da Costa, 1778",
            synonym_of="Cernuella virgata (Da Costa, 1778)",
            remarks="original name",
        ),
        RawSynonymRecord(
            scientific_name="Helix balteata Pollonera, 1892",
            synonym_of="Cernuella cisalpina (Rossmässler, 1837)",
            remarks="original name",
        ),
        RawSynonymRecord(
            scientific_name="Arion lusitanicus auct. non Mabille, 1868",
            synonym_of="Arion vulgaris Moquin-Tandon, 1855",
        ),
    )


@pytest.fixture
def vernacular_names():
    return (
        RawVernacularNameRecord(
            scientific_name="Arion vulgaris Moquin-Tandon, 1855",
            vernacular_name="Spaanse wegslak",
            language="Dutch",
        ),
        RawVernacularNameRecord(
            scientific_name="Arion vulgaris Moquin-Tandon, 1855",
            vernacular_name="Spanish slug",
            language="English",
        ),
        RawVernacularNameRecord(
            scientific_name="Cernuella virgata (Da Costa, 1778)",
            vernacular_name="Escargot de Quimper",
            language="french",
        ),
    )


@pytest.fixture
def references():
    return (
        RawReferenceRecord(
            scientific_name="Cernuella virgata (Da Costa, 1778)",
            identifier="https://doi.org/10.1234/example",
            reference="Vervust et al. (2019) Non-native molluscs in Belgium.",
        ),
    )


@pytest.fixture
def raw_tables(accepted, synonyms, vernacular_names, references):
    return RawTables(
        taxa=accepted,
        synonyms=synonyms,
        vernacular_names=vernacular_names,
        references=references,
    )
