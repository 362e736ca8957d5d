"""Tests for joining extension tables to the Taxon core."""

import pytest

from checklist.extensions import (
    TaxonIndex,
    event_date,
    join_distributions,
    join_references,
    join_species_profiles,
    join_vernacular_names,
)
from checklist.identifiers import generate_id
from checklist.models import RawReferenceRecord, RawVernacularNameRecord
from checklist.taxa import resolve


@pytest.fixture
def index(accepted, synonyms, rank_lookup):
    return TaxonIndex.from_taxa(resolve(accepted, synonyms, rank_lookup=rank_lookup).taxa)


class TestEventDate:
    @pytest.mark.parametrize(
        "first, last, expected",
        [
            ("1950", "", "1950"),
            ("1950", None, "1950"),
            ("1950", "2000", "1950/2000"),
        ],
    )
    def test_event_date(self, first, last, expected):
        assert event_date(first, last) == expected


class TestTaxonIndex:
    def test_only_accepted_names_are_indexed(self, index):
        assert "Helix balteata Pollonera, 1892" not in index.ids
        assert index.ids["Arion vulgaris Moquin-Tandon, 1855"] == generate_id(
            "Arion vulgaris Moquin-Tandon, 1855"
        )

    def test_lookup_is_exact(self, index):
        taxon_id, anomalies = index.lookup("Arion vulgaris Moquin-Tandon,  1855", "references", 3)

        assert taxon_id == ""
        assert anomalies[0].kind == "unmatched_name"
        assert anomalies[0].row == 3


class TestVernacularNames:
    def test_languages_are_recoded(self, vernacular_names, index):
        rows, anomalies = join_vernacular_names(vernacular_names, index)

        assert [r.language for r in rows] == ["nl", "en", "fr"]
        assert anomalies == ()

    def test_unmatched_name_is_kept(self, index):
        records = (
            RawVernacularNameRecord(
                scientific_name="Helix balteata Pollonera, 1892",
                vernacular_name="Gebande slak",
                language="dutch",
            ),
        )
        rows, anomalies = join_vernacular_names(records, index)

        assert len(rows) == 1
        assert rows[0].taxon_id == ""
        assert [a.kind for a in anomalies] == ["unmatched_name"]

    def test_unknown_language_is_reported_and_kept(self, index):
        records = (
            RawVernacularNameRecord(
                scientific_name="Arion vulgaris Moquin-Tandon, 1855",
                vernacular_name="Spansk skogssnigel",
                language="swedish",
            ),
        )
        rows, anomalies = join_vernacular_names(records, index)

        assert len(rows) == 1
        assert rows[0].language is None
        assert rows[0].taxon_id == generate_id("Arion vulgaris Moquin-Tandon, 1855")
        assert [a.kind for a in anomalies] == ["unknown_language"]
        assert anomalies[0].row == 1


class TestTaxonExtensions:
    def test_species_profile_constants(self, accepted, index):
        rows, _ = join_species_profiles(accepted, index)

        assert len(rows) == len(accepted)
        assert all(not r.is_marine and not r.is_freshwater and r.is_terrestrial for r in rows)

    def test_distribution(self, accepted, index):
        rows, anomalies = join_distributions(accepted, index)

        assert [r.event_date for r in rows] == ["1950/2000", "1987", "1974"]
        assert rows[0].source == "Vervust et al. 2019"
        assert rows[0].taxon_id == generate_id("Cernuella virgata (Da Costa, 1778)")
        assert anomalies == ()

    def test_references(self, references, index):
        rows, anomalies = join_references(references, index)

        assert rows[0].identifier == "https://doi.org/10.1234/example"
        assert rows[0].bibliographic_citation.startswith("Vervust et al.")
        assert anomalies == ()

    def test_reference_for_unknown_taxon(self, index):
        records = (RawReferenceRecord(scientific_name="Cornu aspersum", reference="Anon."),)
        rows, anomalies = join_references(records, index)

        assert rows[0].taxon_id == ""
        assert anomalies[0].scientific_name == "Cornu aspersum"
