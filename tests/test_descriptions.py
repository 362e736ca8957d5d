"""Tests for unpivoting native range, pathway and degree of establishment."""

import pytest

from checklist.descriptions import build_descriptions, split_values, unpivot
from checklist.errors import VocabularyError
from checklist.extensions import TaxonIndex
from checklist.identifiers import generate_id
from checklist.models import DescriptorType, RawTaxonRecord
from checklist.taxa import resolve

ARION = "Arion vulgaris Moquin-Tandon, 1855"


@pytest.fixture
def index(accepted, rank_lookup):
    return TaxonIndex.from_taxa(resolve(accepted, (), rank_lookup=rank_lookup).taxa)


class TestSplitValues:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("Europe | Asia", ["Europe", "Asia"]),
            ("Europe", ["Europe"]),
            ("Europe |  | Asia", ["Europe", "Asia"]),
            ("", []),
            (None, []),
        ],
    )
    def test_split(self, value, expected):
        assert split_values(value) == expected

    def test_delimiter_is_literal(self):
        assert split_values("Europe|Asia") == ["Europe|Asia"]


class TestUnpivot:
    def test_native_range(self, accepted, index):
        rows, anomalies = unpivot(accepted[2:], "native_range", DescriptorType.NATIVE_RANGE, index)

        assert [(r.type, r.description) for r in rows] == [
            (DescriptorType.NATIVE_RANGE, "Europe"),
            (DescriptorType.NATIVE_RANGE, "Asia"),
        ]
        assert {r.taxon_id for r in rows} == {generate_id(ARION)}
        assert anomalies == ()

    def test_empty_field_yields_nothing(self, index):
        record = RawTaxonRecord(scientific_name=ARION, first_observation="1974")
        rows, _ = unpivot((record,), "native_range", DescriptorType.NATIVE_RANGE, index)

        assert rows == ()


class TestBuildDescriptions:
    def test_coded_values(self, accepted, index):
        rows, _ = build_descriptions(accepted, index)
        virgata = [r for r in rows if r.taxon_id == generate_id(accepted[0].scientific_name)]

        assert [(r.type.value, r.description) for r in virgata] == [
            ("native range", "Europe"),
            ("native range", "Northern Africa"),
            ("pathway", "cbd_2014_pathway:contaminant_on_plants"),
            ("pathway", "cbd_2014_pathway:stowaway_ship"),
            ("degree of establishment", "blackburn_et_al_2011:C3"),
        ]

    def test_most_established_stage_wins(self, accepted, index):
        rows, _ = build_descriptions(accepted, index)
        cisalpina_id = generate_id(accepted[1].scientific_name)
        (stage,) = [
            r.description
            for r in rows
            if r.taxon_id == cisalpina_id and r.type is DescriptorType.DEGREE_OF_ESTABLISHMENT
        ]

        assert stage == "blackburn_et_al_2011:E"

    def test_sorted_by_taxon_id(self, accepted, index):
        rows, _ = build_descriptions(accepted, index)
        ids = [r.taxon_id for r in rows]

        assert ids == sorted(ids)
        assert all(r.language == "en" for r in rows)

    def test_unknown_pathway_is_fatal(self, index):
        record = RawTaxonRecord(
            scientific_name=ARION, first_observation="1974", introduction_pathway="teleportation"
        )
        with pytest.raises(VocabularyError):
            build_descriptions((record,), index)
