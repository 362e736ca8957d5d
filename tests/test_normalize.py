"""Tests for controlled vocabulary recoding."""

import pytest

from checklist.errors import VocabularyError
from dwc.normalize import (
    most_established_stage,
    normalize_degree_of_establishment,
    normalize_language,
    normalize_pathway,
    split_stages,
)


class TestLanguage:
    @pytest.mark.parametrize(
        "value, expected",
        [("dutch", "nl"), ("English", "en"), ("FRENCH", "fr"), ("german", "de")],
    )
    def test_known_languages(self, value, expected):
        assert normalize_language(value) == expected

    def test_empty_language_passes_through(self):
        assert normalize_language("") == ""

    def test_unknown_language(self):
        with pytest.raises(VocabularyError):
            normalize_language("latin")


class TestPathway:
    def test_known_pathway(self):
        assert normalize_pathway("Horticulture") == "cbd_2014_pathway:escape_horticulture"

    def test_unknown_pathway(self):
        with pytest.raises(VocabularyError) as exc_info:
            normalize_pathway("by balloon")
        assert exc_info.value.code == "unknown_vocabulary"


class TestDegreeOfEstablishment:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("C1 - C3", ["C1", "C3"]),
            ("C3, D1, D2", ["C3", "D1", "D2"]),
            ("D2, E", ["D2", "E"]),
            ("E", ["E"]),
        ],
    )
    def test_split_stages(self, value, expected):
        assert split_stages(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("C1 - C3", "C3"),
            ("C3, D1, D2", "D2"),
            ("D2, E", "E"),
            ("c0", "C0"),
            ("B3 - C0", "C0"),
        ],
    )
    def test_most_established_stage(self, value, expected):
        assert most_established_stage(value) == expected

    def test_vocabulary_prefix(self):
        assert normalize_degree_of_establishment("C1 - C3") == "blackburn_et_al_2011:C3"
        assert normalize_degree_of_establishment("D2, E") == "blackburn_et_al_2011:E"

    @pytest.mark.parametrize("value", ["F", "C1 - established", ""])
    def test_unknown_stage(self, value):
        with pytest.raises(VocabularyError):
            normalize_degree_of_establishment(value)
