"""Tests for the taxon identifier generator."""

import hashlib

import pytest

from checklist.errors import MissingFieldError
from checklist.identifiers import generate_id, suffix_id


class TestGenerateId:
    def test_format(self):
        name = "Arion vulgaris Moquin-Tandon, 1855"
        digest = hashlib.md5(name.encode("utf-8")).hexdigest()

        assert generate_id(name) == f"alien-molluscs-checklist:taxon:{digest}"

    def test_custom_shortname(self):
        assert generate_id("Arion vulgaris", shortname="demo").startswith("demo:taxon:")

    def test_same_name_same_id(self):
        name = "Cernuella cisalpina (Rossmässler, 1837)"
        assert generate_id(name) == generate_id(str(name))

    @pytest.mark.parametrize(
        "first, second",
        [
            ("Helix balteata Pollonera, 1892", "Helix balteata Pollonera 1892"),
            ("Arion vulgaris", "arion vulgaris"),
            ("Arion vulgaris", "Arion vulgaris "),
        ],
    )
    def test_distinct_names_distinct_ids(self, first, second):
        assert generate_id(first) != generate_id(second)

    @pytest.mark.parametrize("name", ["", None])
    def test_empty_name_is_fatal(self, name):
        with pytest.raises(MissingFieldError):
            generate_id(name)


def test_suffix_id():
    assert suffix_id("ds:taxon:abc", 2) == "ds:taxon:abc:2"
