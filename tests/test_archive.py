"""Tests for meta.xml, manifest and bundle creation."""

import json
from xml.etree import ElementTree as ET
from zipfile import ZipFile

import pytest

from dwc.archive import build_manifest, build_meta_xml, create_archive
from dwc.schema import DISTRIBUTION_TERMS, TAXON_TERMS, term_uri

NS = {"dwca": "http://rs.tdwg.org/dwc/text/"}


class TestMetaXml:
    def test_core_and_extensions(self, tmp_path):
        root = ET.parse(build_meta_xml(tmp_path)).getroot()
        core = root.find("dwca:core", NS)
        extensions = root.findall("dwca:extension", NS)

        assert core.get("rowType") == "http://rs.tdwg.org/dwc/terms/Taxon"
        assert core.find("dwca:files/dwca:location", NS).text == "taxon.csv"
        assert len(core.findall("dwca:field", NS)) == len(TAXON_TERMS)
        assert [e.find("dwca:files/dwca:location", NS).text for e in extensions] == [
            "vernacularname.csv",
            "speciesprofile.csv",
            "distribution.csv",
            "references.csv",
            "description.csv",
        ]
        assert all(e.find("dwca:coreid", NS).get("index") == "0" for e in extensions)

    def test_distribution_fields(self, tmp_path):
        root = ET.parse(build_meta_xml(tmp_path)).getroot()
        distribution = root.findall("dwca:extension", NS)[2]
        terms = [f.get("term") for f in distribution.findall("dwca:field", NS)]

        assert terms == [term_uri(t) for t in DISTRIBUTION_TERMS]
        assert "http://purl.org/dc/terms/source" in terms


@pytest.mark.parametrize(
    "term, uri",
    [
        ("scientificName", "http://rs.tdwg.org/dwc/terms/scientificName"),
        ("bibliographicCitation", "http://purl.org/dc/terms/bibliographicCitation"),
        ("isTerrestrial", "http://rs.gbif.org/terms/1.0/isTerrestrial"),
    ],
)
def test_term_uri(term, uri):
    assert term_uri(term) == uri


class TestManifest:
    def test_counts(self):
        manifest = build_manifest({"taxon": 4}, {"unmatched_name": 1}, include_git_info=False)

        assert manifest["row_counts"] == {"taxon": 4}
        assert manifest["anomalies"] == {"unmatched_name": 1}
        assert "git_commit" not in manifest


class TestBundle:
    def test_versioned_bundle(self, tmp_path):
        (tmp_path / "taxon.csv").write_text("taxonID\n")
        (tmp_path / "manifest.json").write_text(json.dumps({"row_counts": {"taxon": 0}}))
        archive = create_archive(tmp_path, compress=True, version="1.0.0", include_checksums=True)

        assert archive.name == "dwca_v1.0.0.zip"
        with ZipFile(archive) as zf:
            assert {"taxon.csv", "meta.xml", "manifest.json"} <= set(zf.namelist())
        manifest = json.loads((tmp_path / "manifest.json").read_text())
        assert manifest["version"] == "1.0.0"
        assert manifest["row_counts"] == {"taxon": 0}
        assert "taxon.csv" in manifest["file_checksums"]

    def test_bundle_requires_semver(self, tmp_path):
        with pytest.raises(ValueError):
            create_archive(tmp_path, compress=True, version="v1")
