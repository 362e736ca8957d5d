"""Utilities for creating Darwin Core Archives.

This module builds a ``meta.xml`` descriptor for the Taxon core and its
five extensions as described in :mod:`dwc.schema`.  The ``meta.xml`` file is
written alongside the CSV exports and can optionally be bundled, together
with ``manifest.json``, into a ZIP file to form a complete Darwin Core
Archive (DwC-A).
"""

from __future__ import annotations

from pathlib import Path
from xml.etree.ElementTree import Element, SubElement, tostring
from xml.dom import minidom
from zipfile import ZipFile, ZIP_DEFLATED
from typing import Any, Dict, List
from datetime import datetime, timezone
import subprocess
import re
import hashlib
import logging

from .schema import EXTENSION_FILES, TAXON_FILE, ArchiveFile, term_uri

SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+$")

_CSV_ATTRIBUTES = {
    "encoding": "UTF-8",
    "linesTerminatedBy": "\\n",
    "fieldsTerminatedBy": ",",
    "fieldsEnclosedBy": '"',
    "ignoreHeaderLines": "1",
}


def build_manifest(
    row_counts: Dict[str, int] | None = None,
    anomaly_counts: Dict[str, int] | None = None,
    version: str | None = None,
    include_git_info: bool = True,
) -> Dict[str, Any]:
    """Return run metadata for archive exports.

    Parameters
    ----------
    row_counts:
        Number of rows written per archive file.
    anomaly_counts:
        Number of reported anomalies per kind.
    version:
        Semantic version string for the export.
    include_git_info:
        Whether to include git repository information.
    """
    logger = logging.getLogger(__name__)

    manifest: Dict[str, Any] = {
        "format_version": "1.0.0",
        "export_type": "darwin_core_archive",
        "core": TAXON_FILE.row_type,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "row_counts": row_counts or {},
        "anomalies": anomaly_counts or {},
    }

    if version:
        if not SEMVER_RE.match(version):
            logger.warning(f"Version '{version}' does not follow semantic versioning")
        manifest["version"] = version

    if include_git_info:
        try:
            commit = subprocess.check_output(
                ["git", "rev-parse", "HEAD"], text=True, stderr=subprocess.DEVNULL
            ).strip()
            manifest["git_commit"] = commit
            manifest["git_commit_short"] = commit[:7]
        except (subprocess.CalledProcessError, FileNotFoundError):
            logger.debug("Git information not available")
            manifest["git_commit"] = "unknown"

    return manifest


def _add_file(root: Element, tag: str, archive_file: ArchiveFile) -> None:
    el = SubElement(root, tag, {**_CSV_ATTRIBUTES, "rowType": archive_file.row_type})
    files_el = SubElement(el, "files")
    SubElement(files_el, "location").text = archive_file.filename
    SubElement(el, "id" if tag == "core" else "coreid", index="0")
    for idx, term in enumerate(archive_file.terms):
        SubElement(el, "field", index=str(idx), term=term_uri(term))


def build_meta_xml(output_dir: Path) -> Path:
    """Create ``meta.xml`` for a Darwin Core Archive.

    Parameters
    ----------
    output_dir:
        Directory containing the Taxon core and extension CSV files.

    Returns
    -------
    Path to the written ``meta.xml`` file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    root = Element("archive", xmlns="http://rs.tdwg.org/dwc/text/")
    _add_file(root, "core", TAXON_FILE)
    for archive_file in EXTENSION_FILES:
        _add_file(root, "extension", archive_file)

    xml_bytes = tostring(root, encoding="utf-8")
    pretty = minidom.parseString(xml_bytes).toprettyxml(indent="  ", encoding="UTF-8")
    meta_path = output_dir / "meta.xml"
    meta_path.write_bytes(pretty)
    return meta_path


def create_archive(
    output_dir: Path,
    *,
    compress: bool = False,
    version: str | None = None,
    include_checksums: bool = False,
    additional_files: List[str] | None = None,
) -> Path:
    """Ensure ``meta.xml`` exists and optionally create a ZIP archive.

    Parameters
    ----------
    output_dir:
        Directory containing the DwC CSV exports and ``manifest.json``.
    compress:
        If ``True``, a versioned ``dwca`` bundle will be created in ``output_dir``.
    version:
        Semantic version string for the bundle when ``compress`` is ``True``.
    include_checksums:
        Whether to add file checksums to the bundled manifest.
    additional_files:
        Additional files to include in the archive beyond the standard set.

    Returns
    -------
    Path to ``meta.xml`` if ``compress`` is ``False``; otherwise the path to the
    created ZIP file.
    """
    meta_path = build_meta_xml(output_dir)
    if not compress:
        return meta_path

    if version is None or not SEMVER_RE.match(version):
        raise ValueError("version must be provided and follow semantic versioning")

    return create_versioned_bundle(
        output_dir=output_dir,
        version=version,
        include_checksums=include_checksums,
        additional_files=additional_files,
    )


def create_versioned_bundle(
    output_dir: Path,
    version: str,
    include_checksums: bool = True,
    additional_files: List[str] | None = None,
) -> Path:
    """Create ``dwca_v{version}.zip`` from the files in ``output_dir``.

    The existing ``manifest.json`` written by the build is updated with the
    bundle version and, when requested, the sha256 checksum of every file.

    Returns
    -------
    Path
        Path to the created ZIP bundle.
    """
    import json

    from io_utils.write import write_manifest

    logger = logging.getLogger(__name__)

    if not SEMVER_RE.match(version):
        raise ValueError("version must follow semantic versioning")

    manifest_path = output_dir / "manifest.json"
    manifest: Dict[str, Any] = {}
    if manifest_path.exists():
        manifest = json.loads(manifest_path.read_text())
    manifest["version"] = version

    files_to_include = [TAXON_FILE.filename] + [f.filename for f in EXTENSION_FILES]
    files_to_include.append("meta.xml")
    if additional_files:
        files_to_include.extend(additional_files)

    if include_checksums:
        file_checksums = {}
        for name in files_to_include:
            file_path = output_dir / name
            if file_path.exists():
                content = file_path.read_bytes()
                file_checksums[name] = {
                    "sha256": hashlib.sha256(content).hexdigest(),
                    "size_bytes": len(content),
                }
        manifest["file_checksums"] = file_checksums

    write_manifest(output_dir, manifest)
    files_to_include.append("manifest.json")

    archive_path = output_dir / f"dwca_v{version}.zip"
    logger.info(f"Creating archive: {archive_path.name}")

    with ZipFile(archive_path, "w", ZIP_DEFLATED) as zf:
        files_added = []
        for name in files_to_include:
            file_path = output_dir / name
            if file_path.exists():
                zf.write(file_path, arcname=name)
                files_added.append(name)
            else:
                logger.warning(f"Requested file {name} not found, skipping")

        logger.info(f"Archive created with {len(files_added)} files: {', '.join(files_added)}")

    return archive_path
