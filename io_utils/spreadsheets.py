from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import pyexcel

from checklist.pipeline import RawTables
from dwc.mapper import (
    map_reference_records,
    map_synonym_records,
    map_taxon_records,
    map_vernacular_name_records,
)

logger = logging.getLogger(__name__)

SOURCE_SHEETS = ("taxa", "synonyms", "vernacular_names", "references")


def read_records(path: Path) -> List[Dict[str, Any]]:
    """Read the first sheet of ``path`` as a list of header-keyed records.

    Any format with a pyexcel plugin is accepted (``.csv`` natively,
    ``.xlsx`` through ``pyexcel-xlsx``).
    """
    records = pyexcel.get_records(file_name=str(path))
    pyexcel.free_resources()
    logger.info("Read %d rows from %s", len(records), path.name)
    return records


def read_sources(input_dir: Path, sources: Dict[str, str]) -> RawTables:
    """Read and map the four checklist sheets found in ``input_dir``.

    ``sources`` maps each sheet in ``SOURCE_SHEETS`` to a file name.  Only
    the taxa sheet is mandatory; a missing optional sheet yields an empty
    table.
    """
    rows: Dict[str, List[Dict[str, Any]]] = {}
    for sheet in SOURCE_SHEETS:
        name = sources.get(sheet)
        path = input_dir / name if name else None
        if path is None or not path.exists():
            if sheet == "taxa":
                raise FileNotFoundError(f"taxa sheet not found in {input_dir}")
            logger.warning("No %s sheet found, continuing without it", sheet)
            rows[sheet] = []
            continue
        rows[sheet] = read_records(path)

    return RawTables(
        taxa=map_taxon_records(rows["taxa"]),
        synonyms=map_synonym_records(rows["synonyms"]),
        vernacular_names=map_vernacular_name_records(rows["vernacular_names"]),
        references=map_reference_records(rows["references"]),
    )


__all__ = ["SOURCE_SHEETS", "read_records", "read_sources"]
