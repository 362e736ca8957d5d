"""GBIF name parser lookup used to fill ``taxonRank``.

The checklist spreadsheets do not record ranks.  They are derived from the
GBIF name parser, whose ``rankMarker`` is recoded to a Darwin Core
``taxonRank`` value.  The lookup is a plain callable so that the pipeline
can run with any other rank source (tests pass a dictionary lookup).
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from functools import lru_cache
from typing import Any, Dict, Optional

import requests
from pygbif import species

DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_BACKOFF_FACTOR = 1.0
DEFAULT_CACHE_SIZE = 1000

# GBIF name parser rank markers to Darwin Core taxonRank values
RANK_MARKERS: Dict[str, str] = {
    "sp.": "species",
    "infrasp.": "infraspecificname",
    "subsp.": "subspecies",
    "var.": "variety",
    "f.": "form",
    "gen.": "genus",
    "fam.": "family",
}


@dataclass
class GbifRankLookup:
    """Resolve a scientific name to a taxon rank with caching and retries."""

    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR
    cache_size: int = DEFAULT_CACHE_SIZE
    _logger: Optional[logging.Logger] = None

    def __post_init__(self):
        if self._logger is None:
            self._logger = logging.getLogger(__name__)
        self._parse = lru_cache(maxsize=self.cache_size)(self._parse_uncached)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "GbifRankLookup":
        """Create a lookup instance from the ``[gbif]`` configuration table."""
        gbif_cfg = cfg.get("gbif", {})
        return cls(
            retry_attempts=gbif_cfg.get("retry_attempts", DEFAULT_RETRY_ATTEMPTS),
            backoff_factor=gbif_cfg.get("backoff_factor", DEFAULT_BACKOFF_FACTOR),
            cache_size=gbif_cfg.get("cache_size", DEFAULT_CACHE_SIZE),
        )

    def _parse_uncached(self, scientific_name: str) -> Dict[str, Any] | None:
        """Call the GBIF name parser, returning ``None`` once retries are exhausted."""
        last_exception = None

        for attempt in range(self.retry_attempts):
            try:
                parsed = species.name_parser(scientific_name)
                self._logger.debug(f"GBIF name parser success: {scientific_name} (attempt {attempt + 1})")
                return parsed[0] if parsed else None
            except (requests.RequestException, ValueError) as e:
                last_exception = e
                self._logger.warning(f"GBIF name parser error on attempt {attempt + 1}: {e}")
                if attempt < self.retry_attempts - 1:
                    time.sleep(self.backoff_factor * (2**attempt))

        self._logger.error(
            f"GBIF name parser failed after {self.retry_attempts} attempts for "
            f"'{scientific_name}': {last_exception}"
        )
        return None

    def __call__(self, scientific_name: str) -> str:
        """Return the Darwin Core rank for ``scientific_name`` or ``""``."""
        parsed = self._parse(scientific_name)
        if not parsed:
            return ""
        marker = parsed.get("rankMarker") or ""
        rank = RANK_MARKERS.get(marker, "")
        if marker and not rank:
            self._logger.warning(f"Unknown GBIF rank marker '{marker}' for '{scientific_name}'")
        return rank


def no_rank(scientific_name: str) -> str:
    """Rank lookup used when GBIF is disabled."""
    return ""


__all__ = ["RANK_MARKERS", "GbifRankLookup", "no_rank"]
