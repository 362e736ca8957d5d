from __future__ import annotations

import hashlib

from .errors import MissingFieldError

DEFAULT_SHORTNAME = "alien-molluscs-checklist"


def generate_id(scientific_name: str | None, *, shortname: str = DEFAULT_SHORTNAME) -> str:
    """Return the stable taxon identifier for ``scientific_name``.

    The identifier is ``{shortname}:taxon:{md5}`` where the hash is computed
    over the name exactly as written, so reruns on unchanged data reproduce
    the same identifiers.
    """

    if not scientific_name:
        raise MissingFieldError("cannot derive a taxon identifier from an empty scientific name")
    digest = hashlib.md5(scientific_name.encode("utf-8")).hexdigest()
    return f"{shortname}:taxon:{digest}"


def suffix_id(taxon_id: str, position: int) -> str:
    """Disambiguate a shared identifier with a 1-based positional suffix."""

    return f"{taxon_id}:{position}"


__all__ = ["DEFAULT_SHORTNAME", "generate_id", "suffix_id"]
