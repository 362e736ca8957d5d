from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List
import tomllib

from checklist.errors import VocabularyError

# Base directory for rule files
_RULES_DIR = Path(__file__).resolve().parent.parent / "config" / "rules"

# Separators between jointly listed Blackburn stages ("C1 - C3", "C3, D1, D2")
_STAGE_SPLIT_RE = re.compile(r"\s*[,;/-]\s*|\s+")


@lru_cache(maxsize=None)
def _load_rules(name: str) -> Dict[str, Any]:
    """Load a TOML rule file from the configuration directory.

    Parameters
    ----------
    name: str
        Name of the rule file without extension.
    """

    path = _RULES_DIR / f"{name}.toml"
    if not path.exists():
        return {}
    with path.open("rb") as fh:
        return tomllib.load(fh)


def _lookup(section: Dict[str, str], value: str, vocab: str) -> str:
    mapping = {k.lower(): v for k, v in section.items()}
    try:
        return mapping[value.strip().lower()]
    except KeyError:
        raise VocabularyError(f"'{value}' is not part of the {vocab} vocabulary") from None


def normalize_language(value: str) -> str:
    """Return the two-letter code for a language name such as ``Dutch``.

    Codes come from the ``[language]`` table of ``config/rules/vocab.toml``.
    """

    if not value:
        return value
    return _lookup(_load_rules("vocab").get("language", {}), value, "language")


def normalize_pathway(value: str) -> str:
    """Return ``cbd_2014_pathway:<code>`` for a raw pathway label."""

    rules = _load_rules("vocab").get("pathway", {})
    code = _lookup(rules.get("codes", {}), value, "pathway")
    return f"{rules.get('vocabulary', 'cbd_2014_pathway')}:{code}"


def split_stages(value: str) -> List[str]:
    """Split a jointly listed degree of establishment into single stages."""

    return [token for token in _STAGE_SPLIT_RE.split(value.strip()) if token]


def most_established_stage(value: str) -> str:
    """Collapse ``value`` to its most advanced Blackburn et al. (2011) stage.

    Every stage must be part of the vocabulary; ``"C1 - C3"`` gives ``C3``
    and ``"D2, E"`` gives ``E``.
    """

    rules = _load_rules("vocab").get("degree_of_establishment", {})
    codes = rules.get("codes", {})
    precedence = rules.get("precedence", [])
    stages = [_lookup(codes, token, "degree of establishment") for token in split_stages(value)]
    if not stages:
        raise VocabularyError(f"'{value}' does not contain a degree of establishment")
    missing = [stage for stage in stages if stage not in precedence]
    if missing:
        raise VocabularyError(f"no precedence defined for stage(s) {', '.join(missing)}")
    return max(stages, key=precedence.index)


def normalize_degree_of_establishment(value: str) -> str:
    """Return ``blackburn_et_al_2011:<stage>`` for a raw degree of establishment."""

    rules = _load_rules("vocab").get("degree_of_establishment", {})
    return f"{rules.get('vocabulary', 'blackburn_et_al_2011')}:{most_established_stage(value)}"


__all__ = [
    "normalize_language",
    "normalize_pathway",
    "split_stages",
    "most_established_stage",
    "normalize_degree_of_establishment",
]
