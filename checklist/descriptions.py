"""Unpivot multi-value taxon fields into Description extension rows.

Native range, introduction pathway and degree of establishment are stored
as ``" | "`` separated lists in the taxa sheet.  Each non-empty token
becomes one :class:`~checklist.models.Descriptor`.  Pathways and degrees of
establishment are recoded through closed vocabularies; an unknown value
raises :class:`~checklist.errors.VocabularyError`.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from dwc.normalize import normalize_degree_of_establishment, normalize_pathway
from qc import Anomaly

from .extensions import TaxonIndex
from .models import Descriptor, DescriptorType, RawTaxonRecord

logger = logging.getLogger(__name__)

DELIMITER = " | "
# Descriptor codes and native ranges are English regardless of the dataset language
DESCRIPTION_LANGUAGE = "en"

Recoder = Callable[[str], str]


def split_values(value: str | None, delimiter: str = DELIMITER) -> List[str]:
    """Split ``value`` on ``delimiter``, dropping empty tokens."""

    if not value:
        return []
    return [token.strip() for token in value.split(delimiter) if token.strip()]


def unpivot(
    records: Sequence[RawTaxonRecord],
    field: str,
    descriptor_type: DescriptorType,
    index: TaxonIndex,
    *,
    delimiter: str = DELIMITER,
    recode: Optional[Recoder] = None,
) -> Tuple[Tuple[Descriptor, ...], Tuple[Anomaly, ...]]:
    """Return one descriptor per token of ``field`` for every record."""

    rows: List[Descriptor] = []
    anomalies: List[Anomaly] = []
    for row_number, record in enumerate(records, start=1):
        tokens = split_values(getattr(record, field), delimiter)
        if not tokens:
            continue
        taxon_id, found = index.lookup(record.scientific_name, "taxa", row_number)
        anomalies.extend(found)
        for token in tokens:
            rows.append(
                Descriptor(
                    taxon_id=taxon_id,
                    type=descriptor_type,
                    description=recode(token) if recode else token,
                    language=DESCRIPTION_LANGUAGE,
                )
            )
    return tuple(rows), tuple(anomalies)


def build_descriptions(
    records: Sequence[RawTaxonRecord], index: TaxonIndex
) -> Tuple[Tuple[Descriptor, ...], Tuple[Anomaly, ...]]:
    """Union the three descriptor fields, grouped by taxon.

    The sort on ``taxon_id`` is stable, so descriptors of one taxon keep the
    order native range, pathway, degree of establishment and, within a field,
    the order of the source tokens.
    """

    native_range, native_anomalies = unpivot(
        records, "native_range", DescriptorType.NATIVE_RANGE, index
    )
    pathways, pathway_anomalies = unpivot(
        records,
        "introduction_pathway",
        DescriptorType.PATHWAY,
        index,
        recode=normalize_pathway,
    )
    establishment, establishment_anomalies = unpivot(
        records,
        "degree_of_establishment",
        DescriptorType.DEGREE_OF_ESTABLISHMENT,
        index,
        recode=normalize_degree_of_establishment,
    )
    descriptors = sorted(native_range + pathways + establishment, key=lambda d: d.taxon_id)
    logger.info(
        "Unpivoted %d native range, %d pathway and %d degree of establishment descriptors",
        len(native_range),
        len(pathways),
        len(establishment),
    )
    # The same taxa rows are joined three times; report each miss once
    anomalies = tuple(
        dict.fromkeys(native_anomalies + pathway_anomalies + establishment_anomalies)
    )
    return tuple(descriptors), anomalies


__all__ = ["DELIMITER", "DESCRIPTION_LANGUAGE", "split_values", "unpivot", "build_descriptions"]
