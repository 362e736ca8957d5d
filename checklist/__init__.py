"""Darwin Core checklist of alien molluscs in Belgium.

The build runs leaf-first: :mod:`checklist.identifiers` derives stable taxon
identifiers, :mod:`checklist.taxa` resolves accepted names and synonyms into
the Taxon core, and :mod:`checklist.extensions` and
:mod:`checklist.descriptions` attach those identifiers to the extension
tables.  :func:`checklist.pipeline.build_checklist` runs all of them.
"""

from .errors import ChecklistError, MissingFieldError, VocabularyError
from .identifiers import generate_id

__all__ = ["ChecklistError", "MissingFieldError", "VocabularyError", "generate_id"]
