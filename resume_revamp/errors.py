"""
Exception hierarchy for ResumeRevamp.

Failures are caught where the operation is invoked (ingestion or export) and
turned into a state transition or an alert; these types only travel that far.
"""


class ResumeRevampError(Exception):
    """Base class for every error raised by this package."""


class RecordDecodeError(ResumeRevampError):
    """Payload does not have the shape of a résumé record."""


class ExtractionError(ResumeRevampError):
    """The AI collaborator could not produce a résumé record."""


class ExportError(ResumeRevampError):
    """Rendering, rasterising or packing an export failed."""
