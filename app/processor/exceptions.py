class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class TerminalProcessingError(ProcessorError):
    """Redelivering the same message cannot change the outcome."""


class MissingMetadataError(TerminalProcessingError):
    """Raised when an uploaded object lacks the metadata identifying its document."""


class NoTransactionsFoundError(TerminalProcessingError):
    """Raised when a document was read successfully but held no transactions."""
