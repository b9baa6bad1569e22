"""Custom exception classes for the statement analyzer."""


class StatementAnalyzerError(Exception):
    """Base exception for the statement analyzer."""
    pass


class ConfigError(StatementAnalyzerError):
    """Configuration-related errors."""
    pass


class ExtractionError(StatementAnalyzerError):
    """Raw document to text/rows extraction errors."""
    pass


# Document-level failures, surfaced to the caller
class UnsupportedKindError(StatementAnalyzerError):
    """Declared document kind has no handler."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Unsupported document kind: {kind!r}")


class EmptyInputError(StatementAnalyzerError):
    """Document yielded zero extractable lines or rows."""
    pass


class NoTransactionsFoundError(StatementAnalyzerError):
    """Every line was noise or failed all grammars."""

    def __init__(self, message: str, hint: str = "Try uploading the statement as a CSV or Excel file instead."):
        self.hint = hint
        super().__init__(f"{message} {hint}")


# Record-level failures, recovered by skipping the record
class InvalidRecordError(StatementAnalyzerError):
    """A single line or row failed date/amount/description validation."""
    pass


class AmbiguousAmountError(InvalidRecordError):
    """Transaction amount could not be isolated from a concatenated digit run."""
    pass
