"""Exception types raised while loading and analyzing transactions."""

from typing import Any, Optional


class AnalysisError(Exception):
    """Base class for failures of a single analyzer query"""


class MalformedAmountError(AnalysisError, ValueError):
    """Transaction amount cannot be interpreted as a finite number."""

    def __init__(self, raw_value: Any, transaction_id: Optional[str] = None):
        self.raw_value = raw_value
        self.transaction_id = transaction_id

        context = f" (transaction: {transaction_id})" if transaction_id is not None else ""
        super().__init__(f"Malformed amount: {raw_value!r}{context}")


class UnparseableDateError(AnalysisError, ValueError):
    """Date value or date component cannot be interpreted."""

    def __init__(self, raw_value: Any, transaction_id: Optional[str] = None, reason: str = ""):
        self.raw_value = raw_value
        self.transaction_id = transaction_id

        context_parts = []
        if transaction_id is not None:
            context_parts.append(f"transaction: {transaction_id}")
        if reason:
            context_parts.append(reason)
        context = f" ({', '.join(context_parts)})" if context_parts else ""
        super().__init__(f"Unparseable date: {raw_value!r}{context}")


class EmptyCollectionError(AnalysisError):
    """Query needs at least one transaction but none were available."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"No transactions available for {operation}")


class LoadError(Exception):
    """Load operation failure with context.

    Provides the file path, line number and field that caused the error
    when they are known. ``error_type`` is the error code key used when the
    failure is recorded.
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        line_number: Optional[int] = None,
        field: Optional[str] = None,
        error_type: str = "MALFORMED_FILE"
    ):
        self.file_path = file_path
        self.error_type = error_type
        self.line_number = line_number
        self.field = field

        context_parts = []
        if file_path:
            context_parts.append(f"file: {file_path}")
        if line_number:
            context_parts.append(f"line: {line_number}")
        if field:
            context_parts.append(f"field: {field}")

        context = f" ({', '.join(context_parts)})" if context_parts else ""
        super().__init__(f"{message}{context}")
