"""Error recording and structured logging for the transaction analyzer."""

import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..exceptions import (
    AnalysisError,
    EmptyCollectionError,
    LoadError,
    MalformedAmountError,
    UnparseableDateError,
)


# Error type -> stable code written to the logs
ERROR_CODES = {
    "FILE_NOT_FOUND": "F001",
    "FILE_PERMISSION_DENIED": "F002",
    "UNSUPPORTED_FORMAT": "F101",
    "MALFORMED_FILE": "F102",
    "MISSING_REQUIRED_COLUMNS": "F104",
    "DATE_PARSE_ERROR": "D001",
    "AMOUNT_PARSE_ERROR": "D002",
    "DUPLICATE_TRANSACTION": "V001",
    "INVALID_RECORD": "V005",
    "EMPTY_COLLECTION": "Q001",
    "CONFIG_TEMPLATE_ERROR": "C005",
}
UNKNOWN_CODE = "S999"


class ErrorSeverity(Enum):
    WARNING = "warning"
    ERROR = "error"


class ErrorCategory(Enum):
    """Where a recorded problem came from"""
    FILE_ACCESS = "file_access"
    FILE_FORMAT = "file_format"
    DATA_PARSING = "data_parsing"
    DATA_VALIDATION = "data_validation"
    QUERY = "query"
    CONFIGURATION = "configuration"


@dataclass
class ErrorRecord:
    """One recorded error or warning"""
    severity: ErrorSeverity
    category: ErrorCategory
    error_code: str
    message: str
    file_path: Optional[str] = None
    line_number: Optional[int] = None
    field_name: Optional[str] = None
    raw_value: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects"""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        problem = getattr(record, 'problem', None)
        if problem is not None:
            entry.update({
                'error_code': problem.error_code,
                'category': problem.category.value,
                'file_path': problem.file_path,
                'line': problem.line_number,
                'field': problem.field_name,
                'raw_value': problem.raw_value,
                'context': problem.context,
            })
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ErrorHandler:
    """Keeps the errors and warnings of a run and mirrors them to log files.

    Everything goes to ``analyzer_YYYYMMDD.jsonl``; errors are also written to
    ``errors_YYYYMMDD.jsonl``. Warnings and errors are echoed to stderr when
    ``enable_console`` is set.
    """

    def __init__(self, log_directory: str = "logs", enable_console: bool = True):
        self.log_directory = Path(log_directory)
        self.log_directory.mkdir(parents=True, exist_ok=True)

        self.errors: List[ErrorRecord] = []
        self.warnings: List[ErrorRecord] = []
        self.logger = self._build_logger(enable_console)

    def _build_logger(self, enable_console: bool) -> logging.Logger:
        logger = logging.getLogger('transaction_analyzer.errors')
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

        day = datetime.now().strftime('%Y%m%d')
        for file_name, level in ((f"analyzer_{day}.jsonl", logging.DEBUG),
                                 (f"errors_{day}.jsonl", logging.ERROR)):
            file_handler = logging.FileHandler(self.log_directory / file_name)
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            logger.addHandler(file_handler)

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(logging.WARNING)
            console_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
            logger.addHandler(console_handler)

        return logger

    def log_error(self,
                  message: str,
                  error_type: str,
                  category: ErrorCategory,
                  exception: Optional[BaseException] = None,
                  **details: Any) -> ErrorRecord:
        """Record an error; ``details`` fill the optional ErrorRecord fields"""
        problem = self._record(ErrorSeverity.ERROR, message, error_type, category, details)
        self.errors.append(problem)
        self.logger.error(message, exc_info=exception, extra={'problem': problem})
        return problem

    def log_warning(self,
                    message: str,
                    warning_type: str,
                    category: ErrorCategory,
                    **details: Any) -> ErrorRecord:
        problem = self._record(ErrorSeverity.WARNING, message, warning_type, category, details)
        self.warnings.append(problem)
        self.logger.warning(message, extra={'problem': problem})
        return problem

    def log_info(self, message: str):
        self.logger.info(message)

    @staticmethod
    def _record(severity: ErrorSeverity,
                message: str,
                error_type: str,
                category: ErrorCategory,
                details: Dict[str, Any]) -> ErrorRecord:
        return ErrorRecord(
            severity=severity,
            category=category,
            error_code=ERROR_CODES.get(error_type, UNKNOWN_CODE),
            message=message,
            **details
        )


def handle_load_error(error_handler: ErrorHandler, exception: LoadError) -> ErrorRecord:
    """Record a failure to read a transaction file"""
    if exception.error_type in ("FILE_NOT_FOUND", "FILE_PERMISSION_DENIED"):
        category = ErrorCategory.FILE_ACCESS
    else:
        category = ErrorCategory.FILE_FORMAT

    return error_handler.log_error(
        str(exception),
        exception.error_type,
        category,
        exception=exception,
        file_path=exception.file_path,
        line_number=exception.line_number,
        field_name=exception.field
    )


def handle_analysis_error(error_handler: ErrorHandler,
                          exception: AnalysisError,
                          operation: str) -> ErrorRecord:
    """Record a failed analyzer query"""
    raw_value = None
    if isinstance(exception, MalformedAmountError):
        error_type, category = "AMOUNT_PARSE_ERROR", ErrorCategory.DATA_PARSING
        raw_value = str(exception.raw_value)
    elif isinstance(exception, UnparseableDateError):
        error_type, category = "DATE_PARSE_ERROR", ErrorCategory.DATA_PARSING
        raw_value = str(exception.raw_value)
    elif isinstance(exception, EmptyCollectionError):
        error_type, category = "EMPTY_COLLECTION", ErrorCategory.QUERY
    else:
        error_type, category = "UNEXPECTED_ERROR", ErrorCategory.QUERY

    return error_handler.log_error(
        f"{operation} failed: {exception}",
        error_type,
        category,
        raw_value=raw_value,
        context={'operation': operation}
    )
