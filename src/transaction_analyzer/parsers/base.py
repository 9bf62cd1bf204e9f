"""Abstract base classes and value conversion for transaction loaders."""

import math
import re
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from ..exceptions import MalformedAmountError, UnparseableDateError
from ..models.core import AnalyzerConfig


ISO_DATETIME_PATTERN = re.compile(
    r'^(\d{4}-\d{2}-\d{2})[T ](\d{2}:\d{2}(?::\d{2})?)(?:\.\d+)?(?:Z|[+-]\d{2}:?\d{2})?$'
)


class RecordLoader(ABC):
    """Abstract base class for all raw record loaders"""

    def __init__(self, config: AnalyzerConfig):
        self.config = config

    @abstractmethod
    def load(self, file_path: str) -> List[Dict[str, Any]]:
        """Load the file and return the raw record mappings in file order"""
        pass

    @abstractmethod
    def get_supported_extensions(self) -> List[str]:
        """Return list of supported file extensions"""
        pass

    @abstractmethod
    def validate_file(self, file_path: str) -> bool:
        """Validate if file can be processed by this loader"""
        pass


class DataTransformer:
    """Interprets the date and amount literals stored on transactions"""

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()

    def normalize_date(self, date_value: Any, transaction_id: Optional[str] = None) -> datetime:
        """Convert a date literal to a naive datetime.

        Configured formats are tried first, then ISO 8601 with a time part.
        Any timezone suffix is dropped, so all results compare as local-naive.
        """
        if isinstance(date_value, datetime):
            return date_value.replace(tzinfo=None)

        if date_value is None or not str(date_value).strip():
            raise UnparseableDateError(date_value, transaction_id, "empty value")

        date_str = str(date_value).strip()

        for fmt in self.config.date_formats:
            try:
                return datetime.strptime(date_str, fmt)
            except ValueError:
                continue

        # Handle formats like "2019-01-01T10:30:00.000Z"
        iso_match = ISO_DATETIME_PATTERN.match(date_str)
        if iso_match:
            time_part = iso_match.group(2)
            if time_part.count(':') == 1:
                time_part += ':00'
            try:
                return datetime.strptime(f"{iso_match.group(1)} {time_part}", "%Y-%m-%d %H:%M:%S")
            except ValueError:
                pass

        raise UnparseableDateError(date_value, transaction_id)

    def normalize_amount(self, amount_value: Any, transaction_id: Optional[str] = None) -> Decimal:
        """Convert an amount literal to Decimal, rejecting non-finite values"""
        if isinstance(amount_value, Decimal):
            amount = amount_value
        elif isinstance(amount_value, bool) or amount_value is None:
            raise MalformedAmountError(amount_value, transaction_id)
        elif isinstance(amount_value, float):
            if math.isnan(amount_value) or math.isinf(amount_value):
                raise MalformedAmountError(amount_value, transaction_id)
            amount = Decimal(str(amount_value))
        else:
            amount_str = str(amount_value).strip()
            if not amount_str:
                raise MalformedAmountError(amount_value, transaction_id)
            try:
                amount = Decimal(amount_str)
            except InvalidOperation as e:
                raise MalformedAmountError(amount_value, transaction_id) from e

        if not amount.is_finite():
            raise MalformedAmountError(amount_value, transaction_id)
        return amount

    @staticmethod
    def month_key(date_value: Any) -> str:
        """Return the "YYYY-MM" grouping key taken from the date literal"""
        return str(date_value)[:7]
