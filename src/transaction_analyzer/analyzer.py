"""In-memory analyzer answering queries over a collection of transactions."""

import logging
from collections import Counter
from datetime import datetime
from decimal import Decimal
from functools import reduce
from typing import Any, Iterable, List, Optional, Set

from .exceptions import EmptyCollectionError, UnparseableDateError
from .models.core import CREDIT, DEBIT, EQUAL, AnalyzerConfig, Transaction
from .parsers.base import DataTransformer


logger = logging.getLogger(__name__)


class TransactionAnalyzer:
    """Owns an ordered list of transactions and answers queries over it.

    Every query scans the current list from scratch. The only mutation is
    :meth:`add_transaction`, which appends.
    """

    def __init__(self, transactions: Iterable[Transaction] = (), config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()
        self.transformer = DataTransformer(self.config)
        self._transactions: List[Transaction] = list(transactions)
        logger.debug(f"Analyzer created with {len(self._transactions)} transactions")

    def __len__(self) -> int:
        return len(self._transactions)

    def add_transaction(self, transaction: Transaction) -> None:
        """Append a transaction; duplicates are not checked"""
        self._transactions.append(transaction)
        logger.debug(f"Added transaction {transaction.transaction_id}")

    def get_all_transactions(self) -> List[Transaction]:
        """Return all transactions in stored order"""
        return list(self._transactions)

    def get_unique_transaction_types(self) -> Set[str]:
        return {t.transaction_type for t in self._transactions}

    def calculate_total_amount(self) -> Decimal:
        """Sum of all amounts; 0 for an empty collection"""
        return self._sum_amounts(self._transactions)

    def calculate_total_amount_by_date(self,
                                       year: Optional[int] = None,
                                       month: Optional[int] = None,
                                       day: Optional[int] = None) -> Decimal:
        """Sum amounts of transactions whose date matches every given component.

        Omitted (or zero) components match any date. ``month`` is 1-based.
        """
        year = self._date_component(year, 'year', 1, 9999)
        month = self._date_component(month, 'month', 1, 12)
        day = self._date_component(day, 'day', 1, 31)

        matching = []
        for transaction in self._transactions:
            date = self._parse_date(transaction)
            if ((not year or date.year == year) and
                    (not month or date.month == month) and
                    (not day or date.day == day)):
                matching.append(transaction)

        return self._sum_amounts(matching)

    def get_transactions_by_type(self, transaction_type: str) -> List[Transaction]:
        """Transactions whose type equals ``transaction_type`` (case-sensitive)"""
        return [t for t in self._transactions if t.transaction_type == transaction_type]

    def get_transactions_in_date_range(self, start_date: Any, end_date: Any) -> List[Transaction]:
        """Transactions dated within ``[start_date, end_date]`` inclusive"""
        start = self.transformer.normalize_date(start_date)
        end = self.transformer.normalize_date(end_date)
        return [t for t in self._transactions if start <= self._parse_date(t) <= end]

    def get_transactions_by_merchant(self, merchant_name: str) -> List[Transaction]:
        return [t for t in self._transactions if t.merchant_name == merchant_name]

    def calculate_average_transaction_amount(self) -> Decimal:
        """Mean amount over all transactions.

        Raises:
            EmptyCollectionError: If there are no transactions
        """
        if not self._transactions:
            raise EmptyCollectionError("average transaction amount")
        return self.calculate_total_amount() / len(self._transactions)

    def get_transactions_by_amount_range(self, min_amount: Any, max_amount: Any) -> List[Transaction]:
        """Transactions whose amount lies within ``[min_amount, max_amount]``"""
        low = self.transformer.normalize_amount(min_amount)
        high = self.transformer.normalize_amount(max_amount)
        return [t for t in self._transactions if low <= self._parse_amount(t) <= high]

    def calculate_total_debit_amount(self) -> Decimal:
        return self._sum_amounts(self.get_transactions_by_type(DEBIT))

    def find_most_transactions_month(self) -> str:
        """Return the "YYYY-MM" key with the most transactions"""
        return self._most_frequent_month(self._transactions, "most transactions month")

    def find_most_debit_transaction_month(self) -> str:
        """Return the "YYYY-MM" key with the most debit transactions"""
        return self._most_frequent_month(self.get_transactions_by_type(DEBIT), "most debit transactions month")

    def most_transaction_types(self) -> str:
        """Compare debit and credit counts; other types are ignored"""
        debit_count = len(self.get_transactions_by_type(DEBIT))
        credit_count = len(self.get_transactions_by_type(CREDIT))
        if debit_count > credit_count:
            return DEBIT
        if credit_count > debit_count:
            return CREDIT
        return EQUAL

    def get_transactions_before_date(self, date: Any) -> List[Transaction]:
        """Transactions dated strictly earlier than ``date``"""
        cutoff = self.transformer.normalize_date(date)
        return [t for t in self._transactions if self._parse_date(t) < cutoff]

    def find_transaction_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """First transaction with the given id, or None"""
        return next((t for t in self._transactions if t.transaction_id == transaction_id), None)

    def map_transaction_descriptions(self) -> List[str]:
        return [t.transaction_description for t in self._transactions]

    def _parse_date(self, transaction: Transaction) -> datetime:
        return self.transformer.normalize_date(transaction.transaction_date, transaction.transaction_id)

    def _parse_amount(self, transaction: Transaction) -> Decimal:
        return self.transformer.normalize_amount(transaction.transaction_amount, transaction.transaction_id)

    def _sum_amounts(self, transactions: Iterable[Transaction]) -> Decimal:
        return sum((self._parse_amount(t) for t in transactions), Decimal('0'))

    def _most_frequent_month(self, transactions: List[Transaction], operation: str) -> str:
        for transaction in transactions:
            if transaction.transaction_date is None or not str(transaction.transaction_date).strip():
                raise UnparseableDateError(transaction.transaction_date, transaction.transaction_id, "empty value")

        # Counter keeps first-seen key order, which decides ties
        counts = Counter(self.transformer.month_key(t.transaction_date) for t in transactions)
        if not counts:
            raise EmptyCollectionError(operation)
        return reduce(lambda a, b: a if counts[a] > counts[b] else b, counts)

    @staticmethod
    def _date_component(value: Any, name: str, lowest: int, highest: int) -> Optional[int]:
        """Validate an optional date component, returning None for a wildcard"""
        if not value:
            return None
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise UnparseableDateError(value, reason=f"invalid {name}")
        try:
            number = int(value)
        except (TypeError, ValueError) as e:
            raise UnparseableDateError(value, reason=f"invalid {name}") from e
        if not lowest <= number <= highest:
            raise UnparseableDateError(value, reason=f"{name} out of range {lowest}-{highest}")
        return number
