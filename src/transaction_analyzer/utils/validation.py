"""Validation engine for transaction records."""

from typing import List, Optional

from ..exceptions import MalformedAmountError, UnparseableDateError
from ..models.core import AnalyzerConfig, Transaction
from ..parsers.base import DataTransformer


class ValidationEngine:
    """Checks that transactions can take part in date and amount queries"""

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.transformer = DataTransformer(config)
        self.required_fields = ['transaction_id', 'transaction_date', 'transaction_amount', 'transaction_type']

    def validate_transaction(self, transaction: Transaction) -> List[str]:
        """Validate individual transaction and return list of errors"""
        errors = []

        for field_name in self.required_fields:
            value = getattr(transaction, field_name)
            if value is None or not str(value).strip():
                errors.append(f"Missing {field_name}")

        if transaction.transaction_date is not None and str(transaction.transaction_date).strip():
            try:
                self.transformer.normalize_date(transaction.transaction_date)
            except UnparseableDateError:
                errors.append(f"Invalid date: {transaction.transaction_date!r}")

        if transaction.transaction_amount is not None and str(transaction.transaction_amount).strip():
            try:
                self.transformer.normalize_amount(transaction.transaction_amount)
            except MalformedAmountError:
                errors.append(f"Invalid amount: {transaction.transaction_amount!r}")

        return errors

    def validate_transactions(self, transactions: List[Transaction]) -> List[str]:
        """Validate all transactions, prefixing each problem with its position"""
        problems = []
        for index, transaction in enumerate(transactions, 1):
            for error in self.validate_transaction(transaction):
                problems.append(f"Record {index} (id {transaction.transaction_id}): {error}")
        return problems

    def find_duplicate_ids(self, transactions: List[Transaction]) -> List[str]:
        """Return ids used by more than one transaction, in first-seen order"""
        seen = set()
        duplicates = []
        for transaction in transactions:
            transaction_id = transaction.transaction_id
            if transaction_id in seen and transaction_id not in duplicates:
                duplicates.append(transaction_id)
            seen.add(transaction_id)
        return duplicates
