"""Human-facing report that runs every analyzer query once."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, List, Optional

from .analyzer import TransactionAnalyzer
from .exceptions import AnalysisError
from .models.core import ReportConfig, Transaction
from .utils.error_handler import ErrorHandler, handle_analysis_error


logger = logging.getLogger(__name__)


@dataclass
class ReportItem:
    """Outcome of one report query"""
    number: str
    title: str
    value: Any = None
    error: Optional[AnalysisError] = None

    @property
    def success(self) -> bool:
        return self.error is None


class ReportBuilder:
    """Runs the analyzer queries in presentation order"""

    def __init__(self,
                 analyzer: TransactionAnalyzer,
                 report_config: Optional[ReportConfig] = None,
                 error_handler: Optional[ErrorHandler] = None):
        self.analyzer = analyzer
        self.report_config = report_config or analyzer.config.report
        self.error_handler = error_handler

    def build(self) -> List[ReportItem]:
        """Run every query; a failing query is recorded and the rest still run"""
        rc = self.report_config
        a = self.analyzer

        queries: List[tuple] = [
            ("1", "Transaction types", a.get_unique_transaction_types),
            ("2", "Total amount of all transactions", a.calculate_total_amount),
            (
                "3",
                f"Total amount for date ({self._date_label()})",
                lambda: a.calculate_total_amount_by_date(rc.year, rc.month, rc.day),
            ),
        ]

        letters = "abcdefghijklmnopqrstuvwxyz"
        for index, transaction_type in enumerate(rc.transaction_types):
            number = f"4{letters[index]}" if len(rc.transaction_types) > 1 else "4"
            queries.append((
                number,
                f"Transactions of type {transaction_type}",
                lambda t=transaction_type: a.get_transactions_by_type(t),
            ))

        queries.extend([
            (
                "5",
                f"Transactions from {rc.range_start} to {rc.range_end}",
                lambda: a.get_transactions_in_date_range(rc.range_start, rc.range_end),
            ),
            ("6", f"Transactions with merchant {rc.merchant}", lambda: a.get_transactions_by_merchant(rc.merchant)),
            ("7", "Average transaction amount", a.calculate_average_transaction_amount),
            (
                "8",
                f"Transactions with amount from {rc.min_amount} to {rc.max_amount}",
                lambda: a.get_transactions_by_amount_range(rc.min_amount, rc.max_amount),
            ),
            ("9", "Total debit amount", a.calculate_total_debit_amount),
            ("10", "Month with the most transactions", a.find_most_transactions_month),
            ("11", "Month with the most debit transactions", a.find_most_debit_transaction_month),
            ("12", "Most frequent transaction type", a.most_transaction_types),
            ("13", f"Transactions before {rc.before_date}", lambda: a.get_transactions_before_date(rc.before_date)),
            (
                "14",
                f"Transaction with id {rc.transaction_id}",
                lambda: a.find_transaction_by_id(rc.transaction_id),
            ),
            ("15", "Transaction descriptions", a.map_transaction_descriptions),
        ])

        return [self._run(number, title, query) for number, title, query in queries]

    def _run(self, number: str, title: str, query: Callable[[], Any]) -> ReportItem:
        try:
            return ReportItem(number=number, title=title, value=query())
        except AnalysisError as e:
            logger.debug(f"Report query {number} failed: {e}")
            if self.error_handler:
                handle_analysis_error(self.error_handler, e, title)
            return ReportItem(number=number, title=title, error=e)

    def _date_label(self) -> str:
        rc = self.report_config
        parts = [
            f"{rc.year:04d}" if rc.year else "*",
            f"{rc.month:02d}" if rc.month else "*",
            f"{rc.day:02d}" if rc.day else "*",
        ]
        return "-".join(parts)


def format_value(value: Any) -> str:
    """Render one query result as text"""
    if value is None:
        return "not found"
    if isinstance(value, Transaction):
        return value.to_json()
    if isinstance(value, Decimal):
        return format(value.normalize(), 'f') if value == value.to_integral_value() else str(value)
    if isinstance(value, (set, frozenset)):
        return ", ".join(sorted(str(v) for v in value)) or "(none)"
    if isinstance(value, list):
        if not value:
            return "(none)"
        return "\n".join(format_value(v) if isinstance(v, Transaction) else str(v) for v in value)
    return str(value)


def render_report(items: List[ReportItem]) -> str:
    """Render report items in order, one block per query"""
    blocks = []
    for item in items:
        if item.success:
            body = format_value(item.value)
        else:
            body = f"error: {item.error}"

        if "\n" in body:
            blocks.append(f"{item.number}. {item.title}:\n{body}")
        else:
            blocks.append(f"{item.number}. {item.title}: {body}")
    return "\n".join(blocks)
