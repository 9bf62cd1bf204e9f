"""Core data models for the transaction analyzer."""

import json
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional


DEBIT = "debit"
CREDIT = "credit"
EQUAL = "equal"

# Source key names, in canonical order
TRANSACTION_FIELDS = [
    'transaction_id',
    'transaction_date',
    'transaction_amount',
    'transaction_type',
    'transaction_description',
    'merchant_name',
    'card_type',
]


@dataclass(frozen=True)
class Transaction:
    """A single transaction record.

    Values are stored exactly as they were received. Dates and amounts are
    only interpreted when a query needs them.

    Attributes:
        transaction_id: Opaque identifier, assumed unique by lookups
        transaction_date: Date (optionally with time) as a literal string
        transaction_amount: Decimal quantity encoded as text
        transaction_type: Category label such as "debit" or "credit"
        transaction_description: Free-form description
        merchant_name: Counterparty name
        card_type: Card type label
    """
    transaction_id: Optional[str] = None
    transaction_date: Optional[str] = None
    transaction_amount: Optional[str] = None
    transaction_type: Optional[str] = None
    transaction_description: Optional[str] = None
    merchant_name: Optional[str] = None
    card_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Transaction':
        """Build a transaction from a raw record mapping"""
        return cls(**{name: data.get(name) for name in TRANSACTION_FIELDS})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary keyed by source field names"""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_json(self) -> str:
        """Pretty JSON representation used for display and logging"""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False, default=str)

    def __str__(self) -> str:
        return self.to_json()


@dataclass
class ReportConfig:
    """Sample arguments passed to each query by the report"""
    year: int = 2019
    month: int = 1
    day: int = 1
    transaction_types: List[str] = field(default_factory=lambda: [DEBIT, CREDIT])
    range_start: str = "2019-01-01"
    range_end: str = "2019-01-31"
    merchant: str = "SuperMart"
    min_amount: float = 50
    max_amount: float = 200
    before_date: str = "2019-01-05"
    transaction_id: str = "1"


@dataclass
class AnalyzerConfig:
    """Configuration for loading and analyzing transactions"""
    input_file: str = "transaction.json"
    log_directory: str = "logs"
    date_formats: Optional[List[str]] = None
    report: ReportConfig = field(default_factory=ReportConfig)

    def __post_init__(self):
        if self.date_formats is None:
            self.date_formats = [
                "%Y-%m-%d", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M",
                "%Y/%m/%d", "%m/%d/%Y", "%Y-%m",
            ]
