"""Data models and structures"""

from .core import (
    CREDIT,
    DEBIT,
    EQUAL,
    TRANSACTION_FIELDS,
    AnalyzerConfig,
    ReportConfig,
    Transaction,
)

__all__ = [
    'CREDIT',
    'DEBIT',
    'EQUAL',
    'TRANSACTION_FIELDS',
    'AnalyzerConfig',
    'ReportConfig',
    'Transaction',
]
