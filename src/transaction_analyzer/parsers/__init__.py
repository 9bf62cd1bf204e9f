"""Loaders for transaction files in different formats"""

from .base import RecordLoader, DataTransformer
from .json_loader import JSONLoader
from .csv_loader import CSVLoader
from .factory import LoaderFactory, load_transactions

__all__ = ['RecordLoader', 'DataTransformer', 'JSONLoader', 'CSVLoader', 'LoaderFactory', 'load_transactions']
