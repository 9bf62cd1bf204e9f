"""Loader selection and materialization of transaction records."""

import logging
import os
from typing import Dict, List, Optional, Type

from .base import RecordLoader
from .csv_loader import CSVLoader
from .json_loader import JSONLoader
from ..exceptions import LoadError
from ..models.core import AnalyzerConfig, Transaction


logger = logging.getLogger(__name__)


class LoaderFactory:
    """Factory for creating loader instances based on file extension"""

    def __init__(self, config: AnalyzerConfig):
        self.config = config
        self._loader_classes: Dict[str, Type[RecordLoader]] = {}
        self._register_default_loaders()

    def _register_default_loaders(self):
        """Register default loader classes"""
        self._loader_classes['.json'] = JSONLoader
        self._loader_classes['.csv'] = CSVLoader

    def get_loader_for_file(self, file_path: str) -> Optional[RecordLoader]:
        """
        Get appropriate loader instance for a file

        Args:
            file_path: Path to the file to load

        Returns:
            Loader instance or None if the extension is not supported
        """
        _, ext = os.path.splitext(file_path.lower())
        loader_class = self._loader_classes.get(ext)
        if loader_class is None:
            return None
        return loader_class(self.config)

    def get_supported_extensions(self) -> List[str]:
        """Return all registered extensions"""
        return sorted(self._loader_classes)


def load_transactions(file_path: str, config: Optional[AnalyzerConfig] = None) -> List[Transaction]:
    """Read a transaction file and materialize its records in file order"""
    config = config or AnalyzerConfig()
    loader = LoaderFactory(config).get_loader_for_file(file_path)
    if loader is None:
        raise LoadError("No suitable loader found", file_path=file_path, error_type="UNSUPPORTED_FORMAT")

    transactions = [Transaction.from_dict(record) for record in loader.load(file_path)]
    logger.debug(f"Materialized {len(transactions)} transactions from {file_path}")
    return transactions
