"""CSV file loader for raw transaction records."""

import logging
import os
from typing import Any, Dict, List

import pandas as pd

from .base import RecordLoader
from ..exceptions import LoadError
from ..models.core import AnalyzerConfig, TRANSACTION_FIELDS


logger = logging.getLogger(__name__)


class CSVLoader(RecordLoader):
    """Loader for CSV exports with one column per transaction field"""

    def __init__(self, config: AnalyzerConfig):
        super().__init__(config)
        self.supported_extensions = ['.csv']
        self.required_columns = list(TRANSACTION_FIELDS)

    def get_supported_extensions(self) -> List[str]:
        """Return list of supported file extensions"""
        return self.supported_extensions

    def validate_file(self, file_path: str) -> bool:
        """Validate CSV file format"""
        if not os.path.isfile(file_path):
            logger.error(f"File does not exist: {file_path}")
            return False

        _, ext = os.path.splitext(file_path.lower())
        if ext not in self.supported_extensions:
            logger.error(f"Unsupported file extension: {ext}")
            return False

        return True

    def load(self, file_path: str) -> List[Dict[str, Any]]:
        """Read the CSV and return one mapping per row, values kept as text"""
        if not self.validate_file(file_path):
            raise LoadError("Cannot read transaction file", file_path=file_path, error_type="FILE_NOT_FOUND")

        try:
            # Everything stays a string; empty cells must not become NaN
            df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            logger.warning(f"CSV file is empty: {file_path}")
            return []
        except (pd.errors.ParserError, OSError, UnicodeDecodeError) as e:
            raise LoadError(f"Error reading CSV: {e}", file_path=file_path) from e

        df.columns = [str(column).strip() for column in df.columns]
        missing = [column for column in self.required_columns if column not in df.columns]
        if missing:
            raise LoadError(
                f"Missing required columns: {', '.join(missing)}",
                file_path=file_path,
                field=missing[0],
                error_type="MISSING_REQUIRED_COLUMNS"
            )

        records = df[self.required_columns].to_dict(orient='records')
        logger.info(f"Loaded {len(records)} records from {file_path}")
        return records
