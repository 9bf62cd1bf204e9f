"""JSON file loader for raw transaction records."""

import json
import logging
import os
from typing import Any, Dict, List

from .base import RecordLoader
from ..exceptions import LoadError
from ..models.core import AnalyzerConfig


logger = logging.getLogger(__name__)


class JSONLoader(RecordLoader):
    """Loader for JSON files holding an array of transaction objects"""

    def __init__(self, config: AnalyzerConfig):
        super().__init__(config)
        self.supported_extensions = ['.json']

    def get_supported_extensions(self) -> List[str]:
        """Return list of supported file extensions"""
        return self.supported_extensions

    def validate_file(self, file_path: str) -> bool:
        """Validate JSON file location and extension"""
        if not os.path.isfile(file_path):
            logger.error(f"File does not exist: {file_path}")
            return False

        _, ext = os.path.splitext(file_path.lower())
        if ext not in self.supported_extensions:
            logger.error(f"Unsupported file extension: {ext}")
            return False

        return True

    def load(self, file_path: str) -> List[Dict[str, Any]]:
        """Read the file and return its records in array order"""
        if not self.validate_file(file_path):
            raise LoadError("Cannot read transaction file", file_path=file_path, error_type="FILE_NOT_FOUND")

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise LoadError(f"Invalid JSON: {e.msg}", file_path=file_path, line_number=e.lineno) from e
        except (OSError, UnicodeDecodeError) as e:
            error_type = "FILE_PERMISSION_DENIED" if isinstance(e, PermissionError) else "MALFORMED_FILE"
            raise LoadError(f"Error reading file: {e}", file_path=file_path, error_type=error_type) from e

        if not isinstance(data, list):
            raise LoadError("Top-level JSON value must be an array of records", file_path=file_path)

        for index, record in enumerate(data):
            if not isinstance(record, dict):
                raise LoadError(
                    f"Record {index} is {type(record).__name__}, expected an object",
                    file_path=file_path
                )

        logger.info(f"Loaded {len(data)} records from {file_path}")
        return data
