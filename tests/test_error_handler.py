"""Tests for error recording and the JSON-lines logs."""

import json
import shutil
import tempfile
from pathlib import Path

from transaction_analyzer.exceptions import LoadError, MalformedAmountError
from transaction_analyzer.utils.error_handler import (
    ErrorCategory,
    ErrorHandler,
    ErrorSeverity,
    handle_analysis_error,
    handle_load_error,
)


class TestErrorHandler:
    """Test cases for ErrorHandler"""

    def setup_method(self):
        self.log_dir = tempfile.mkdtemp()
        self.handler = ErrorHandler(self.log_dir, enable_console=False)

    def teardown_method(self):
        for log_handler in list(self.handler.logger.handlers):
            log_handler.close()
            self.handler.logger.removeHandler(log_handler)
        shutil.rmtree(self.log_dir, ignore_errors=True)

    def read_log(self, prefix):
        files = list(Path(self.log_dir).glob(f"{prefix}_*.jsonl"))
        assert len(files) == 1
        return [json.loads(line) for line in files[0].read_text().splitlines()]

    def test_warning_is_kept_apart_from_errors(self):
        record = self.handler.log_warning("Duplicate transaction id: 1", "DUPLICATE_TRANSACTION",
                                          ErrorCategory.DATA_VALIDATION, file_path="transaction.json")

        assert self.handler.errors == []
        assert self.handler.warnings == [record]
        assert record.severity is ErrorSeverity.WARNING
        assert record.error_code == "V001"
        assert record.file_path == "transaction.json"

    def test_unknown_error_type_gets_fallback_code(self):
        record = self.handler.log_error("boom", "SOMETHING_ELSE", ErrorCategory.QUERY)
        assert record.error_code == "S999"

    def test_errors_written_to_both_logs(self):
        self.handler.log_info("Loaded 3 transactions")
        self.handler.log_error("Failed to generate config template", "CONFIG_TEMPLATE_ERROR",
                               ErrorCategory.CONFIGURATION, file_path="out.json")

        all_entries = self.read_log("analyzer")
        error_entries = self.read_log("errors")

        assert [entry['level'] for entry in all_entries] == ["INFO", "ERROR"]
        assert len(error_entries) == 1
        assert error_entries[0]['error_code'] == "C005"
        assert error_entries[0]['category'] == "configuration"
        assert error_entries[0]['file_path'] == "out.json"

    def test_handle_load_error_keeps_file_context(self):
        error = LoadError("Invalid JSON", file_path="bad.json", line_number=3, error_type="MALFORMED_FILE")
        try:
            raise error
        except LoadError as e:
            record = handle_load_error(self.handler, e)

        assert record.category is ErrorCategory.FILE_FORMAT
        assert record.error_code == "F102"
        assert record.line_number == 3

        entry = self.read_log("errors")[0]
        assert entry['line'] == 3
        assert "LoadError" in entry['exception']

    def test_handle_load_error_missing_file(self):
        record = handle_load_error(self.handler, LoadError("File not found", file_path="x.json",
                                                           error_type="FILE_NOT_FOUND"))
        assert record.category is ErrorCategory.FILE_ACCESS
        assert record.error_code == "F001"

    def test_handle_analysis_error_records_raw_value(self):
        record = handle_analysis_error(self.handler, MalformedAmountError("abc", "2"), "Total debit amount")

        assert record.category is ErrorCategory.DATA_PARSING
        assert record.error_code == "D002"
        assert record.raw_value == "abc"
        assert record.context == {'operation': "Total debit amount"}
        assert record.message.startswith("Total debit amount failed:")
