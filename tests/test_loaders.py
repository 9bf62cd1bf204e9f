"""Tests for JSON and CSV transaction loaders."""

import json
import os
import tempfile

import pytest

from transaction_analyzer.exceptions import LoadError
from transaction_analyzer.models.core import AnalyzerConfig, Transaction
from transaction_analyzer.parsers.csv_loader import CSVLoader
from transaction_analyzer.parsers.factory import LoaderFactory, load_transactions
from transaction_analyzer.parsers.json_loader import JSONLoader


RECORDS = [
    {
        "transaction_id": "1",
        "transaction_date": "2019-01-01",
        "transaction_amount": "100.00",
        "transaction_type": "debit",
        "transaction_description": "Payment for groceries",
        "merchant_name": "SuperMart",
        "card_type": "Visa",
    },
    {
        "transaction_id": "2",
        "transaction_date": "2019-01-02",
        "transaction_amount": "50.00",
        "transaction_type": "credit",
        "transaction_description": "Refund for returned item",
        "merchant_name": "OnlineShop",
        "card_type": "MasterCard",
    },
]


def write_temp_file(content: str, suffix: str) -> str:
    with tempfile.NamedTemporaryFile(mode='w', suffix=suffix, delete=False, encoding='utf-8') as f:
        f.write(content)
        return f.name


class TestJSONLoader:
    """Test cases for JSON loader"""

    def setup_method(self):
        self.loader = JSONLoader(AnalyzerConfig())
        self.temp_files = []

    def teardown_method(self):
        for path in self.temp_files:
            os.unlink(path)

    def _write(self, content: str, suffix: str = '.json') -> str:
        path = write_temp_file(content, suffix)
        self.temp_files.append(path)
        return path

    def test_supported_extensions(self):
        assert self.loader.get_supported_extensions() == ['.json']

    def test_load_records_in_order(self):
        path = self._write(json.dumps(RECORDS))
        records = self.loader.load(path)

        assert records == RECORDS

    def test_load_empty_array(self):
        path = self._write("[]")
        assert self.loader.load(path) == []

    def test_invalid_json(self):
        path = self._write('[{"transaction_id": "1",\n')
        with pytest.raises(LoadError) as exc_info:
            self.loader.load(path)
        assert exc_info.value.file_path == path
        assert exc_info.value.error_type == "MALFORMED_FILE"

    def test_top_level_must_be_array(self):
        path = self._write('{"transaction_id": "1"}')
        with pytest.raises(LoadError, match="array"):
            self.loader.load(path)

    def test_records_must_be_objects(self):
        path = self._write('[{"transaction_id": "1"}, 5]')
        with pytest.raises(LoadError, match="Record 1"):
            self.loader.load(path)

    def test_missing_file(self):
        with pytest.raises(LoadError) as exc_info:
            self.loader.load("does_not_exist.json")
        assert exc_info.value.error_type == "FILE_NOT_FOUND"

    def test_validate_file_rejects_wrong_extension(self):
        path = self._write("[]", suffix='.txt')
        assert not self.loader.validate_file(path)


class TestCSVLoader:
    """Test cases for CSV loader"""

    def setup_method(self):
        self.loader = CSVLoader(AnalyzerConfig())
        self.temp_files = []

    def teardown_method(self):
        for path in self.temp_files:
            os.unlink(path)

    def _write(self, content: str) -> str:
        path = write_temp_file(content, '.csv')
        self.temp_files.append(path)
        return path

    def test_load_keeps_values_as_text(self):
        csv_content = """transaction_id,transaction_date,transaction_amount,transaction_type,transaction_description,merchant_name,card_type
001,2019-01-01,100.00,debit,Payment for groceries,SuperMart,Visa
2,2019-01-02,,credit,,OnlineShop,MasterCard"""
        records = self.loader.load(self._write(csv_content))

        assert len(records) == 2
        assert records[0]["transaction_id"] == "001"
        assert records[0]["transaction_amount"] == "100.00"
        assert records[1]["transaction_amount"] == ""
        assert records[1]["transaction_description"] == ""

    def test_extra_columns_are_dropped(self):
        csv_content = """transaction_id,transaction_date,transaction_amount,transaction_type,transaction_description,merchant_name,card_type,note
1,2019-01-01,100.00,debit,Groceries,SuperMart,Visa,ignored"""
        records = self.loader.load(self._write(csv_content))
        assert "note" not in records[0]

    def test_missing_columns(self):
        csv_content = """transaction_id,transaction_date,transaction_amount
1,2019-01-01,100.00"""
        with pytest.raises(LoadError) as exc_info:
            self.loader.load(self._write(csv_content))
        assert exc_info.value.field == "transaction_type"
        assert exc_info.value.error_type == "MISSING_REQUIRED_COLUMNS"

    def test_empty_file(self):
        assert self.loader.load(self._write("")) == []

    def test_header_only(self):
        header = "transaction_id,transaction_date,transaction_amount,transaction_type,transaction_description,merchant_name,card_type\n"
        assert self.loader.load(self._write(header)) == []


class TestLoaderFactory:
    """Test cases for loader selection"""

    def setup_method(self):
        self.factory = LoaderFactory(AnalyzerConfig())

    def test_loader_selection_by_extension(self):
        assert isinstance(self.factory.get_loader_for_file("data/transaction.json"), JSONLoader)
        assert isinstance(self.factory.get_loader_for_file("EXPORT.CSV"), CSVLoader)
        assert self.factory.get_loader_for_file("statement.pdf") is None

    def test_supported_extensions(self):
        assert self.factory.get_supported_extensions() == ['.csv', '.json']

    def test_load_transactions(self):
        path = write_temp_file(json.dumps(RECORDS), '.json')
        try:
            transactions = load_transactions(path)
        finally:
            os.unlink(path)

        assert transactions == [Transaction.from_dict(r) for r in RECORDS]

    def test_load_transactions_unsupported_format(self):
        with pytest.raises(LoadError) as exc_info:
            load_transactions("statement.pdf")
        assert exc_info.value.error_type == "UNSUPPORTED_FORMAT"
