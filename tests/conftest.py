# tests/conftest.py
"""Shared fixtures for parser and controller tests."""

import json

import pytest

from controllers.table_controller import TableController
from models.table_model import TableData
from services.file_service import UploadedFile


def make_rows(count: int):
    return [{"column_1": f"value_1_{i}", "column_2": f"value_2_{i}"} for i in range(count)]


def make_json_file(row_count: int, name: str = "mockfile.json") -> UploadedFile:
    content = json.dumps({"columns": ["column_1", "column_2"], "rows": make_rows(row_count)})
    return UploadedFile(name, content)


@pytest.fixture
def controller():
    return TableController()


@pytest.fixture
def table_200():
    return TableData(columns=["column_1", "column_2"], rows=make_rows(200))
