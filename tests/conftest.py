"""Shared test fixtures for schema-annotator."""

from pathlib import Path

import pytest

from schema_annotator.schema.loader import load_schema
from schema_annotator.schema.model import Column, SchemaModel

FIXTURES = Path(__file__).parent / "fixtures"

FILE_CONTENT = "class User(Model):\n    pass\n"


@pytest.fixture
def targets():
    return load_schema(FIXTURES / "schema-minimal.yaml")


@pytest.fixture
def users_schema():
    return SchemaModel(
        "users",
        "id",
        [Column("id", "integer", nullable=False), Column("name", "integer")],
    )


@pytest.fixture
def model_file(tmp_path):
    path = tmp_path / "user.py"
    path.write_text(FILE_CONTENT)
    return path


@pytest.fixture
def file_content():
    return FILE_CONTENT
