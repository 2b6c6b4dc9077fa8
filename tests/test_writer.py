import json
import os
import stat
import pytest
from schemadump.domain.models import (
    BackendKind, Collection, CollectionSchema, Column, DatabaseSchema, Table,
)
from schemadump.exceptions import OutputError
from schemadump.writer import to_json, write_schema

def _schema():
    return DatabaseSchema(
        database_name="appdb",
        db_type=BackendKind.SQLSERVER,
        default_schema="dbo",
        tables=[Table(table_name="t", schema_name="dbo", columns=[
            Column(column_name="id", data_type="int", is_nullable="NO", precision=10, scale=0,
                   is_primary_key=True, is_identity=True),
            Column(column_name="name", data_type="nvarchar", is_nullable="YES", max_length=50,
                   default_value="('n/a')"),
        ])],
    )

def test_json_is_two_space_indented_and_newline_terminated():
    text = to_json(_schema())
    assert text.endswith("}\n")
    assert text.startswith('{\n  "databaseName": "appdb",\n  "dbType": "sqlserver",')

def test_absent_optional_fields_are_omitted():
    document = json.loads(to_json(_schema()))
    id_col, name_col = document["tables"][0]["columns"]

    assert "maxLength" not in id_col
    assert "defaultValue" not in id_col
    assert id_col["scale"] == 0
    assert "precision" not in name_col and "scale" not in name_col
    assert name_col["maxLength"] == 50
    assert name_col["defaultValue"] == "('n/a')"
    assert name_col["isPrimaryKey"] is False

def test_collection_schema_json():
    schema = CollectionSchema(
        database_name="app",
        collections=[Collection(collection_name="users", database_name="app")],
    )
    document = json.loads(to_json(schema))

    assert document == {
        "databaseName": "app",
        "dbType": "mongodb",
        "collections": [{"collectionName": "users", "databaseName": "app"}],
    }

def test_write_schema_creates_file(tmp_path):
    target = tmp_path / "out" / "schema.json"

    write_schema(_schema(), target)

    assert json.loads(target.read_text(encoding="utf-8"))["defaultSchema"] == "dbo"
    assert os.listdir(target.parent) == ["schema.json"]

def test_write_failure_leaves_no_file(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")

    with pytest.raises(OutputError):
        write_schema(_schema(), blocker / "schema.json")

    assert blocker.read_text() == "x"

def test_written_file_follows_umask(tmp_path):
    target = tmp_path / "schema.json"
    previous = os.umask(0o022)
    try:
        write_schema(_schema(), target)
    finally:
        os.umask(previous)

    assert stat.S_IMODE(os.stat(target).st_mode) == 0o644
