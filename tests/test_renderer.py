"""Tests for the schema info renderer."""

import pytest

from schema_annotator.annotation.renderer import format_foreign_key_name, render
from schema_annotator.config import AnnotateConfig
from schema_annotator.schema.model import Column, ForeignKey, Index, SchemaModel

HEADER = "== Schema Info"
PAD = " " * 10  # "integer" padded to the type column, plus one space


class TestColumns:
    def test_exact_block(self, users_schema):
        block = render(users_schema, HEADER)
        assert block == (
            "# == Schema Info\n"
            "#\n"
            "# Table name: users\n"
            "#\n"
            f"#  id   :integer{PAD}not null, primary key\n"
            "#  name :integer\n"
            "#\n"
            "\n"
        )

    def test_deterministic(self, users_schema):
        config = AnnotateConfig(show_indexes=True, show_foreign_keys=True)
        assert render(users_schema, HEADER, config) == render(users_schema, HEADER, config)

    def test_starts_with_header_ends_with_blank_line(self, users_schema):
        block = render(users_schema, "== Custom")
        assert block.startswith("# == Custom\n")
        assert block.endswith("#\n\n")

    def test_declaration_order(self):
        schema = SchemaModel("t", None, [Column("zeta", "text"), Column("alpha", "text")])
        block = render(schema, HEADER)
        assert block.index("zeta") < block.index("alpha")

    def test_attributes(self):
        schema = SchemaModel("t", "id", [
            Column("id", "integer", nullable=False),
            Column("email", "string", limit=255, default="x", nullable=False),
            Column("active", "boolean", default=False),
            Column("score", "float", default=1.5),
        ])
        block = render(schema, HEADER)
        assert ':string(255)' + " " * 6 + 'default("x"), not null' in block
        assert "default(false)" in block
        assert "default(1.5)" in block

    def test_no_trailing_whitespace(self, users_schema):
        for line in render(users_schema, HEADER).splitlines():
            assert line == line.rstrip()

    def test_empty_columns(self):
        block = render(SchemaModel("empty"), HEADER)
        assert block == "# == Schema Info\n#\n# Table name: empty\n#\n#\n\n"

    def test_missing_primary_key_column(self):
        schema = SchemaModel("t", "uuid", [Column("id", "integer")])
        assert "primary key" not in render(schema, HEADER)

    def test_comment_prefix(self, users_schema):
        block = render(users_schema, HEADER, AnnotateConfig(comment_prefix="--"))
        assert block.startswith("-- == Schema Info\n--\n-- Table name: users\n")
        assert all(line.startswith("--") for line in block.splitlines() if line)


class TestSorting:
    @pytest.fixture
    def schema(self):
        return SchemaModel("posts", "id", [
            Column("updated_at", "datetime"),
            Column("title", "string"),
            Column("author_id", "integer"),
            Column("id", "integer"),
            Column("created_at", "datetime"),
            Column("body", "text"),
        ])

    def _names(self, block):
        return [line.split()[1].rstrip(":") for line in block.splitlines() if line.startswith("#  ")]

    def test_sort(self, schema):
        block = render(schema, HEADER, AnnotateConfig(sort=True))
        assert self._names(block) == ["author_id", "body", "created_at", "id", "title", "updated_at"]

    def test_classified_sort(self, schema):
        block = render(schema, HEADER, AnnotateConfig(classified_sort=True))
        assert self._names(block) == ["id", "body", "title", "author_id", "created_at", "updated_at"]


class TestIndexes:
    def test_hidden_by_default(self, targets):
        assert "Indexes" not in render(targets[0].schema, HEADER)

    def test_index_section(self, targets):
        block = render(targets[0].schema, HEADER, AnnotateConfig(show_indexes=True))
        assert "# Indexes\n#\n#  index_users_on_email  (email) UNIQUE\n" in block

    def test_partial_and_multi_column(self):
        schema = SchemaModel("t", None, [Column("a", "integer"), Column("b", "integer")], indexes=[
            Index("idx_ab", ["a", "b"], where="a > 0"),
        ])
        block = render(schema, HEADER, AnnotateConfig(show_indexes=True))
        assert "#  idx_ab  (a,b) WHERE a > 0\n" in block

    def test_no_indexes_no_section(self, users_schema):
        assert "Indexes" not in render(users_schema, HEADER, AnnotateConfig(show_indexes=True))


class TestForeignKeys:
    @pytest.fixture
    def schema(self):
        return SchemaModel("users", "id", [Column("id", "integer"), Column("org_id", "integer")], foreign_keys=[
            ForeignKey("fk_rails_cf2568e89e", "org_id", "orgs", on_delete="cascade"),
        ])

    def test_hidden_by_default(self, schema):
        assert "Foreign Keys" not in render(schema, HEADER)

    def test_foreign_key_section(self, schema):
        block = render(schema, HEADER, AnnotateConfig(show_foreign_keys=True))
        assert "# Foreign Keys\n#\n#  fk_rails_...  (org_id => orgs.id) ON DELETE => cascade\n#\n\n" in block

    def test_complete_names(self, schema):
        config = AnnotateConfig(show_foreign_keys=True, show_complete_foreign_keys=True)
        assert "fk_rails_cf2568e89e  (org_id" in render(schema, HEADER, config)

    def test_on_update(self):
        schema = SchemaModel("t", None, [Column("a_id", "integer")], foreign_keys=[
            ForeignKey("fk_a", "a_id", "as", on_update="nullify"),
        ])
        block = render(schema, HEADER, AnnotateConfig(show_foreign_keys=True))
        assert "(a_id => as.id) ON UPDATE => nullify" in block
        assert "ON DELETE" not in block

    def test_sections_order(self, targets):
        config = AnnotateConfig(show_indexes=True, show_foreign_keys=True)
        block = render(targets[0].schema, HEADER, config)
        assert block.index("# Indexes") < block.index("# Foreign Keys")


class TestFormatForeignKeyName:
    def test_shortens_hashed_name(self):
        assert format_foreign_key_name("fk_rails_0123456789") == "fk_rails_..."

    def test_keeps_custom_name(self):
        assert format_foreign_key_name("fk_users_orgs") == "fk_users_orgs"

    def test_complete(self):
        assert format_foreign_key_name("fk_rails_0123456789", complete=True) == "fk_rails_0123456789"
