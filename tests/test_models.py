"""
tests/test_models.py
Unit tests for the pydantic models in crudgen.models.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from crudgen.models import (
    ArtifactKind,
    FieldSpec,
    FieldType,
    GeneratedArtifact,
    ModuleSpec,
    ScaffoldConfig,
)


class TestFieldSpec:
    def test_defaults_to_text(self) -> None:
        assert FieldSpec(identifier="title").type is FieldType.TEXT

    def test_label(self) -> None:
        assert FieldSpec(identifier="unit_price", type="integer").label == "Unit Price"

    @pytest.mark.parametrize("identifier", ["Title", "1st", "unit-price", "two words", ""])
    def test_invalid_identifier_rejected(self, identifier: str) -> None:
        with pytest.raises(ValidationError):
            FieldSpec(identifier=identifier)

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FieldSpec(identifier="price", type="money")


class TestModuleSpec:
    def test_fields_keep_declaration_order(self, product_spec: ModuleSpec) -> None:
        assert product_spec.field_identifiers == ("title", "price")
        assert product_spec.fields[1].type is FieldType.INTEGER

    def test_empty_fields_get_default_name_field(self) -> None:
        spec = ModuleSpec(name="Widget", fields=[])
        assert len(spec.fields) == 1
        assert spec.fields[0].identifier == "name"
        assert spec.fields[0].type is FieldType.TEXT

    def test_missing_fields_get_default_name_field(self) -> None:
        assert ModuleSpec(name="Widget").field_identifiers == ("name",)

    def test_default_field_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="crudgen.models"):
            ModuleSpec(name="Widget")
        assert "Adding default 'name' field" in caplog.text

    def test_duplicate_identifiers_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Duplicate field identifiers"):
            ModuleSpec(
                name="Product",
                fields=[{"identifier": "title"}, {"identifier": "title", "type": "longText"}],
            )

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModuleSpec(name="   ")

    def test_name_is_stripped(self) -> None:
        assert ModuleSpec(name=" Product ").name == "Product"

    def test_frozen(self, product_spec: ModuleSpec) -> None:
        with pytest.raises(ValidationError):
            product_spec.name = "Other"  # type: ignore[misc]


class TestGeneratedArtifact:
    def test_line_count(self) -> None:
        artifact = GeneratedArtifact(kind=ArtifactKind.MODEL, path="a.py", content="a\nb\n")
        assert artifact.line_count == 2
        assert artifact.append is False

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GeneratedArtifact(kind=ArtifactKind.MODEL, path="", content="")


class TestScaffoldConfig:
    def test_defaults(self) -> None:
        cfg = ScaffoldConfig()
        assert cfg.package_name == "app"
        assert cfg.admin_prefix == "/admin"
        assert cfg.admin_segment == "admin"
        assert cfg.page_size == 10
        assert cfg.menu_table == "admin_menus"
        assert cfg.layout_template == "layouts/admin.html"
        assert cfg.overwrite_existing is False
        assert cfg.dry_run is False

    @pytest.mark.parametrize("raw", ["admin", "/admin/", "admin/"])
    def test_prefix_normalised(self, raw: str) -> None:
        assert ScaffoldConfig(admin_prefix=raw).admin_prefix == "/admin"

    def test_root_prefix_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ScaffoldConfig(admin_prefix="/")

    def test_page_size_bounds(self) -> None:
        with pytest.raises(ValidationError):
            ScaffoldConfig(page_size=0)

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ScaffoldConfig(templates="x")  # type: ignore[call-arg]

    def test_validate_assignment(self) -> None:
        cfg = ScaffoldConfig()
        with pytest.raises(ValidationError):
            cfg.page_size = -1

    def test_overrides_ignore_none(self) -> None:
        cfg = ScaffoldConfig(page_size=20).overrides(page_size=None, dry_run=True)
        assert cfg.page_size == 20
        assert cfg.dry_run is True

    def test_app_path_is_absolute(self, config: ScaffoldConfig) -> None:
        assert config.app_path.is_absolute()
