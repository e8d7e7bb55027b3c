"""
tests/test_naming.py
Unit tests for crudgen.naming and the casing / pluralisation helpers.
"""

from __future__ import annotations

import pytest

from crudgen.naming import derive_naming
from crudgen.utils import (
    capitalize_first,
    to_camel_case,
    to_plural,
    to_snake_case,
    to_title_label,
)


class TestDeriveNaming:
    """Every naming variant derived from one module name."""

    def test_product_variants(self) -> None:
        v = derive_naming("Product")
        assert v.type_name == "Product"
        assert v.collection_name == "products"
        assert v.handler_name == "ProductHandler"
        assert v.route_segment == "admin/products"
        assert v.route_name == "admin.products"
        assert v.variable_name == "product"
        assert v.module_name == "product"

    def test_compound_name(self) -> None:
        v = derive_naming("OrderItem")
        assert v.type_name == "OrderItem"
        assert v.collection_name == "order_items"
        assert v.variable_name == "orderItem"
        assert v.module_name == "order_item"
        assert v.handler_name == "OrderItemHandler"

    def test_lowercase_name_is_capitalised(self) -> None:
        v = derive_naming("category")
        assert v.type_name == "Category"
        assert v.collection_name == "categories"

    def test_irregular_plural(self) -> None:
        assert derive_naming("Person").collection_name == "people"

    def test_custom_admin_segment(self) -> None:
        v = derive_naming("Product", "backoffice")
        assert v.route_segment == "backoffice/products"
        assert v.route_name == "backoffice.products"

    def test_derivation_is_stable(self) -> None:
        first = derive_naming("Product")
        second = derive_naming("Product")
        assert first == second
        assert first.collection_name == second.collection_name

    def test_surrounding_whitespace_ignored(self) -> None:
        assert derive_naming("  Product ").collection_name == "products"

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_empty_name_rejected(self, raw: str) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            derive_naming(raw)

    def test_name_without_usable_characters_rejected(self) -> None:
        with pytest.raises(ValueError, match="no usable characters"):
            derive_naming("!!!")


class TestCasingHelpers:
    """Casing and label helpers."""

    def test_snake_case(self) -> None:
        assert to_snake_case("OrderItem") == "order_item"
        assert to_snake_case("HTTPRequestLog") == "http_request_log"
        assert to_snake_case("already_snake") == "already_snake"
        assert to_snake_case("") == ""

    def test_camel_case(self) -> None:
        assert to_camel_case("OrderItem") == "orderItem"
        assert to_camel_case("order_item") == "orderItem"
        assert to_camel_case("product") == "product"

    def test_capitalize_first_keeps_rest(self) -> None:
        assert capitalize_first("orderItem") == "OrderItem"
        assert capitalize_first("") == ""

    def test_title_label(self) -> None:
        assert to_title_label("unit_price") == "Unit Price"
        assert to_title_label("title") == "Title"


class TestPluralisation:
    """Naive English pluralisation of the last snake_case segment."""

    @pytest.mark.parametrize(
        "singular, plural",
        [
            ("product", "products"),
            ("category", "categories"),
            ("box", "boxes"),
            ("status", "statuses"),
            ("day", "days"),
            ("knife", "knives"),
            ("order_item", "order_items"),
            ("sales_person", "sales_people"),
            ("news", "news"),
            ("quiz", "quizzes"),
            ("gas", "gases"),
            ("buzz", "buzzes"),
            ("waltz", "waltzes"),
        ],
    )
    def test_plural(self, singular: str, plural: str) -> None:
        assert to_plural(singular) == plural

    def test_empty(self) -> None:
        assert to_plural("") == ""
