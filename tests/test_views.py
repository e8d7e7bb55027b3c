"""
tests/test_views.py
Tests for crudgen.views.ViewRenderer.

The generated templates are written to tmp_path and rendered with a plain
Jinja2 environment whose ``url_for`` / ``admin_menus`` globals stand in for
the ones the generated application registers.
"""

from __future__ import annotations

import pathlib
import re
from datetime import date, datetime
from types import SimpleNamespace
from typing import Any, List

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from crudgen.exporters import ArtifactExporter
from crudgen.models import ArtifactKind, MenuEntry, ModuleSpec, NamingVariants, ScaffoldConfig
from crudgen.views import EMPTY_STATE, ViewRenderer


def _fake_url_for(name: str, **params: Any) -> str:
    path = "/" + name.replace(".", "/")
    if "item_id" in params:
        path += f"/{params['item_id']}"
    return path


def _write_views(
    root: pathlib.Path, config: ScaffoldConfig, spec: ModuleSpec, naming: NamingVariants
) -> Environment:
    renderer = ViewRenderer(config)
    exporter = ArtifactExporter(root)
    for artifact in renderer.render_views(spec, naming):
        exporter.write(artifact)
    exporter.write(renderer.render_layout())

    env = Environment(
        loader=FileSystemLoader(str(root / config.templates_dir)),
        undefined=StrictUndefined,
        autoescape=True,
    )
    env.globals["url_for"] = _fake_url_for
    env.globals["admin_menus"] = lambda: [
        MenuEntry(slug="products", label="Product", order_no=1),
        MenuEntry(slug="orders", label="Order", order_no=2),
    ]
    return env


def _input_names(html: str) -> List[str]:
    return re.findall(r'<label for="(\w+)"', html)


def _labels(html: str) -> List[str]:
    return re.findall(r'<label for="\w+" class="form(?:-check)?-label">([^<]+)</label>', html)


class TestRenderedArtifacts:
    def test_paths(
        self, config: ScaffoldConfig, product_spec: ModuleSpec, product_naming: NamingVariants
    ) -> None:
        artifacts = ViewRenderer(config).render_views(product_spec, product_naming)
        assert [a.path for a in artifacts] == [
            "templates/admin/products/_form.html",
            "templates/admin/products/index.html",
            "templates/admin/products/create.html",
            "templates/admin/products/edit.html",
        ]
        assert all(a.kind is ArtifactKind.TEMPLATE for a in artifacts)

    def test_all_extend_layout(
        self, config: ScaffoldConfig, product_spec: ModuleSpec, product_naming: NamingVariants
    ) -> None:
        for artifact in ViewRenderer(config).render_views(product_spec, product_naming):
            if artifact.path.endswith("_form.html"):
                continue
            assert artifact.content.startswith('{% extends "layouts/admin.html" %}')

    def test_forms_share_partial(
        self, config: ScaffoldConfig, product_spec: ModuleSpec, product_naming: NamingVariants
    ) -> None:
        renderer = ViewRenderer(config)
        include = '{% include "admin/products/_form.html" %}'
        assert include in renderer.render_create(product_naming)
        assert include in renderer.render_edit(product_naming)

    def test_input_types(
        self, config: ScaffoldConfig, gadget_spec: ModuleSpec
    ) -> None:
        form = ViewRenderer(config).render_form(gadget_spec)
        assert 'type="text" id="title"' in form
        assert '<textarea id="body"' in form
        assert 'type="number" id="qty"' in form
        assert 'type="checkbox" id="active"' in form
        assert 'type="date" id="released"' in form
        assert 'type="datetime-local" id="starts_at"' in form

    def test_layout_artifact(self, config: ScaffoldConfig) -> None:
        layout = ViewRenderer(config).render_layout()
        assert layout.kind is ArtifactKind.LAYOUT
        assert layout.path == "templates/layouts/admin.html"
        assert "{% for menu in admin_menus() %}" in layout.content
        assert "{% block content %}" in layout.content


class TestRenderedHtml:
    def test_index_empty_state(
        self,
        tmp_path: pathlib.Path,
        config: ScaffoldConfig,
        product_spec: ModuleSpec,
        product_naming: NamingVariants,
    ) -> None:
        env = _write_views(tmp_path, config, product_spec, product_naming)
        html = env.get_template("admin/products/index.html").render(
            items=[], page=1, pages=1, total=0
        )
        assert EMPTY_STATE in html
        assert "<table" not in html
        assert 'href="/admin/products/create"' in html

    def test_index_rows(
        self,
        tmp_path: pathlib.Path,
        config: ScaffoldConfig,
        product_spec: ModuleSpec,
        product_naming: NamingVariants,
    ) -> None:
        env = _write_views(tmp_path, config, product_spec, product_naming)
        items = [SimpleNamespace(id=7, title="Lamp", price=12)]
        html = env.get_template("admin/products/index.html").render(
            items=items, page=1, pages=1, total=1
        )
        assert "<th>Title</th>" in html
        assert "<th>Price</th>" in html
        assert "<th>Actions</th>" in html
        assert "<td>Lamp</td>" in html
        assert "<td>12</td>" in html
        assert 'href="/admin/products/edit/7"' in html
        assert 'action="/admin/products/destroy/7"' in html
        assert "pagination" not in html
        assert EMPTY_STATE not in html

    def test_index_pagination(
        self,
        tmp_path: pathlib.Path,
        config: ScaffoldConfig,
        product_spec: ModuleSpec,
        product_naming: NamingVariants,
    ) -> None:
        env = _write_views(tmp_path, config, product_spec, product_naming)
        items = [SimpleNamespace(id=1, title="Lamp", price=12)]
        html = env.get_template("admin/products/index.html").render(
            items=items, page=2, pages=3, total=21
        )
        assert 'href="?page=3"' in html
        assert 'class="page-item active"' in html

    def test_layout_lists_menu_entries(
        self,
        tmp_path: pathlib.Path,
        config: ScaffoldConfig,
        product_spec: ModuleSpec,
        product_naming: NamingVariants,
    ) -> None:
        env = _write_views(tmp_path, config, product_spec, product_naming)
        html = env.get_template("admin/products/index.html").render(
            items=[], page=1, pages=1, total=0
        )
        assert 'href="/admin/products">Product</a>' in html
        assert 'href="/admin/orders">Order</a>' in html
        assert html.index("Product</a>") < html.index("Order</a>")

    def test_create_and_edit_share_fields(
        self,
        tmp_path: pathlib.Path,
        config: ScaffoldConfig,
        gadget_spec: ModuleSpec,
        gadget_naming: NamingVariants,
    ) -> None:
        env = _write_views(tmp_path, config, gadget_spec, gadget_naming)
        item = SimpleNamespace(
            id=3,
            title="Phone",
            body="A phone.",
            qty=0,
            active=True,
            released=date(2024, 1, 2),
            starts_at=datetime(2024, 1, 2, 10, 30),
        )
        create_html = env.get_template("admin/gadgets/create.html").render(item=None)
        edit_html = env.get_template("admin/gadgets/edit.html").render(item=item)

        expected = ["title", "body", "qty", "active", "released", "starts_at"]
        assert _input_names(create_html) == expected
        assert _input_names(edit_html) == expected
        assert _labels(create_html) == _labels(edit_html)
        assert _labels(create_html) == [
            "Title", "Body", "Qty", "Active", "Released", "Starts At"
        ]

    def test_create_form_is_empty(
        self,
        tmp_path: pathlib.Path,
        config: ScaffoldConfig,
        gadget_spec: ModuleSpec,
        gadget_naming: NamingVariants,
    ) -> None:
        env = _write_views(tmp_path, config, gadget_spec, gadget_naming)
        html = env.get_template("admin/gadgets/create.html").render(item=None)
        assert 'action="/admin/gadgets/store"' in html
        assert 'value=""' in html
        assert "checked" not in html
        assert ">Save</button>" in html

    def test_edit_form_is_bound(
        self,
        tmp_path: pathlib.Path,
        config: ScaffoldConfig,
        gadget_spec: ModuleSpec,
        gadget_naming: NamingVariants,
    ) -> None:
        env = _write_views(tmp_path, config, gadget_spec, gadget_naming)
        item = SimpleNamespace(
            id=3,
            title="Phone",
            body="A phone.",
            qty=0,
            active=True,
            released=date(2024, 1, 2),
            starts_at=datetime(2024, 1, 2, 10, 30),
        )
        html = env.get_template("admin/gadgets/edit.html").render(item=item)
        assert 'action="/admin/gadgets/update/3"' in html
        assert 'value="Phone"' in html
        assert ">A phone.</textarea>" in html
        assert 'value="0"' in html
        assert " checked>" in html
        assert 'value="2024-01-02"' in html
        assert 'value="2024-01-02T10:30"' in html
        assert ">Update</button>" in html


def test_custom_prefix_moves_views(config: ScaffoldConfig, product_spec: ModuleSpec) -> None:
    from crudgen.naming import derive_naming

    cfg = config.overrides(admin_prefix="/backoffice")
    naming = derive_naming("Product", cfg.admin_segment)
    renderer = ViewRenderer(cfg)
    assert renderer.view_dir(naming) == "templates/backoffice/products"
    assert "url_for('backoffice.products.create')" in renderer.render_index(product_spec, naming)


class TestRejectedSubmission:
    def test_checkbox_has_unchecked_fallback(
        self, config: ScaffoldConfig, gadget_spec: ModuleSpec
    ) -> None:
        form = ViewRenderer(config).render_form(gadget_spec)
        hidden = form.index('<input type="hidden" name="active" value="0">')
        assert hidden < form.index('type="checkbox" id="active"')

    def test_typed_values_and_errors_shown(
        self,
        tmp_path: pathlib.Path,
        config: ScaffoldConfig,
        gadget_spec: ModuleSpec,
        gadget_naming: NamingVariants,
    ) -> None:
        env = _write_views(tmp_path, config, gadget_spec, gadget_naming)
        old = {
            "title": "Phone",
            "body": "A <b>phone</b>.",
            "qty": "lots",
            "active": "1",
            "released": "2024-01-02",
            "starts_at": "",
        }
        html = env.get_template("admin/gadgets/create.html").render(
            item=None, old=old, errors=["Invalid value for qty."]
        )
        assert '<div class="alert alert-danger">' in html
        assert "<li>Invalid value for qty.</li>" in html
        assert 'value="Phone"' in html
        assert ">A &lt;b&gt;phone&lt;/b&gt;.</textarea>" in html
        assert 'value="lots"' in html
        assert " checked>" in html
        assert 'value="2024-01-02"' in html

    def test_typed_values_win_over_item(
        self,
        tmp_path: pathlib.Path,
        config: ScaffoldConfig,
        gadget_spec: ModuleSpec,
        gadget_naming: NamingVariants,
    ) -> None:
        env = _write_views(tmp_path, config, gadget_spec, gadget_naming)
        item = SimpleNamespace(
            id=3,
            title="Phone",
            body="A phone.",
            qty=2,
            active=True,
            released=date(2024, 1, 2),
            starts_at=datetime(2024, 1, 2, 10, 30),
        )
        old = {
            "title": "",
            "body": "A phone.",
            "qty": "2",
            "active": "0",
            "released": "2024-01-02",
            "starts_at": "2024-01-02T10:30",
        }
        html = env.get_template("admin/gadgets/edit.html").render(
            item=item, old=old, errors=["The title field(s) are required."]
        )
        assert 'action="/admin/gadgets/update/3"' in html
        assert 'value="Phone"' not in html
        assert "checked" not in html
        assert "<li>The title field(s) are required.</li>" in html

    def test_no_errors_block_without_errors(
        self,
        tmp_path: pathlib.Path,
        config: ScaffoldConfig,
        product_spec: ModuleSpec,
        product_naming: NamingVariants,
    ) -> None:
        env = _write_views(tmp_path, config, product_spec, product_naming)
        html = env.get_template("admin/products/create.html").render(item=None)
        assert "alert-danger" not in html
