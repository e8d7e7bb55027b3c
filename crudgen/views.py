# File: crudgen/views.py
"""
crudgen - View Template Renderer
=================================
Emits the Jinja2 templates of one module:

    templates/admin/<collection>/index.html    list + pagination
    templates/admin/<collection>/create.html   create form
    templates/admin/<collection>/edit.html     edit form
    templates/admin/<collection>/_form.html    field inputs shared by both forms

and, once per application, the sidebar layout every view extends. Create and
edit include the same ``_form.html`` so their field order and labels cannot
drift apart.
"""

from __future__ import annotations

import logging
from typing import List

from crudgen.models import (
    ArtifactKind,
    ColumnKind,
    FieldSpec,
    GeneratedArtifact,
    ModuleSpec,
    NamingVariants,
    ScaffoldConfig,
)
from crudgen.typemap import input_type, map_field_type

logger: logging.Logger = logging.getLogger("crudgen.views")

BOOTSTRAP_CSS: str = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.2/dist/css/bootstrap.min.css"
EMPTY_STATE: str = "No records found."
FORM_PARTIAL: str = "_form.html"
CHECKED_VALUES: str = "('1', 'true', 'on', 'yes')"


class ViewRenderer:
    """Renders list / create / edit templates and the shared layout."""

    def __init__(self, config: ScaffoldConfig) -> None:
        self._config: ScaffoldConfig = config
        self._indent: str = "    "

    def view_dir(self, naming: NamingVariants) -> str:
        return f"{self._config.templates_dir}/{naming.route_segment}"

    def layout_path(self) -> str:
        return f"{self._config.templates_dir}/{self._config.layout_template}"

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def render_views(self, spec: ModuleSpec, naming: NamingVariants) -> List[GeneratedArtifact]:
        """All four module templates, partial first."""
        base: str = self.view_dir(naming)
        rendered = [
            (FORM_PARTIAL, self.render_form(spec)),
            ("index.html", self.render_index(spec, naming)),
            ("create.html", self.render_create(naming)),
            ("edit.html", self.render_edit(naming)),
        ]
        logger.debug("Rendered %d templates for '%s'.", len(rendered), naming.collection_name)
        return [
            GeneratedArtifact(kind=ArtifactKind.TEMPLATE, path=f"{base}/{name}", content=content)
            for name, content in rendered
        ]

    def render_index(self, spec: ModuleSpec, naming: NamingVariants) -> str:
        i, ii = self._indent, self._indent * 2
        var: str = naming.variable_name
        route: str = naming.route_name

        lines: List[str] = self._open(naming.collection_name.replace("_", " ").title())
        lines.append(
            f"<a href=\"{{{{ url_for('{route}.create') }}}}\" "
            f'class="btn btn-primary mb-2">Add</a>'
        )
        lines.append("")
        lines.append("{% if items %}")
        lines.append('<table class="table table-bordered">')
        lines.append("<thead>")
        lines.append("<tr>")
        for field in spec.fields:
            lines.append(f"{i}<th>{field.label}</th>")
        lines.append(f"{i}<th>Actions</th>")
        lines.append("</tr>")
        lines.append("</thead>")
        lines.append("<tbody>")
        lines.append(f"{{% for {var} in items %}}")
        lines.append("<tr>")
        for field in spec.fields:
            lines.append(f"{i}<td>{{{{ {var}.{field.identifier} }}}}</td>")
        lines.append(f"{i}<td>")
        lines.append(
            f"{ii}<a href=\"{{{{ url_for('{route}.edit', item_id={var}.id) }}}}\" "
            f'class="btn btn-sm btn-warning">Edit</a>'
        )
        lines.append(
            f"{ii}<form action=\"{{{{ url_for('{route}.destroy', item_id={var}.id) }}}}\" "
            f'method="POST" style="display:inline">'
        )
        lines.append(f'{ii}{i}<button class="btn btn-sm btn-danger">Delete</button>')
        lines.append(f"{ii}</form>")
        lines.append(f"{i}</td>")
        lines.append("</tr>")
        lines.append("{% endfor %}")
        lines.append("</tbody>")
        lines.append("</table>")
        lines.append("")
        lines.append("{% if pages > 1 %}")
        lines.append('<nav><ul class="pagination">')
        lines.append("{% for p in range(1, pages + 1) %}")
        lines.append(
            f'{i}<li class="page-item{{% if p == page %}} active{{% endif %}}">'
            f'<a class="page-link" href="?page={{{{ p }}}}">{{{{ p }}}}</a></li>'
        )
        lines.append("{% endfor %}")
        lines.append("</ul></nav>")
        lines.append("{% endif %}")
        lines.append("{% else %}")
        lines.append(f'<div class="alert alert-info">{EMPTY_STATE}</div>')
        lines.append("{% endif %}")
        lines.extend(self._close())
        return "\n".join(lines)

    def render_create(self, naming: NamingVariants) -> str:
        return self._render_form_page(
            naming,
            title=f"New {naming.type_name}",
            action=f"url_for('{naming.route_name}.store')",
            button="Save",
        )

    def render_edit(self, naming: NamingVariants) -> str:
        return self._render_form_page(
            naming,
            title=f"Edit {naming.type_name}",
            action=f"url_for('{naming.route_name}.update', item_id=item.id)",
            button="Update",
        )

    def render_form(self, spec: ModuleSpec) -> str:
        """
        Field inputs in declaration order, one block per field.

        After a rejected submission the handler passes ``old`` (the values
        as typed) and ``errors``; ``old`` wins over the bound ``item``.
        """
        i: str = self._indent
        lines: List[str] = [
            "{# Shared field inputs. Generated by crudgen. #}",
            "{% set form_old = old | default({}) %}",
            "{% set form_errors = errors | default([]) %}",
            "{% if form_errors %}",
            '<div class="alert alert-danger">',
            f'{i}<ul class="mb-0">',
            f"{i}{{% for error in form_errors %}}",
            f"{i}{i}<li>{{{{ error }}}}</li>",
            f"{i}{{% endfor %}}",
            f"{i}</ul>",
            "</div>",
            "{% endif %}",
        ]
        for field in spec.fields:
            lines.extend(self._input_block(field))
        lines.append("")
        return "\n".join(lines)

    def render_layout(self) -> GeneratedArtifact:
        """Sidebar navigation shell listing active menu entries."""
        i, ii = self._indent, self._indent * 2
        prefix: str = self._config.admin_prefix
        lines: List[str] = [
            "<!doctype html>",
            '<html lang="en">',
            "<head>",
            f'{i}<meta charset="utf-8">',
            f"{i}<title>{{% block title %}}Admin{{% endblock %}}</title>",
            f'{i}<link href="{BOOTSTRAP_CSS}" rel="stylesheet">',
            "</head>",
            "<body>",
            '<div class="d-flex">',
            f'{i}<div class="bg-dark text-white p-3" style="width:200px">',
            f'{ii}<ul class="nav flex-column">',
            f"{ii}{{% for menu in admin_menus() %}}",
            f'{ii}{i}<li class="nav-item">',
            f'{ii}{ii}<a class="nav-link text-white" href="{prefix}/{{{{ menu.slug }}}}">'
            f"{{{{ menu.label }}}}</a>",
            f"{ii}{i}</li>",
            f"{ii}{{% endfor %}}",
            f"{ii}</ul>",
            f"{i}</div>",
            f'{i}<div class="p-4 w-100">',
            f"{ii}{{% block content %}}{{% endblock %}}",
            f"{i}</div>",
            "</div>",
            "</body>",
            "</html>",
            "",
        ]
        return GeneratedArtifact(
            kind=ArtifactKind.LAYOUT, path=self.layout_path(), content="\n".join(lines)
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _open(self, title: str) -> List[str]:
        return [
            f'{{% extends "{self._config.layout_template}" %}}',
            f"{{% block title %}}{title}{{% endblock %}}",
            "{% block content %}",
        ]

    @staticmethod
    def _close() -> List[str]:
        return ["{% endblock %}", ""]

    def _render_form_page(
        self, naming: NamingVariants, *, title: str, action: str, button: str
    ) -> str:
        lines: List[str] = self._open(title)
        lines.append(f'<form method="POST" action="{{{{ {action} }}}}">')
        lines.append(f'{{% include "{naming.route_segment}/{FORM_PARTIAL}" %}}')
        lines.append(f'<button class="btn btn-success">{button}</button>')
        lines.append("</form>")
        lines.extend(self._close())
        return "\n".join(lines)

    def _input_block(self, field: FieldSpec) -> List[str]:
        i: str = self._indent
        name: str = field.identifier
        kind: ColumnKind = map_field_type(field.type)
        html_type: str = input_type(kind)

        if kind is ColumnKind.BOOLEAN:
            # An unchecked box is not submitted; the hidden "0" stands in for it.
            checked: str = (
                f"{{% if '{name}' in form_old %}}"
                f"{{% if form_old['{name}'] in {CHECKED_VALUES} %}} checked{{% endif %}}"
                f"{{% elif item and item.{name} %}} checked{{% endif %}}"
            )
            return [
                '<div class="form-check mb-3">',
                f'{i}<input type="hidden" name="{name}" value="0">',
                f'{i}<input type="checkbox" id="{name}" name="{name}" value="1" '
                f'class="form-check-input"{checked}>',
                f'{i}<label for="{name}" class="form-check-label">{field.label}</label>',
                "</div>",
            ]

        if kind is ColumnKind.DATE:
            bound: str = f"item.{name}.isoformat() if item and item.{name} else ''"
        elif kind is ColumnKind.DATETIME:
            bound = f"item.{name}.strftime('%Y-%m-%dT%H:%M') if item and item.{name} else ''"
        else:
            bound = f"item.{name} if item and item.{name} is not none else ''"
        value: str = f"{{{{ form_old['{name}'] if '{name}' in form_old else ({bound}) }}}}"

        lines: List[str] = [
            '<div class="mb-3">',
            f'{i}<label for="{name}" class="form-label">{field.label}</label>',
        ]
        if html_type == "textarea":
            lines.append(
                f'{i}<textarea id="{name}" name="{name}" rows="4" '
                f'class="form-control">{value}</textarea>'
            )
        else:
            lines.append(
                f'{i}<input type="{html_type}" id="{name}" name="{name}" '
                f'value="{value}" class="form-control">'
            )
        lines.append("</div>")
        return lines


__all__: List[str] = ["ViewRenderer", "EMPTY_STATE", "FORM_PARTIAL"]
