# File: crudgen/naming.py
"""
crudgen - Identifier Deriver
=============================
Turns one raw module name into every naming variant the emitters use.

    >>> v = derive_naming("OrderItem")
    >>> v.type_name, v.collection_name, v.handler_name
    ('OrderItem', 'order_items', 'OrderItemHandler')
    >>> v.route_segment, v.variable_name
    ('admin/order_items', 'orderItem')

Derivation is pure and cached per (name, segment) pair; the variants are
never persisted.
"""

from __future__ import annotations

import functools
import logging
from typing import List

from crudgen.models import NamingVariants
from crudgen.utils import capitalize_first, to_camel_case, to_plural, to_snake_case

logger: logging.Logger = logging.getLogger("crudgen.naming")

DEFAULT_ADMIN_SEGMENT: str = "admin"
HANDLER_SUFFIX: str = "Handler"


@functools.lru_cache(maxsize=256)
def derive_naming(
    raw_name: str, admin_segment: str = DEFAULT_ADMIN_SEGMENT
) -> NamingVariants:
    """
    Derive ``NamingVariants`` from *raw_name*.

    The type name keeps the operator's casing apart from the first letter;
    the collection name is the pluralised snake_case form.

    Raises:
        ValueError: if *raw_name* is empty or has no usable characters.
    """
    name: str = raw_name.strip()
    if not name:
        raise ValueError("Module name must not be empty.")

    snake: str = to_snake_case(name)
    if not snake:
        raise ValueError(f"Module name '{raw_name}' contains no usable characters.")

    type_name: str = capitalize_first(name)
    collection: str = to_plural(snake)

    variants: NamingVariants = NamingVariants(
        type_name=type_name,
        collection_name=collection,
        handler_name=type_name + HANDLER_SUFFIX,
        route_segment=f"{admin_segment}/{collection}",
        variable_name=to_camel_case(name),
        module_name=snake,
    )
    logger.debug("Derived naming for '%s': %r", raw_name, variants)
    return variants


__all__: List[str] = ["derive_naming", "DEFAULT_ADMIN_SEGMENT", "HANDLER_SUFFIX"]
