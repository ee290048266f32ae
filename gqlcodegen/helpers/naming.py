"""Naming utilities shared by the builders and the output stage.

Thin wrappers over the ``inflection`` package so every generated name goes
through the same camelize/underscore/singularize/pluralize rules.
"""

from __future__ import annotations

from typing import Literal, get_args

import inflection

DocumentConvention = Literal["underscore", "dashed", "camelcase", "camelUpper"]
DOCUMENT_CONVENTIONS: tuple[str, ...] = get_args(DocumentConvention)


def camelize(name: str, *, lower_first: bool = True) -> str:
    """Camelize an underscored name. ``lower_first`` keeps the first letter lowercase."""
    if not name:
        return name
    return inflection.camelize(name, uppercase_first_letter=not lower_first)


def underscore(name: str) -> str:
    return inflection.underscore(name)


def singularize(name: str) -> str:
    return inflection.singularize(name)


def pluralize(name: str) -> str:
    return inflection.pluralize(name)


def lc_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def uc_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def join_camelized(*parts: str) -> str:
    """Join parts with underscores and camelize lower-first.

    >>> join_camelized("get", underscore("allUsers"), "query")
    'getAllUsersQuery'
    """
    return camelize("_".join(parts), lower_first=True)


def document_filename(key: str, convention: str) -> str:
    """Map an operation name to a file base name under a document convention."""
    if convention == "underscore":
        return underscore(key)
    if convention == "dashed":
        return underscore(key).replace("_", "-")
    if convention == "camelUpper":
        return camelize(key, lower_first=False)
    return key
