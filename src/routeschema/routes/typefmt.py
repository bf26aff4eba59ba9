"""Helpers that spell TypeScript type expressions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from routeschema.routes.schema import ParamArity, ParamBinding

_PARAM_VALUE_TYPES: dict[ParamArity, str] = {
    "single": "string",
    "catch_all": "string[]",
    "optional_catch_all": "string[] | undefined",
}


def record_type(key: str, value: str) -> str:
    if not key or not value:
        return ""
    return f"Record<{key}, {value}>"


def object_type(fields: Sequence[tuple[str, str]]) -> str:
    """``[("id", "string")]`` -> ``{ "id": string }``.

    Multiple fields are ``;``-separated with a trailing ``;``.  Returns an
    empty string when there are no fields or any field is blank.
    """
    if not fields or any(not name or not type_ for name, type_ in fields):
        return ""
    body = "; ".join(f'"{name}": {type_}' for name, type_ in fields)
    trailer = ";" if len(fields) > 1 else ""
    return f"{{ {body}{trailer} }}"


def params_record(bindings: Iterable[ParamBinding]) -> str:
    """Render the params object type for an endpoint's inherited bindings."""
    return object_type([(b.name, _PARAM_VALUE_TYPES[b.arity]) for b in bindings])


def import_type(names: str, source: str, alias: str | None = None) -> str:
    if not names or not source:
        return ""
    if alias:
        return f'import type {{ {names} as {alias} }} from "{source}";'
    return f'import type {{ {names} }} from "{source}";'
