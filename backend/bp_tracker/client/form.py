"""Reading form serialization: field values to the JSON body posted to /submit."""

from __future__ import annotations

import re
from collections.abc import Mapping

from bs4 import Tag

# Leading optional sign and decimal digits after leading whitespace; the rest is ignored
_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")

# Controls that never contribute a value
_SKIPPED_TYPES = {"submit", "button", "reset", "image", "file"}


def parse_int(value: str | None) -> int | None:
    """
    Base-10 integer from the start of a field value, ignoring trailing junk.

    "120" -> 120, " 80 mmHg" -> 80, "-7" -> -7, "12.9" -> 12.
    Returns None (serialized as JSON null) when the value has no leading integer.
    """
    if value is None:
        return None
    m = _INT_PREFIX.match(value)
    if not m:
        return None
    return int(m.group(1))


def form_fields(form: Tag) -> list[Tag]:
    """Named, enabled value-carrying inputs in document order."""
    fields = []
    for el in form.find_all(["input", "textarea"]):
        name = el.get("name")
        if not name or el.has_attr("disabled"):
            continue
        input_type = (el.get("type") or "text").lower()
        if input_type in _SKIPPED_TYPES:
            continue
        if input_type in ("checkbox", "radio") and not el.has_attr("checked"):
            continue
        fields.append(el)
    return fields


def field_value(el: Tag) -> str:
    if el.name == "textarea":
        return el.get_text()
    return el.get("value") or ""


def collect_form_data(form: Tag) -> dict[str, int | None]:
    """Flat mapping of field name to parsed integer; a repeated name keeps the last value."""
    return {el["name"]: parse_int(field_value(el)) for el in form_fields(form)}


def snapshot_defaults(form: Tag) -> dict[str, str | None]:
    """Initial values to restore on reset."""
    return {el["name"]: el.get("value") for el in form.find_all("input") if el.get("name")}


def fill_form(form: Tag, values: Mapping[str, object]) -> None:
    """Type values into the named inputs. Unknown names are ignored."""
    for el in form.find_all(["input", "textarea"]):
        name = el.get("name")
        if name not in values:
            continue
        text = "" if values[name] is None else str(values[name])
        if el.name == "textarea":
            el.string = text
        else:
            el["value"] = text


def reset_form(form: Tag, defaults: Mapping[str, str | None]) -> None:
    """Put every input back to its initial value (empty for the tracker page)."""
    for el in form.find_all("input"):
        name = el.get("name")
        if not name or name not in defaults:
            continue
        default = defaults[name]
        if default is None:
            if el.has_attr("value"):
                del el["value"]
        else:
            el["value"] = default
