"""Mapping of mu field letters to record properties and their display text."""

from datetime import datetime
from typing import Any

from ..common.pydantic import Record
from .sexp import Symbol

IDENTIFIER_FIELD = "i"

FIELD_KEYS = {
    "i": "message-id",
    "s": "subject",
    "f": "from",
    "t": "to",
    "c": "cc",
    "d": "date",
    "p": "path",
    "m": "maildir",
    "g": "flags",
    "x": "tags",
    "z": "size",
}

DATE_FORMAT = "%Y-%m-%d %H:%M"


def _format_contact(contact: Any) -> str:
    if isinstance(contact, list):
        # old mu: ("Name" . "email")
        if len(contact) == 3 and contact[1] == ".":
            name, email = contact[0], contact[2]
        else:
            props = plist_to_dict(contact) or {}
            name, email = props.get("name"), props.get("email")
        if name and email:
            return f"{name} <{email}>"
        return str(name or email or "")
    return render_value(contact)


def _format_date(value: Any) -> str:
    # Emacs time value: (HIGH LOW USEC)
    if isinstance(value, list) and len(value) >= 2 and all(isinstance(v, int) for v in value[:2]):
        seconds = (value[0] << 16) + value[1]
    elif isinstance(value, int):
        seconds = value
    else:
        return render_value(value)
    try:
        return datetime.fromtimestamp(seconds).strftime(DATE_FORMAT)
    except (ValueError, OverflowError, OSError):
        return render_value(value)


def render_value(value: Any) -> str:
    """Render a decoded value as single-line text."""
    if value is None:
        return ""
    if value is True:
        return "t"
    if isinstance(value, list):
        return " ".join(filter(None, (render_value(item) for item in value)))
    return " ".join(str(value).split())


def render_field(key: str, value: Any) -> str:
    """Render one record property for display."""
    if key in ("from", "to", "cc") and isinstance(value, list):
        return ", ".join(filter(None, (_format_contact(contact) for contact in value)))
    if key == "date":
        return _format_date(value)
    if key in ("flags", "tags") and isinstance(value, list):
        return ",".join(render_value(flag) for flag in value)
    return render_value(value)


def plist_to_dict(form: Any) -> dict[str, Any] | None:
    """Convert a property list into a dict keyed by property name.

    Returns None if ``form`` is not a list of keyword/value pairs.
    """
    if not isinstance(form, list) or len(form) % 2 != 0:
        return None
    props: dict[str, Any] = {}
    for key, value in zip(form[::2], form[1::2]):
        if not isinstance(key, Symbol) or not key.is_keyword:
            return None
        props[key[1:]] = value
    return props


def record_from_form(form: Any, fields: str, delimiter: str) -> Record | None:
    """Build a record from a decoded form, or None if it is not usable."""
    props = plist_to_dict(form)
    if props is None:
        return None
    identifier = render_value(props.get(FIELD_KEYS[fields[0]]))
    if not identifier:
        return None
    values = [identifier]
    for letter in fields[1:]:
        key = FIELD_KEYS[letter]
        values.append(render_field(key, props.get(key)))
    return Record(identifier=identifier, fields=props, line=delimiter.join(values))
