"""
Form serialization for backend payloads.

Turns submitted HTML form data into the JSON bodies the backend expects:
checkboxes become booleans, numeric fields are coerced to numbers (or
dropped when blank or not a number), and hidden editing-id fields are
removed.
"""

import math
from typing import Any, Dict, Iterable, Mapping

# Fields coerced to numbers before sending
NUMERIC_FIELDS = (
    "gpa",
    "gpa_scale",
    "gre_total",
    "toefl_total",
    "start_year",
    "end_year",
    "year",
)

EDUCATION_CHECKBOXES = ("currently_enrolled",)

FIRST_AUTHOR = "First Author"
CO_AUTHOR = "Co-author"


def form_to_json(form: Mapping[str, Any], checkbox_fields: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Copy submitted form fields into a plain dict.

    Repeated keys keep their last value. Each name in checkbox_fields is set
    to True when the form submitted it and False otherwise, since browsers
    omit unchecked boxes entirely.

    Args:
        form: Submitted form data (werkzeug MultiDict or a plain mapping)
        checkbox_fields: Names of checkbox inputs on the form

    Returns:
        New dict of field name -> value
    """
    payload: Dict[str, Any] = {}
    if hasattr(form, "lists"):
        for key, values in form.lists():
            payload[key] = values[-1] if values else ""
    else:
        payload.update(form)

    for name in checkbox_fields:
        payload[name] = name in form

    return payload


def _to_number(value: Any):
    """Parse a form value as a number, or return None when it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if text == "":
            return None
        try:
            number = float(text)
        except ValueError:
            return None

    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


def cleanup_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Coerce numeric fields in place.

    Each field in NUMERIC_FIELDS that is present is replaced by its numeric
    value (int when integral), or removed when blank, None, or not a finite
    number. Other fields are left untouched.

    Returns:
        The same payload dict
    """
    for field in NUMERIC_FIELDS:
        if field not in payload:
            continue
        number = _to_number(payload[field])
        if number is None:
            del payload[field]
        else:
            payload[field] = number
    return payload


def profile_payload(form: Mapping[str, Any], checkbox_fields: Iterable[str] = ()) -> Dict[str, Any]:
    return cleanup_payload(form_to_json(form, checkbox_fields))


def application_payload(form: Mapping[str, Any]) -> Dict[str, Any]:
    return cleanup_payload(form_to_json(form))


def education_payload(form: Mapping[str, Any]) -> Dict[str, Any]:
    """Serialize the education form, without its hidden education_id field."""
    payload = cleanup_payload(form_to_json(form, EDUCATION_CHECKBOXES))
    payload.pop("education_id", None)
    return payload


def publication_payload(form: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Serialize the publication form.

    Drops the hidden publication_id field and derives the first_author flag
    from the author_type select.
    """
    payload = cleanup_payload(form_to_json(form))
    payload.pop("publication_id", None)
    payload["first_author"] = payload.get("author_type") == FIRST_AUTHOR
    return payload
