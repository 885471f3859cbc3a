"""
Payload validation against a Pydantic rule table.

``validate_payload`` turns a raw JSON object into the validated field
set used verbatim for persistence, or raises ``ValidationFailed`` with
an error map keyed by field name.  Messages are plain sentences such
as ``"The name field is required."`` so clients can show them
directly next to the offending input.

Input is normalised before validation: strings are trimmed and empty
strings become ``None``, so ``""`` fails a required rule and clears a
nullable field.  Extra rules that need storage (uniqueness) are passed
in by the caller and only run on fields that are otherwise valid.
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from .errors import ValidationFailed


# A field-level rule: (field name, check).  ``check`` receives the
# validated value and returns an error message or ``None``.
ExtraRule = Tuple[str, Callable[[Any], Optional[str]]]

# Secrets are compared byte for byte and never trimmed.
_UNTRIMMED = {"password", "password_confirmation"}


def _label(field: str) -> str:
    return field.replace("_", " ")


def _normalise(raw: Mapping[str, Any]) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            if key not in _UNTRIMMED:
                value = value.strip()
            if value == "":
                value = None
        data[key] = value
    return data


def _message(field: str, error: Mapping[str, Any]) -> str:
    """Translate a Pydantic error into a human readable sentence."""
    label = _label(field)
    error_type = error.get("type")
    ctx = error.get("ctx") or {}
    if error_type == "missing":
        return f"The {label} field is required."
    if error_type == "string_type":
        return f"The {label} field must be a string."
    if error_type == "string_too_long":
        return f"The {label} field must not be greater than {ctx.get('max_length')} characters."
    if error_type == "value_error" and "email" in str(error.get("msg", "")):
        return f"The {label} field must be a valid email address."
    return str(error.get("msg", "Invalid value."))


def validate_payload(
    schema: Type[BaseModel],
    raw: Optional[Mapping[str, Any]],
    extra_rules: Iterable[ExtraRule] = (),
) -> Dict[str, Any]:
    """Validate ``raw`` against ``schema`` and return the validated fields.

    Parameters
    ----------
    schema : Type[BaseModel]
        Rule table for the current operation.
    raw : Optional[Mapping[str, Any]]
        Decoded request body.  ``None`` is treated as an empty object.
    extra_rules : Iterable[ExtraRule]
        Additional checks run after the schema, e.g. uniqueness.

    Returns
    -------
    dict
        Only the fields declared by ``schema``, correctly typed.  Strings
        are returned as submitted (after trimming), never rewritten.
        Optional fields absent from ``raw`` are present with ``None``.

    Raises
    ------
    ValidationFailed
        With every violation found, keyed by field name.
    """
    data = _normalise(raw or {})
    errors: Dict[str, List[str]] = {}

    for name, field in schema.model_fields.items():
        if field.is_required() and data.get(name) is None:
            errors[name] = [f"The {_label(name)} field is required."]

    validated: Optional[BaseModel] = None
    try:
        validated = schema.model_validate(data)
    except ValidationError as exc:
        for error in exc.errors():
            loc = error.get("loc") or ()
            field = str(loc[0]) if loc else "body"
            if field in errors and data.get(field) is None:
                # Already reported as missing.
                continue
            errors.setdefault(field, []).append(_message(field, error))

    values = data
    if validated is not None:
        # Keep the submitted strings: validators such as EmailStr check the
        # value but their normalised form is not what the client sent.
        values = validated.model_dump()
        for name in list(values):
            if isinstance(data.get(name), str):
                values[name] = data[name]
    for field, check in extra_rules:
        if field in errors or values.get(field) is None:
            continue
        message = check(values[field])
        if message:
            errors.setdefault(field, []).append(message)

    if errors:
        raise ValidationFailed(errors)
    return values
