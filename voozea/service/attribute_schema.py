"""
Typed custom fields for product categories.

A category's ``attribute_schema`` maps an attribute key to a field spec::

    {"abv": {"type": "number", "label": "ABV (%)", "min": 0, "max": 100, "step": 0.1},
     "style": {"type": "select", "label": "Style", "options": ["IPA", "Stout"]},
     "notes": {"type": "text", "label": "Tasting notes", "optional": true}}

Products in that category carry an ``attributes`` dict validated against it.
"""
import json
import math
from marshmallow import Schema, fields, validate, validates_schema
from marshmallow import ValidationError as SchemaError

from voozea.errors import ValidationError

FIELD_TYPES = ("number", "text", "select")


class AttributeFieldSchema(Schema):
    type = fields.String(required=True, validate=validate.OneOf(FIELD_TYPES))
    label = fields.String(required=True, validate=validate.Length(min=1))
    min = fields.Float(allow_none=True)
    max = fields.Float(allow_none=True)
    step = fields.Float(allow_none=True, validate=validate.Range(min=0, min_inclusive=False))
    options = fields.List(fields.String(), allow_none=True)
    optional = fields.Boolean(load_default=False)

    @validates_schema
    def check_field(self, data, **kwargs):
        if data["type"] == "select" and not data.get("options"):
            raise SchemaError("select fields need a non-empty options list", "options")
        low, high = data.get("min"), data.get("max")
        if low is not None and high is not None and low > high:
            raise SchemaError("min must not exceed max", "min")


attribute_field_schema = AttributeFieldSchema()


def parse_attribute_schema(raw):
    """
    Accept a JSON string or a dict; return the validated schema dict, or None
    when nothing was given.
    """
    if raw is None or raw == "" or raw == {}:
        return None

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise ValidationError("Invalid attribute schema JSON")

    if not isinstance(raw, dict):
        raise ValidationError("Attribute schema must be an object")

    parsed = {}
    for key, spec in raw.items():
        if not isinstance(spec, dict):
            raise ValidationError(f"Attribute '{key}' must be an object")
        try:
            loaded = attribute_field_schema.load(spec)
        except SchemaError as e:
            raise ValidationError(f"Invalid attribute '{key}': {e.messages}")
        # keep the stored form compact: drop unset keys
        parsed[key] = {k: v for k, v in loaded.items() if v is not None}
    return parsed or None


def _is_empty(value):
    return value is None or value == ""


def _to_number(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
    # nan and inf slip past min/max comparisons
    return number if math.isfinite(number) else None


def _format_bound(bound):
    return int(bound) if float(bound).is_integer() else bound


def validate_attributes(attributes, schema):
    """Return a list of human readable errors; empty when valid."""
    errors = []
    attributes = attributes or {}

    for key, spec in (schema or {}).items():
        label = spec.get("label", key)
        value = attributes.get(key)

        if _is_empty(value):
            if not spec.get("optional"):
                errors.append(f"{label} is required")
            continue

        if spec.get("type") == "number":
            number = _to_number(value)
            if number is None:
                errors.append(f"{label} must be a number")
                continue
            if spec.get("min") is not None and number < spec["min"]:
                errors.append(f"{label} must be at least {_format_bound(spec['min'])}")
            if spec.get("max") is not None and number > spec["max"]:
                errors.append(f"{label} must be at most {_format_bound(spec['max'])}")

        if spec.get("type") == "select" and spec.get("options"):
            if str(value) not in spec["options"]:
                errors.append(f"{label} must be one of: {', '.join(spec['options'])}")

    return errors


def clean_attributes(attributes, schema):
    """
    Drop empty values and coerce number fields. Returns None for an empty
    result so the column stays null.
    """
    schema = schema or {}
    cleaned = {}
    for key, value in (attributes or {}).items():
        if _is_empty(value):
            continue
        if schema.get(key, {}).get("type") == "number":
            number = _to_number(value)
            cleaned[key] = number if number is not None else value
        else:
            cleaned[key] = value
    return cleaned or None
