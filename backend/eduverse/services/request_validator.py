"""
Request Validator

Turns an untyped create/update payload into a sanitized record or patch for
one entity kind. Values are checked by the pydantic payload models generated
from the Schema Registry; their errors are reported as a single pipeline
error. Missing fields win over invalid ones, and within each group the first
field in registry order is reported.
"""
from typing import Any, Dict, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from eduverse.core.exceptions import FieldError, InvalidBodyError, InvalidFieldError, MissingFieldError
from eduverse.core.types import iso_timestamp
from eduverse.schemas.payload import LooseInteger, ValidationMode, payload_model
from eduverse.services.schema_registry import EntitySchema, FieldSpec, FieldType

_INTEGER = TypeAdapter(LooseInteger)
_JSON_OBJECT = TypeAdapter(Dict[str, Any])


def coerce_integer(value: Any) -> Optional[int]:
    """
    Integer from an int, an integral float or a string of digits.
    Returns None when the value cannot be read as an integer.
    """
    try:
        return _INTEGER.validate_python(value)
    except ValidationError:
        return None


def parse_json_object(raw: bytes) -> Dict[str, Any]:
    """Request body as a JSON object, or InvalidBodyError"""
    try:
        return _JSON_OBJECT.validate_json(raw)
    except ValidationError as e:
        if any(err["type"] == "json_invalid" for err in e.errors()):
            raise InvalidBodyError("Request body must be valid JSON") from None
        raise InvalidBodyError() from None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _invalid(spec: FieldSpec, value: Any) -> InvalidFieldError:
    if spec.type is FieldType.INTEGER:
        return InvalidFieldError(spec.name, spec.label, minimum=spec.minimum, maximum=spec.maximum,
                                 expected="an integer", value=value)
    if spec.choices is not None:
        return InvalidFieldError(spec.name, spec.label, allowed=spec.choices, value=value)
    return InvalidFieldError(spec.name, spec.label, expected="a string", value=value)


def to_field_error(schema: EntitySchema, payload: Mapping[str, Any], error: ValidationError) -> FieldError:
    """The one error reported for a failed payload model"""
    failed = []
    for err in error.errors():
        name = err["loc"][0] if err["loc"] else None
        if isinstance(name, str) and schema.has_field(name) and name not in failed:
            failed.append(name)

    if not failed:
        raise InvalidBodyError()

    for name in failed:
        if _is_blank(payload.get(name)):
            return MissingFieldError(name, schema.get_field(name).label)

    name = failed[0]
    return _invalid(schema.get_field(name), payload.get(name))


def _parse(schema: EntitySchema, payload: Mapping[str, Any], mode: ValidationMode):
    if not isinstance(payload, Mapping):
        raise InvalidBodyError()
    try:
        return payload_model(schema, mode).model_validate(dict(payload))
    except ValidationError as e:
        raise to_field_error(schema, payload, e) from None


def validate_create(schema: EntitySchema, payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Sanitized record for insert, keyed by wire name.

    Every required field must be present and non-blank; optional fields
    default to null; fields the caller may not set on create (and any
    ``id``/``createdAt`` in the payload) are ignored. ``createdAt`` is stamped
    here.
    """
    parsed = _parse(schema, payload, ValidationMode.CREATE)

    record: Dict[str, Any] = {spec.name: None for spec in schema.fields if not spec.creatable}
    record.update(parsed.model_dump())
    record["createdAt"] = iso_timestamp()
    return record


def validate_update(schema: EntitySchema, payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Sanitized partial patch, keyed by wire name.

    Only supplied fields are validated and returned; unknown keys, ``id`` and
    ``createdAt`` are dropped. The entity's update hook (if any) runs last.
    """
    parsed = _parse(schema, payload, ValidationMode.UPDATE)
    patch = parsed.model_dump(exclude_unset=True)

    if schema.update_hook is not None:
        patch = schema.update_hook(patch, dict(payload))
    return patch


def validate_payload(schema: EntitySchema, payload: Mapping[str, Any], mode: ValidationMode) -> Dict[str, Any]:
    if mode is ValidationMode.CREATE:
        return validate_create(schema, payload)
    return validate_update(schema, payload)


__all__ = [
    "ValidationMode",
    "coerce_integer",
    "parse_json_object",
    "to_field_error",
    "validate_create",
    "validate_update",
    "validate_payload",
]
