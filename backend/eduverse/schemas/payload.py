"""
Request payload models

One pydantic model per entity kind and validation mode, generated from the
Schema Registry so names, types, choices and bounds are declared only once.
Model fields use the wire (camelCase) names; unknown keys are ignored.
"""
import enum
from typing import Annotated, Any, Dict, Literal, Optional, Tuple, Type

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints, create_model

from eduverse.core.types import INT64_MAX, INT64_MIN
from eduverse.services.schema_registry import EntityKind, EntitySchema, FieldSpec, FieldType


class ValidationMode(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"


def integer_input(value: Any) -> Any:
    """Rejects booleans; strips spaces around digit strings"""
    if isinstance(value, bool):
        raise ValueError("a boolean is not an integer")
    if isinstance(value, str):
        return value.strip()
    return value


def strip_text(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# int, integral float or digit string
LooseInteger = Annotated[int, BeforeValidator(integer_input)]

Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def field_annotation(spec: FieldSpec) -> Any:
    """Value type for one registry field, constraints included"""
    if spec.type is FieldType.INTEGER:
        annotation = Annotated[
            LooseInteger,
            Field(
                ge=INT64_MIN if spec.minimum is None else spec.minimum,
                le=INT64_MAX if spec.maximum is None else spec.maximum,
            ),
        ]
    elif spec.choices is not None:
        annotation = Annotated[Literal[spec.choices], BeforeValidator(strip_text)]
    else:
        annotation = Text

    if spec.nullable:
        return Annotated[Optional[annotation], BeforeValidator(blank_to_none)]
    return annotation


def build_payload_model(schema: EntitySchema, mode: ValidationMode) -> Type[BaseModel]:
    """
    Create models hold the creatable fields; required ones have no default.
    Update models hold every field with an unvalidated ``None`` default, so
    ``model_dump(exclude_unset=True)`` yields exactly the supplied fields.
    """
    definitions: Dict[str, Tuple[Any, Any]] = {}
    for spec in schema.fields:
        if mode is ValidationMode.CREATE:
            if not spec.creatable:
                continue
            default = ... if spec.required else None
        else:
            default = None
        definitions[spec.name] = (field_annotation(spec), default)

    return create_model(
        f"{schema.name}{mode.value.capitalize()}",
        __config__=ConfigDict(extra="ignore"),
        **definitions,
    )


_MODELS: Dict[Tuple[EntityKind, ValidationMode], Type[BaseModel]] = {}


def payload_model(schema: EntitySchema, mode: ValidationMode) -> Type[BaseModel]:
    key = (schema.kind, mode)
    if key not in _MODELS:
        _MODELS[key] = build_payload_model(schema, mode)
    return _MODELS[key]
