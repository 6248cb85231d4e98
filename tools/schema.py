"""
Input schema algebra for tools.

A ``ToolSchema`` wraps a pydantic model describing a tool's named, typed input
fields and offers the few operations the tool core needs on top of it:

• ``validate``: full validation, returns a plain JSON-like dict
• ``validate_partial``: supplied fields only, undeclared keys rejected
• ``omit``: derive a schema without some fields
• ``to_json_schema``: render for LLM function-calling metadata

Derived schemas are new pydantic models; the source model is never modified.
Validators declared on the source model are not copied into derived models;
``ToolBase`` callers re-validate the merged input against the source schema.
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, Iterable, List, Mapping, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model
from pydantic.fields import FieldInfo

# FieldInfo attributes carried over to derived models.
_FIELD_ATTRIBUTES = (
    "alias",
    "validation_alias",
    "serialization_alias",
    "title",
    "description",
    "examples",
    "json_schema_extra",
    "discriminator",
)


def _annotation(info: FieldInfo) -> Any:
    """Field annotation with its constraints (min/max, lengths, …) re-attached."""
    if info.metadata:
        return Annotated[(info.annotation, *info.metadata)]
    return info.annotation


def _definition(info: FieldInfo) -> Tuple[Any, FieldInfo]:
    kwargs: Dict[str, Any] = {
        attr: getattr(info, attr) for attr in _FIELD_ATTRIBUTES if getattr(info, attr) is not None
    }
    if info.is_required():
        return _annotation(info), Field(**kwargs)
    if info.default_factory is not None:
        return _annotation(info), Field(default_factory=info.default_factory, **kwargs)
    return _annotation(info), Field(default=info.default, **kwargs)


def _line_error(error: Mapping[str, Any]) -> Dict[str, Any]:
    line = {"type": error["type"], "loc": error["loc"], "input": error["input"]}
    if "ctx" in error:
        line["ctx"] = error["ctx"]
    return line


class ToolSchema:
    """Immutable, introspectable descriptor of a tool's input fields."""

    def __init__(self, model: Type[BaseModel]):
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise TypeError(f"ToolSchema expects a pydantic model class, got {model!r}")
        self._model = model

    @property
    def model(self) -> Type[BaseModel]:
        return self._model

    @property
    def fields(self) -> Dict[str, FieldInfo]:
        return dict(self._model.model_fields)

    def keys(self) -> List[str]:
        return list(self._model.model_fields)

    def __contains__(self, key: object) -> bool:
        return key in self._model.model_fields

    def __repr__(self) -> str:
        return f"ToolSchema({self._model.__name__}, fields={self.keys()})"

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate ``value`` against every declared field.

        Returns the cleaned input as plain python data; keys the caller did not
        supply stay absent. Raises ``pydantic.ValidationError`` on failure.
        """
        instance = self._model.model_validate(dict(value))
        return instance.model_dump(exclude_unset=True)

    def validate_partial(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate a subset of fields; every supplied value must be legal for its field.

        The source model runs as is, so constraints and field validators apply;
        only "missing" errors for fields that were not supplied are ignored.
        Undeclared keys are rejected. Returns the supplied values.
        """
        value = dict(value)
        errors = [
            {"type": "extra_forbidden", "loc": (key,), "input": item}
            for key, item in value.items()
            if key not in self._model.model_fields
        ]
        try:
            self._model.model_validate(value)
        except ValidationError as exc:
            errors.extend(
                _line_error(error)
                for error in exc.errors(include_url=False)
                if error["type"] != "missing"
            )
        if errors:
            raise ValidationError.from_exception_data(f"{self._model.__name__}Partial", errors)
        return value

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------
    def omit(self, keys: Iterable[str]) -> "ToolSchema":
        """Return a schema without the given fields. Unknown keys are ignored."""
        dropped = set(keys)
        if not dropped & set(self._model.model_fields):
            return self

        definitions = {
            name: _definition(info)
            for name, info in self._model.model_fields.items()
            if name not in dropped
        }
        config = {k: v for k, v in self._model.model_config.items() if k != "title"}
        model = create_model(
            self._model.__name__,
            __config__=ConfigDict(**config),
            __doc__=self._model.__doc__,
            **definitions,
        )
        return ToolSchema(model)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def to_json_schema(self) -> Dict[str, Any]:
        schema = self._model.model_json_schema()
        schema.setdefault("properties", {})
        schema.setdefault("required", [])
        return schema
