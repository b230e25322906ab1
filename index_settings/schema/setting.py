"""
Tri-state setting value and the sparse model base that puts it on the wire.
Set(x) -> key with x; Reset -> key with null; NotSet -> key omitted.
"""

from enum import Enum
from typing import Any, Generic, TypeVar, get_args, get_origin

from pydantic import (
    BaseModel,
    ConfigDict,
    GetCoreSchemaHandler,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
)
from pydantic.alias_generators import to_camel
from pydantic.fields import FieldInfo
from pydantic_core import core_schema

from index_settings.errors import MissingDefaultFallback

T = TypeVar("T")

# Serialization context key: emit null for gated fields instead of dropping them
REPLACEMENT = "replacement"


class SettingState(str, Enum):
    """The three update intents a Setting can carry."""

    SET = "set"
    RESET = "reset"
    NOT_SET = "not_set"


class Setting(Generic[T]):
    """
    Exactly one of Set(value), Reset or NotSet. NotSet is the default for any T.
    Immutable; build with Setting.set(x), Setting.reset() or Setting.not_set().
    """

    __slots__ = ("_state", "_value")

    def __init__(self, state: SettingState, value: T | None = None):
        if state is SettingState.SET and value is None:
            raise ValueError("Setting.set() needs a value; use Setting.reset() to send null")
        if state is not SettingState.SET and value is not None:
            raise ValueError(f"{state.name} carries no value")
        object.__setattr__(self, "_state", state)
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Setting is immutable")

    @classmethod
    def set(cls, value: T) -> "Setting[T]":
        return cls(SettingState.SET, value)

    @classmethod
    def reset(cls) -> "Setting[T]":
        return cls(SettingState.RESET)

    @classmethod
    def not_set(cls) -> "Setting[T]":
        return cls(SettingState.NOT_SET)

    @property
    def state(self) -> SettingState:
        return self._state

    @property
    def value(self) -> T | None:
        """The payload when Set, otherwise None."""
        return self._value

    @property
    def is_set(self) -> bool:
        return self._state is SettingState.SET

    @property
    def is_reset(self) -> bool:
        return self._state is SettingState.RESET

    @property
    def is_not_set(self) -> bool:
        return self._state is SettingState.NOT_SET

    def or_reset(self, value: T) -> "Setting[T]":
        """If Reset, return Set(value); otherwise return self unchanged."""
        if self._state is SettingState.RESET:
            return Setting.set(value)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Setting):
            return NotImplemented
        return self._state is other._state and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._state, self._value))

    def __copy__(self) -> "Setting[T]":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "Setting[T]":
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        return (Setting, (self._state, self._value))

    def __repr__(self) -> str:
        if self._state is SettingState.SET:
            return f"Setting.set({self._value!r})"
        return f"Setting.{self._state.value}()"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        args = get_args(source_type)
        inner = handler.generate_schema(args[0]) if args else core_schema.any_schema()
        return core_schema.no_info_wrap_validator_function(
            cls._from_wire,
            core_schema.nullable_schema(inner),
            serialization=core_schema.wrap_serializer_function_ser_schema(cls._to_wire, schema=inner),
        )

    @classmethod
    def _from_wire(cls, value: Any, handler: core_schema.ValidatorFunctionWrapHandler) -> "Setting[Any]":
        if isinstance(value, Setting):
            if value.is_set:
                return cls.set(handler(value.value))
            return value
        decoded = handler(value)
        if decoded is None:
            return cls.reset()
        return cls.set(decoded)

    @staticmethod
    def _to_wire(value: "Setting[Any]", serializer: core_schema.SerializerFunctionWrapHandler) -> Any:
        if value.is_set:
            return serializer(value.value)
        # Reset and NotSet both render as null; the container gate drops NotSet keys
        return None


class OmitIfNotSet:
    """Field marker: drop the key when the Setting is NotSet. Required on every Setting field."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "OmitIfNotSet()"


class OmitIfNone:
    """Field marker: drop the key when a plain optional value is None."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "OmitIfNone()"


def is_setting_type(annotation: Any) -> bool:
    return annotation is Setting or get_origin(annotation) is Setting


def wraps_setting_type(annotation: Any) -> bool:
    """True if a Setting appears inside annotation without being the annotation itself."""
    if is_setting_type(annotation):
        return False
    return any(is_setting_type(arg) or wraps_setting_type(arg) for arg in get_args(annotation))


def _has_marker(field: FieldInfo, marker: type) -> bool:
    return any(isinstance(m, marker) for m in field.metadata)


def _is_omitted(field: FieldInfo, value: Any) -> bool:
    if _has_marker(field, OmitIfNotSet):
        return isinstance(value, Setting) and value.is_not_set
    if _has_marker(field, OmitIfNone):
        return value is None
    return False


class SparseModel(BaseModel):
    """
    Frozen camelCase model whose gated fields are left out of the encoded document.
    Every Setting field must be a bare Setting[...], carry OmitIfNotSet and default to
    Setting.not_set(); a subclass that breaks any of these fails at class definition.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        for name, field in cls.model_fields.items():
            if wraps_setting_type(field.annotation):
                raise MissingDefaultFallback(
                    cls.__name__, name, "tri-state field must be a bare Setting[...], not wrapped"
                )
            if not is_setting_type(field.annotation):
                continue
            if not _has_marker(field, OmitIfNotSet):
                raise MissingDefaultFallback(
                    cls.__name__, name, "tri-state field is missing its OmitIfNotSet gate"
                )
            if field.get_default(call_default_factory=True) != Setting.not_set():
                raise MissingDefaultFallback(
                    cls.__name__, name, "tri-state field must default to Setting.not_set()"
                )

    @model_serializer(mode="wrap")
    def serialize_sparse(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = handler(self)
        if isinstance(info.context, dict) and info.context.get(REPLACEMENT):
            return data
        for name, field in type(self).model_fields.items():
            if _is_omitted(field, getattr(self, name)):
                data.pop(field.alias if info.by_alias and field.alias else name, None)
        return data
