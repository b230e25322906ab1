"""
Encode typed settings to wire documents and decode them back.

Sparse encoding (patch): NotSet and None-valued gated fields are omitted, Reset is null.
Replacement encoding (replace): gated fields that would be omitted are sent as null,
so the service resets every sub-field the caller did not give.
"""

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError

from index_settings.config.logging import get_logger
from index_settings.errors import DecodeError, EncodeError
from index_settings.schema.setting import REPLACEMENT
from index_settings.services.settings.groups import SettingsGroup

logger = get_logger(__name__)


@lru_cache(maxsize=None)
def _adapter(value_type: Any) -> TypeAdapter:
    return TypeAdapter(value_type)


def _type_name(value_type: Any) -> str:
    return getattr(value_type, "__name__", None) or str(value_type)


def encode(value: Any, value_type: Any | None = None, *, replacement: bool = False) -> Any:
    """
    Encode value as a JSON-compatible document. value_type defaults to type(value).
    Plain inputs (dicts, tuples, iterables) are validated against value_type first.
    Raises EncodeError if value does not fit value_type.
    """
    value_type = value_type or type(value)
    adapter = _adapter(value_type)
    try:
        typed = adapter.validate_python(value)
    except ValidationError as e:
        raise EncodeError(_type_name(value_type), e.errors(include_url=False), cause=e) from e
    return adapter.dump_python(
        typed,
        mode="json",
        by_alias=True,
        context={REPLACEMENT: replacement},
    )


def decode(value_type: Any, document: Any, *, strict: bool = True) -> Any:
    """
    Decode a wire document into value_type. Absent tri-state keys become NotSet, nulls become Reset.
    Raises DecodeError if a present value cannot be converted. Decoding is strict by default:
    true, "12" and 12.0 are not counts, and "true" is not a bool.
    """
    try:
        return _adapter(value_type).validate_python(document, strict=strict)
    except ValidationError as e:
        target = _type_name(value_type)
        logger.warning(
            "Settings document failed to decode",
            extra={"target": target, "error_count": e.error_count()},
        )
        raise DecodeError(target, e.errors(include_url=False), cause=e) from e


def encode_group(group: SettingsGroup, value: Any, *, replacement: bool = False) -> Any:
    """Encode the body of a write to group."""
    try:
        return encode(value, group.value_type, replacement=replacement)
    except EncodeError as e:
        raise EncodeError(group.name, e.errors, cause=e.cause) from e


def decode_group(group: SettingsGroup, document: Any) -> Any:
    """Decode the body of a read from group."""
    try:
        return decode(group.value_type, document)
    except DecodeError as e:
        raise DecodeError(group.name, e.errors, cause=e.cause) from e
