"""
orderkey Structured-Data Form
=============================
pydantic integration for embedding keys in models.

Two encodings, both decoding to an identical in-memory Key:
  default    → raw byte form. Python dumps yield bytes; JSON carries the
               bytes as URL-safe base64 whatever the model's bytes settings.
               Python input must be a Key or bytes-like, never str.
  stringify  → hex display form (HexKey). Python and JSON dumps yield
               the hex string, for text-only interchange formats.

Usage:
    class Item(BaseModel):
        position: Key               # b"\x81\x7f\x80" / "gX-A" in JSON
        label_pos: HexKey           # "817f80"
"""

import base64
from typing import Annotated, Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from orderkey.hexform import from_hex, to_hex
from orderkey.key import Key, KeyDecodeError


HEX_PATTERN = r"^(?:[0-9a-fA-F]{2})+$"


# ─── Raw byte form ──────────────────────────────────────────────────────────

def _key_from_python(value: Any) -> Key:
    if isinstance(value, Key):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Key.from_bytes(value)
    raise KeyDecodeError(
        f"Key field expects a Key or bytes, got {type(value).__name__}"
    )


def _key_from_base64(text: str) -> Key:
    """Accepts both the URL-safe and the standard base64 alphabet."""
    try:
        data = base64.b64decode(text, altchars=b"-_", validate=True)
    except ValueError as e:
        raise KeyDecodeError(f"Invalid base64 key: {text!r}") from e
    return Key.from_bytes(data)


def _key_to_raw(key: Key, info: core_schema.SerializationInfo) -> Any:
    if info.mode_is_json():
        return base64.urlsafe_b64encode(key.to_bytes()).decode("ascii")
    return key.to_bytes()


def key_core_schema() -> core_schema.CoreSchema:
    """
    Raw byte form: python input is a Key instance or bytes-like,
    JSON input is base64 text. Decoding failures surface as
    ValueError (KeyDecodeError).
    """
    return core_schema.json_or_python_schema(
        json_schema=core_schema.no_info_after_validator_function(
            _key_from_base64, core_schema.str_schema()
        ),
        python_schema=core_schema.no_info_plain_validator_function(_key_from_python),
        serialization=core_schema.plain_serializer_function_ser_schema(
            _key_to_raw, info_arg=True
        ),
    )


def key_json_schema(handler: GetJsonSchemaHandler) -> JsonSchemaValue:
    return {"type": "string", "contentEncoding": "base64"}


# ─── Stringify (hex) form ───────────────────────────────────────────────────

class Stringify:
    """
    Annotation switching a Key field to the hex display form.

        position: Annotated[Key, Stringify()]
    """

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_text = core_schema.no_info_after_validator_function(
            from_hex, core_schema.str_schema()
        )
        # isinstance checks only make sense for python input
        return core_schema.json_or_python_schema(
            json_schema=from_text,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(Key), from_text]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                to_hex, return_schema=core_schema.str_schema()
            ),
        )

    def __get_pydantic_json_schema__(
        self, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "pattern": HEX_PATTERN}


HexKey = Annotated[Key, Stringify()]
