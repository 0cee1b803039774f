"""
JSON codec - Infrastructure component serializing request bodies and decoding
response payloads into caller-owned targets.
"""

from __future__ import annotations
import dataclasses
import json
from collections.abc import Mapping, MutableMapping, MutableSequence
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from ...domain.errors import DecodingError, EncodingError


class JsonCodec:
    """Codec speaking JSON.

    Decoding fills the target in place the way a struct decoder would:
    dicts are updated, lists replaced, and objects (dataclasses, plain
    classes, pydantic models) get matching attributes assigned. Keys match
    attribute names exactly first, then case-insensitively; unknown keys are
    ignored and attributes without a key are left untouched.
    """

    def __init__(self, encoding: str = 'utf-8', ensure_ascii: bool = False):
        self._encoding = encoding
        self._ensure_ascii = ensure_ascii

    def encode(self, value: Any) -> bytes:
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        if isinstance(value, BaseModel):
            value = value.model_dump(mode='json', by_alias=True)
        elif dataclasses.is_dataclass(value) and not isinstance(value, type):
            value = dataclasses.asdict(value)
        try:
            return json.dumps(value, ensure_ascii=self._ensure_ascii, allow_nan=False).encode(self._encoding)
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"Unable to encode {type(value).__name__} as JSON: {exc}") from exc

    def decode(self, payload: bytes, target: Any) -> None:
        if target is None:
            raise DecodingError("No target to decode into")
        if not payload or not payload.strip():
            raise DecodingError("Empty payload")
        try:
            data = json.loads(payload)
        except (ValueError, UnicodeDecodeError, RecursionError) as exc:
            raise DecodingError(f"Invalid JSON payload: {exc}") from exc
        self._fill(target, data)

    def _fill(self, target: Any, data: Any) -> None:
        if isinstance(target, BaseModel):
            self._fill_model(target, data)
        elif isinstance(target, MutableMapping):
            if not isinstance(data, Mapping):
                raise DecodingError(f"Expected a JSON object, got {type(data).__name__}")
            target.update(data)
        elif isinstance(target, MutableSequence):
            if not isinstance(data, list):
                raise DecodingError(f"Expected a JSON array, got {type(data).__name__}")
            target[:] = data
        elif dataclasses.is_dataclass(target) and not isinstance(target, type):
            self._fill_attributes(target, data, [f.name for f in dataclasses.fields(target)])
        elif hasattr(target, '__dict__'):
            self._fill_attributes(target, data, list(vars(target)))
        else:
            raise DecodingError(f"Cannot decode into {type(target).__name__}")

    def _fill_attributes(self, target: Any, data: Any, names: list) -> None:
        if not isinstance(data, Mapping):
            raise DecodingError(f"Expected a JSON object, got {type(data).__name__}")
        folded = {name.lower(): name for name in names}
        for key, value in data.items():
            name = key if key in names else folded.get(str(key).lower())
            if name is None:
                continue
            current = getattr(target, name, None)
            if isinstance(value, Mapping) and self._is_nested_target(current):
                self._fill(current, value)
                continue
            try:
                setattr(target, name, value)
            except (AttributeError, TypeError, dataclasses.FrozenInstanceError) as exc:
                raise DecodingError(f"Cannot assign '{name}' on {type(target).__name__}: {exc}") from exc

    def _fill_model(self, target: BaseModel, data: Any) -> None:
        if not isinstance(data, Mapping):
            raise DecodingError(f"Expected a JSON object, got {type(data).__name__}")
        merged: Dict[str, Any] = target.model_dump(by_alias=True)
        merged.update(data)
        try:
            validated = type(target).model_validate(merged)
        except ValidationError as exc:
            raise DecodingError(f"Payload does not match {type(target).__name__}: {exc}") from exc
        for name in type(target).model_fields:
            try:
                setattr(target, name, getattr(validated, name))
            except (TypeError, ValidationError) as exc:
                raise DecodingError(f"Cannot assign '{name}' on {type(target).__name__}: {exc}") from exc

    @staticmethod
    def _is_nested_target(value: Optional[Any]) -> bool:
        if value is None or isinstance(value, type):
            return False
        return isinstance(value, (BaseModel, MutableMapping)) or dataclasses.is_dataclass(value)
