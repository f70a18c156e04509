from __future__ import annotations

from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..core.errors import DecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_model(model_cls: Type[ModelT], data: bytes) -> ModelT:
    """Validate a JSON document into model_cls.

    Raises DecodeError if data is not JSON or does not match the model's shape.
    """
    try:
        return model_cls.model_validate_json(data)
    except ValidationError as exc:
        raise DecodeError(f"response does not match {model_cls.__name__}: {exc}") from exc


def decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"response is not valid UTF-8: {exc}") from exc
