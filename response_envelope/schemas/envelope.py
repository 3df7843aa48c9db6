from __future__ import annotations

import logging
import types
from http import HTTPStatus
from typing import Any, Generic, List, Optional, Sequence, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

logger = logging.getLogger(__name__)

WirePayload = Union[dict, str, bytes, bytearray]


def _coerce_messages(errors: Union[str, Sequence[str]]) -> List[str]:
    """Normalize a single message or a sequence of messages into a new list."""
    if errors is None:
        raise TypeError("errors must be a string or a sequence of strings, not None")
    if isinstance(errors, str):
        return [errors]
    messages = list(errors)
    for message in messages:
        if not isinstance(message, str):
            raise TypeError(f"error messages must be strings, got {type(message).__name__}")
    return messages


def _check_message(message: str) -> str:
    if not isinstance(message, str):
        raise TypeError(f"error message must be a string, got {type(message).__name__}")
    return message


def _type_name(tp: Any) -> str:
    # Optional[X] and X | None name the wrapped type
    if get_origin(tp) in (Union, types.UnionType):
        members = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(members) == 1:
            tp = members[0]
    return getattr(tp, "__name__", None) or str(tp)


def _payload_name(model: type, data: Any) -> str:
    """Name of the payload type, from the parametrized class or ``data``."""
    for klass in model.__mro__:
        metadata = getattr(klass, "__pydantic_generic_metadata__", None) or {}
        args = metadata.get("args") or ()
        if args and not isinstance(args[0], TypeVar):
            return _type_name(args[0])
    if data is not None:
        return type(data).__name__
    raise TypeError(
        "cannot derive an entity name: parametrize the envelope "
        "(e.g. Envelope[User]) or pass the affected data"
    )


def _build(model: type, success: bool, data: Any, errors: Optional[List[str]], status_code: int) -> Any:
    """Create an envelope without validating the payload; wire input is validated in from_wire."""
    return model.model_construct(
        data=data, errors=errors, success=success, status_code=int(status_code)
    )


def _entity_name(entity: Any) -> str:
    if isinstance(entity, str):
        return entity
    if isinstance(entity, type):
        return entity.__name__
    raise TypeError(
        f"entity must be a name or a type, got {type(entity).__name__}"
    )


class Envelope(BaseModel, Generic[T]):
    """Standard operation result carrying a typed payload.

    ``success`` and ``status_code`` have no defaults, so an envelope is
    obtained from the classmethod factories rather than an empty call.
    ``status_code`` is serialized as ``statusCode``.
    """

    model_config = ConfigDict(populate_by_name=True)

    data: Optional[T] = None
    errors: Optional[List[str]] = None
    success: bool
    status_code: int = Field(alias="statusCode")

    # ---- factories ----

    @classmethod
    def succeed(cls, data: T, status_code: int = HTTPStatus.OK) -> "Envelope[T]":
        return _build(cls, True, data, None, status_code)

    # CRUD messages always downgrade the payload to Envelope[str]

    @classmethod
    def succeed_create(
        cls, data: Optional[T] = None, status_code: int = HTTPStatus.CREATED
    ) -> "Envelope[str]":
        message = f"{_payload_name(cls, data)} is created"
        return _build(Envelope[str], True, message, None, status_code)

    @classmethod
    def succeed_update(
        cls, data: Optional[T] = None, status_code: int = HTTPStatus.OK
    ) -> "Envelope[str]":
        message = f"{_payload_name(cls, data)} is updated"
        return _build(Envelope[str], True, message, None, status_code)

    @classmethod
    def succeed_delete(
        cls, data: Optional[T] = None, status_code: int = HTTPStatus.OK
    ) -> "Envelope[str]":
        message = f"{_payload_name(cls, data)} is deleted"
        return _build(Envelope[str], True, message, None, status_code)

    @classmethod
    def succeed_remove(
        cls, data: Optional[T] = None, status_code: int = HTTPStatus.OK
    ) -> "Envelope[str]":
        message = f"{_payload_name(cls, data)} is removed"
        return _build(Envelope[str], True, message, None, status_code)

    @classmethod
    def fail(
        cls,
        errors: Union[str, Sequence[str]],
        status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR,
    ) -> "Envelope[T]":
        messages = _coerce_messages(errors)
        logger.debug(
            "envelope_failure",
            extra={"status_code": int(status_code), "error_count": len(messages)},
        )
        return _build(cls, False, None, messages, status_code)

    # ---- fluent setters ----

    def with_data(self, data: Optional[T]) -> "Envelope[T]":
        self.data = data
        return self

    def with_errors(self, errors: Optional[Sequence[str]]) -> "Envelope[T]":
        self.errors = None if errors is None else _coerce_messages(errors)
        return self

    def with_error(self, error: str) -> "Envelope[T]":
        if self.errors is None:
            self.errors = []
        self.errors.append(_check_message(error))
        return self

    def with_status_code(self, status_code: int) -> "Envelope[T]":
        self.status_code = int(status_code)
        return self

    # ---- wire format ----

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_wire(cls, payload: WirePayload) -> "Envelope[T]":
        if isinstance(payload, (str, bytes, bytearray)):
            return cls.model_validate_json(payload)
        return cls.model_validate(payload)


class DynamicEnvelope(BaseModel):
    """Operation result whose payload is untyped.

    Used for operations that report only a status message or nothing at all.
    CRUD messages take the entity name (or a class) explicitly.
    """

    model_config = ConfigDict(populate_by_name=True)

    data: Any = None
    errors: Optional[List[str]] = None
    success: bool
    status_code: int = Field(alias="statusCode")

    @classmethod
    def succeed(
        cls, data: Any = None, status_code: int = HTTPStatus.OK
    ) -> "DynamicEnvelope":
        return _build(cls, True, data, None, status_code)

    @classmethod
    def succeed_create(
        cls, entity: Union[str, type], status_code: int = HTTPStatus.CREATED
    ) -> "DynamicEnvelope":
        message = f"{_entity_name(entity)} is created"
        return _build(cls, True, message, None, status_code)

    @classmethod
    def succeed_update(
        cls, entity: Union[str, type], status_code: int = HTTPStatus.OK
    ) -> "DynamicEnvelope":
        message = f"{_entity_name(entity)} is updated"
        return _build(cls, True, message, None, status_code)

    @classmethod
    def succeed_delete(
        cls, entity: Union[str, type], status_code: int = HTTPStatus.OK
    ) -> "DynamicEnvelope":
        message = f"{_entity_name(entity)} is deleted"
        return _build(cls, True, message, None, status_code)

    @classmethod
    def succeed_remove(
        cls, entity: Union[str, type], status_code: int = HTTPStatus.OK
    ) -> "DynamicEnvelope":
        message = f"{_entity_name(entity)} is removed"
        return _build(cls, True, message, None, status_code)

    @classmethod
    def fail(
        cls,
        errors: Union[str, Sequence[str]],
        status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR,
    ) -> "DynamicEnvelope":
        messages = _coerce_messages(errors)
        logger.debug(
            "envelope_failure",
            extra={"status_code": int(status_code), "error_count": len(messages)},
        )
        return _build(cls, False, None, messages, status_code)

    def with_data(self, data: Any) -> "DynamicEnvelope":
        self.data = data
        return self

    def with_errors(self, errors: Optional[Sequence[str]]) -> "DynamicEnvelope":
        self.errors = None if errors is None else _coerce_messages(errors)
        return self

    def with_error(self, error: str) -> "DynamicEnvelope":
        if self.errors is None:
            self.errors = []
        self.errors.append(_check_message(error))
        return self

    def with_status_code(self, status_code: int) -> "DynamicEnvelope":
        self.status_code = int(status_code)
        return self

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_wire(cls, payload: WirePayload) -> "DynamicEnvelope":
        if isinstance(payload, (str, bytes, bytearray)):
            return cls.model_validate_json(payload)
        return cls.model_validate(payload)
