"""Validator hooks: turn authenticated plaintext into an application value.

A validator is any object with a ``validate(plaintext: bytes)`` method. It
only ever sees bytes that already passed the signature and freshness checks.
It signals rejection by raising :class:`PayloadRejectedError`; a plain
``ValueError`` is treated the same way.
"""

from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from fernet_codec.exceptions import PayloadRejectedError

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
ModelT = TypeVar("ModelT", bound=BaseModel)


class Validator(Protocol[T_co]):
    """Single-method strategy applied to decrypted token payloads."""

    def validate(self, plaintext: bytes) -> T_co:
        """Return the accepted value or raise :class:`PayloadRejectedError`."""
        ...


class BytesValidator:
    """Accept any payload unchanged."""

    def validate(self, plaintext: bytes) -> bytes:
        return plaintext


class StringValidator:
    """Decode the payload as text."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def validate(self, plaintext: bytes) -> str:
        try:
            return plaintext.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise PayloadRejectedError(f"payload is not valid {self.encoding}") from exc


class PredicateValidator(Generic[T]):
    """Transform the payload, then accept it only if *predicate* holds.

    Example::

        PredicateValidator(lambda b: b.decode(), lambda s: s.startswith("user:"))
    """

    def __init__(self, transform: Callable[[bytes], T], predicate: Callable[[T], bool]) -> None:
        self._transform = transform
        self._predicate = predicate

    def validate(self, plaintext: bytes) -> T:
        value = self._transform(plaintext)
        if not self._predicate(value):
            raise PayloadRejectedError("payload failed predicate")
        return value


class ModelValidator(Generic[ModelT]):
    """Parse the payload as JSON into a pydantic model."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    def validate(self, plaintext: bytes) -> ModelT:
        try:
            return self.model.model_validate_json(plaintext)
        except ValidationError as exc:
            raise PayloadRejectedError(
                f"payload does not match {self.model.__name__} ({exc.error_count()} errors)"
            ) from exc


def apply_validator(validator: Validator[T], plaintext: bytes) -> T:
    """Run *validator* exactly once, normalizing rejections.

    Raises:
        PayloadRejectedError: If the validator rejects the payload.
    """
    try:
        return validator.validate(plaintext)
    except PayloadRejectedError:
        raise
    except ValueError as exc:
        raise PayloadRejectedError(str(exc)) from exc
