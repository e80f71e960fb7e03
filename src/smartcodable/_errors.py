from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from smartcodable.normalize import NormalizationStage


@dataclass(init=False)
class SmartCodableError(Exception):
    """The base class that all smartcodable errors are subclasses of."""

    if not TYPE_CHECKING:
        message: str  # needed to have dataclass include message in the repr, etc

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)

    @property
    def message(self) -> str:
        return cast(str, self.args[0])

    def __str__(self) -> str:
        field_values = [
            (f.name, getattr(self, f.name)) for f in fields(self) if f.name != "message"
        ]
        values_fmt = ", ".join(f"{f}={v!r}" for (f, v) in field_values)

        if values_fmt:
            return f"{self.message}: {values_fmt}"
        return self.message


@dataclass(init=False)
class NormalizationError(SmartCodableError, ValueError):
    """
    Input could not be converted to JSON bytes and parsed into a tree.

    No structural decode is attempted after a normalization failure.
    """

    stage: NormalizationStage

    def __init__(
        self, message: str, *args: object, stage: NormalizationStage
    ) -> None:
        super().__init__(message, *args)
        self.stage = stage


@dataclass(init=False)
class DecodeError(SmartCodableError, ValueError):
    """A JSON tree does not match the shape of the type it's decoded as."""

    path: str
    type_name: str

    def __init__(
        self, message: str, *args: object, path: str, type_name: str
    ) -> None:
        super().__init__(message, *args)
        self.path = path
        self.type_name = type_name


@dataclass(init=False)
class MissingFieldDecodeError(DecodeError):
    """A required field has no value in the JSON object."""

    field: str

    def __init__(
        self, message: str, *args: object, field: str, path: str, type_name: str
    ) -> None:
        super().__init__(message, *args, path=path, type_name=type_name)
        self.field = field


@dataclass(init=False)
class TypeMismatchDecodeError(DecodeError):
    expected: str
    value: object

    def __init__(
        self,
        message: str,
        *args: object,
        expected: str,
        value: object,
        path: str,
        type_name: str,
    ) -> None:
        super().__init__(message, *args, path=path, type_name=type_name)
        self.expected = expected
        self.value = value


@dataclass(init=False)
class UnhandledTypeDecodeError(DecodeError):
    """
    No decode step is able to handle a type.

    Raised when the target type (or a type nested in it) is not one that
    any of the decode steps know how to create from JSON values.
    """

    hint: object

    def __init__(
        self, message: str, *args: object, hint: object, path: str, type_name: str
    ) -> None:
        super().__init__(message, *args, path=path, type_name=type_name)
        self.hint = hint


@dataclass(init=False)
class CollectionElementDecodeError(DecodeError):
    """One element of a collection failed, so the whole collection failed."""

    index: int

    def __init__(
        self, message: str, *args: object, index: int, path: str, type_name: str
    ) -> None:
        super().__init__(message, *args, path=path, type_name=type_name)
        self.index = index
