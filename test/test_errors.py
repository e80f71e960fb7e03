from __future__ import annotations

from dataclasses import dataclass

from smartcodable._errors import (
    CollectionElementDecodeError,
    DecodeError,
    MissingFieldDecodeError,
    NormalizationError,
    SmartCodableError,
    TypeMismatchDecodeError,
    UnhandledTypeDecodeError,
)
from smartcodable.normalize import NormalizationStage


@dataclass(init=False)
class ExampleSmartCodableError(SmartCodableError):
    level: int
    limit: float

    def __init__(self, message: str, *, level: int, limit: float) -> None:
        super().__init__(message)
        self.level = level
        self.limit = limit


def test_smartcodableerror_str_with_fields() -> None:
    assert (
        str(ExampleSmartCodableError("Level too high", level=3, limit=2.123))
        == "Level too high: level=3, limit=2.123"
    )


@dataclass(init=False)
class RecursiveSmartCodableError(SmartCodableError):
    obj: object

    def __init__(self, message: str, *, obj: object) -> None:
        super().__init__(message)
        self.obj = obj


def test_smartcodableerror_str_with_recursive_dataclass_field() -> None:
    @dataclass(repr=False, init=False)
    class RecursiveThing:
        obj: object

        def __init__(self) -> None:
            self.obj = self

        def __repr__(self) -> str:
            return "RecursiveThing()"

    assert (
        str(RecursiveSmartCodableError("Example", obj=RecursiveThing()))
        == "Example: obj=RecursiveThing()"
    )


def test_smartcodableerror_str_without_fields() -> None:
    assert str(SmartCodableError("Something went wrong")) == "Something went wrong"


def test_NormalizationError() -> None:
    err = NormalizationError("Bad input", stage=NormalizationStage.PARSE)

    assert isinstance(err, ValueError)
    assert err.message == "Bad input"
    assert str(err) == "Bad input: stage=<NormalizationStage.PARSE: 'parse'>"


def test_DecodeError() -> None:
    err = DecodeError("Nope", path="$.a", type_name="Thing")

    assert isinstance(err, ValueError)
    assert str(err) == "Nope: path='$.a', type_name='Thing'"


def test_MissingFieldDecodeError() -> None:
    err = MissingFieldDecodeError("Msg", field="id", path="$", type_name="Server")

    assert str(err) == "Msg: path='$', type_name='Server', field='id'"


def test_TypeMismatchDecodeError() -> None:
    err = TypeMismatchDecodeError(
        "Msg", expected="an integer", value="3", path="$.id", type_name="Server"
    )

    assert (
        str(err)
        == "Msg: path='$.id', type_name='Server', expected='an integer', value='3'"
    )


def test_UnhandledTypeDecodeError() -> None:
    err = UnhandledTypeDecodeError("Msg", hint=complex, path="$", type_name="X")

    assert isinstance(err, DecodeError)
    assert err.hint is complex
    assert str(err) == "Msg: path='$', type_name='X', hint=<class 'complex'>"


def test_CollectionElementDecodeError() -> None:
    err = CollectionElementDecodeError(
        "Msg", index=2, path="$[2].id", type_name="list[Server]"
    )

    assert isinstance(err, DecodeError)
    assert str(err) == "Msg: path='$[2].id', type_name='list[Server]', index=2"
