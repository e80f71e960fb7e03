"""Decode JSON objects and arrays as instances of Python types."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar, Union, cast, overload

from smartcodable._errors import (
    CollectionElementDecodeError,
    DecodeError,
    NormalizationError,
    SmartCodableError,
)
from smartcodable._typing import ReadableBinary, is_readable_binary
from smartcodable.decodable import finish_mapping
from smartcodable.decode import build_context, default_decode_steps, type_name
from smartcodable.diagnostics import DiagnosticSink, default_sink
from smartcodable.normalize import (
    NormalizationStage,
    array_to_data,
    data_to_tree,
    mapping_to_data,
    require_array,
    text_to_data,
)
from smartcodable.options import DecodingOption, resolve

if TYPE_CHECKING:
    from typing_extensions import TypeAlias

    from smartcodable.decode import DecodeContext, DecodeStep

T = TypeVar("T")

Source: TypeAlias = Union[
    "Mapping[str, Any] | Sequence[Any] | str | ReadableBinary | None"
]
"""The forms of input accepted by `deserialize()` and `deserialize_list()`."""


def decode_one(
    data: ReadableBinary,
    target_type: type[T] | Any,
    options: Iterable[DecodingOption] | None = None,
    *,
    decode_steps: Iterable[DecodeStep] | None = None,
    sink: DiagnosticSink | None = None,
) -> T:
    """
    Decode JSON bytes as one instance of `target_type`, then call its hook.

    The post-decode hook (`did_finish_mapping()`) of the result is called once
    if the result has one. When `target_type` is a list type, the hook of each
    element is called instead.

    Raises
    ------
    NormalizationError
        If `data` is not UTF-8 JSON.
    DecodeError
        If the JSON value does not match `target_type`, or is nested too
        deeply to decode.
    """
    tree = data_to_tree(data)
    ctx = build_context(
        target_type, resolve(options), tree, decode_steps=decode_steps, sink=sink
    )
    result = cast(T, _decode_root(ctx, tree, target_type))
    finish_mapping(result)
    return result


def decode_many(
    data: ReadableBinary,
    element_type: type[T] | Any,
    options: Iterable[DecodingOption] | None = None,
    *,
    decode_steps: Iterable[DecodeStep] | None = None,
    sink: DiagnosticSink | None = None,
) -> list[T]:
    """
    Decode a JSON array as a list of `element_type`, then call each element's hook.

    All elements are decoded before any hook is called. If any element fails,
    the whole array fails: a shorter list is never returned.

    Raises
    ------
    NormalizationError
        If `data` is not UTF-8 JSON, or its top-level value is not an array.
    CollectionElementDecodeError
        If an element does not match `element_type`, or is nested too deeply
        to decode.
    """
    tree = require_array(data_to_tree(data))
    # One context is shared by every element
    ctx = build_context(
        list[element_type],  # type: ignore[valid-type]
        resolve(options),
        tree,
        decode_steps=decode_steps,
        sink=sink,
    )
    result: list[T] = []
    for i, item in enumerate(tree):
        try:
            result.append(cast(T, _decode_root(ctx, item, element_type, at=i)))
        except DecodeError as e:
            raise CollectionElementDecodeError(
                f"Element {i} of the array failed to decode: {e.message}",
                index=i,
                path=e.path,
                type_name=e.type_name,
            ) from e
    finish_mapping(result)
    return result


def _decode_root(
    ctx: DecodeContext, value: object, hint: object, *, at: int | None = None
) -> object:
    try:
        return ctx.decode_value(value, hint, at=at)
    except RecursionError as e:
        ctx.throw("JSON value is nested too deeply to decode", cause=e)


@dataclass(init=False, frozen=True, slots=True)
class Decoder:
    """
    A re-usable configuration for decoding JSON as Python types.

    The `decode()` and `decode_list()` methods behave like [`deserialize()`]
    and [`deserialize_list()`] without needing to pass the options for every
    call. A `Decoder` holds no state between calls, so one instance can be used
    from multiple threads.

    [`deserialize()`]: `smartcodable.deserialize`
    [`deserialize_list()`]: `smartcodable.deserialize_list`

    Parameters
    ----------
    options
        `DecodingOption` values. When an option kind occurs more than once, the
        last one is used.
    decode_steps
        A sequence of decode steps, which create Python values from JSON values.
        Default: `default_decode_steps`.
    sink
        Receives the reasons for failed decodes. Default: a
        `LoggingDiagnosticSink` logging to the `smartcodable` logger.
    """

    options: tuple[DecodingOption, ...]
    decode_steps: tuple[DecodeStep, ...]
    sink: DiagnosticSink

    def __init__(
        self,
        options: Iterable[DecodingOption] | None = None,
        decode_steps: Iterable[DecodeStep] | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        object.__setattr__(self, "options", tuple(options or ()))
        object.__setattr__(
            self,
            "decode_steps",
            tuple(default_decode_steps if decode_steps is None else decode_steps),
        )
        object.__setattr__(self, "sink", default_sink if sink is None else sink)

    def _report(self, error: SmartCodableError, target_type: object) -> None:
        if isinstance(error, NormalizationError):
            self.sink.log_debug(
                f"{type_name(target_type)}: input normalization failed at stage "
                f"{error.stage.value}: {error.message}"
            )
        else:
            self.sink.log_error(error, type_name(target_type))

    def _decode_one(self, get_data: Any, source: object, cls: object) -> Any:
        try:
            data = get_data(source)
            return decode_one(
                data, cls, self.options, decode_steps=self.decode_steps, sink=self.sink
            )
        except SmartCodableError as e:
            self._report(e, cls)
            return None

    def _decode_many(self, get_data: Any, source: object, cls: object) -> Any:
        try:
            data = get_data(source)
            return decode_many(
                data, cls, self.options, decode_steps=self.decode_steps, sink=self.sink
            )
        except SmartCodableError as e:
            self._report(e, list[cls])  # type: ignore[valid-type]
            return None

    def from_dict(self, cls: type[T], value: Mapping[str, Any] | None) -> T | None:
        """Decode a JSON-compatible mapping as `cls`. Returns None on failure."""
        return cast("T | None", self._decode_one(mapping_to_data, value, cls))

    def from_json(self, cls: type[T], text: str | None) -> T | None:
        """Decode JSON text as `cls`. Returns None on failure."""
        return cast("T | None", self._decode_one(text_to_data, text, cls))

    def from_data(self, cls: type[T], data: ReadableBinary | None) -> T | None:
        """Decode UTF-8 JSON bytes as `cls`. Returns None on failure."""
        return cast("T | None", self._decode_one(_require_data, data, cls))

    def list_from_array(
        self, cls: type[T], values: Sequence[Any] | None
    ) -> list[T] | None:
        """Decode a JSON-compatible list as a list of `cls`."""
        return cast("list[T] | None", self._decode_many(array_to_data, values, cls))

    def list_from_json(self, cls: type[T], text: str | None) -> list[T] | None:
        """Decode JSON array text as a list of `cls`."""
        return cast("list[T] | None", self._decode_many(text_to_data, text, cls))

    def list_from_data(
        self, cls: type[T], data: ReadableBinary | None
    ) -> list[T] | None:
        """Decode UTF-8 JSON array bytes as a list of `cls`."""
        return cast("list[T] | None", self._decode_many(_require_data, data, cls))

    def decode(self, cls: type[T], source: Source) -> T | None:
        """
        Decode a JSON object as `cls`.

        Parameters
        ----------
        cls
            The type to create. Usually a dataclass or `SmartDecodable` class,
            but any type supported by the decode steps can be used.
        source
            A `dict` (or other mapping), JSON text as `str`, or UTF-8 JSON as
            a bytes-like object.

        Returns
        -------
        :
            The decoded value, after its post-decode hook has run. None if the
            source is None, is not valid JSON, or does not match `cls`.
        """
        if isinstance(source, str):
            return self.from_json(cls, source)
        if source is None or is_readable_binary(source):
            return self.from_data(cls, source)
        return self.from_dict(cls, cast("Mapping[str, Any]", source))

    def decode_list(self, cls: type[T], source: Source) -> list[T] | None:
        """
        Decode a JSON array as a list of `cls`.

        `source` is a `list` (or `tuple`), JSON text as `str`, or UTF-8 JSON as
        a bytes-like object. None is returned if any element fails to decode.
        """
        if isinstance(source, str):
            return self.list_from_json(cls, source)
        if source is None or is_readable_binary(source):
            return self.list_from_data(cls, source)
        return self.list_from_array(cls, cast("Sequence[Any]", source))


def _require_data(data: ReadableBinary | None) -> ReadableBinary:
    if data is None:
        raise NormalizationError(
            "The provided data is None", stage=NormalizationStage.MISSING_INPUT
        )
    return data


@overload
def deserialize(
    cls: type[T],
    source: Mapping[str, Any] | str | ReadableBinary | None,
    *,
    options: Iterable[DecodingOption] | None = None,
    sink: DiagnosticSink | None = None,
) -> T | None: ...


@overload
def deserialize(
    cls: Any,
    source: Mapping[str, Any] | str | ReadableBinary | None,
    *,
    options: Iterable[DecodingOption] | None = None,
    sink: DiagnosticSink | None = None,
) -> Any: ...


def deserialize(
    cls: Any,
    source: Source,
    *,
    options: Iterable[DecodingOption] | None = None,
    sink: DiagnosticSink | None = None,
) -> Any:
    """
    Decode a JSON object as an instance of `cls`.

    The source can be a `dict`, JSON text or UTF-8 JSON bytes. After decoding,
    the instance's `did_finish_mapping()` hook is called.

    Failures are not raised. `None` is returned and the reason is reported to
    `sink` (by default, logged to the `smartcodable` logger).

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> from smartcodable import KeyStrategy
    >>> @dataclass
    ... class User:
    ...     userName: str
    >>> deserialize(User, '{"user_name": "Ada"}',
    ...             options=[KeyStrategy.convert_from_snake_case()])
    User(userName='Ada')
    >>> deserialize(User, '{"user_name": "Ada"}') is None
    True
    """
    return Decoder(options=options, sink=sink).decode(cls, source)


def deserialize_list(
    cls: type[T] | Any,
    source: Source,
    *,
    options: Iterable[DecodingOption] | None = None,
    sink: DiagnosticSink | None = None,
) -> list[T] | None:
    """
    Decode a JSON array as a list of `cls` instances.

    Every element's `did_finish_mapping()` hook is called, in order. When
    `cls` is itself a list type (an array of arrays), the hooks of the
    innermost elements are called.

    If any element fails to decode, `None` is returned rather than a list with
    fewer elements than the array.

    Examples
    --------
    >>> deserialize_list(int, "[1, 2, 3]")
    [1, 2, 3]
    >>> deserialize_list(int, '[1, "two", 3]') is None
    True
    """
    return Decoder(options=options, sink=sink).decode_list(cls, source)


def from_dict(
    cls: type[T],
    value: Mapping[str, Any] | None,
    *,
    options: Iterable[DecodingOption] | None = None,
    sink: DiagnosticSink | None = None,
) -> T | None:
    return Decoder(options=options, sink=sink).from_dict(cls, value)


def from_json(
    cls: type[T],
    text: str | None,
    *,
    options: Iterable[DecodingOption] | None = None,
    sink: DiagnosticSink | None = None,
) -> T | None:
    return Decoder(options=options, sink=sink).from_json(cls, text)


def from_data(
    cls: type[T],
    data: ReadableBinary | None,
    *,
    options: Iterable[DecodingOption] | None = None,
    sink: DiagnosticSink | None = None,
) -> T | None:
    return Decoder(options=options, sink=sink).from_data(cls, data)


def list_from_array(
    cls: type[T],
    values: Sequence[Any] | None,
    *,
    options: Iterable[DecodingOption] | None = None,
    sink: DiagnosticSink | None = None,
) -> list[T] | None:
    return Decoder(options=options, sink=sink).list_from_array(cls, values)


def list_from_json(
    cls: type[T],
    text: str | None,
    *,
    options: Iterable[DecodingOption] | None = None,
    sink: DiagnosticSink | None = None,
) -> list[T] | None:
    return Decoder(options=options, sink=sink).list_from_json(cls, text)


def list_from_data(
    cls: type[T],
    data: ReadableBinary | None,
    *,
    options: Iterable[DecodingOption] | None = None,
    sink: DiagnosticSink | None = None,
) -> list[T] | None:
    return Decoder(options=options, sink=sink).list_from_data(cls, data)
