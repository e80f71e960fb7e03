"""Create instances of Python types from trees of JSON values."""

from __future__ import annotations

import base64
import binascii
import copy
import dataclasses
import enum
import math
import types
import typing
import uuid
from collections.abc import (
    Iterable,
    Mapping,
    MutableMapping,
    MutableSequence,
    MutableSet,
    Sequence,
    Set,
)
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal, InvalidOperation
from functools import partial
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    AbstractSet,
    Annotated,
    Any,
    Callable,
    ClassVar,
    Final,
    Protocol,
    Union,
    cast,
)

from typing_extensions import Literal, get_args, get_origin

from smartcodable._errors import (
    DecodeError,
    MissingFieldDecodeError,
    TypeMismatchDecodeError,
    UnhandledTypeDecodeError,
)
from smartcodable.decodable import PostDecodeHook
from smartcodable.diagnostics import DiagnosticSink, default_sink
from smartcodable.options import (
    DataDecoding,
    DateDecoding,
    FloatDecoding,
    KeyDecoding,
    KeyStrategy,
    ResolvedConfig,
    convert_from_snake_case,
)

if TYPE_CHECKING:
    from typing_extensions import Never, TypeAlias

KeyTransform: TypeAlias = Callable[[str], str]
"""Maps a JSON object key to the field name it populates."""

PathElement: TypeAlias = Union[str, int]

REFERENCE_DATE: Final = datetime(2001, 1, 1, tzinfo=timezone.utc)
"""The epoch of `DateDecoding.DEFERRED_TO_DATE` timestamps."""

_NONE_TYPES: Final = (None, type(None))


def type_name(hint: object) -> str:
    """Get a readable name for a type or type hint, for error messages."""
    origin = get_origin(hint)
    if origin is None:
        if isinstance(hint, type):
            return hint.__qualname__
        return repr(hint).replace("typing.", "")
    args = ", ".join(
        "..." if arg is Ellipsis else type_name(arg) for arg in get_args(hint)
    )
    return f"{type_name(origin)}[{args}]"


def format_path(path: Iterable[PathElement]) -> str:
    """
    Format the location of a value in a JSON tree.

    >>> format_path(["servers", 2, "name"])
    '$.servers[2].name'
    """
    return "$" + "".join(f"[{p}]" if isinstance(p, int) else f".{p}" for p in path)


def _allows_none(hint: object) -> bool:
    if hint in _NONE_TYPES or hint is Any or hint is object:
        return True
    if get_origin(hint) in (Union, types.UnionType):
        return any(arg in _NONE_TYPES for arg in get_args(hint))
    return False


class DecodeContext(Protocol):
    """
    The state of one decode call, shared by the decode steps that run in it.

    A context is created for every decode call and discarded afterwards, so
    decode steps can use it to see the options and input of the current call.
    """

    config: ResolvedConfig
    """The options in effect for this call."""
    target_type: object
    """The type the decode call was asked to create."""
    original_tree: object
    """
    A copy of the whole JSON tree being decoded, as it was before decoding.

    Decode steps can inspect it to see values near the one being decoded.
    """
    key_transform: KeyTransform
    """Maps JSON object keys to field names according to `config`."""
    sink: DiagnosticSink

    @property
    def path(self) -> tuple[PathElement, ...]:
        """The keys and indexes leading from the tree root to the current value."""

    def decode_value(
        self, value: object, hint: object, *, at: PathElement | None = None
    ) -> object:
        """
        Create a value of type `hint` from a JSON value.

        Parameters
        ----------
        value
            The JSON value to decode.
        hint
            The type or type hint of the result.
        at
            The key or index of `value` in the current value, if `value` is a
            child of the current value. Used to identify the location of errors.

        Raises
        ------
        DecodeError
            If `value` cannot be decoded as `hint`.
        """

    def throw(self, message: str, *, cause: BaseException | None = None) -> Never:
        """Raise a `DecodeError` for the value currently being decoded."""

    def throw_mismatch(
        self, expected: str, value: object, *, cause: BaseException | None = None
    ) -> Never:
        """Raise a `TypeMismatchDecodeError` for the value being decoded."""

    def throw_missing_field(self, field: str) -> Never:
        """Raise a `MissingFieldDecodeError` for the object being decoded."""

    def report(self, message: str) -> None:
        """Report a decode problem that did not stop the decode."""


class DecodeNextFn(Protocol):
    """
    Delegate to the next decode step in the sequence to decode a value.

    Raises
    ------
    UnhandledTypeDecodeError
        If none of the following decode steps were able to decode the type.
    """

    def __call__(self, value: object, hint: object, /) -> object: ...


class DecodeStepFn(Protocol):
    """
    The signature of a function that creates a Python value from a JSON value.

    Decode steps can either create the value themselves, or delegate to the
    next decode step by calling `next()`. Steps can modify the value decoded by
    the next step before returning it.
    """

    def __call__(
        self, value: object, hint: object, /, ctx: DecodeContext, next: DecodeNextFn
    ) -> object: ...


class DecodeStepObject(Protocol):
    decode: DecodeStepFn
    """The same as `DecodeStepFn`."""


DecodeStep: TypeAlias = "DecodeStepObject | DecodeStepFn"
"""Either a `DecodeStepObject` or `DecodeStepFn`."""


@dataclass(init=False, slots=True)
class DefaultDecodeContext(DecodeContext):
    """The default implementation of `DecodeContext`."""

    decode_steps: Sequence[DecodeStep]
    config: ResolvedConfig
    target_type: object
    original_tree: object
    key_transform: KeyTransform
    sink: DiagnosticSink
    _path: list[PathElement]

    def __init__(
        self,
        *,
        target_type: object,
        original_tree: object,
        config: ResolvedConfig | None = None,
        key_transform: KeyTransform | None = None,
        decode_steps: Iterable[DecodeStep] | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self.config = ResolvedConfig() if config is None else config
        self.target_type = target_type
        self.original_tree = original_tree
        self.key_transform = (
            key_transform_for(self.config.key_strategy)
            if key_transform is None
            else key_transform
        )
        self.decode_steps = list(
            default_decode_steps if decode_steps is None else decode_steps
        )
        self.sink = default_sink if sink is None else sink
        self._path = []

    @property
    def path(self) -> tuple[PathElement, ...]:
        return tuple(self._path)

    def __decode_with_step(self, value: object, hint: object, *, i: int) -> object:
        if i < len(self.decode_steps):
            step = self.decode_steps[i]
            next = partial(self.__decode_with_step, i=i + 1)
            if callable(step):
                return step(value, hint, ctx=self, next=next)
            else:
                return step.decode(value, hint, ctx=self, next=next)
        self._report_unhandled_type(hint)
        raise AssertionError("report_unhandled_type returned")

    def decode_value(
        self, value: object, hint: object, *, at: PathElement | None = None
    ) -> object:
        if at is None:
            return self.__decode_with_step(value, hint, i=0)
        self._path.append(at)
        try:
            return self.__decode_with_step(value, hint, i=0)
        finally:
            self._path.pop()

    def throw(self, message: str, *, cause: BaseException | None = None) -> Never:
        raise DecodeError(
            message,
            path=format_path(self._path),
            type_name=type_name(self.target_type),
        ) from cause

    def throw_mismatch(
        self, expected: str, value: object, *, cause: BaseException | None = None
    ) -> Never:
        raise TypeMismatchDecodeError(
            f"Expected {expected} at {format_path(self._path)}",
            expected=expected,
            value=value,
            path=format_path(self._path),
            type_name=type_name(self.target_type),
        ) from cause

    def throw_missing_field(self, field: str) -> Never:
        path = format_path(self._path)
        raise MissingFieldDecodeError(
            f"No value for required field {field!r} at {path}",
            field=field,
            path=path,
            type_name=type_name(self.target_type),
        )

    def report(self, message: str) -> None:
        self.sink.log_warning(
            f"{type_name(self.target_type)} at {format_path(self._path)}: {message}"
        )

    def _report_unhandled_type(self, hint: object) -> Never:
        raise UnhandledTypeDecodeError(
            f"No decode step was able to decode the type {type_name(hint)}",
            hint=hint,
            path=format_path(self._path),
            type_name=type_name(self.target_type),
        )


def _use_key(key: str) -> str:
    return key


def key_transform_for(strategy: KeyStrategy) -> KeyTransform:
    """
    Get the function that renames JSON keys for a `KeyStrategy`.

    >>> rename = key_transform_for(KeyStrategy.custom({"server_id": "serverId"}))
    >>> rename("server_id"), rename("name")
    ('serverId', 'name')
    """
    if strategy.kind is KeyDecoding.CONVERT_FROM_SNAKE_CASE:
        return convert_from_snake_case
    if strategy.kind is KeyDecoding.CUSTOM:
        mapping = strategy.mapping

        def use_mapped_key(key: str) -> str:
            return mapping.get(key, key)

        return use_mapped_key
    return _use_key


def build_context(
    target_type: object,
    config: ResolvedConfig,
    original_tree: object,
    *,
    decode_steps: Iterable[DecodeStep] | None = None,
    sink: DiagnosticSink | None = None,
) -> DefaultDecodeContext:
    """
    Create the `DecodeContext` for one decode call.

    The key strategy of `config` is turned into the context's `key_transform`,
    and a copy of `original_tree` is attached so that decode steps can see the
    input as it was before decoding, even if other steps modify values.

    Raises
    ------
    DecodeError
        If `original_tree` is nested too deeply to copy.
    """
    try:
        snapshot = copy.deepcopy(original_tree)
    except RecursionError as e:
        raise DecodeError(
            "JSON value is nested too deeply to decode",
            path=format_path(()),
            type_name=type_name(target_type),
        ) from e
    return DefaultDecodeContext(
        target_type=target_type,
        original_tree=snapshot,
        config=config,
        key_transform=key_transform_for(config.key_strategy),
        decode_steps=decode_steps,
        sink=sink,
    )


class TypeReaderFn(Protocol):
    """
    The type of a function that decodes values on behalf of a `TypeReader`.

    Typically this is an unbound method of `TypeReader`.
    """

    def __call__(
        self,
        type_reader: TypeReader,
        value: object,
        hint: object,
        ctx: DecodeContext,
        /,
    ) -> object: ...


@dataclass(init=False, slots=True)
class TypeReaderRegistry:
    """
    A registry of classes and the functions that can decode them.

    `TypeReader` uses this to dispatch decode calls to an appropriate function.
    A class is matched by the first of its base classes (in method resolution
    order) with a registered function.
    """

    index: Mapping[type, TypeReaderFn]
    _index: dict[type, TypeReaderFn]

    def __init__(self, entries: TypeReaderRegistry | None = None) -> None:
        self._index = {}
        self.index = MappingProxyType(self._index)
        if entries:
            self.register_all(entries)

    def register(self, cls: type | Iterable[type], type_reader: TypeReaderFn) -> None:
        """Associate a function with a class, so that `match()` will return it."""
        for c in (cls,) if isinstance(cls, type) else cls:
            self._index[c] = type_reader

    def register_all(self, registry: TypeReaderRegistry) -> None:
        """
        Copy the registrations of another registry into this one.

        Existing registrations that also occur in `registry` are overwritten.
        """
        self._index.update(registry.index)

    def match(self, cls: type) -> TypeReaderFn | None:
        """Get the `TypeReaderFn` registered for a class or its bases, or `None`."""
        for base in cls.__mro__:
            type_reader = self._index.get(base)
            if type_reader is not None:
                return type_reader
        return None


@dataclass(init=False, slots=True)
class TypeReader(DecodeStepObject):
    """
    Controls how JSON values are converted to Python types when deserializing.

    `TypeReader` supports:

    * `Any` and `object` (the JSON value is used as-is)
    * `None`, `Optional`, `Union` (members are tried in order) and `Literal`
    * `bool`, `int`, `float`, `str`, `Decimal`, `uuid.UUID` and `Enum` types
    * `bytes` and `bytearray`, according to the `DataStrategy`
    * `datetime`, according to the `DateStrategy`, and ISO 8601 `date` and
      `time`
    * `list`, `tuple`, `set`, `frozenset`, `dict` and their `collections.abc`
      equivalents
    * dataclasses
    * other classes with a `did_finish_mapping()` method that can be created
      without arguments, by setting their annotated attributes

    Parameters
    ----------
    type_readers
        Extra registrations, which take priority over the default
        registrations for the same class.
    """

    type_readers: TypeReaderRegistry

    def __init__(self, type_readers: TypeReaderRegistry | None = None) -> None:
        self.type_readers = TypeReaderRegistry(default_type_readers)
        if type_readers:
            self.type_readers.register_all(type_readers)

    def decode(
        self, value: object, hint: object, /, ctx: DecodeContext, next: DecodeNextFn
    ) -> object:
        while True:
            if hasattr(hint, "__supertype__"):  # NewType
                hint = hint.__supertype__
            elif get_origin(hint) is Annotated:
                hint = get_args(hint)[0]
            else:
                break

        if hint is Any or hint is object or isinstance(hint, typing.TypeVar):
            return value
        if hint in _NONE_TYPES:
            if value is None:
                return None
            ctx.throw_mismatch("null", value)

        origin = get_origin(hint)
        if origin in (Union, types.UnionType):
            return self.decode_union(value, hint, ctx)
        if origin is Literal:
            return self.decode_literal(value, hint, ctx)

        cls = hint if origin is None else origin
        if not isinstance(cls, type):
            return next(value, hint)
        if issubclass(cls, enum.Enum):
            return self.decode_enum(value, cls, ctx)
        type_reader = self.type_readers.match(cls)
        if type_reader is not None:
            return type_reader(self, value, hint, ctx)
        if dataclasses.is_dataclass(cls):
            return self.decode_dataclass(value, cls, ctx)
        if issubclass(cls, PostDecodeHook):
            return self.decode_empty_constructed(value, cls, ctx)
        return next(value, hint)

    def decode_union(self, value: object, hint: object, ctx: DecodeContext) -> object:
        members = get_args(hint)
        if value is None and any(m in _NONE_TYPES for m in members):
            return None
        errors: list[DecodeError] = []
        for member in members:
            if member in _NONE_TYPES:
                continue
            try:
                return ctx.decode_value(value, member)
            except DecodeError as e:
                errors.append(e)
        ctx.throw_mismatch(
            type_name(hint), value, cause=errors[-1] if errors else None
        )

    def decode_literal(self, value: object, hint: object, ctx: DecodeContext) -> object:
        for literal in get_args(hint):
            # type check first, because True == 1
            if type(literal) is type(value) and literal == value:
                return literal
        ctx.throw_mismatch(type_name(hint), value)

    def decode_enum(
        self, value: object, cls: type[enum.Enum], ctx: DecodeContext
    ) -> enum.Enum:
        if isinstance(value, (dict, list)):
            ctx.throw_mismatch(f"a {cls.__qualname__} value", value)
        try:
            return cls(value)
        except ValueError as e:
            ctx.throw_mismatch(f"a {cls.__qualname__} value", value, cause=e)

    def object_source(
        self, value: object, cls: type, ctx: DecodeContext
    ) -> dict[str, object]:
        """
        Get the properties of a JSON object, with keys renamed to field names.

        When two keys are renamed to the same field name, the first one is used.
        """
        if not isinstance(value, dict):
            ctx.throw_mismatch(f"an object for {cls.__qualname__}", value)
        source: dict[str, object] = {}
        for key, item in value.items():
            source.setdefault(ctx.key_transform(key), item)
        return source

    def type_hints(self, cls: type, ctx: DecodeContext) -> dict[str, Any]:
        try:
            return typing.get_type_hints(cls)
        except (NameError, TypeError) as e:
            ctx.throw(f"Cannot resolve the type hints of {cls.__qualname__}", cause=e)

    def decode_dataclass(self, value: object, cls: type, ctx: DecodeContext) -> object:
        """
        Create a dataclass instance from a JSON object.

        Fields are matched to JSON keys by name, after the key strategy renames
        the keys. A field with a default uses its default when its key is
        absent or its value can't be decoded. A field without a default whose
        type allows `None` is `None` when its key is absent. Fields with
        `init=False` are not decoded.
        """
        source = self.object_source(value, cls, ctx)
        hints = self.type_hints(cls, ctx)
        kwargs: dict[str, object] = {}
        for f in dataclasses.fields(cls):
            if not f.init:
                continue
            hint = hints.get(f.name, Any)
            has_default = (
                f.default is not dataclasses.MISSING
                or f.default_factory is not dataclasses.MISSING
            )
            if f.name not in source:
                if has_default:
                    continue
                if _allows_none(hint):
                    kwargs[f.name] = None
                    continue
                ctx.throw_missing_field(f.name)
            try:
                kwargs[f.name] = ctx.decode_value(source[f.name], hint, at=f.name)
            except DecodeError as e:
                if not has_default:
                    raise
                ctx.report(f"field {f.name!r} uses its default value: {e}")
        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as e:
            ctx.throw(f"{cls.__qualname__} could not be created: {e}", cause=e)

    def decode_empty_constructed(
        self, value: object, cls: type, ctx: DecodeContext
    ) -> object:
        """
        Create an instance of a non-dataclass by setting attributes on an empty one.

        The class is called without arguments, then each annotated public
        attribute with a key in the JSON object is decoded and assigned.
        Attributes that are absent or fail to decode keep their initial value.
        """
        source = self.object_source(value, cls, ctx)
        hints = self.type_hints(cls, ctx)
        try:
            obj = cls()
        except TypeError as e:
            ctx.throw(
                f"{cls.__qualname__} is not a dataclass and cannot be created "
                f"without arguments",
                cause=e,
            )
        for name, hint in hints.items():
            if name.startswith("_") or hint is ClassVar or get_origin(hint) is ClassVar:
                continue
            if name not in source:
                continue
            try:
                setattr(obj, name, ctx.decode_value(source[name], hint, at=name))
            except DecodeError as e:
                ctx.report(f"attribute {name!r} keeps its initial value: {e}")
        return obj

    def deserialize_bool(
        self, value: object, hint: object, ctx: DecodeContext
    ) -> bool:
        if isinstance(value, bool):
            return value
        ctx.throw_mismatch("a boolean", value)

    def deserialize_int(self, value: object, hint: object, ctx: DecodeContext) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        # JSON has one number type; 2.0 is as much an int as 2 is
        if isinstance(value, float) and value.is_integer():
            return int(value)
        ctx.throw_mismatch("an integer", value)

    def deserialize_float(
        self, value: object, hint: object, ctx: DecodeContext
    ) -> float:
        strategy = ctx.config.float_strategy
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            result = float(value)
            # Out of range numbers like 1e400 are parsed as inf
            if math.isfinite(result) or strategy.kind is not FloatDecoding.THROW:
                return result
            ctx.throw_mismatch("a finite number", value)
        if strategy.kind is FloatDecoding.CONVERT_FROM_STRING and isinstance(
            value, str
        ):
            if value == strategy.positive_infinity:
                return math.inf
            if value == strategy.negative_infinity:
                return -math.inf
            if value == strategy.nan:
                return math.nan
        ctx.throw_mismatch("a number", value)

    def deserialize_str(self, value: object, hint: object, ctx: DecodeContext) -> str:
        if isinstance(value, str):
            return value
        ctx.throw_mismatch("a string", value)

    def deserialize_bytes(
        self, value: object, hint: object, ctx: DecodeContext
    ) -> bytes | bytearray:
        strategy = ctx.config.data_strategy
        result: bytes
        if strategy.kind is DataDecoding.BASE64:
            if not isinstance(value, str):
                ctx.throw_mismatch("a base64 string", value)
            try:
                result = base64.b64decode(value, validate=True)
            except binascii.Error as e:
                ctx.throw_mismatch("a base64 string", value, cause=e)
        elif strategy.kind is DataDecoding.DEFERRED_TO_DATA:
            if not isinstance(value, list):
                ctx.throw_mismatch("an array of bytes", value)
            octets = [
                ctx.decode_value(octet, int, at=i) for i, octet in enumerate(value)
            ]
            try:
                result = bytes(cast("list[int]", octets))
            except ValueError as e:
                ctx.throw_mismatch("an array of bytes", value, cause=e)
        else:
            assert strategy.parser is not None
            try:
                result = strategy.parser(value)
            except (TypeError, ValueError) as e:
                ctx.throw(f"Custom data decoding failed: {e}", cause=e)
        if hint is bytearray:
            return bytearray(result)
        return result

    def deserialize_datetime(
        self, value: object, hint: object, ctx: DecodeContext
    ) -> datetime:
        strategy = ctx.config.date_strategy
        kind = strategy.kind
        expected = f"a date ({kind.value})"
        if kind is DateDecoding.CUSTOM:
            assert strategy.parser is not None
            try:
                result = strategy.parser(value)
            except (TypeError, ValueError) as e:
                ctx.throw_mismatch(expected, value, cause=e)
            if not isinstance(result, datetime):
                ctx.throw(f"Custom date decoding returned {result!r}")
            return result

        try:
            if isinstance(value, str):
                if kind is DateDecoding.ISO8601:
                    # fromisoformat() only accepts the Z suffix from py3.11
                    if value.endswith(("Z", "z")):
                        value = f"{value[:-1]}+00:00"
                    return datetime.fromisoformat(value)
                if kind is DateDecoding.FORMATTED:
                    assert strategy.format is not None
                    return datetime.strptime(value, strategy.format)
            elif isinstance(value, (int, float)) and not isinstance(value, bool):
                if kind is DateDecoding.SECONDS_SINCE_1970:
                    return datetime.fromtimestamp(value, tz=timezone.utc)
                if kind is DateDecoding.MILLISECONDS_SINCE_1970:
                    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
                if kind is DateDecoding.DEFERRED_TO_DATE:
                    return REFERENCE_DATE + timedelta(seconds=value)
        except (ValueError, OverflowError, OSError) as e:
            ctx.throw_mismatch(expected, value, cause=e)
        ctx.throw_mismatch(expected, value)

    def deserialize_date(
        self, value: object, hint: object, ctx: DecodeContext
    ) -> date:
        if isinstance(value, str):
            try:
                return date.fromisoformat(value)
            except ValueError as e:
                ctx.throw_mismatch("an ISO 8601 date", value, cause=e)
        ctx.throw_mismatch("an ISO 8601 date", value)

    def deserialize_time(
        self, value: object, hint: object, ctx: DecodeContext
    ) -> time:
        if isinstance(value, str):
            try:
                return time.fromisoformat(value)
            except ValueError as e:
                ctx.throw_mismatch("an ISO 8601 time", value, cause=e)
        ctx.throw_mismatch("an ISO 8601 time", value)

    def deserialize_uuid(
        self, value: object, hint: object, ctx: DecodeContext
    ) -> uuid.UUID:
        if isinstance(value, str):
            try:
                return uuid.UUID(value)
            except ValueError as e:
                ctx.throw_mismatch("a UUID string", value, cause=e)
        ctx.throw_mismatch("a UUID string", value)

    def deserialize_decimal(
        self, value: object, hint: object, ctx: DecodeContext
    ) -> Decimal:
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            ctx.throw_mismatch("a decimal number", value)
        try:
            # via str to get the shortest repr of floats, not their binary value
            return Decimal(str(value))
        except InvalidOperation as e:
            ctx.throw_mismatch("a decimal number", value, cause=e)

    def _element_hint(self, hint: object) -> object:
        args = get_args(hint)
        return args[0] if args else Any

    def deserialize_list(
        self, value: object, hint: object, ctx: DecodeContext
    ) -> list[object]:
        if not isinstance(value, list):
            ctx.throw_mismatch(f"an array for {type_name(hint)}", value)
        element_hint = self._element_hint(hint)
        return [
            ctx.decode_value(item, element_hint, at=i) for i, item in enumerate(value)
        ]

    def deserialize_tuple(
        self, value: object, hint: object, ctx: DecodeContext
    ) -> tuple[object, ...]:
        if not isinstance(value, list):
            ctx.throw_mismatch(f"an array for {type_name(hint)}", value)
        args = get_args(hint)
        if not args:
            return tuple(value)
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(
                ctx.decode_value(item, args[0], at=i) for i, item in enumerate(value)
            )
        if len(args) != len(value):
            ctx.throw_mismatch(f"an array of length {len(args)}", value)
        return tuple(
            ctx.decode_value(item, arg, at=i)
            for i, (item, arg) in enumerate(zip(value, args))
        )

    def deserialize_set(
        self, value: object, hint: object, ctx: DecodeContext
    ) -> AbstractSet[object]:
        if not isinstance(value, list):
            ctx.throw_mismatch(f"an array for {type_name(hint)}", value)
        element_hint = self._element_hint(hint)
        items = [
            ctx.decode_value(item, element_hint, at=i) for i, item in enumerate(value)
        ]
        try:
            if (get_origin(hint) or hint) is frozenset:
                return frozenset(items)
            return set(items)
        except TypeError as e:
            ctx.throw(f"{type_name(hint)} elements must be hashable", cause=e)

    def deserialize_dict(
        self, value: object, hint: object, ctx: DecodeContext
    ) -> dict[object, object]:
        if not isinstance(value, dict):
            ctx.throw_mismatch(f"an object for {type_name(hint)}", value)
        args = get_args(hint)
        key_hint, value_hint = args if len(args) == 2 else (Any, Any)
        return {
            self._decode_mapping_key(key, key_hint, ctx): ctx.decode_value(
                item, value_hint, at=key
            )
            for key, item in value.items()
        }

    def _decode_mapping_key(
        self, key: str, key_hint: object, ctx: DecodeContext
    ) -> object:
        if key_hint is int:
            try:
                return int(key)
            except ValueError as e:
                ctx.throw_mismatch("an integer object key", key, cause=e)
        return ctx.decode_value(key, key_hint, at=key)


default_type_readers: Final = TypeReaderRegistry()
"""The standard classes `TypeReader` decodes, and the functions it uses for them."""

default_type_readers.register(bool, TypeReader.deserialize_bool)
default_type_readers.register(int, TypeReader.deserialize_int)
default_type_readers.register(float, TypeReader.deserialize_float)
default_type_readers.register(str, TypeReader.deserialize_str)
default_type_readers.register((bytes, bytearray), TypeReader.deserialize_bytes)
default_type_readers.register(datetime, TypeReader.deserialize_datetime)
default_type_readers.register(date, TypeReader.deserialize_date)
default_type_readers.register(time, TypeReader.deserialize_time)
default_type_readers.register(uuid.UUID, TypeReader.deserialize_uuid)
default_type_readers.register(Decimal, TypeReader.deserialize_decimal)
default_type_readers.register(
    (list, Sequence, MutableSequence), TypeReader.deserialize_list
)
default_type_readers.register(tuple, TypeReader.deserialize_tuple)
default_type_readers.register(
    (set, frozenset, Set, MutableSet), TypeReader.deserialize_set
)
default_type_readers.register(
    (dict, Mapping, MutableMapping), TypeReader.deserialize_dict
)

default_decode_steps: Final[Sequence[DecodeStep]] = (TypeReader(),)
"""
The default sequence of decode steps used to create Python values.

This is a `TypeReader` with no options changed from the defaults.
"""
