"""Options controlling how JSON values are decoded."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Final, Union

if TYPE_CHECKING:
    from typing_extensions import Self, TypeAlias


class KeyDecoding(Enum):
    """How JSON object keys are matched to the names of fields."""

    USE_DEFAULT_KEYS = "use_default_keys"
    """Keys are matched to field names unchanged."""
    CONVERT_FROM_SNAKE_CASE = "convert_from_snake_case"
    """`snake_case` keys are converted to `camelCase` before matching."""
    CUSTOM = "custom"
    """Keys are renamed with a mapping of JSON key to field name."""


class DateDecoding(Enum):
    """How JSON values are turned into `datetime` values."""

    ISO8601 = "iso8601"
    """ISO 8601 strings, as accepted by `datetime.fromisoformat()`."""
    SECONDS_SINCE_1970 = "seconds_since_1970"
    """Numbers of seconds since the Unix epoch. Creates UTC datetimes."""
    MILLISECONDS_SINCE_1970 = "milliseconds_since_1970"
    """Numbers of milliseconds since the Unix epoch. Creates UTC datetimes."""
    DEFERRED_TO_DATE = "deferred_to_date"
    """Numbers of seconds since 2001-01-01T00:00:00Z. Creates UTC datetimes."""
    FORMATTED = "formatted"
    """Strings parsed with `datetime.strptime()` and a format string."""
    CUSTOM = "custom"
    """A function receives the JSON value and returns the datetime."""


class DataDecoding(Enum):
    """How JSON values are turned into `bytes` values."""

    BASE64 = "base64"
    """Base64-encoded strings. Invalid base64 characters are rejected."""
    DEFERRED_TO_DATA = "deferred_to_data"
    """Arrays of integers in the range 0..255."""
    CUSTOM = "custom"
    """A function receives the JSON value and returns the bytes."""


class FloatDecoding(Enum):
    """How non-finite (infinite and NaN) float values are decoded."""

    THROW = "throw"
    """Non-finite values are not accepted."""
    CONVERT_FROM_STRING = "convert_from_string"
    """Specific strings represent positive/negative infinity and NaN."""


@dataclass(frozen=True, slots=True)
class KeyStrategy:
    """
    A decoding option selecting how JSON keys are matched to field names.

    Examples
    --------
    >>> KeyStrategy.custom({"server_id": "serverId"}).mapping["server_id"]
    'serverId'
    """

    kind: KeyDecoding = KeyDecoding.USE_DEFAULT_KEYS
    mapping: Mapping[str, str] = field(
        default_factory=lambda: _EMPTY_MAPPING, hash=False
    )
    """JSON key to field name, used when `kind` is `CUSTOM`."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "mapping", MappingProxyType(dict(self.mapping)))

    @classmethod
    def use_default_keys(cls) -> Self:
        return cls(KeyDecoding.USE_DEFAULT_KEYS)

    @classmethod
    def convert_from_snake_case(cls) -> Self:
        return cls(KeyDecoding.CONVERT_FROM_SNAKE_CASE)

    @classmethod
    def custom(cls, mapping: Mapping[str, str]) -> Self:
        """Rename JSON keys to field names. Unmapped keys are left unchanged."""
        return cls(KeyDecoding.CUSTOM, mapping)


@dataclass(frozen=True, slots=True)
class DateStrategy:
    kind: DateDecoding = DateDecoding.ISO8601
    format: str | None = None
    parser: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if self.kind is DateDecoding.FORMATTED and self.format is None:
            raise ValueError("DateDecoding.FORMATTED requires a format")
        if self.kind is DateDecoding.CUSTOM and self.parser is None:
            raise ValueError("DateDecoding.CUSTOM requires a parser")

    @classmethod
    def iso8601(cls) -> Self:
        return cls(DateDecoding.ISO8601)

    @classmethod
    def seconds_since_1970(cls) -> Self:
        return cls(DateDecoding.SECONDS_SINCE_1970)

    @classmethod
    def milliseconds_since_1970(cls) -> Self:
        return cls(DateDecoding.MILLISECONDS_SINCE_1970)

    @classmethod
    def deferred_to_date(cls) -> Self:
        return cls(DateDecoding.DEFERRED_TO_DATE)

    @classmethod
    def formatted(cls, format: str) -> Self:
        return cls(DateDecoding.FORMATTED, format=format)

    @classmethod
    def custom(cls, parser: Callable[[Any], Any]) -> Self:
        return cls(DateDecoding.CUSTOM, parser=parser)


@dataclass(frozen=True, slots=True)
class DataStrategy:
    kind: DataDecoding = DataDecoding.BASE64
    parser: Callable[[Any], bytes] | None = None

    def __post_init__(self) -> None:
        if self.kind is DataDecoding.CUSTOM and self.parser is None:
            raise ValueError("DataDecoding.CUSTOM requires a parser")

    @classmethod
    def base64(cls) -> Self:
        return cls(DataDecoding.BASE64)

    @classmethod
    def deferred_to_data(cls) -> Self:
        return cls(DataDecoding.DEFERRED_TO_DATA)

    @classmethod
    def custom(cls, parser: Callable[[Any], bytes]) -> Self:
        return cls(DataDecoding.CUSTOM, parser=parser)


@dataclass(frozen=True, slots=True)
class FloatStrategy:
    """
    A decoding option for float values JSON can't represent as numbers.

    With `FloatDecoding.CONVERT_FROM_STRING`, a float field whose JSON value is
    exactly one of the three strings is decoded as `inf`, `-inf` or `nan`.
    """

    kind: FloatDecoding = FloatDecoding.THROW
    positive_infinity: str = "Infinity"
    negative_infinity: str = "-Infinity"
    nan: str = "NaN"

    @classmethod
    def throw(cls) -> Self:
        return cls(FloatDecoding.THROW)

    @classmethod
    def convert_from_string(
        cls,
        positive_infinity: str = "Infinity",
        negative_infinity: str = "-Infinity",
        nan: str = "NaN",
    ) -> Self:
        return cls(
            FloatDecoding.CONVERT_FROM_STRING,
            positive_infinity=positive_infinity,
            negative_infinity=negative_infinity,
            nan=nan,
        )


DecodingOption: TypeAlias = Union[
    KeyStrategy, DateStrategy, DataStrategy, FloatStrategy
]
"""One of the option types accepted by the decode functions."""

_EMPTY_MAPPING: Final[Mapping[str, str]] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ResolvedConfig:
    """The single effective value of each kind of option for one decode call."""

    key_strategy: KeyStrategy = field(default_factory=KeyStrategy)
    date_strategy: DateStrategy = field(default_factory=DateStrategy)
    data_strategy: DataStrategy = field(default_factory=DataStrategy)
    float_strategy: FloatStrategy = field(default_factory=FloatStrategy)


_CONFIG_FIELD_BY_OPTION_TYPE: Final[Mapping[type, str]] = MappingProxyType(
    {
        KeyStrategy: "key_strategy",
        DateStrategy: "date_strategy",
        DataStrategy: "data_strategy",
        FloatStrategy: "float_strategy",
    }
)


def resolve(options: Iterable[DecodingOption] | None) -> ResolvedConfig:
    """
    Combine a sequence of options into a `ResolvedConfig`.

    When an option kind occurs more than once, the last one wins. Kinds that
    don't occur get their default.

    Examples
    --------
    >>> config = resolve([FloatStrategy.convert_from_string(nan="nan"),
    ...                   FloatStrategy.convert_from_string(nan="NaN!")])
    >>> config.float_strategy.nan
    'NaN!'
    >>> config.key_strategy.kind
    <KeyDecoding.USE_DEFAULT_KEYS: 'use_default_keys'>
    """
    selected: dict[str, DecodingOption] = {}
    for option in options or ():
        name = _CONFIG_FIELD_BY_OPTION_TYPE.get(type(option))
        if name is None:
            raise TypeError(f"Not a decoding option: {option!r}")
        selected[name] = option
    return ResolvedConfig(**selected)  # type: ignore[arg-type]


def convert_from_snake_case(key: str) -> str:
    """
    Convert a `snake_case` JSON key to `camelCase`.

    Leading and trailing underscores are kept. Keys without an underscore
    between other characters are returned unchanged. Otherwise the first word
    is lower-cased and the others are capitalized.

    Examples
    --------
    >>> convert_from_snake_case("user_name")
    'userName'
    >>> convert_from_snake_case("_private__thing_")
    '_privateThing_'
    >>> convert_from_snake_case("alreadyCamel")
    'alreadyCamel'
    >>> convert_from_snake_case("URL_VALUE")
    'urlValue'
    """
    stripped = key.strip("_")
    if "_" not in stripped:
        return key
    start = len(key) - len(key.lstrip("_"))
    end = start + len(stripped)
    first, *rest = (part for part in stripped.split("_") if part)
    camel = first.lower() + "".join(part.capitalize() for part in rest)
    return f"{key[:start]}{camel}{key[end:]}"
