from __future__ import annotations

from types import MappingProxyType

import pytest
from hypothesis import given
from hypothesis import strategies as st

from smartcodable.options import (
    DataDecoding,
    DataStrategy,
    DateDecoding,
    DateStrategy,
    FloatDecoding,
    FloatStrategy,
    KeyDecoding,
    KeyStrategy,
    ResolvedConfig,
    convert_from_snake_case,
    resolve,
)


def test_resolve__defaults() -> None:
    config = resolve(None)

    assert config == ResolvedConfig()
    assert config.key_strategy.kind is KeyDecoding.USE_DEFAULT_KEYS
    assert config.date_strategy.kind is DateDecoding.ISO8601
    assert config.data_strategy.kind is DataDecoding.BASE64
    assert config.float_strategy.kind is FloatDecoding.THROW
    assert resolve([]) == config


def test_resolve__last_option_of_a_kind_wins() -> None:
    first = FloatStrategy.convert_from_string("+inf", "-inf", "nan")
    second = FloatStrategy.convert_from_string("INF", "-INF", "NAN")

    config = resolve([first, KeyStrategy.convert_from_snake_case(), second])

    assert config.float_strategy is second
    assert config.key_strategy.kind is KeyDecoding.CONVERT_FROM_SNAKE_CASE


def test_resolve__kinds_are_independent() -> None:
    date = DateStrategy.seconds_since_1970()
    data = DataStrategy.deferred_to_data()

    config = resolve([date, data])

    assert config.date_strategy is date
    assert config.data_strategy is data
    assert config.key_strategy == KeyStrategy()
    assert config.float_strategy == FloatStrategy()


def test_resolve__rejects_non_options() -> None:
    with pytest.raises(TypeError, match=r"Not a decoding option: 'iso8601'"):
        resolve(["iso8601"])  # type: ignore[list-item]


@given(
    st.lists(
        st.sampled_from(
            [
                DateStrategy.iso8601(),
                DateStrategy.seconds_since_1970(),
                DateStrategy.milliseconds_since_1970(),
                DateStrategy.deferred_to_date(),
                DateStrategy.formatted("%Y"),
            ]
        ),
        min_size=1,
    )
)
def test_resolve__uses_last_date_strategy(options: list[DateStrategy]) -> None:
    assert resolve(options).date_strategy is options[-1]


def test_KeyStrategy_custom__mapping_is_a_read_only_copy() -> None:
    mapping = {"server_id": "serverId"}
    strategy = KeyStrategy.custom(mapping)
    mapping["name"] = "title"

    assert strategy.kind is KeyDecoding.CUSTOM
    assert isinstance(strategy.mapping, MappingProxyType)
    assert dict(strategy.mapping) == {"server_id": "serverId"}


def test_DateStrategy__requires_format_and_parser() -> None:
    with pytest.raises(ValueError, match="requires a format"):
        DateStrategy(DateDecoding.FORMATTED)
    with pytest.raises(ValueError, match="requires a parser"):
        DateStrategy(DateDecoding.CUSTOM)

    assert DateStrategy.formatted("%d/%m/%Y").format == "%d/%m/%Y"


def test_DataStrategy__custom_requires_parser() -> None:
    with pytest.raises(ValueError, match="requires a parser"):
        DataStrategy(DataDecoding.CUSTOM)

    assert DataStrategy.custom(bytes.fromhex).parser is bytes.fromhex


def test_FloatStrategy__defaults() -> None:
    strategy = FloatStrategy.convert_from_string()

    assert strategy.kind is FloatDecoding.CONVERT_FROM_STRING
    assert (strategy.positive_infinity, strategy.negative_infinity, strategy.nan) == (
        "Infinity",
        "-Infinity",
        "NaN",
    )
    assert FloatStrategy.throw() == FloatStrategy()


@pytest.mark.parametrize(
    "key,expected",
    [
        ("user_name", "userName"),
        ("server_id", "serverId"),
        ("a_b_c", "aBC"),
        ("name", "name"),
        ("alreadyCamel", "alreadyCamel"),
        ("_private", "_private"),
        ("__dunder__", "__dunder__"),
        ("_leading_key", "_leadingKey"),
        ("trailing_key_", "trailingKey_"),
        ("double__underscore", "doubleUnderscore"),
        ("URL_VALUE", "urlValue"),
        ("Server_ID", "serverId"),
        ("_HTTP_status_", "_httpStatus_"),
        ("", ""),
        ("_", "_"),
        ("___", "___"),
    ],
)
def test_convert_from_snake_case(key: str, expected: str) -> None:
    assert convert_from_snake_case(key) == expected


@given(st.text(alphabet="abcdefghijklmnopqrstuvwxyzABC0123"))
def test_convert_from_snake_case__keys_without_underscores_are_unchanged(
    key: str,
) -> None:
    assert convert_from_snake_case(key) == key


def test_options_are_hashable() -> None:
    first = KeyStrategy.custom({"server_id": "serverId"})
    second = KeyStrategy.custom({"server_id": "serverId"})

    assert first == second
    assert hash(first) == hash(second)
    assert first != KeyStrategy.custom({"server_id": "id"})
    assert len({resolve([first]), resolve([second]), resolve(None)}) == 2
