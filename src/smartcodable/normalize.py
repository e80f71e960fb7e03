"""Convert the accepted input forms to JSON bytes, and JSON bytes to a tree."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from smartcodable._errors import NormalizationError

if TYPE_CHECKING:
    from typing_extensions import Never

    from smartcodable._typing import ReadableBinary


class NormalizationStage(Enum):
    """The step of input normalization that failed."""

    MISSING_INPUT = "missing_input"
    """The input was `None`."""
    TO_JSON = "to_json"
    """A mapping or sequence contains values JSON can't represent."""
    TO_BYTES = "to_bytes"
    """JSON text could not be encoded as UTF-8."""
    TO_TEXT = "to_text"
    """JSON bytes are not valid UTF-8."""
    PARSE = "parse"
    """JSON text is not valid JSON."""
    SHAPE = "shape"
    """The top-level JSON value is not the kind of value required."""


def _reject_constant(name: str) -> Never:
    raise ValueError(f"Non-standard JSON constant {name} is not allowed")


def _to_json(value: object, *, description: str) -> str:
    try:
        text = json.dumps(value, allow_nan=False, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise NormalizationError(
            f"{description} cannot be represented as JSON",
            stage=NormalizationStage.TO_JSON,
        ) from e
    _require_str_keys(value, description=description)
    return text


def _require_str_keys(value: object, *, description: str) -> None:
    # json.dumps() stringifies non-str keys. Cycles were already rejected by it.
    pending = [value]
    while pending:
        item = pending.pop()
        if isinstance(item, dict):
            for key, child in item.items():
                if not isinstance(key, str):
                    raise NormalizationError(
                        f"{description} has a non-string object key: {key!r}",
                        stage=NormalizationStage.TO_JSON,
                    )
                pending.append(child)
        elif isinstance(item, (list, tuple)):
            pending.extend(item)


def mapping_to_data(value: Mapping[str, Any] | None) -> bytes:
    """
    Serialize a mapping as UTF-8 JSON bytes.

    Raises
    ------
    NormalizationError
        If the mapping is None, or contains keys or values JSON can't
        represent (including non-finite floats).
    """
    if value is None:
        raise NormalizationError(
            "The provided dict is None", stage=NormalizationStage.MISSING_INPUT
        )
    if not isinstance(value, Mapping):
        raise NormalizationError(
            f"Expected a mapping but found {type(value).__name__}",
            stage=NormalizationStage.SHAPE,
        )
    return text_to_data(_to_json(dict(value), description="The provided dict"))


def array_to_data(value: list[Any] | tuple[Any, ...] | None) -> bytes:
    """Serialize a list or tuple as UTF-8 JSON bytes."""
    if value is None:
        raise NormalizationError(
            "The provided array is None", stage=NormalizationStage.MISSING_INPUT
        )
    if not isinstance(value, (list, tuple)):
        raise NormalizationError(
            f"Expected a list or tuple but found {type(value).__name__}",
            stage=NormalizationStage.SHAPE,
        )
    return text_to_data(_to_json(value, description="The provided array"))


def text_to_data(text: str | None) -> bytes:
    if text is None:
        raise NormalizationError(
            "The provided JSON string is None",
            stage=NormalizationStage.MISSING_INPUT,
        )
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise NormalizationError(
            "JSON string cannot be encoded as UTF-8",
            stage=NormalizationStage.TO_BYTES,
        ) from e


def data_to_tree(data: ReadableBinary | None) -> object:
    """
    Parse UTF-8 JSON bytes into a tree of dict, list, str, int, float, bool
    and None values.

    The non-standard `NaN`, `Infinity` and `-Infinity` constants that the
    `json` module accepts by default are rejected.
    """
    if data is None:
        raise NormalizationError(
            "The provided data is None", stage=NormalizationStage.MISSING_INPUT
        )
    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise NormalizationError(
            "Data is not valid UTF-8", stage=NormalizationStage.TO_TEXT
        ) from e
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise NormalizationError(
            f"Data is not valid JSON: {e}", stage=NormalizationStage.PARSE
        ) from e


def require_array(tree: object) -> list[Any]:
    if not isinstance(tree, list):
        raise NormalizationError(
            f"Expected a JSON array but found {_describe(tree)}",
            stage=NormalizationStage.SHAPE,
        )
    return tree


def _describe(tree: object) -> str:
    if isinstance(tree, dict):
        return "an object"
    if tree is None:
        return "null"
    if isinstance(tree, bool):
        return "a boolean"
    if isinstance(tree, (int, float)):
        return "a number"
    if isinstance(tree, str):
        return "a string"
    return type(tree).__name__
