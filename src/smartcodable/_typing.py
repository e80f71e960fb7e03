from __future__ import annotations

from array import array
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from typing_extensions import TypeAlias, TypeGuard


ReadableBinary: TypeAlias = Union["bytes | bytearray | memoryview | array[int]"]
"""Binary data such as `bytes`, `bytearray`, `array.array` and `memoryview`."""


def is_readable_binary(value: object) -> TypeGuard[ReadableBinary]:
    """Return True if a value is binary data that can be read as JSON bytes."""
    return isinstance(value, (bytes, bytearray, memoryview, array))
