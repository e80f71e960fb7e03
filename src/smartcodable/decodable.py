"""The post-decode hook capability, and its propagation through sequences."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from functools import singledispatch
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing_extensions import Self

    from smartcodable.deserialize import Source
    from smartcodable.options import DecodingOption


@runtime_checkable
class PostDecodeHook(Protocol):
    """
    A type with a method to call after an instance has been decoded.

    Any class with a `did_finish_mapping()` method satisfies this protocol. It
    doesn't need to subclass it, or `SmartDecodable`.
    """

    def did_finish_mapping(self) -> None:
        """
        Finish initialising the instance after all its fields are decoded.

        Called once for each instance created by a decode function, before the
        instance is returned.
        """


class SmartDecodable(PostDecodeHook):
    """
    A mixin providing a no-op `did_finish_mapping()` and decode classmethods.

    Classes opting in are decoded from JSON objects by field name. Dataclasses
    are constructed with their fields; other classes must be constructable
    without arguments, and have their annotated attributes assigned.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Server(SmartDecodable):
    ...     serverId: int
    ...     name: str = ""
    ...     def did_finish_mapping(self) -> None:
    ...         self.name = self.name or f"server-{self.serverId}"
    >>> Server.deserialize('{"serverId": 3}')
    Server(serverId=3, name='server-3')
    >>> Server.deserialize('{"name": "missing id"}') is None
    True
    """

    __slots__ = ()

    def did_finish_mapping(self) -> None:
        pass

    @classmethod
    def deserialize(
        cls, source: Source, options: Iterable[DecodingOption] | None = None
    ) -> Self | None:
        """Decode a JSON object from a dict, str or bytes as this type."""
        from smartcodable.deserialize import deserialize

        return deserialize(cls, source, options=options)

    @classmethod
    def deserialize_list(
        cls, source: Source, options: Iterable[DecodingOption] | None = None
    ) -> list[Self] | None:
        """Decode a JSON array from a list, str or bytes as a list of this type."""
        from smartcodable.deserialize import deserialize_list

        return deserialize_list(cls, source, options=options)


@singledispatch
def finish_mapping(value: object) -> None:
    """
    Call the post-decode hook of a decoded value.

    Lists and tuples call the hook of each of their elements in order,
    recursively, so every instance in an array of arrays is finished once.
    A list or tuple subclass with its own hook is finished after its elements.
    Values without a hook are ignored.
    """
    if isinstance(value, PostDecodeHook):
        value.did_finish_mapping()


@finish_mapping.register(list)
@finish_mapping.register(tuple)
def _finish_mapping_sequence(value: list[Any] | tuple[Any, ...]) -> None:
    # A stack instead of recursion, so nesting depth is not limited
    stack: list[tuple[Sequence[Any], Iterator[Any]]] = [(value, iter(value))]
    while stack:
        sequence, items = stack[-1]
        for item in items:
            if isinstance(item, (list, tuple)):
                stack.append((item, iter(item)))
                break
            finish_mapping(item)
        else:
            stack.pop()
            if isinstance(sequence, PostDecodeHook):
                sequence.did_finish_mapping()
