"""Tagged JSON values built by the semantic actions."""

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Union


@dataclass(frozen=True, slots=True)
class Null:
    def to_python(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class Bool:
    value: bool

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class Number:
    value: float

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True, slots=True)
class String:
    value: str

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Array:
    items: tuple["ValueNode", ...] = ()

    def append(self, item: "ValueNode") -> "Array":
        return Array(self.items + (item,))

    def __iter__(self) -> Iterator["ValueNode"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, slots=True)
class Object:
    """Members in source order; a key may appear more than once."""

    members: tuple[tuple[str, "ValueNode"], ...] = ()

    def extend(self, other: "Object") -> "Object":
        return Object(self.members + other.members)

    def keys(self) -> list[str]:
        return [key for key, _ in self.members]

    def get(self, key: str, default: Optional["ValueNode"] = None):
        # the last occurrence of a duplicated key wins, as in `to_python`
        for member_key, value in reversed(self.members):
            if member_key == key:
                return value
        return default

    def __iter__(self) -> Iterator[tuple[str, "ValueNode"]]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.members}


ValueNode = Union[Null, Bool, Number, String, Array, Object]


@dataclass(frozen=True, slots=True)
class Fragment:
    """Lexical text of a number under construction (integer, fraction, exponent)."""

    text: str


Node = Union[ValueNode, Fragment]
