"""
Presence Type Implementation.

Lookups in the registry return an explicit ``Found``/``Absent`` value
instead of ``None`` so that callers branch on the variant rather than
on scattered null checks.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    """
    A lookup that matched.

    Attributes:
        value: The matched item.
        index: Position of the item in its container.
    """
    value: T
    index: int

    def is_found(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Absent:
    """A lookup that matched nothing."""
    key: str

    def is_found(self) -> bool:
        return False

    def unwrap(self):
        raise LookupError(f"Called unwrap on Absent: {self.key}")


# Type alias for the lookup result
Lookup = Union[Found[T], Absent]
