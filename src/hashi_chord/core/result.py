"""
Outcome of resolving the edge records.

``resolve_records`` returns ``Ok(records)`` or ``Err(SourceError)`` so the
render and links commands choose how a failure is shown (error page, red
message) rather than wrapping the pipeline in a try block.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise ValueError(f"No records resolved: {self.error}")


Result = Union[Ok[T], Err[E]]


def map_ok(result: Result[T, E], func: Callable[[T], U]) -> Result[U, E]:
    """Build on resolved records; an Err passes through untouched."""
    if isinstance(result, Ok):
        return Ok(func(result.value))
    return result
