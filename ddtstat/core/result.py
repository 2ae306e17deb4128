from typing import Generic, TypeVar, Optional, cast
from dataclasses import dataclass

T = TypeVar('T')
E = TypeVar('E', bound=Exception)


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Outcome of one service stage: a value, or the error that stopped the pass.

    A metric of 0 is a valid value, so success is decided by the error slot.
    """
    _value: Optional[T] = None
    _error: Optional[E] = None

    def __post_init__(self):
        if self._value is not None and self._error is not None:
            raise ValueError("Result cannot carry both a value and an error")
        if self._value is None and self._error is None:
            raise ValueError("Result needs a value or an error")

    @classmethod
    def success(cls, value: T) -> 'Result[T, E]':
        return cls(_value=value)

    @classmethod
    def failure(cls, error: E) -> 'Result[T, E]':
        return cls(_error=error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self.is_failure:
            raise ValueError(f"No value: stage failed with {self._error!r}")
        return cast(T, self._value)

    @property
    def error(self) -> E:
        if self.is_success:
            raise ValueError("No error: stage succeeded")
        return cast(E, self._error)
