"""Base class for use cases."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
P = TypeVar("P")


class UseCase(ABC, Generic[T, P]):
    """
    A single application operation.

    T is what the call returns, P is its one parameter.
    Use cases are awaited directly: `await use_case(params)`.
    """

    @abstractmethod
    async def __call__(self, params: P) -> T:
        pass
