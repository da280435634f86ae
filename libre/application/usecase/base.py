"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One step of the sign-in flow, called by a route handler.

    Use cases take and return pydantic models and let LoginError subclasses
    propagate to the HTTP error handlers.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
