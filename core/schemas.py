"""
Data Envelope
=============

Stateful result wrapper emitted by the loaders, plus the loading strategies.
"""

from typing import Any, Callable, Generic, Optional, TypeVar
from enum import Enum
from pydantic import BaseModel, Field

T = TypeVar("T")
R = TypeVar("R")


class DataState(str, Enum):
    """Possible states of a Data envelope"""
    LOADING = "loading"  # Fetch started, nothing to show yet
    READY = "ready"      # Content available
    ERROR = "error"      # Fetch failed, error recorded


class Strategy(str, Enum):
    """Caching strategies supported by the loaders"""
    REMOTE_FIRST = "remote_first"  # Network first, storage as fallback
    LOCAL_FIRST = "local_first"    # Storage snapshot first, then network
    REMOTE_ONLY = "remote_only"    # Network only, storage never touched


class Data(BaseModel, Generic[T]):
    """
    Stateful data result.

    Tells whether the content is still loading, is ready, or failed to load,
    without raising. Build instances through the factory methods only.

    Two failed envelopes are equal when their errors have the same class and
    the same message, regardless of identity.

    Example:
        >>> Data.ready(42).map_data(str)
        Data(state=<DataState.READY: 'ready'>, content='42', error=None)
        >>> Data.failed(ValueError("boom")) == Data.failed(ValueError("boom"))
        True
    """
    state: DataState = Field(..., description="Envelope state")
    content: Optional[T] = Field(default=None, description="Content, set only when ready")
    error: Optional[BaseException] = Field(default=None, description="Error, set only when failed")

    class Config:
        arbitrary_types_allowed = True
        frozen = True

    @classmethod
    def loading(cls) -> "Data[Any]":
        return cls(state=DataState.LOADING)

    @classmethod
    def ready(cls, content: Any) -> "Data[Any]":
        return cls(state=DataState.READY, content=content)

    @classmethod
    def failed(cls, error: BaseException) -> "Data[Any]":
        if error is None:
            raise ValueError("Failed data requires an error instance")
        return cls(state=DataState.ERROR, error=error)

    def is_loading(self) -> bool:
        return self.state == DataState.LOADING

    def is_ready(self) -> bool:
        return self.state == DataState.READY

    def is_failed(self) -> bool:
        return self.state == DataState.ERROR

    def map_data(self, mapper: Callable[[T], R]) -> "Data[R]":
        """
        Change the content type, keeping the state.

        Args:
            mapper: Conversion applied to the content of a ready envelope

        Returns:
            New envelope; loading and failed envelopes pass through unchanged
        """
        if self.is_failed():
            return Data.failed(self.error)
        if self.is_loading():
            return Data.loading()
        return Data.ready(mapper(self.content))

    def _error_key(self):
        if self.error is None:
            return None
        return type(self.error), str(self.error)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Data):
            return NotImplemented
        return (
            self.state == other.state
            and self.content == other.content
            and self._error_key() == other._error_key()
        )

    def __hash__(self) -> int:
        # content can be unhashable (lists, dicts), equal envelopes still collide
        return hash((self.state, self._error_key()))
