"""
Data Mappers
============

Conversions between the network, storage and domain representations.
Loaders depend on this interface, never on an implementation.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, Optional, TypeVar

N = TypeVar("N")  # network (remote) model
S = TypeVar("S")  # storage (local) model
D = TypeVar("D")  # domain model


class DataMapper(ABC, Generic[N, S, D]):
    """
    Data models mapper allowing different models for domain/network/storage layers.

    remote_to_local runs on every successful remote value before it is
    persisted or surfaced; local_to_domain runs on every value handed to the
    caller.
    """

    @abstractmethod
    def remote_to_local(self, remote_model: N) -> S:
        """Convert a network model into its storage representation."""
        pass

    @abstractmethod
    def local_to_domain(self, local_model: S) -> D:
        """Convert a storage model into the domain model surfaced to callers."""
        pass


class IdentityMapper(DataMapper):
    """Mapper for sources that use one model on every layer."""

    def remote_to_local(self, remote_model):
        return remote_model

    def local_to_domain(self, local_model):
        return local_model


class FunctionMapper(DataMapper):
    """
    Mapper built from plain functions.

    Example:
        >>> mapper = FunctionMapper(
        ...     remote_to_local=lambda payload: Row(**payload),
        ...     local_to_domain=lambda row: User(id=row.id, name=row.name),
        ... )
    """

    def __init__(
        self,
        remote_to_local: Optional[Callable] = None,
        local_to_domain: Optional[Callable] = None
    ):
        """
        Args:
            remote_to_local: Network -> storage conversion (identity if None)
            local_to_domain: Storage -> domain conversion (identity if None)
        """
        self._remote_to_local = remote_to_local
        self._local_to_domain = local_to_domain

    def remote_to_local(self, remote_model):
        if self._remote_to_local is None:
            return remote_model
        return self._remote_to_local(remote_model)

    def local_to_domain(self, local_model):
        if self._local_to_domain is None:
            return local_model
        return self._local_to_domain(local_model)
