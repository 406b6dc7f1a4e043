"""
Strategy-based cached data loading with loading/ready/error envelopes
"""

__version__ = "1.0.0"

from core.schemas import Data, DataState, Strategy
from core.loader_config import LoaderConfig
from .mapper import DataMapper, IdentityMapper, FunctionMapper
from .sources import DataSource, ObservableDataSource, CallableDataSource, EmptySourceError
from .loader import DataLoader
from .loader_infinite import InfiniteDataLoader

__all__ = [
    "Data",
    "DataState",
    "Strategy",
    "LoaderConfig",
    "DataMapper",
    "IdentityMapper",
    "FunctionMapper",
    "DataSource",
    "ObservableDataSource",
    "CallableDataSource",
    "EmptySourceError",
    "DataLoader",
    "InfiniteDataLoader",
]
