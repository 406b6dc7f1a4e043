from .schemas import Data, DataState, Strategy
from .timeout_decorator import FetchTimeoutError, call_with_timeout, with_timeout, with_configurable_timeout
from .executor_async import AsyncCallExecutor
from .loader_config import LoaderConfig, DEFAULT_CONFIG, FAST_CONFIG, ROBUST_CONFIG
from .logging_setup import setup_logging

__all__ = [
    "Data",
    "DataState",
    "Strategy",
    "FetchTimeoutError",
    "call_with_timeout",
    "with_timeout",
    "with_configurable_timeout",
    "AsyncCallExecutor",
    "LoaderConfig",
    "DEFAULT_CONFIG",
    "FAST_CONFIG",
    "ROBUST_CONFIG",
    "setup_logging",
]
