"""APIs package initialization."""

from .Db import Db
from .BatchWriter import BatchWriter
from .AuthApi import AuthApi, map_provider_error

__all__ = ["Db", "BatchWriter", "AuthApi", "map_provider_error"]
