from .client import MvmApiClient

__all__ = ["MvmApiClient"]
