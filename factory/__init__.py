"""Factory package - Dependency injection for pluggable collaborators"""

from .client_factory import create_cache_client, create_price_source

__all__ = [
    "create_cache_client",
    "create_price_source",
]
