from .adapter import TokenFactoryAdapter

__all__ = ["TokenFactoryAdapter"]
