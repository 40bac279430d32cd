from .lazy import LazyMap

__all__ = ["LazyMap"]
