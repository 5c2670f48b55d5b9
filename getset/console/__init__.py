from .sink import Console

__all__ = ["Console"]
