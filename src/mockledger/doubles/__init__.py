from .double import MockDouble

__all__ = ["MockDouble"]
