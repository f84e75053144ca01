"""Player circuit: an ordered, capacity-bounded gate list."""

from .core import DEFAULT_MAX_GATES, Circuit

__all__ = ["Circuit", "DEFAULT_MAX_GATES"]
