from .equality import deep_equal

__all__ = ["deep_equal"]
