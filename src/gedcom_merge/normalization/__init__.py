from .place import normalize_place

__all__ = ["normalize_place"]
