"""Building blocks for force-directed layouts of citation maps: binary and JSON helpers, a quad tree, the view transform, step-size control and position files."""

__version__ = "0.1.0"

__all__ = [
    "blob",
    "strhash",
    "hashmap",
    "jsmn",
    "jsonstream",
    "quadtree",
    "view",
    "stepping",
    "positions",
]