"""
fuzzytree - approximate matching with BK-trees
==============================================

This package indexes items under a pluggable distance function and answers
"everything within distance d of a query" without scanning every item.

Modules principaux:
- bktree: Burkhard-Keller tree with triangle-inequality pruning
- damerau_levenshtein: true Damerau-Levenshtein distance and ratio
- double_metaphone: Double Metaphone phonetic keys
- short_metaphone: metaphone keys packed into 16-bit integers
- utils: configuration getters and ready-made distance adapters

Usage:
    from fuzzytree import BKTree, similarity

    tree = BKTree(similarity)
    tree.extend(["Engineering", "Engineer", "Operations", "Process"])
    list(tree.query("Orocess", 0.25))  # ["Process"]
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .bktree import BKTree, TreeState

from .damerau_levenshtein import distance, similarity

from .double_metaphone import DoubleMetaphone, PhoneticKey, double_metaphone, encode

from .short_metaphone import (
    METAPHONE_INVALID_KEY,
    PackedKey,
    ShortDoubleMetaphone,
    encode_packed,
    pack_key,
)

from .exceptions import FuzzyTreeError, InvalidArgumentError, InvariantViolationError

from .utils import is_similar, phonetic_distance, sounds_like

__all__ = [
    # Index
    "BKTree",
    "TreeState",

    # Distances
    "distance",
    "similarity",
    "is_similar",
    "phonetic_distance",
    "sounds_like",

    # Phonetic keys
    "DoubleMetaphone",
    "ShortDoubleMetaphone",
    "PhoneticKey",
    "PackedKey",
    "METAPHONE_INVALID_KEY",
    "encode",
    "encode_packed",
    "double_metaphone",
    "pack_key",

    # Errors
    "FuzzyTreeError",
    "InvalidArgumentError",
    "InvariantViolationError",
]
