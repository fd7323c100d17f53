# fuzzytree/config.py - CONFIGURATION
"""
Configuration for the fuzzytree metric index and string metrics.
Values here are defaults; environment overrides are read by the getters
in ``fuzzytree.utils``.
"""

# === INFORMATIONS APPLICATION ===
APP_NAME = "fuzzytree"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "BK-tree range search with Damerau-Levenshtein and Double Metaphone"
APP_LICENSE = "MIT"

# === BK-TREE ===
BKTREE = {
    # Tolerance used when matching a distance against an existing edge label
    "distance_epsilon": 1e-10,
}

# === SIMILARITY ===
SIMILARITY = {
    # Maximum Damerau-Levenshtein ratio still considered "similar"
    "max_ratio": 0.25,
}

# === DOUBLE METAPHONE ===
METAPHONE = {
    "key_length": 4,
    # Padding appended to the word so look-ahead never runs past the end
    "padding": "     ",
    "vowels": "AEIOUY",
    "slavo_germanic_markers": ("W", "K", "CZ", "WITZ"),
}

# === VARIABLES D'ENVIRONNEMENT ===
ENV_DISTANCE_EPSILON = "FUZZYTREE_DISTANCE_EPSILON"
ENV_SIMILARITY_THRESHOLD = "FUZZYTREE_SIMILARITY_THRESHOLD"
