import logging
import os
from typing import Optional

from .config import BKTREE, ENV_DISTANCE_EPSILON, ENV_SIMILARITY_THRESHOLD, SIMILARITY
from .damerau_levenshtein import similarity as dl_similarity
from .short_metaphone import encode_packed


def _float_from_env(name: str, default: float) -> float:
    env_value = os.getenv(name)
    if env_value:
        try:
            return float(env_value)
        except ValueError:
            logging.warning("Ignoring invalid value for %s: %r", name, env_value)
    return float(default)


def get_distance_epsilon() -> float:
    """Return the edge-label matching tolerance from env or configuration.

    Environment variable ``FUZZYTREE_DISTANCE_EPSILON`` takes precedence
    over ``BKTREE["distance_epsilon"]``. Negative values are ignored.
    """

    default = BKTREE.get("distance_epsilon", 1e-10)
    epsilon = _float_from_env(ENV_DISTANCE_EPSILON, default)
    if epsilon < 0:
        logging.warning("Negative distance epsilon %s, using %s", epsilon, default)
        return float(default)
    return epsilon


def get_similarity_threshold() -> float:
    """Return the maximum Damerau-Levenshtein ratio from env or configuration."""

    return _float_from_env(ENV_SIMILARITY_THRESHOLD, SIMILARITY.get("max_ratio", 0.25))


def is_similar(a: Optional[str], b: Optional[str], *, max_ratio: Optional[float] = None) -> bool:
    """Return ``True`` if ``a`` and ``b`` differ by at most ``max_ratio``.

    Parameters
    ----------
    a, b: str
        Strings to compare. Empty or missing values never match.
    max_ratio: float, optional
        Largest Damerau-Levenshtein ratio (distance over longest length)
        still considered similar. If omitted, the value defined in
        configuration or environment is used.
    """

    if not a or not b:
        return False

    cutoff = max_ratio if max_ratio is not None else get_similarity_threshold()
    return dl_similarity(a, b) <= cutoff


def phonetic_distance(a: str, b: str) -> int:
    """Discrete metric over packed primary metaphone keys.

    Returns 0 when both words share a primary key and 1 otherwise. Being a
    true metric, it can back a :class:`~fuzzytree.bktree.BKTree` without
    losing matches.
    """

    return 0 if encode_packed(a).primary == encode_packed(b).primary else 1


def sounds_like(a: str, b: str) -> bool:
    """Return ``True`` if any metaphone key of ``a`` equals any key of ``b``.

    Alternate keys take part in the comparison, so "Smith" sounds like
    "Schmidt". This relation is not transitive and must not be used as a
    tree distance.
    """

    keys_a = encode_packed(a)
    keys_b = encode_packed(b)
    candidates_a = {keys_a.primary}
    candidates_b = {keys_b.primary}
    if keys_a.has_alternate:
        candidates_a.add(keys_a.alternate)
    if keys_b.has_alternate:
        candidates_b.add(keys_b.alternate)
    return bool(candidates_a & candidates_b)
