from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Callable, Generic, Iterable, Iterator, List, NamedTuple, Optional, Tuple, TypeVar

from .exceptions import InvalidArgumentError, InvariantViolationError
from .utils import get_distance_epsilon

T = TypeVar("T")
DistanceFunc = Callable[[T, T], float]


class TreeState(Enum):
    EMPTY = "empty"
    POPULATED = "populated"


class _Edge(NamedTuple):
    label: float
    target: int


class _BKTreeNode(Generic[T]):
    __slots__ = ("item", "edges")

    def __init__(self, item: T) -> None:
        self.item = item
        self.edges: List[_Edge] = []


class BKTree(Generic[T]):
    """Burkhard-Keller tree for range queries under a metric.

    Nodes are kept in a flat list and edges refer to children by index, so
    the tree has no parent pointers and traversal is iterative.

    Every edge label is the distance between the two items it connects,
    computed once on insertion. Queries skip any edge whose label falls
    outside ``[d - max_distance, d + max_distance]`` where ``d`` is the
    distance from the query to the current node; this is exact as long as
    ``distance_func`` is a metric. Ratios such as
    :func:`fuzzytree.damerau_levenshtein.similarity` are not strict metrics
    and may occasionally lose a match.

    Items at distance zero from an existing node are not rejected: they are
    stored under that node's zero-labelled edge and returned alongside it.

    Parameters
    ----------
    distance_func: callable
        Pure, deterministic, non-negative ``(a, b) -> float``. Fixed for
        the lifetime of the tree.
    epsilon: float, optional
        Tolerance when matching a distance against an existing edge label.
        Defaults to the configured value.
    """

    def __init__(self, distance_func: DistanceFunc[T], epsilon: Optional[float] = None) -> None:
        if distance_func is None or not callable(distance_func):
            raise InvalidArgumentError("distance_func must be a callable")
        if epsilon is None:
            epsilon = get_distance_epsilon()
        elif epsilon < 0:
            raise InvalidArgumentError("epsilon must not be negative")
        self._distance_func = distance_func
        self._epsilon = float(epsilon)
        self._nodes: List[_BKTreeNode[T]] = []

    @property
    def distance_func(self) -> DistanceFunc[T]:
        return self._distance_func

    @property
    def epsilon(self) -> float:
        return self._epsilon

    @property
    def state(self) -> TreeState:
        return TreeState.POPULATED if self._nodes else TreeState.EMPTY

    @property
    def root(self) -> Optional[T]:
        """Item stored at the root, or ``None`` for an empty tree."""
        return self._nodes[0].item if self._nodes else None

    def is_empty(self) -> bool:
        return not self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __contains__(self, item: object) -> bool:
        if item is None:
            return False
        return any(True for _ in self.find_within_distance(item, 0))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def insert(self, item: T) -> None:
        """Add ``item`` to the tree.

        Raises
        ------
        InvalidArgumentError
            If ``item`` is ``None``.
        """
        if item is None:
            raise InvalidArgumentError("item must have a value")

        if not self._nodes:
            self._nodes.append(_BKTreeNode(item))
            logging.debug(f"BK-tree root created: {item!r}")
            return

        node = self._nodes[0]
        while True:
            dist = self._distance_func(node.item, item)
            edge = self._find_edge(node, dist)
            if edge is not None:
                node = self._nodes[edge.target]
            else:
                self._nodes.append(_BKTreeNode(item))
                node.edges.append(_Edge(dist, len(self._nodes) - 1))
                break

    add = insert

    def extend(self, items: Iterable[T]) -> None:
        """Insert every item of ``items``.

        All items are checked before the first insertion, so a ``None``
        anywhere leaves the tree unchanged.
        """
        pending = list(items)
        if any(item is None for item in pending):
            raise InvalidArgumentError("items must not contain None")
        for item in pending:
            self.insert(item)

    def _find_edge(self, node: _BKTreeNode[T], dist: float) -> Optional[_Edge]:
        for edge in node.edges:
            if abs(edge.label - dist) < self._epsilon or edge.label == dist:
                return edge
        return None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def find_within_distance(self, value: T, max_distance: float) -> Iterator[T]:
        """Lazily yield every item within ``max_distance`` of ``value``.

        Arguments are validated immediately; the traversal itself runs as
        the returned iterator is consumed. Items come out in pre-order, not
        sorted by distance. Inserting while iterating is not supported.

        Raises
        ------
        InvalidArgumentError
            If ``value`` is ``None`` or ``max_distance`` is negative.
        """
        if value is None:
            raise InvalidArgumentError("value must have a value")
        if max_distance is None or math.isnan(max_distance) or max_distance < 0:
            raise InvalidArgumentError("max_distance should be a positive number")

        if not self._nodes:
            return iter(())
        return (item for item, _ in self._iter_matches(value, max_distance))

    query = find_within_distance

    def search(self, value: T, max_distance: float) -> List[Tuple[T, float]]:
        """Return ``(item, distance)`` pairs within ``max_distance``, closest first."""
        if value is None:
            raise InvalidArgumentError("value must have a value")
        if max_distance is None or math.isnan(max_distance) or max_distance < 0:
            raise InvalidArgumentError("max_distance should be a positive number")

        results = list(self._iter_matches(value, max_distance))
        results.sort(key=lambda match: match[1])
        return results

    def _iter_matches(self, value: T, max_distance: float) -> Iterator[Tuple[T, float]]:
        if not self._nodes:
            return
        stack = [0]
        while stack:
            node = self._nodes[stack.pop()]
            dist = self._distance_func(node.item, value)
            if dist <= max_distance:
                yield node.item, dist
            low = dist - max_distance
            high = dist + max_distance
            # Reversed so children are visited in insertion order
            for edge in reversed(node.edges):
                if low <= edge.label <= high:
                    stack.append(edge.target)

    # ------------------------------------------------------------------
    # Introspection / utilities
    # ------------------------------------------------------------------
    def items(self) -> Iterator[T]:
        """Yield every stored item in pre-order."""
        if not self._nodes:
            return
        stack = [0]
        while stack:
            node = self._nodes[stack.pop()]
            yield node.item
            stack.extend(edge.target for edge in reversed(node.edges))

    def depth(self) -> int:
        """Number of nodes on the longest root-to-leaf path (0 when empty)."""
        if not self._nodes:
            return 0
        deepest = 0
        stack = [(0, 1)]
        while stack:
            index, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((edge.target, level + 1) for edge in self._nodes[index].edges)
        return deepest

    def check_invariants(self) -> None:
        """Recompute every edge label and verify sibling labels are distinct.

        Raises
        ------
        InvariantViolationError
            If a label no longer matches the distance between its endpoints
            or two sibling edges share a label.
        """
        for node in self._nodes:
            seen: List[float] = []
            for edge in node.edges:
                child = self._nodes[edge.target]
                actual = self._distance_func(node.item, child.item)
                if abs(actual - edge.label) >= self._epsilon and actual != edge.label:
                    logging.error(
                        f"Edge label drift between {node.item!r} and {child.item!r}: "
                        f"stored {edge.label}, recomputed {actual}"
                    )
                    raise InvariantViolationError(
                        f"Edge label {edge.label} does not match distance {actual} "
                        f"between {node.item!r} and {child.item!r}"
                    )
                if any(abs(label - edge.label) < self._epsilon or label == edge.label for label in seen):
                    raise InvariantViolationError(
                        f"Duplicate edge label {edge.label} under {node.item!r}"
                    )
                seen.append(edge.label)
