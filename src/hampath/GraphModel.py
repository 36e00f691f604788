from typing import Dict, List, Optional, Tuple
import networkx as nx
from .errors import MalformedInputError, OutOfRangeVertexError
from .VariableAllocator import VariableAllocator

Edge = Tuple[int, int]


class GraphModel:
    """
    Undirected graph over vertices 0..n_vertices-1 as read from the input.

    Edges are kept in input order, including self-loops and repeated edges.
    Membership is answered from an n x n boolean grid so no pair hashing
    is involved.

    Attributes:
        n_vertices (int): Number of vertices.
        edges (List[Edge]): Input edges, 0-based, in the order they were added.
    """

    def __init__(self, n_vertices: int) -> None:
        if n_vertices < 0:
            raise MalformedInputError(f"Vertex count must be non-negative, got {n_vertices}")
        self.n_vertices: int = n_vertices
        self.edges: List[Edge] = []
        self._neighbors: List[List[int]] = [[] for _ in range(n_vertices)]
        self._matrix: List[List[bool]] = [[False] * n_vertices for _ in range(n_vertices)]
        self._anti_edges: Optional[List[Edge]] = None

    @classmethod
    def from_networkx(cls, graph: nx.Graph) -> "GraphModel":
        """
        Builds a model from a networkx graph.

        Nodes are relabelled to 0..n-1 following their sorted order and edges
        are added in sorted order, so the result does not depend on how the
        networkx graph was populated.
        """
        nodes = sorted(graph.nodes())
        index = {node: i for i, node in enumerate(nodes)}
        model = cls(len(nodes))
        pairs = sorted(tuple(sorted((index[u], index[v]))) for u, v in graph.edges())
        for u, v in pairs:
            model.add_edge(u, v)
        return model

    def _check_vertex(self, v: int) -> None:
        if not 0 <= v < self.n_vertices:
            raise OutOfRangeVertexError(v + 1, self.n_vertices)

    def add_edge(self, u: int, v: int) -> None:
        """
        Adds the undirected edge {u, v} (0-based).

        Raises:
            OutOfRangeVertexError: If either endpoint is outside [0, n_vertices).
        """
        self._check_vertex(u)
        self._check_vertex(v)
        if self._anti_edges is not None:
            raise RuntimeError("Cannot add edges after anti-edges were computed.")
        self.edges.append((u, v))
        self._neighbors[u].append(v)
        if u != v:
            self._neighbors[v].append(u)
        self._matrix[u][v] = True
        self._matrix[v][u] = True

    def has_edge(self, u: int, v: int) -> bool:
        return self._matrix[u][v]

    def neighbors(self, v: int) -> List[int]:
        return list(self._neighbors[v])

    def adjacency(self) -> Dict[int, List[int]]:
        return {v: list(ns) for v, ns in enumerate(self._neighbors)}

    def distinct_edge_count(self) -> int:
        """Number of distinct unordered edges, self-loops excluded."""
        n = self.n_vertices
        return sum(1 for i in range(n) for j in range(i + 1, n) if self._matrix[i][j])

    def anti_edges(self) -> List[Edge]:
        """
        Returns every unordered pair (i, j), i < j, that is not an edge.

        Computed on first call and cached. Pairs come in lexicographic order.
        """
        if self._anti_edges is None:
            n = self.n_vertices
            self._anti_edges = [
                (i, j)
                for i in range(n)
                for j in range(i + 1, n)
                if not self._matrix[i][j]
            ]
        return self._anti_edges

    def assign_edge_variables(self, allocator: VariableAllocator) -> Dict[Edge, int]:
        """
        Allocates one identifier per input edge, in input order, and returns
        them keyed by both (u, v) and (v, u). A repeated edge gets a fresh
        identifier that replaces the earlier one in the lookup.

        The graph keeps no reference to the result, so encoders sharing a
        graph each own their identifiers.
        """
        edge_variables: Dict[Edge, int] = {}
        for u, v in self.edges:
            identifier = allocator.allocate()
            edge_variables[(u, v)] = identifier
            edge_variables[(v, u)] = identifier
        return edge_variables

    def __repr__(self) -> str:
        return f"GraphModel(n_vertices={self.n_vertices}, edges={len(self.edges)})"
