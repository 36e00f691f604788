"""
Input sources for the encoder.

Edge-list format (whitespace separated, 1-based vertices):

    N M
    u_1 v_1
    ...
    u_M v_M

graph6 input is one graph per line; blank lines and ">>" headers are skipped.
"""
from typing import Iterable, Iterator, TextIO
import networkx as nx
from .errors import MalformedInputError, OutOfRangeVertexError
from .GraphModel import GraphModel


def tokens(stream: Iterable[str]) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _next_int(it: Iterator[str], what: str) -> int:
    try:
        token = next(it)
    except StopIteration:
        raise MalformedInputError(f"Input ended while reading {what}") from None
    try:
        return int(token)
    except ValueError:
        raise MalformedInputError(f"Expected an integer for {what}, got {token!r}") from None


def read_instance(stream: TextIO) -> GraphModel:
    """
    Reads an edge-list instance and returns the graph with 0-based vertices.

    The whole instance is read and validated before anything is returned, so
    a caller never sees a partially populated graph.

    Raises:
        MalformedInputError: On truncated input, non-integer tokens or negative counts.
        OutOfRangeVertexError: If an edge endpoint is outside [1, N].
    """
    it = tokens(stream)
    n_vertices = _next_int(it, "the vertex count")
    n_edges = _next_int(it, "the edge count")
    if n_vertices < 0:
        raise MalformedInputError(f"Vertex count must be non-negative, got {n_vertices}")
    if n_edges < 0:
        raise MalformedInputError(f"Edge count must be non-negative, got {n_edges}")

    graph = GraphModel(n_vertices)
    for i in range(n_edges):
        start = _next_int(it, f"edge {i + 1} of {n_edges}")
        stop = _next_int(it, f"edge {i + 1} of {n_edges}")
        for vertex in (start, stop):
            if not 1 <= vertex <= n_vertices:
                raise OutOfRangeVertexError(vertex, n_vertices)
        graph.add_edge(start - 1, stop - 1)
    return graph


def read_graph6(lines: Iterable[str]) -> Iterator[GraphModel]:
    """
    Yields one GraphModel per graph6 line.

    Raises:
        MalformedInputError: If a line cannot be decoded as graph6.
    """
    for i, line in enumerate(lines):
        s = line.strip()
        if not s or s.startswith(">>"):
            continue
        try:
            G = nx.from_graph6_bytes(s.encode())
        except (nx.NetworkXError, ValueError) as e:
            raise MalformedInputError(f"Failed to parse graph6 line {i}: {e}") from e
        yield GraphModel.from_networkx(G)
