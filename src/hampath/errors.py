class HamPathError(Exception):
    """Base class for errors raised while reading or encoding a graph."""


class MalformedInputError(HamPathError, ValueError):
    """Input ended early, held a non-integer token, or declared negative counts."""


class OutOfRangeVertexError(HamPathError, ValueError):
    """An edge references a vertex outside [1, N]."""

    def __init__(self, vertex: int, n_vertices: int) -> None:
        super().__init__(f"Vertex {vertex} out of range [1, {n_vertices}]")
        self.vertex = vertex
        self.n_vertices = n_vertices
