from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple
from typing_extensions import Literal
from .GraphModel import GraphModel
from .VariableAllocator import VariableAllocator

Clause = List[int]


@dataclass
class CNFFormula:
    n_variables: int
    clauses: List[Clause] = field(default_factory=list)

    @property
    def n_clauses(self) -> int:
        return len(self.clauses)

    def to_dimacs_string(self, header: Literal["plain", "dimacs"] = "plain") -> str:
        if header == "dimacs":
            lines = [f"p cnf {self.n_variables} {self.n_clauses}\n"]
        else:
            lines = [f"{self.n_variables} {self.n_clauses}\n"]
        lines.extend(" ".join(map(str, clause)) + " 0\n" for clause in self.clauses)
        return "".join(lines)


class HamiltonianPathEncoder:
    """
    Builds the CNF whose models are exactly the Hamiltonian paths of a graph.

    Variable x[v][p] means "vertex v sits at position p of the path".
    Identifiers are laid out row-major, vertex-first:

                    positions ->   0  1  2
                                  _  _  _
                  vertices    0 | 1  2  3
                              1 | 4  5  6
                              2 | 7  8  9

    With edge_variables on, one more identifier per input edge follows the
    grid. Those propositions never occur in a clause but are counted in the
    reported variable total, which keeps the output identical to the legacy
    format.

    Clause families, emitted in this order:
        AxiomI:  every vertex takes exactly one position.
        AxiomII: every position holds exactly one vertex.
        AxiomA:  no two non-adjacent vertices sit at consecutive positions.

    Attributes:
        graph (GraphModel): The graph being encoded.
        x (List[List[int]]): Position variable identifiers, x[v][p].
        edge_ids (Dict[Tuple[int, int], int]): Edge proposition identifiers,
            empty when edge_variables is off.
        n_variables (int): Number of declared variables.
    """

    def __init__(self, graph: GraphModel, edge_variables: bool = True) -> None:
        self.graph: GraphModel = graph
        self.edge_variables: bool = edge_variables
        self.allocator: VariableAllocator = VariableAllocator()
        n = graph.n_vertices
        self.x: List[List[int]] = self.allocator.allocate_grid(n, n)
        self.edge_ids: Dict[Tuple[int, int], int] = {}
        if edge_variables:
            self.edge_ids = graph.assign_edge_variables(self.allocator)

    def edge_variable(self, u: int, v: int) -> Optional[int]:
        return self.edge_ids.get((u, v))

    @property
    def n_variables(self) -> int:
        return self.allocator.count

    def axiom_i(self) -> Iterator[Clause]:
        """Each vertex occupies at least one and at most one position."""
        n = self.graph.n_vertices
        for v in range(n):
            yield [self.x[v][p] for p in range(n)]
        for v in range(n):
            for p in range(n):
                for q in range(p + 1, n):
                    yield [-self.x[v][p], -self.x[v][q]]

    def axiom_ii(self) -> Iterator[Clause]:
        """Each position is occupied by at least one and at most one vertex."""
        n = self.graph.n_vertices
        for p in range(n):
            yield [self.x[v][p] for v in range(n)]
        for p in range(n):
            for v in range(n):
                for w in range(v + 1, n):
                    yield [-self.x[v][p], -self.x[w][p]]

    def axiom_a(self) -> Iterator[Clause]:
        """
        Forbids a non-adjacent pair {u, v} at positions (k, k+1) in either order.

        Outer loop over k, inner loop over anti-edges in lexicographic order.
        """
        anti_edges = self.graph.anti_edges()
        for k in range(self.graph.n_vertices - 1):
            for u, v in anti_edges:
                yield [-self.x[u][k], -self.x[v][k + 1]]
                yield [-self.x[v][k], -self.x[u][k + 1]]

    def clauses(self) -> Iterator[Clause]:
        yield from self.axiom_i()
        yield from self.axiom_ii()
        yield from self.axiom_a()

    def count_clauses(self) -> int:
        """
        Number of clauses clauses() yields, without generating them.

        Returns:
            int: 2 * (N + N * C(N, 2)) + 2 * |anti-edges| * (N - 1)
        """
        n = self.graph.n_vertices
        if n == 0:
            return 0
        exactly_one = n + n * (n * (n - 1) // 2)
        return 2 * exactly_one + 2 * len(self.graph.anti_edges()) * (n - 1)

    def encode(self) -> CNFFormula:
        return CNFFormula(n_variables=self.n_variables, clauses=list(self.clauses()))


def encode_graph(graph: GraphModel, edge_variables: bool = True) -> CNFFormula:
    return HamiltonianPathEncoder(graph, edge_variables).encode()
