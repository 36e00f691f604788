from typing import Iterable, List, Optional, TextIO
from typing_extensions import Literal
from .HamiltonianPathCNF import CNFFormula


class CNFEmitter:
    """
    Writes a CNF instance to a text sink.

    Attributes:
        sink (TextIO): Stream the lines are written to.
        header (str): "plain" writes "<variables> <clauses>" as the first line,
            "dimacs" writes "p cnf <variables> <clauses>".
        comments (List[str]): "c" lines placed before a dimacs header.
    """

    def __init__(
            self,
            sink: TextIO,
            header: Literal["plain", "dimacs"] = "plain",
            comments: Optional[List[str]] = None
            ) -> None:
        if header not in ("plain", "dimacs"):
            raise ValueError(f"Unknown header style: {header}")
        if comments and header != "dimacs":
            raise ValueError("Comment lines need the dimacs header.")
        self.sink: TextIO = sink
        self.header: str = header
        self.comments: List[str] = comments or []

    def write(self, formula: CNFFormula) -> None:
        self.write_stream(formula.n_variables, formula.n_clauses, formula.clauses)

    def write_stream(self, n_variables: int, n_clauses: int, clauses: Iterable[List[int]]) -> int:
        """
        Writes the header, then one line per clause terminated by " 0".

        Args:
            n_variables (int): Declared variable count.
            n_clauses (int): Declared clause count.
            clauses (Iterable[List[int]]): Clauses in output order.

        Returns:
            int: Number of clause lines written.

        Raises:
            RuntimeError: If the clauses do not match the declared count.
        """
        for comment in self.comments:
            self.sink.write(f"c {comment}\n")
        if self.header == "dimacs":
            self.sink.write(f"p cnf {n_variables} {n_clauses}\n")
        else:
            self.sink.write(f"{n_variables} {n_clauses}\n")

        written = 0
        for clause in clauses:
            self.sink.write(" ".join(map(str, clause)) + " 0\n")
            written += 1
        if written != n_clauses:
            raise RuntimeError(f"Declared {n_clauses} clauses but wrote {written}")
        return written
