from typing import List


class VariableAllocator:
    """
    Hands out CNF variable identifiers for a single encoding run.

    Identifiers are dense and start at 1; 0 terminates a clause in the
    output format and is never assigned.

    Attributes:
        count (int): Number of identifiers handed out so far.
    """

    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError(f"Variable identifiers start at 1, got {start}")
        self._start: int = start
        self._next: int = start

    def allocate(self) -> int:
        """Returns the next free identifier."""
        identifier = self._next
        self._next += 1
        return identifier

    def allocate_grid(self, rows: int, cols: int) -> List[List[int]]:
        """
        Allocates one identifier per cell of a rows x cols grid, row-major.

        Args:
            rows (int): Number of rows (vertices).
            cols (int): Number of columns (positions).

        Returns:
            List[List[int]]: grid[r][c] is the identifier of cell (r, c).
        """
        return [[self.allocate() for _ in range(cols)] for _ in range(rows)]

    @property
    def count(self) -> int:
        return self._next - self._start
