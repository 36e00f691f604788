from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union
from typing_extensions import Literal
import tempfile
import os
import sys
from .errors import HamPathError
from .reader import read_graph6
from .HamiltonianPathCNF import HamiltonianPathEncoder
from .CNFEmitter import CNFEmitter


@dataclass
class CNFFile:
    name: Optional[str]
    path: Union[str, Path]


class Converter:
    """
    Encodes every graph of a graph6 file into its own CNF file.

    Attributes:
        input_path (Path): graph6 file, one graph per line.
        use_temp (bool): Write to temporary files instead of output_dir.
        output_dir (Optional[Path]): Directory for "<stem>_<index>.cnf" files.
        edge_variables (bool): Declare the unused edge propositions.
        header (str): Header style passed to CNFEmitter.
        cnf_files (List[CNFFile]): Files written by convert_all.
    """

    def __init__(
            self,
            input_path: Path,
            output_dir: Optional[Path] = None,
            use_temp: bool = True,
            edge_variables: bool = True,
            header: Literal["plain", "dimacs"] = "plain"
            ) -> None:
        self.input_path: Path = Path(input_path)
        if not self.input_path.exists():
            raise FileNotFoundError(f"Input path not found: {self.input_path}")
        if use_temp and output_dir is not None:
            raise ValueError("Output directory specified when using temp files.")
        if not use_temp and output_dir is None:
            raise ValueError("Output directory required when not using temp files.")
        self.use_temp: bool = use_temp
        self.output_dir: Optional[Path] = Path(output_dir) if output_dir is not None else None
        self.edge_variables: bool = edge_variables
        self.header: str = header
        self.cnf_files: List[CNFFile] = []

    def read_inputs(self) -> List[str]:
        inputs: List[str] = []
        with open(self.input_path, "r") as f:
            for line in f:
                s = line.strip()
                if not s or s.startswith(">>"):
                    continue
                inputs.append(s)
        return inputs

    def _target(self, index: int) -> Path:
        if self.use_temp:
            tmpf = tempfile.NamedTemporaryFile(mode="w+", suffix=".cnf", delete=False)
            tmpf.close()
            return Path(tmpf.name)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir / f"{self.input_path.stem}_{index}.cnf"

    def convert(self, _input: str, index: int) -> Optional[CNFFile]:
        """
        Encodes a single graph6 line. Failures are reported on stderr and
        yield None so that one bad graph does not stop a batch.
        """
        try:
            graph = next(read_graph6([_input]))
            encoder = HamiltonianPathEncoder(graph, self.edge_variables)
            n_clauses = encoder.count_clauses()
        except HamPathError as e:
            print(f"Converter failed on graph {index}: {e}", file=sys.stderr)
            return None

        path = self._target(index)
        comments = [f"graph_index {index}", f"n_vertices {graph.n_vertices}"] if self.header == "dimacs" else None
        try:
            with open(path, "w") as f:
                CNFEmitter(f, self.header, comments).write_stream(encoder.n_variables, n_clauses, encoder.clauses())
        except Exception:
            if os.path.exists(path):
                os.unlink(path)
            raise
        return CNFFile(name=f"{self.input_path}_{index}", path=path)

    def convert_all(self) -> List[CNFFile]:
        self.cnf_files = []
        for i, _input in enumerate(self.read_inputs()):
            cnf_file = self.convert(_input, i)
            if cnf_file is not None:
                self.cnf_files.append(cnf_file)
        return self.cnf_files
