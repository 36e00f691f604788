import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, TextIO
from .errors import HamPathError
from .GraphModel import GraphModel
from .HamiltonianPathCNF import HamiltonianPathEncoder
from .CNFEmitter import CNFEmitter
from .GraphToCNF import Converter
from .reader import read_instance, read_graph6

INPUT_FORMATS = ("edgelist", "g6")
HEADERS = ("plain", "dimacs")


@dataclass
class Config:
    input_format: str = "edgelist"
    edge_variables: bool = True
    header: str = "plain"
    stream: bool = False
    output_dir: Optional[str] = None
    use_temp: bool = True
    verbose: bool = False


def _validate(config: Config) -> Config:
    if config.input_format not in INPUT_FORMATS:
        raise ValueError(f"Unknown input_format: {config.input_format}")
    if config.header not in HEADERS:
        raise ValueError(f"Unknown header: {config.header}")
    return config


def load_config(config_path: Path) -> Config:
    """Load and validate configuration from JSON file into dataclass"""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open() as f:
        data: Dict = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file must hold a JSON object: {config_path}")

    config = Config(
        input_format=data.get('input_format', 'edgelist'),
        edge_variables=data.get('edge_variables', True),
        header=data.get('header', 'plain'),
        stream=data.get('stream', False),
        output_dir=data.get('output_dir'),
        use_temp=data.get('use_temp', data.get('output_dir') is None),
        verbose=data.get('verbose', False)
    )
    return _validate(config)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encode the Hamiltonian path problem of a graph as CNF")
    p.add_argument("input", nargs="?", default="-", help="Input file or '-' for stdin (default)")
    p.add_argument("-o", "--output", type=Path, help="Write CNF here instead of stdout")
    p.add_argument("--config", type=Path, help="JSON configuration file")
    p.add_argument("--format", dest="input_format", choices=INPUT_FORMATS, help="Input format")
    p.add_argument("--no-edge-variables", dest="edge_variables", action="store_false", default=None,
                   help="Do not declare the unused per-edge variables (N^2 variables instead of N^2 + M)")
    p.add_argument("--dimacs", dest="header", action="store_const", const="dimacs",
                   help="Write a 'p cnf' header instead of the plain '<vars> <clauses>' line")
    p.add_argument("--stream", action="store_true", default=None,
                   help="Write clauses as they are generated instead of buffering them")
    p.add_argument("--all", action="store_true", help="g6 only: convert every graph into its own file")
    p.add_argument("--output-dir", help="g6 --all: directory for the CNF files (default: temp files)")
    p.add_argument("-v", "--verbose", action="store_true", default=None, help="Print a summary to stderr")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    config = load_config(args.config) if args.config is not None else Config()
    for name in ("input_format", "edge_variables", "header", "stream", "verbose"):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)
    if args.output_dir is not None:
        config.output_dir = args.output_dir
        config.use_temp = False
    return _validate(config)


def emit(graph: GraphModel, config: Config, out: TextIO) -> None:
    encoder = HamiltonianPathEncoder(graph, config.edge_variables)
    emitter = CNFEmitter(out, config.header)
    if config.stream:
        n_clauses = emitter.write_stream(encoder.n_variables, encoder.count_clauses(), encoder.clauses())
    else:
        formula = encoder.encode()
        emitter.write(formula)
        n_clauses = formula.n_clauses
    if config.verbose:
        print(f"Encoded N={graph.n_vertices} M={len(graph.edges)}: "
              f"{encoder.n_variables} variables, {n_clauses} clauses", file=sys.stderr)


def _read_graph(source: TextIO, config: Config) -> GraphModel:
    if config.input_format == "g6":
        graphs = list(read_graph6(source))
        if not graphs:
            raise HamPathError("No graphs found in input.")
        return graphs[0]
    return read_instance(source)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"Invalid config: {e}", file=sys.stderr)
        return 1

    if args.all:
        if config.input_format != "g6" or args.input == "-":
            print("--all needs a g6 input file.", file=sys.stderr)
            return 2
        try:
            converter = Converter(
                Path(args.input),
                Path(config.output_dir) if config.output_dir else None,
                config.use_temp,
                config.edge_variables,
                config.header
            )
        except (FileNotFoundError, ValueError) as e:
            print(str(e), file=sys.stderr)
            return 2
        for cnf_file in converter.convert_all():
            print(cnf_file.path)
        return 0

    try:
        if args.input == "-":
            graph = _read_graph(sys.stdin, config)
        else:
            input_path = Path(args.input)
            if not input_path.exists():
                print(f"Input file {input_path} not found.", file=sys.stderr)
                return 2
            with input_path.open() as f:
                graph = _read_graph(f, config)
    except HamPathError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output is not None:
        with args.output.open("w") as out:
            emit(graph, config, out)
    else:
        emit(graph, config, sys.stdout)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
