from .errors import HamPathError, MalformedInputError, OutOfRangeVertexError
from .GraphModel import GraphModel
from .VariableAllocator import VariableAllocator
from .HamiltonianPathCNF import CNFFormula, HamiltonianPathEncoder, encode_graph
from .CNFEmitter import CNFEmitter
from .reader import read_instance, read_graph6

__version__ = "0.1.0"
