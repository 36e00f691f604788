import unittest
import os
import sys
from itertools import permutations, product

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))
from hampath.GraphModel import GraphModel
from hampath.HamiltonianPathCNF import HamiltonianPathEncoder, encode_graph


def make_graph(n, edges):
    """Edges are 1-based, as in the input format."""
    graph = GraphModel(n)
    for u, v in edges:
        graph.add_edge(u - 1, v - 1)
    return graph


def satisfies(clauses, true_vars):
    return all(any((lit > 0) == (abs(lit) in true_vars) for lit in clause) for clause in clauses)


def brute_force_models(clauses, n_variables):
    """Every assignment over 1..n_variables satisfying the clauses, as sets of true variables."""
    models = []
    for bits in product((False, True), repeat=n_variables):
        true_vars = {i + 1 for i, b in enumerate(bits) if b}
        if satisfies(clauses, true_vars):
            models.append(true_vars)
    return models


def permutation_model(encoder, order):
    return {encoder.x[v][p] for p, v in enumerate(order)}


def has_hamiltonian_path(graph):
    n = graph.n_vertices
    return any(all(graph.has_edge(order[k], order[k + 1]) for k in range(n - 1))
               for order in permutations(range(n)))


class TestHamiltonianPathCNF(unittest.TestCase):

    def test_triangle_counts(self):
        graph = make_graph(3, [(1, 2), (2, 3), (3, 1)])
        formula = encode_graph(graph)
        self.assertEqual(formula.n_variables, 12)
        self.assertEqual(formula.n_clauses, 24)

    def test_variable_count_with_and_without_edge_variables(self):
        edges = [(1, 2), (2, 3), (3, 4), (1, 4), (2, 4)]
        self.assertEqual(encode_graph(make_graph(5, edges)).n_variables, 25 + 5)
        self.assertEqual(encode_graph(make_graph(5, edges), edge_variables=False).n_variables, 25)

    def test_clause_count_formula(self):
        for n, edges in [(1, []), (2, []), (3, [(1, 2)]), (4, [(1, 2), (2, 3), (2, 1)]), (5, [(1, 5), (3, 3)])]:
            encoder = HamiltonianPathEncoder(make_graph(n, edges))
            distinct = encoder.graph.distinct_edge_count()
            anti = n * (n - 1) // 2 - distinct
            expected = 2 * (n + n * (n * (n - 1) // 2)) + 2 * anti * (n - 1)
            self.assertEqual(encoder.count_clauses(), expected)
            self.assertEqual(len(list(encoder.clauses())), expected)

    def test_two_vertices_exact_clauses(self):
        formula = encode_graph(make_graph(2, []))
        self.assertEqual(formula.n_variables, 4)
        self.assertEqual(formula.clauses, [
            [1, 2], [3, 4], [-1, -2], [-3, -4],
            [1, 3], [2, 4], [-1, -3], [-2, -4],
            [-1, -4], [-3, -2],
        ])

    def test_axiom_a_order_is_position_major(self):
        encoder = HamiltonianPathEncoder(make_graph(3, []))
        x = encoder.x
        self.assertEqual(list(encoder.axiom_a()), [
            [-x[0][0], -x[1][1]], [-x[1][0], -x[0][1]],
            [-x[0][0], -x[2][1]], [-x[2][0], -x[0][1]],
            [-x[1][0], -x[2][1]], [-x[2][0], -x[1][1]],
            [-x[0][1], -x[1][2]], [-x[1][1], -x[0][2]],
            [-x[0][1], -x[2][2]], [-x[2][1], -x[0][2]],
            [-x[1][1], -x[2][2]], [-x[2][1], -x[1][2]],
        ])

    def test_edge_variables_never_in_clauses(self):
        encoder = HamiltonianPathEncoder(make_graph(4, [(1, 2), (3, 4)]))
        used = {abs(lit) for clause in encoder.clauses() for lit in clause}
        self.assertEqual(used, set(range(1, 17)))
        self.assertEqual(encoder.edge_variable(0, 1), 17)
        self.assertEqual(encoder.edge_variable(3, 2), 18)
        self.assertIsNone(encoder.edge_variable(0, 2))

    def test_encoders_sharing_a_graph_keep_their_own_edge_variables(self):
        graph = make_graph(3, [(1, 2), (2, 3)])
        with_edges = HamiltonianPathEncoder(graph)
        without_edges = HamiltonianPathEncoder(graph, edge_variables=False)
        self.assertEqual(without_edges.edge_ids, {})
        self.assertIsNone(without_edges.edge_variable(0, 1))
        self.assertEqual(without_edges.n_variables, 9)
        self.assertEqual(with_edges.edge_variable(1, 0), 10)
        self.assertEqual(with_edges.n_variables, 11)

    def test_single_vertex(self):
        encoder = HamiltonianPathEncoder(make_graph(1, []))
        self.assertEqual(list(encoder.axiom_i()), [[1]])
        self.assertEqual(list(encoder.axiom_ii()), [[1]])
        self.assertEqual(list(encoder.axiom_a()), [])
        self.assertEqual(brute_force_models(list(encoder.clauses()), 1), [{1}])

    def test_empty_graph(self):
        formula = encode_graph(make_graph(0, []))
        self.assertEqual(formula.n_variables, 0)
        self.assertEqual(formula.clauses, [])

    def test_complete_graph_has_no_adjacency_clauses(self):
        edges = [(i, j) for i in range(1, 5) for j in range(i + 1, 5)]
        encoder = HamiltonianPathEncoder(make_graph(4, edges))
        self.assertEqual(list(encoder.axiom_a()), [])

    def test_permutation_soundness(self):
        encoder = HamiltonianPathEncoder(make_graph(3, []), edge_variables=False)
        clauses = list(encoder.axiom_i()) + list(encoder.axiom_ii())
        models = brute_force_models(clauses, encoder.n_variables)
        expected = [permutation_model(encoder, order) for order in permutations(range(3))]
        self.assertEqual(len(models), 6)
        self.assertCountEqual(models, expected)

    def test_triangle_is_satisfiable(self):
        encoder = HamiltonianPathEncoder(make_graph(3, [(1, 2), (2, 3), (3, 1)]), edge_variables=False)
        models = brute_force_models(list(encoder.clauses()), encoder.n_variables)
        self.assertEqual(len(models), 6)
        self.assertIn(permutation_model(encoder, (0, 1, 2)), models)

    def test_two_isolated_vertices_unsatisfiable(self):
        encoder = HamiltonianPathEncoder(make_graph(2, []), edge_variables=False)
        self.assertEqual(brute_force_models(list(encoder.clauses()), encoder.n_variables), [])

    def test_path_graph_models_are_its_two_directions(self):
        encoder = HamiltonianPathEncoder(make_graph(3, [(1, 2), (2, 3)]), edge_variables=False)
        models = brute_force_models(list(encoder.clauses()), encoder.n_variables)
        self.assertCountEqual(models, [permutation_model(encoder, (0, 1, 2)),
                                       permutation_model(encoder, (2, 1, 0))])

    def test_matches_hamiltonian_path_existence(self):
        # Models of AxiomI/II are permutations, so checking every permutation decides satisfiability.
        cases = [
            (4, [(1, 2), (1, 3), (1, 4)]),          # star
            (4, [(1, 2), (2, 3), (3, 4)]),          # path
            (4, [(1, 2), (3, 4)]),                  # two components
            (4, [(1, 2), (2, 3), (3, 1), (3, 4)]),  # triangle with a tail
            (5, [(1, 2), (2, 3), (3, 1), (4, 5)]),
            (5, [(1, 3), (3, 5), (5, 2), (2, 4)]),
        ]
        for n, edges in cases:
            graph = make_graph(n, edges)
            encoder = HamiltonianPathEncoder(graph)
            clauses = list(encoder.clauses())
            satisfiable = any(satisfies(clauses, permutation_model(encoder, order))
                              for order in permutations(range(n)))
            self.assertEqual(satisfiable, has_hamiltonian_path(graph), msg=f"n={n} edges={edges}")

    def test_encoding_is_deterministic(self):
        edges = [(2, 4), (1, 3), (4, 1), (3, 2)]
        first = encode_graph(make_graph(4, edges))
        second = encode_graph(make_graph(4, edges))
        self.assertEqual(first.to_dimacs_string(), second.to_dimacs_string())


if __name__ == "__main__":
    unittest.main()
