"""
Tests for metrics module.
"""

import pytest
import networkx as nx
import numpy as np
import pandas as pd

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lfr_benchmark.generators.lfr import LFRNetworkGenerator
from lfr_benchmark.metrics.quality import (
    compute_community_statistics,
    compute_degree_statistics,
    compute_mixing_statistics,
    compute_modularity,
    edge_type,
    parse_communities,
    partition_edges,
    summarize_community_attribute,
    summarize_network,
    validate_network,
)


class TestParseCommunities:
    """Tests for community format handling."""

    def test_list_of_sets(self):
        """Test conversion of a list of sets."""
        assert parse_communities([{0, 1}, {2}]) == {0: 0, 1: 0, 2: 1}

    def test_dict_passthrough(self):
        """Test that a mapping is returned unchanged."""
        mapping = {"a": "x", "b": "y"}
        assert parse_communities(mapping) is mapping


class TestModularity:
    """Tests for modularity computation."""

    def test_two_cliques(self):
        """Test the textbook two-component value."""
        G = nx.Graph([(0, 1), (2, 3)])
        assert compute_modularity(G, [{0, 1}, {2, 3}]) == pytest.approx(0.5)

    def test_single_community_is_zero(self):
        """Test that one all-encompassing community scores 0."""
        G = nx.karate_club_graph()
        assert compute_modularity(G, [set(G.nodes())]) == pytest.approx(0.0, abs=1e-12)

    def test_matches_networkx_on_karate(self):
        """Test against networkx on an unweighted view of karate club."""
        G = nx.karate_club_graph()
        communities = [
            {n for n in G if G.nodes[n]["club"] == "Mr. Hi"},
            {n for n in G if G.nodes[n]["club"] != "Mr. Hi"},
        ]

        expected = nx.community.modularity(G, communities, weight=None)
        assert compute_modularity(G, communities) == pytest.approx(expected, abs=1e-9)

    def test_empty_graph(self):
        """Test that a graph without edges scores 0."""
        G = nx.empty_graph(5)
        assert compute_modularity(G, [set(range(5))]) == 0.0

    def test_nodelist_order_irrelevant(self):
        """Test that node ordering does not change the value."""
        G = nx.barbell_graph(5, 0)
        communities = {n: int(n >= 5) for n in G}
        forward = compute_modularity(G, communities)
        backward = compute_modularity(G, communities, nodelist=list(reversed(list(G))))
        assert forward == pytest.approx(backward)

    def test_directed_uses_total_degree(self):
        """Test the directed variant on a pair of two-cycles."""
        G = nx.DiGraph([(0, 1), (1, 0), (2, 3), (3, 2)])
        # E = 4 and k_i = 2 (in + out): per community 2/8 - (4/8)**2 = 0
        Q = compute_modularity(G, {0: 0, 1: 0, 2: 1, 3: 1})
        assert Q == pytest.approx(0.0, abs=1e-12)

        G.add_edge(0, 2)
        assert compute_modularity(G, {0: 0, 1: 0, 2: 1, 3: 1}) < 0.0


class TestPartitionEdges:
    """Tests for intra/inter edge partitioning."""

    def test_partition(self):
        """Test the edge split."""
        G = nx.path_graph(4)
        intra, inter = partition_edges(G, {0: 0, 1: 0, 2: 1, 3: 1})

        assert sorted(intra) == [(0, 1), (2, 3)]
        assert inter == [(1, 2)]

    def test_edge_type(self):
        """Test edge labelling."""
        mapping = {0: 0, 1: 0, 2: 1}
        assert edge_type(0, 1, mapping) == "intra"
        assert edge_type(1, 2, mapping) == "inter"

    def test_mixing_statistics(self):
        """Test the realized mixing fraction."""
        G = nx.path_graph(4)
        mixing = compute_mixing_statistics(G, {0: 0, 1: 0, 2: 1, 3: 1})

        assert mixing["n_intra"] == 2
        assert mixing["n_inter"] == 1
        assert mixing["realized_mu"] == pytest.approx(1 / 3)


class TestDegreeStatistics:
    """Tests for degree statistics."""

    def test_star(self):
        """Test statistics of a star graph."""
        G = nx.star_graph(4)
        result = compute_degree_statistics(G)

        assert result["mean"] == pytest.approx(1.6)
        assert result["min"] == 1
        assert result["max"] == 4
        assert result["median"] == 1.0
        assert result["n_isolated"] == 0
        assert result["skewness"] > 0

    def test_expected_degrees(self):
        """Test comparison against a target sequence."""
        G = nx.cycle_graph(5)
        result = compute_degree_statistics(G, expected_degrees=[3, 3, 3, 3, 3])

        assert result["expected_mean"] == 3.0
        assert result["mean_deviation"] == pytest.approx(-1.0)

    def test_isolated_nodes_counted(self):
        """Test isolated node counting."""
        G = nx.Graph([(0, 1)])
        G.add_nodes_from([2, 3])
        assert compute_degree_statistics(G)["n_isolated"] == 2

    def test_empty_graph_full_keys(self):
        """Test that an empty graph returns the same keys as a populated one."""
        empty = compute_degree_statistics(nx.Graph())
        populated = compute_degree_statistics(nx.path_graph(3))

        assert set(empty) == set(populated)
        assert empty["mean"] == 0.0
        assert empty["std"] == 0.0
        assert empty["n_isolated"] == 0
        assert np.isnan(empty["skewness"])

    def test_empty_graph_with_empty_expected(self):
        """Test that an empty expected sequence adds no comparison fields."""
        result = compute_degree_statistics(nx.Graph(), expected_degrees=[])
        assert "expected_mean" not in result

    def test_powerlaw_fit_fields(self):
        """Test that the optional fit adds its fields."""
        G = nx.barabasi_albert_graph(300, 3, seed=42)
        result = compute_degree_statistics(G, fit_powerlaw=True)

        assert "powerlaw_alpha" in result
        assert "powerlaw_xmin" in result


class TestCommunityStatistics:
    """Tests for community size statistics."""

    def test_from_lists(self):
        """Test sizes from a list of communities."""
        result = compute_community_statistics([[0, 1, 2], [3, 4], [5, 6]])

        assert result["n_communities"] == 3
        assert result["sizes"] == [3, 2, 2]
        assert result["size_counts"] == {2: 2, 3: 1}
        assert result["mean"] == pytest.approx(7 / 3)

    def test_from_mapping(self):
        """Test sizes from a node -> community mapping."""
        result = compute_community_statistics({0: 1, 1: 1, 2: 0})
        assert result["sizes"] == [1, 2]

    def test_empty(self):
        """Test that no communities gives zero counts."""
        assert compute_community_statistics([])["n_communities"] == 0


class TestCommunityAttribute:
    """Tests for per-community attribute summaries."""

    def test_summary_frame(self):
        """Test the DataFrame layout and values."""
        G = nx.path_graph(4)
        nx.set_node_attributes(G, {0: 1.0, 1: 3.0, 2: -1.0}, "opinion")

        df = summarize_community_attribute(G, {0: 0, 1: 0, 2: 1, 3: 1}, "opinion")

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["community", "size", "count", "mean", "min", "max"]
        row0 = df[df["community"] == 0].iloc[0]
        row1 = df[df["community"] == 1].iloc[0]
        assert row0["mean"] == 2.0
        assert row0["max"] == 3.0
        assert row1["size"] == 2
        assert row1["count"] == 1

    def test_missing_attribute(self):
        """Test that communities without values get NaN."""
        G = nx.path_graph(2)
        df = summarize_community_attribute(G, [{0}, {1}], "opinion")

        assert df["count"].tolist() == [0, 0]
        assert df["mean"].isna().all()


class TestValidateNetwork:
    """Tests for the validation report."""

    def test_clean_network(self):
        """Test a network without problems."""
        G = nx.cycle_graph(6)
        report = validate_network(G, {n: n // 3 for n in G})

        assert report["n_isolated"] == 0
        assert report["n_communities"] == 2
        assert report["density"] == pytest.approx(nx.density(G))
        assert report["warnings"] == []

    def test_problems_reported_not_raised(self):
        """Test that isolated and unassigned nodes produce warnings."""
        G = nx.Graph([(0, 1)])
        G.add_nodes_from([2, 3])
        report = validate_network(G, {0: 0, 1: 0, 2: 1})

        assert report["n_isolated"] == 2
        assert report["n_with_community"] == 3
        assert len(report["warnings"]) == 2

    def test_edgeless_network(self):
        """Test the warning for a graph without edges."""
        report = validate_network(nx.empty_graph(3), {0: 0, 1: 0, 2: 0})
        assert "Network has no edges" in report["warnings"]


class TestSummarizeNetwork:
    """Tests for the generated-network summary."""

    def test_summary_fields(self):
        """Test that the summary agrees with the generator."""
        gen = LFRNetworkGenerator(2.5, 1.5, 0.2, 5, 20, 10.0, seed=42)
        G = gen.create_network(nx.empty_graph(100))
        summary = summarize_network(G, gen)

        assert summary["n_nodes"] == 100
        assert summary["n_edges"] == G.number_of_edges()
        assert summary["n_communities"] == len(gen.communities)
        assert summary["modularity"] == pytest.approx(gen.modularity(G))
        assert summary["actual_average_degree"] == pytest.approx(2 * G.number_of_edges() / 100)
        assert summary["construction"]["edges_created"] == G.number_of_edges()
        assert 0.0 <= summary["realized_mu"] <= 1.0
        assert np.isclose(summary["expected_average_degree"], gen.degree_sequence.mean())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
