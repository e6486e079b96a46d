"""
Tests for data module (export and loading).
"""

import csv

import pytest
import networkx as nx

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lfr_benchmark.generators.lfr import LFRNetworkGenerator
from lfr_benchmark.data.export import (
    EDGE_COLUMNS,
    NODE_COLUMNS,
    export_csv,
    export_gml,
    generate_gml_lines,
)
from lfr_benchmark.data.network_loader import (
    load_lfr_csv,
    load_lfr_gml,
    load_lfr_network,
)


def _generated(directed=False, seed=42):
    gen = LFRNetworkGenerator(2.5, 1.5, 0.2, 5, 20, 10.0, seed=seed)
    host = nx.DiGraph() if directed else nx.Graph()
    host.add_nodes_from(range(100))
    G = gen.create_network(host)
    return G, gen


class TestGMLExport:
    """Tests for GML export."""

    def test_header(self):
        """Test the graph-level attributes."""
        G, gen = _generated()
        lines = list(generate_gml_lines(G, gen))

        assert lines[0] == "graph ["
        assert lines[1] == "  directed 0"
        assert lines[2] == '  comment "LFR Benchmark Network"'
        assert lines[3] == "  avgDegree 10.0"
        assert lines[4] == "  mu 0.2"
        assert lines[-1] == "]"

    def test_round_trip(self, tmp_path):
        """Test that nodes, edges and communities survive a round trip."""
        G, gen = _generated()
        path = export_gml(G, gen, tmp_path / "net.gml")

        H, communities = load_lfr_gml(path)

        assert not H.is_directed()
        assert H.number_of_nodes() == G.number_of_nodes()
        assert H.number_of_edges() == G.number_of_edges()
        assert communities == gen.node_community_map
        assert H.graph["mu"] == pytest.approx(0.2)
        assert H.graph["avgDegree"] == pytest.approx(10.0)
        for node in H.nodes():
            assert H.nodes[node]["degree"] == G.degree(node)

    def test_edge_types(self, tmp_path):
        """Test that edge types agree with the community labels."""
        G, gen = _generated()
        H, communities = load_lfr_gml(export_gml(G, gen, tmp_path / "net.gml"))

        for u, v, kind in H.edges(data="type"):
            expected = "intra" if communities[u] == communities[v] else "inter"
            assert kind == expected

    def test_directed_round_trip(self, tmp_path):
        """Test a directed network."""
        G, gen = _generated(directed=True)
        H, _ = load_lfr_gml(export_gml(G, gen, tmp_path / "sub" / "net.gml"))

        assert H.is_directed()
        assert H.number_of_edges() == G.number_of_edges()
        assert sorted(H.edges()) == sorted(G.edges())

    def test_string_labels(self, tmp_path):
        """Test that host node labels are kept as the label attribute."""
        G = nx.Graph()
        G.add_nodes_from(f"agent {i}" for i in range(40))
        gen = LFRNetworkGenerator(2.5, 1.5, 0.3, 3, 10, seed=1)
        gen.create_network(G)

        H, _ = load_lfr_gml(export_gml(G, gen, tmp_path / "labels.gml"))
        assert H.nodes[7]["label"] == "agent 7"


class TestCSVExport:
    """Tests for CSV export."""

    def test_columns(self, tmp_path):
        """Test the node and edge table headers."""
        G, gen = _generated()
        nodes_path, edges_path = export_csv(
            G, gen, tmp_path / "nodes.csv", tmp_path / "edges.csv"
        )

        with open(nodes_path, newline="") as f:
            assert next(csv.reader(f)) == NODE_COLUMNS
        with open(edges_path, newline="") as f:
            rows = list(csv.reader(f))

        assert rows[0] == EDGE_COLUMNS
        assert len(rows) - 1 == G.number_of_edges()

    def test_round_trip(self, tmp_path):
        """Test that the tables rebuild the same graph."""
        G, gen = _generated()
        nodes_path, edges_path = export_csv(
            G, gen, tmp_path / "nodes.csv", tmp_path / "edges.csv"
        )

        H, communities = load_lfr_csv(nodes_path, edges_path)

        assert H.number_of_nodes() == G.number_of_nodes()
        assert sorted(tuple(sorted(e)) for e in H.edges()) == \
            sorted(tuple(sorted(e)) for e in G.edges())
        assert communities == gen.node_community_map
        for node in H.nodes():
            assert H.nodes[node]["expected_degree"] == gen.degree_sequence[node]
            assert H.nodes[node]["degree"] <= H.nodes[node]["expected_degree"]


class TestLoadDispatch:
    """Tests for format dispatch."""

    def test_gml_suffix(self, tmp_path):
        """Test loading by .gml suffix."""
        G, gen = _generated()
        path = export_gml(G, gen, tmp_path / "net.gml")

        H, _ = load_lfr_network(path)
        assert H.number_of_edges() == G.number_of_edges()

    def test_csv_suffix(self, tmp_path):
        """Test loading by .csv suffix."""
        G, gen = _generated(directed=True)
        nodes_path, edges_path = export_csv(
            G, gen, tmp_path / "nodes.csv", tmp_path / "edges.csv"
        )

        H, _ = load_lfr_network(nodes_path, edges_path, directed=True)
        assert H.is_directed()
        assert H.number_of_edges() == G.number_of_edges()

    def test_csv_requires_edges(self, tmp_path):
        """Test that a lone node table is rejected."""
        with pytest.raises(ValueError):
            load_lfr_network(tmp_path / "nodes.csv")

    def test_unknown_format(self, tmp_path):
        """Test that unknown suffixes are rejected."""
        with pytest.raises(ValueError):
            load_lfr_network(tmp_path / "net.graphml")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
