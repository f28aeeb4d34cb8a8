"""
Tests for the graph package: MemoryGraph and PredicateRepository.
"""

import pytest

from taxograph.constants import RDF_TYPE, RDFS_SUBCLASSOF, TAXOGRAPH_NS
from taxograph.errors import ConfigurationError
from taxograph.graph import GraphStore, MemoryGraph, PredicateRepository, local_name
from taxograph.graph.vocabulary import vocabulary_terms
from taxograph.localtypes import Direction, Edge, VertexType

A, B, C = "http://x/A", "http://x/B", "http://x/C"


class TestMemoryGraph:
    def test_is_a_graph_store(self):
        assert isinstance(MemoryGraph(), GraphStore)

    def test_add_edges_creates_endpoints(self):
        graph = MemoryGraph()
        assert graph.add_edges([Edge(A, RDFS_SUBCLASSOF, B)]) == 1
        assert graph.get_vertex(A).type is VertexType.UNDEFINED
        assert graph.list_vertices() == frozenset({A, B})

    def test_duplicate_edges_are_ignored(self):
        graph = MemoryGraph()
        graph.add_edge(A, RDFS_SUBCLASSOF, B)
        generation = graph.generation
        assert graph.add_edges([Edge(A, RDFS_SUBCLASSOF, B)]) == 0
        assert graph.generation == generation

    def test_list_edges_filters(self):
        graph = MemoryGraph()
        graph.add_edge(A, RDFS_SUBCLASSOF, B)
        graph.add_edge(C, RDF_TYPE, A)

        assert graph.list_edges(RDFS_SUBCLASSOF) == frozenset({Edge(A, RDFS_SUBCLASSOF, B)})
        assert graph.list_edges(vertex=A, direction=Direction.OUT) == frozenset(
            {Edge(A, RDFS_SUBCLASSOF, B)}
        )
        assert graph.list_edges(vertex=A, direction=Direction.IN) == frozenset(
            {Edge(C, RDF_TYPE, A)}
        )
        assert len(graph.list_edges(vertex=A)) == 2
        assert graph.list_edges(vertex="http://x/missing") == frozenset()

    def test_neighbors(self):
        graph = MemoryGraph()
        graph.add_edge(A, RDFS_SUBCLASSOF, B)
        graph.add_edge(C, RDFS_SUBCLASSOF, A)
        assert graph.neighbors(A, {RDFS_SUBCLASSOF}, Direction.OUT) == frozenset({B})
        assert graph.neighbors(A, {RDFS_SUBCLASSOF}, Direction.IN) == frozenset({C})
        assert graph.neighbors(A, RDFS_SUBCLASSOF, Direction.BOTH) == frozenset({B, C})
        assert graph.neighbors(A, {RDF_TYPE}, Direction.OUT) == frozenset()

    def test_remove_vertices_removes_incident_edges(self):
        graph = MemoryGraph()
        graph.add_edge(A, RDFS_SUBCLASSOF, B)
        graph.add_edge(C, RDFS_SUBCLASSOF, A)
        assert graph.remove_vertices({A, "http://x/missing"}) == 1
        assert graph.list_edges() == frozenset()
        assert graph.list_vertices() == frozenset({B, C})

    def test_list_vertices_by_type(self):
        graph = MemoryGraph()
        graph.create_vertex(A, VertexType.CLASS)
        graph.create_vertex(B, VertexType.INSTANCE)
        assert graph.list_vertices(VertexType.INSTANCE) == frozenset({B})
        assert graph.list_vertices({VertexType.CLASS, VertexType.INSTANCE}) == frozenset({A, B})

    def test_generation_advances_on_every_mutation(self):
        graph = MemoryGraph()
        generations = [graph.generation]

        graph.create_vertex(A)
        generations.append(graph.generation)
        graph.add_edge(A, RDFS_SUBCLASSOF, B)
        generations.append(graph.generation)
        graph.set_vertex_type(B, VertexType.ROOT)
        generations.append(graph.generation)
        graph.remove_edges({Edge(A, RDFS_SUBCLASSOF, B)})
        generations.append(graph.generation)
        graph.remove_vertices({A})
        generations.append(graph.generation)

        assert generations == sorted(set(generations))

    def test_noop_mutations_keep_generation(self):
        graph = MemoryGraph()
        graph.create_vertex(A)
        generation = graph.generation
        graph.create_vertex(A)
        graph.set_vertex_type(A, VertexType.CLASS)
        graph.remove_edges({Edge(A, RDFS_SUBCLASSOF, B)})
        graph.remove_vertices({B})
        assert graph.generation == generation

    def test_set_type_of_unknown_vertex(self):
        with pytest.raises(ConfigurationError):
            MemoryGraph().set_vertex_type(A, VertexType.CLASS)

    @pytest.mark.parametrize(
        "identifier", ["http://x/A", "  http://x/A ", "urn:isbn:0451450523"]
    )
    def test_resolve_identifier(self, identifier):
        assert MemoryGraph().resolve_identifier(identifier) == identifier.strip()

    @pytest.mark.parametrize("identifier", ["", "A", "http://x/A B", "1http://x"])
    def test_resolve_malformed_identifier(self, identifier):
        with pytest.raises(ConfigurationError):
            MemoryGraph().resolve_identifier(identifier)


class TestPredicateRepository:
    def test_defaults(self):
        predicates = PredicateRepository()
        assert predicates.taxonomic == frozenset({RDFS_SUBCLASSOF})
        assert predicates.type_predicate == RDF_TYPE
        assert predicates.subsumption == RDFS_SUBCLASSOF
        assert RDF_TYPE in predicates

    def test_repositories_are_independent(self):
        first = PredicateRepository()
        second = PredicateRepository()
        first.add_taxonomic("http://x/partOf")
        assert "http://x/partOf" not in second
        assert not second.is_taxonomic("http://x/partOf")

    def test_define_inverse(self):
        predicates = PredicateRepository()
        predicates.define_inverse("http://x/p", "http://x/q")
        assert predicates.inverse("http://x/p") == "http://x/q"
        assert predicates.inverse("http://x/q") == "http://x/p"
        assert predicates.inverses({"http://x/p", "http://x/z"}) == frozenset({"http://x/q"})

    def test_conflicting_inverse(self):
        predicates = PredicateRepository()
        predicates.define_inverse("http://x/p", "http://x/q")
        predicates.define_inverse("http://x/p", "http://x/q")
        with pytest.raises(ConfigurationError, match="already defined"):
            predicates.define_inverse("http://x/p", "http://x/r")

    def test_create_inverse(self):
        predicates = PredicateRepository()
        inverse = predicates.create_inverse(RDFS_SUBCLASSOF)
        assert inverse == TAXOGRAPH_NS + "subClassOf_inverse"
        assert predicates.inverse(inverse) == RDFS_SUBCLASSOF

    def test_requires_a_taxonomic_predicate(self):
        with pytest.raises(ConfigurationError):
            PredicateRepository(taxonomic=())

    def test_local_name(self):
        assert local_name("http://www.w3.org/2000/01/rdf-schema#subClassOf") == "subClassOf"
        assert local_name("http://x/a/b") == "b"
        assert local_name("plain") == "plain"


class TestVocabulary:
    def test_flags_are_case_insensitive(self):
        assert vocabulary_terms(" rdfs ") == vocabulary_terms("RDFS")
        assert RDFS_SUBCLASSOF in vocabulary_terms("RDFS")
        assert RDF_TYPE in vocabulary_terms("RDF")

    def test_unknown_flag(self):
        with pytest.raises(KeyError):
            vocabulary_terms("SKOS")
