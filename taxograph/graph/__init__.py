"""
Graph storage, predicates and vocabularies.

**Store** (store.py)
    - GraphStore: interface consumed by the engines
    - MemoryGraph: in-memory, generation-counting implementation

**Predicates** (predicates.py)
    - PredicateRepository: taxonomic/type predicates and inverses of a session

**Vocabulary** (vocabulary.py)
    - VOCABULARIES: RDF, RDFS and OWL terms removable by pruning
"""

from .predicates import PredicateRepository, local_name
from .store import GraphStore, MemoryGraph
from .vocabulary import VOCABULARIES, vocabulary_terms

__all__ = [
    "GraphStore",
    "MemoryGraph",
    "PredicateRepository",
    "local_name",
    "VOCABULARIES",
    "vocabulary_terms",
]
