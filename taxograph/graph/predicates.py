"""
Predicate repository.

Holds the predicates a processing session treats as taxonomic, the predicate
linking instances to their classes, and the inverse of each predicate.
One repository is created per session and handed to every component that
needs predicate lookups.
"""

import logging
from collections.abc import Iterable

from taxograph.constants import RDF_TYPE, RDFS_SUBCLASSOF, TAXOGRAPH_NS
from taxograph.errors import ConfigurationError
from taxograph.localtypes import PredicateId

logger = logging.getLogger(__name__)


def local_name(iri: str) -> str:
    """Returns the part of an IRI after its last '#', '/' or ':'."""
    for separator in ("#", "/", ":"):
        if separator in iri:
            return iri.rsplit(separator, 1)[1]
    return iri


class PredicateRepository:
    """
    Registry of predicates known to a session.

    Attributes:
        taxonomic: Predicates encoding subsumption (child -> parent).
        type_predicate: Predicate linking an instance to one of its classes.
    """

    def __init__(
        self,
        taxonomic: Iterable[PredicateId] = (RDFS_SUBCLASSOF,),
        type_predicate: PredicateId = RDF_TYPE,
    ) -> None:
        self._taxonomic: set[PredicateId] = set(taxonomic)
        if not self._taxonomic:
            raise ConfigurationError("At least one taxonomic predicate is required")
        self.type_predicate = type_predicate
        self._predicates: set[PredicateId] = {*self._taxonomic, type_predicate}
        self._inverses: dict[PredicateId, PredicateId] = {}

    @property
    def taxonomic(self) -> frozenset[PredicateId]:
        return frozenset(self._taxonomic)

    @property
    def subsumption(self) -> PredicateId:
        """Predicate used when new subsumption edges are created."""
        if RDFS_SUBCLASSOF in self._taxonomic:
            return RDFS_SUBCLASSOF
        return min(self._taxonomic)

    @property
    def predicates(self) -> frozenset[PredicateId]:
        return frozenset(self._predicates)

    def __contains__(self, predicate: object) -> bool:
        return predicate in self._predicates

    def load(self, predicate: PredicateId) -> PredicateId:
        """Registers a predicate and returns it."""
        self._predicates.add(predicate)
        return predicate

    def add_taxonomic(self, predicate: PredicateId) -> PredicateId:
        """Registers a predicate as an additional subsumption relation."""
        self._taxonomic.add(predicate)
        return self.load(predicate)

    def is_taxonomic(self, predicate: PredicateId) -> bool:
        return predicate in self._taxonomic

    def define_inverse(self, predicate: PredicateId, inverse: PredicateId) -> None:
        """
        Declares two predicates as inverses of each other.

        Raises:
            ConfigurationError: If either predicate already has a different inverse.
        """
        for a, b in ((predicate, inverse), (inverse, predicate)):
            existing = self._inverses.get(a)
            if existing is not None and existing != b:
                raise ConfigurationError(
                    f"Cannot set {b} as inverse of {a}: inverse already defined as {existing}"
                )
        self.load(predicate)
        self.load(inverse)
        self._inverses[predicate] = inverse
        self._inverses[inverse] = predicate

    def inverse(self, predicate: PredicateId) -> PredicateId | None:
        return self._inverses.get(predicate)

    def inverses(self, predicates: Iterable[PredicateId]) -> frozenset[PredicateId]:
        """Returns the known inverses of the given predicates."""
        return frozenset(
            inverse
            for inverse in (self._inverses.get(p) for p in predicates)
            if inverse is not None
        )

    def create_inverse(self, predicate: PredicateId) -> PredicateId:
        """Mints, registers and returns a fresh inverse predicate."""
        inverse = self.load(f"{TAXOGRAPH_NS}{local_name(predicate)}_inverse")
        self.define_inverse(predicate, inverse)
        logger.debug(f"Created inverse {inverse} of {predicate}")
        return inverse
