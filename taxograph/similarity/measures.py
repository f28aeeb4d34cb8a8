"""
Pairwise similarity measures.

Edge-based measures score the distances between the most specific common
ancestor (MSA) of two concepts, the root, and the two concepts. Information
content (IC) based measures score the IC of the concepts and of their most
informative common ancestor (MICA).

Measures (identifier - range):
    pekar_staab_2002 - [0, 1]
    wu_palmer_1994   - [0, 1]
    rada_1989        - (0, 1]
    resnik_1995      - [0, 1] with the intrinsic ICs of this package
    lin_1998         - [0, 1]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, NamedTuple

from typing_extensions import override

from taxograph.constants import DEFAULT_INFORMATION_CONTENT
from taxograph.errors import ConfigurationError
from taxograph.localtypes import ShortestPathMap, VertexId

from .information_content import INTRINSIC_IC

if TYPE_CHECKING:
    from .engine import SimilarityEngine


@dataclass(frozen=True)
class SMConf:
    """Selected measure and its options."""

    measure: str
    options: Mapping[str, Any] = field(default_factory=dict)


class PathDistances(NamedTuple):
    """Edge counts from the MSA to the root and to both compared concepts."""

    msa_to_root: int
    msa_to_a: int
    msa_to_b: int


# =============================================================================
# Formulas
# =============================================================================


def pekar_staab_2002(d: PathDistances) -> float:
    """d(msa, root) / (d(msa, root) + d(msa, a) + d(msa, b)), 1 for root versus root."""
    den = d.msa_to_root + d.msa_to_a + d.msa_to_b
    if den == 0:
        return 1.0
    return d.msa_to_root / den


def wu_palmer_1994(d: PathDistances) -> float:
    den = d.msa_to_a + d.msa_to_b + 2 * d.msa_to_root
    if den == 0:
        return 1.0
    return 2 * d.msa_to_root / den


def rada_1989(d: PathDistances) -> float:
    # Shortest path through the MSA turned into a similarity
    return 1.0 / (1.0 + d.msa_to_a + d.msa_to_b)


def resnik_1995(ic_mica: float, ic_a: float, ic_b: float) -> float:
    return ic_mica


def lin_1998(ic_mica: float, ic_a: float, ic_b: float) -> float:
    den = ic_a + ic_b
    if den == 0:
        return 1.0
    return 2 * ic_mica / den


# =============================================================================
# Measures
# =============================================================================


class SimilarityMeasure(ABC):
    """A pairwise measure, configured once and applied through an engine."""

    identifier: ClassVar[str]
    accepted_options: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, **options: Any) -> None:
        unknown = sorted(set(options) - self.accepted_options)
        if unknown:
            raise ConfigurationError(
                f"Unknown option(s) {', '.join(unknown)} for measure {self.identifier}"
            )

    @abstractmethod
    def sim(self, a: VertexId, b: VertexId, engine: SimilarityEngine) -> float:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class EdgeBasedMeasure(SimilarityMeasure):
    """Scores the MSA/root/concept distances read from one map rooted at the MSA."""

    @override
    def sim(self, a: VertexId, b: VertexId, engine: SimilarityEngine) -> float:
        msa = engine.most_specific_ancestor(a, b)
        root = engine.root
        distances = engine.shortest_paths(msa)
        return self.score(path_distances(distances, msa, root, a, b))

    @abstractmethod
    def score(self, distances: PathDistances) -> float:
        pass


def path_distances(
    distances: ShortestPathMap, msa: VertexId, root: VertexId, a: VertexId, b: VertexId
) -> PathDistances:
    """
    Reads the distance triple out of a shortest-path map rooted at msa.

    Raises:
        ConfigurationError: If root does not subsume msa.
    """
    if root not in distances:
        raise ConfigurationError(f"{msa} is not subsumed by the root {root}")
    return PathDistances(distances[root], distances[a], distances[b])


class PekarStaab2002(EdgeBasedMeasure):
    identifier = "pekar_staab_2002"

    @override
    def score(self, distances: PathDistances) -> float:
        return pekar_staab_2002(distances)


class WuPalmer1994(EdgeBasedMeasure):
    identifier = "wu_palmer_1994"

    @override
    def score(self, distances: PathDistances) -> float:
        return wu_palmer_1994(distances)


class Rada1989(EdgeBasedMeasure):
    identifier = "rada_1989"

    @override
    def score(self, distances: PathDistances) -> float:
        return rada_1989(distances)


class InformationContentMeasure(SimilarityMeasure):
    """Scores the IC of both concepts and of their most informative common ancestor."""

    accepted_options = frozenset({"ic"})

    def __init__(self, ic: str = DEFAULT_INFORMATION_CONTENT, **options: Any) -> None:
        super().__init__(**options)
        if ic not in INTRINSIC_IC:
            raise ConfigurationError(
                f"Unknown information content '{ic}', admitted: {sorted(INTRINSIC_IC)}"
            )
        self.ic = ic

    @override
    def sim(self, a: VertexId, b: VertexId, engine: SimilarityEngine) -> float:
        ic_mica = max(
            engine.information_content(c, self.ic) for c in engine.common_ancestors(a, b)
        )
        return self.score(
            ic_mica,
            engine.information_content(a, self.ic),
            engine.information_content(b, self.ic),
        )

    @abstractmethod
    def score(self, ic_mica: float, ic_a: float, ic_b: float) -> float:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(ic={self.ic!r})"


class Resnik1995(InformationContentMeasure):
    identifier = "resnik_1995"

    @override
    def score(self, ic_mica: float, ic_a: float, ic_b: float) -> float:
        return resnik_1995(ic_mica, ic_a, ic_b)


class Lin1998(InformationContentMeasure):
    identifier = "lin_1998"

    @override
    def score(self, ic_mica: float, ic_a: float, ic_b: float) -> float:
        return lin_1998(ic_mica, ic_a, ic_b)


MEASURES: dict[str, type[SimilarityMeasure]] = {
    measure.identifier: measure
    for measure in (PekarStaab2002, WuPalmer1994, Rada1989, Resnik1995, Lin1998)
}


def build_measure(conf: SMConf | SimilarityMeasure) -> SimilarityMeasure:
    """
    Instantiates the measure selected by conf.

    Raises:
        ConfigurationError: On unknown measure or option.
    """
    if isinstance(conf, SimilarityMeasure):
        return conf
    measure_class = MEASURES.get(conf.measure.strip().lower())
    if measure_class is None:
        raise ConfigurationError(
            f"Unknown measure '{conf.measure}', admitted: {sorted(MEASURES)}"
        )
    return measure_class(**dict(conf.options))
