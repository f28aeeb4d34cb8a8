"""
Semantic similarity between concepts.

Main entry point: SimilarityEngine.similarity(a, b, SMConf(...))

**Measures** (measures.py)
    Edge-based: pekar_staab_2002, wu_palmer_1994, rada_1989
    IC-based: resnik_1995, lin_1998

**Information content** (information_content.py)
    Intrinsic models: seco_2004, sanchez_2011

**Groupwise** (groupwise.py)
    best_match_average, optimal_assignment
"""

from .engine import SimilarityEngine
from .groupwise import (
    STRATEGIES,
    best_match_average,
    groupwise_similarity,
    optimal_assignment,
)
from .information_content import INTRINSIC_IC, sanchez_2011, seco_2004
from .measures import (
    MEASURES,
    EdgeBasedMeasure,
    InformationContentMeasure,
    Lin1998,
    PathDistances,
    PekarStaab2002,
    Rada1989,
    Resnik1995,
    SimilarityMeasure,
    SMConf,
    WuPalmer1994,
    build_measure,
    lin_1998,
    pekar_staab_2002,
    rada_1989,
    resnik_1995,
    wu_palmer_1994,
)

__all__ = [
    "SimilarityEngine",
    "SMConf",
    # Measures
    "SimilarityMeasure",
    "EdgeBasedMeasure",
    "InformationContentMeasure",
    "PekarStaab2002",
    "WuPalmer1994",
    "Rada1989",
    "Resnik1995",
    "Lin1998",
    "MEASURES",
    "build_measure",
    "PathDistances",
    # Formulas
    "pekar_staab_2002",
    "wu_palmer_1994",
    "rada_1989",
    "resnik_1995",
    "lin_1998",
    # Information content
    "INTRINSIC_IC",
    "seco_2004",
    "sanchez_2011",
    # Groupwise
    "STRATEGIES",
    "groupwise_similarity",
    "best_match_average",
    "optimal_assignment",
]
