"""
Vocabularies which can be stripped from a graph by vertex pruning.
"""

from taxograph.constants import OWL_NS, RDF_NS, RDFS_NS

RDF_TERMS = (
    "first", "nil", "predicate", "Alt", "Seq", "type", "rest", "value", "Bag",
    "Property", "XMLLiteral", "object", "List", "Statement", "subject",
    "langString", "li",
)

RDFS_TERMS = (
    "subClassOf", "label", "Class", "member", "comment", "Literal", "seeAlso",
    "Resource", "Container", "isDefinedBy", "domain", "subPropertyOf",
    "Datatype", "range", "ContainerMembershipProperty",
)

OWL_TERMS = (
    "AllDifferent", "allValuesFrom", "AnnotationProperty",
    "backwardCompatibleWith", "cardinality", "Class", "complementOf",
    "DatatypeProperty", "DeprecatedClass", "DeprecatedProperty",
    "differentFrom", "disjointWith", "distinctMembers", "equivalentClass",
    "equivalentProperty", "FunctionalProperty", "hasValue", "imports",
    "incompatibleWith", "Individual", "intersectionOf",
    "InverseFunctionalProperty", "inverseOf", "maxCardinality",
    "minCardinality", "ObjectProperty", "oneOf", "onProperty", "Ontology",
    "OntologyProperty", "priorVersion", "Restriction", "sameAs",
    "someValuesFrom", "SymmetricProperty", "TransitiveProperty", "unionOf",
    "versionInfo",
)

VOCABULARIES: dict[str, frozenset[str]] = {
    "RDF": frozenset(RDF_NS + term for term in RDF_TERMS),
    "RDFS": frozenset(RDFS_NS + term for term in RDFS_TERMS),
    "OWL": frozenset(OWL_NS + term for term in OWL_TERMS),
}


def vocabulary_terms(flag: str) -> frozenset[str]:
    """
    Returns the IRIs of a vocabulary given its flag (RDF, RDFS or OWL).

    Raises:
        KeyError: If the flag is unknown.
    """
    return VOCABULARIES[flag.strip().upper()]
