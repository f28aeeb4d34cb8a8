"""
Global constants used throughout the project
"""

RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDFS_NS = "http://www.w3.org/2000/01/rdf-schema#"
OWL_NS = "http://www.w3.org/2002/07/owl#"

# Namespace of the identifiers minted by taxograph itself
TAXOGRAPH_NS = "http://taxograph.org/ns#"

RDF_TYPE = RDF_NS + "type"
RDFS_SUBCLASSOF = RDFS_NS + "subClassOf"

# Reserved placeholder, created on demand by rerooting
SYNTHETIC_ROOT = TAXOGRAPH_NS + "root"

DEFAULT_INFORMATION_CONTENT = "seco_2004"

# Accepted spellings of boolean action options
TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
FALSE_STRINGS = frozenset({"false", "no", "off", "0"})
