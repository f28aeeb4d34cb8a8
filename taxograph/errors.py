"""
Exceptions raised by taxograph.

ConfigurationError: invalid action/measure options, unknown identifiers.
CycleDetected: a closure or reduction met a cycle in the taxonomy.
CollaboratorError: an external reasoner, type inferencer or identifier
source failed.
"""


class TaxographError(Exception):
    """Base class of every error raised by this package."""

    pass


class ConfigurationError(TaxographError):
    """Raised when an action, a measure or an identifier is misconfigured."""

    pass


class CycleDetected(TaxographError):
    """Raised when an operation requiring acyclicity finds a cycle."""

    def __init__(self, message: str, vertex: str | None = None):
        super().__init__(message)
        self.vertex = vertex


class CollaboratorError(TaxographError):
    """Raised when an external collaborator fails or reports incompleteness."""

    pass


__all__ = [
    "TaxographError",
    "ConfigurationError",
    "CycleDetected",
    "CollaboratorError",
]
