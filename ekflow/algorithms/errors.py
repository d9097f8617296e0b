"""Exceptions raised by the max-flow algorithms."""


class InvalidGraphError(ValueError):
    """Capacity graph cannot be turned into a residual graph.

    Raised when both (u, v) and (v, u) are present: a pre-existing reverse
    edge would be indistinguishable from a backward residual edge.
    """


class ResidualMismatchError(LookupError):
    """Residual graph does not belong to the capacity graph it was paired with."""
