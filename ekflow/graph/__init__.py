"""Graph primitives and helpers.

This package provides the strict directed graph type `StrictDiGraph` and the
`convert` helpers for moving graphs to and from NetworkX.
"""
