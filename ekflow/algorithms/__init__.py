"""Edmonds-Karp max-flow and min-cut algorithms."""
