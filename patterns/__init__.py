"""Reusable patterns shared by the API verticals.

Each module is a self-contained building block: the async repository layer
with its store error kinds, and the frozen-dataclass domain configuration.
"""
