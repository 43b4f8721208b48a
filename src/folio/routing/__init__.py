"""Routing — route table, route descriptors, resolver and path patterns.

The table is built once during the documentation build and frozen; the
resolver turns names, query strings and route ids into descriptors.
"""
