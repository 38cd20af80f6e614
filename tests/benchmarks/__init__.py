"""Benchmarks for GraphQL-vars

Run these with ``pytest tests/benchmarks --benchmark-enable``.
"""
