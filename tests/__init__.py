"""Tests for GraphQL-vars"""
