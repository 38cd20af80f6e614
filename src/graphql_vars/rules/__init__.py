"""Validation rules

This package contains the rules that can be used with ``graphql.validate()`` and
with :func:`graphql_vars.validate_variables`.
"""

from .no_undefined_variables import NoUndefinedVariablesRule

__all__ = ["NoUndefinedVariablesRule"]
