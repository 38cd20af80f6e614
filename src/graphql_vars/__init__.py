"""GraphQL-vars

GraphQL-vars checks that every operation of a GraphQL document defines all the
variables it uses, either directly or in any of the fragments that it spreads,
directly or indirectly.

It works on documents parsed by GraphQL-core and reports its findings as
GraphQL-core errors, so it can also be run as a validation rule together with the
rules of the GraphQL specification.
"""

# The GraphQL-vars version info.
from .version import version, version_info

# Usages of variables in operations and fragments.
from .variable_usage import (
    VariableUsage,
    collect_usages_and_spreads,
    collect_variable_usages,
)

# The memoized usages of fragments.
from .fragment_usage_index import FragmentUsageIndex

# Check a single operation.
from .check_operation import (
    check_operation,
    get_operation_variable_usages,
    undefined_variable_message,
)

# The validation rule.
from .rules import NoUndefinedVariablesRule

# Check all operations of a document.
from .validate import ValidationAbortedError, validate_variables

__version__ = version
__version_info__ = version_info

__all__ = [
    "version",
    "version_info",
    "VariableUsage",
    "collect_usages_and_spreads",
    "collect_variable_usages",
    "FragmentUsageIndex",
    "check_operation",
    "get_operation_variable_usages",
    "undefined_variable_message",
    "NoUndefinedVariablesRule",
    "ValidationAbortedError",
    "validate_variables",
]
