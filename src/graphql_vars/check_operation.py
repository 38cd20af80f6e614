from __future__ import annotations

from typing import List, Optional

from graphql.error import GraphQLError
from graphql.language import OperationDefinitionNode

from .fragment_usage_index import FragmentUsageIndex
from .variable_usage import VariableUsage, collect_variable_usages

__all__ = [
    "check_operation",
    "get_operation_variable_usages",
    "undefined_variable_message",
]


def undefined_variable_message(var_name: str, op_name: Optional[str] = None) -> str:
    return (
        f'Variable "${var_name}" is not defined by operation "{op_name}".'
        if op_name
        else f'Variable "${var_name}" is not defined.'
    )


def get_operation_variable_usages(
    operation: OperationDefinitionNode, fragment_index: FragmentUsageIndex
) -> List[VariableUsage]:
    """Get all variable usages reachable from an operation in document order.

    Fragment spreads are expanded in place, using the given fragment index.
    """
    return collect_variable_usages(operation, fragment_index.expand_spread)


def check_operation(
    operation: OperationDefinitionNode, fragment_index: FragmentUsageIndex
) -> List[GraphQLError]:
    """Check that an operation defines all variables it uses.

    Returns one error for every usage of a variable that is not defined by the
    operation, in the order of the usages. Usages that are reached through a
    fragment spread are attributed to the operation if it has a name, in which case
    the error has the location of the operation name as second location.
    """
    defined_names = {
        definition.variable.name.value
        for definition in operation.variable_definitions or ()
    }
    op_name_node = operation.name

    errors: List[GraphQLError] = []
    for usage in get_operation_variable_usages(operation, fragment_index):
        var_name = usage.name
        if var_name in defined_names:
            continue
        if usage.via_fragment and op_name_node:
            errors.append(
                GraphQLError(
                    undefined_variable_message(var_name, op_name_node.value),
                    [usage.node, op_name_node],
                )
            )
        else:
            errors.append(
                GraphQLError(undefined_variable_message(var_name), usage.node)
            )
    return errors
