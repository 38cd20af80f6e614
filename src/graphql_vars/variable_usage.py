from __future__ import annotations

from typing import Callable, List, NamedTuple, Optional, Sequence, Union

from graphql.language import (
    SKIP,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    OperationDefinitionNode,
    VariableDefinitionNode,
    VariableNode,
    Visitor,
    visit,
)

__all__ = [
    "UsageOrSpread",
    "VariableUsage",
    "VariableUsageCollector",
    "collect_usages_and_spreads",
    "collect_variable_usages",
]


class VariableUsage(NamedTuple):
    """A variable referenced somewhere in an executable definition.

    The ``fragment_name`` is the name of the fragment definition in which the
    variable has been written, or None if it has been written directly inside an
    operation.
    """

    node: VariableNode
    fragment_name: Optional[str] = None

    @property
    def name(self) -> str:
        return self.node.name.value

    @property
    def is_direct(self) -> bool:
        return self.fragment_name is None

    @property
    def via_fragment(self) -> bool:
        return self.fragment_name is not None


UsageOrSpread = Union[VariableUsage, FragmentSpreadNode]

ExpandSpread = Callable[[FragmentSpreadNode], Sequence[VariableUsage]]


class VariableUsageCollector(Visitor):
    """Collect variable usages and fragment spreads of a definition in document order.

    Spreads are recorded as they are, without following them. The directives of a
    spread are collected before the spread itself.
    """

    def __init__(self, fragment_name: Optional[str] = None) -> None:
        super().__init__()
        self.fragment_name = fragment_name
        self.items: List[UsageOrSpread] = []

    def enter_variable_definition(self, _node: VariableDefinitionNode, *_args):
        return SKIP

    def enter_variable(self, node: VariableNode, *_args) -> None:
        self.items.append(VariableUsage(node, self.fragment_name))

    def leave_fragment_spread(self, node: FragmentSpreadNode, *_args) -> None:
        self.items.append(node)


def collect_usages_and_spreads(
    definition: OperationDefinitionNode | FragmentDefinitionNode,
) -> List[UsageOrSpread]:
    """Get the variable usages and fragment spreads of a definition in document order.

    The fragments themselves are not visited.
    """
    fragment_name = (
        definition.name.value
        if isinstance(definition, FragmentDefinitionNode)
        else None
    )
    collector = VariableUsageCollector(fragment_name)
    visit(definition, collector)
    return collector.items


def collect_variable_usages(
    definition: OperationDefinitionNode | FragmentDefinitionNode,
    expand_spread: ExpandSpread,
) -> List[VariableUsage]:
    """Get all variable usages of an operation or fragment in document order.

    Every fragment spread is replaced by what ``expand_spread`` returns for it.
    """
    usages: List[VariableUsage] = []
    for item in collect_usages_and_spreads(definition):
        if isinstance(item, FragmentSpreadNode):
            usages.extend(expand_spread(item))
        else:
            usages.append(item)
    return usages
