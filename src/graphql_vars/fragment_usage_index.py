from __future__ import annotations

from collections import defaultdict
from logging import getLogger
from typing import (
    Callable,
    DefaultDict,
    Dict,
    FrozenSet,
    Iterator,
    List,
    Optional,
    Set,
    Tuple,
)

from graphql.language import (
    DocumentNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
)

from .variable_usage import UsageOrSpread, VariableUsage, collect_usages_and_spreads

__all__ = ["FragmentUsageIndex", "GetFragment"]

logger = getLogger(__name__)

GetFragment = Callable[[str], Optional[FragmentDefinitionNode]]

# a fragment name together with the names of the fragments of the same strongly
# connected component that are being expanded around it
MemoKey = Tuple[str, FrozenSet[str]]

NO_CUTS: FrozenSet[str] = frozenset()


class FragmentExpansion:
    """In-progress marker for a fragment that is currently being expanded."""

    __slots__ = "name", "key", "items", "position", "usages"

    def __init__(self, name: str, key: MemoKey, items: Tuple[UsageOrSpread, ...]):
        self.name = name
        self.key = key
        self.items = items
        self.position = 0
        self.usages: List[VariableUsage] = []


class FragmentUsageIndex:
    """Variable usages of fragments, with all nested fragment spreads expanded.

    The usages of a fragment are computed lazily on first request and memoized for
    the lifetime of the index. Use one index per validation run, since the memo
    table does not notice when the document changes.

    A spread of a fragment that is already being expanded further up the current
    path is a cycle and contributes no usages. Spreads are expanded with an explicit
    stack, so that arbitrarily deep fragment chains can be handled.

    Only fragments of the same strongly connected component of the fragment graph
    can be cut off by a cycle. Therefore the usages of a fragment are memoized
    under its name together with the fragments of its component which are on the
    current path. Without such fragments, the memoized result is the same as if the
    fragment had been expanded as a root, no matter which operation or fragment
    triggered its computation. Every fragment is expanded at most once per distinct
    set of enclosing fragments of its component.
    """

    def __init__(self, get_fragment: GetFragment) -> None:
        self.get_fragment = get_fragment
        self._items: Dict[str, Optional[Tuple[UsageOrSpread, ...]]] = {}
        self._component: Dict[str, int] = {}
        self._memo: Dict[MemoKey, Tuple[VariableUsage, ...]] = {}

    @classmethod
    def from_document(cls, document: DocumentNode) -> FragmentUsageIndex:
        """Create an index for all fragments defined in the given document."""
        fragments = {
            definition.name.value: definition
            for definition in document.definitions
            if isinstance(definition, FragmentDefinitionNode)
        }
        return cls(fragments.get)

    def __contains__(self, fragment_name: str) -> bool:
        """Check whether the usages of the given fragment have been memoized."""
        return (fragment_name, NO_CUTS) in self._memo

    def usages_of(self, fragment_name: str) -> Tuple[VariableUsage, ...]:
        """Get the usages of the given fragment in document order.

        Unknown fragments do not have any usages.
        """
        usages = self._memo.get((fragment_name, NO_CUTS))
        if usages is None:
            usages = self._expand(fragment_name)
        return usages

    def expand_spread(self, spread: FragmentSpreadNode) -> Tuple[VariableUsage, ...]:
        return self.usages_of(spread.name.value)

    def _get_items(self, name: str) -> Optional[Tuple[UsageOrSpread, ...]]:
        """Get the own usages and spreads of a fragment, or None if it is unknown."""
        try:
            return self._items[name]
        except KeyError:
            fragment = self.get_fragment(name)
            items = tuple(collect_usages_and_spreads(fragment)) if fragment else None
            self._items[name] = items
            return items

    def _get_spread_names(self, name: str) -> Iterator[str]:
        for item in self._get_items(name) or ():
            if isinstance(item, FragmentSpreadNode):
                yield item.name.value

    def _assign_components(self, root: str) -> None:
        """Assign strongly connected components to all fragments reachable from root.

        This is Tarjan's algorithm, with an explicit stack instead of recursion.
        Fragments which already have a component are complete and are skipped.
        """
        component = self._component
        if root in component:
            return
        index: Dict[str, int] = {root: 0}
        low_link: Dict[str, int] = {root: 0}
        stack: List[str] = [root]
        on_stack: Set[str] = {root}
        nodes_to_visit: List[Tuple[str, Iterator[str]]] = [
            (root, self._get_spread_names(root))
        ]
        while nodes_to_visit:
            name, spread_names = nodes_to_visit[-1]
            for spread_name in spread_names:
                if spread_name in component:
                    continue
                if spread_name not in index:
                    index[spread_name] = low_link[spread_name] = len(index)
                    stack.append(spread_name)
                    on_stack.add(spread_name)
                    nodes_to_visit.append(
                        (spread_name, self._get_spread_names(spread_name))
                    )
                    break
                if spread_name in on_stack:
                    low_link[name] = min(low_link[name], index[spread_name])
            else:
                nodes_to_visit.pop()
                if nodes_to_visit:
                    parent = nodes_to_visit[-1][0]
                    low_link[parent] = min(low_link[parent], low_link[name])
                if low_link[name] == index[name]:
                    component_id = len(component)
                    while True:
                        member = stack.pop()
                        on_stack.remove(member)
                        component[member] = component_id
                        if member == name:
                            break

    def _expand(self, root: str) -> Tuple[VariableUsage, ...]:
        items = self._get_items(root)
        if items is None:
            return ()
        self._assign_components(root)
        component = self._component
        memo = self._memo

        # in-progress markers, ordered from the outermost to the innermost expansion
        path: Dict[str, FragmentExpansion] = {}
        # names on the path per strongly connected component
        open_names: DefaultDict[int, Set[str]] = defaultdict(set)

        expansion = path[root] = FragmentExpansion(root, (root, NO_CUTS), items)
        open_names[component[root]].add(root)
        stack = [expansion]

        while True:
            expansion = stack[-1]
            if expansion.position < len(expansion.items):
                item = expansion.items[expansion.position]
                expansion.position += 1
                if not isinstance(item, FragmentSpreadNode):
                    expansion.usages.append(item)
                    continue
                name = item.name.value
                if name in path:
                    # cycle: the spread contributes nothing
                    logger.debug(
                        "Spread of fragment '%s' within itself is not expanded.", name
                    )
                    continue
                items = self._get_items(name)
                if items is None:
                    continue
                names = open_names[component[name]]
                key = (name, frozenset(names) if names else NO_CUTS)
                usages = memo.get(key)
                if usages is not None:
                    expansion.usages.extend(usages)
                    continue
                expansion = path[name] = FragmentExpansion(name, key, items)
                names.add(name)
                stack.append(expansion)
            else:
                stack.pop()
                name = expansion.name
                del path[name]
                open_names[component[name]].discard(name)
                usages = memo[expansion.key] = tuple(expansion.usages)
                if not stack:
                    return usages
                stack[-1].usages.extend(usages)
