import logging
from typing import Dict, FrozenSet, List, Tuple

from cargo_review.core.graph import DependencyGraph
from cargo_review.core.model import AncestryTree, Chain


def build_ancestry_tree(name: str, graph: DependencyGraph) -> AncestryTree:
    """
    Expands every package that (transitively) depends on `name`.

    The visited set belongs to a single branch, so one package may show up
    on several independent branches but never twice on the same path.
    """
    root = AncestryTree(name)
    stack: List[Tuple[AncestryTree, FrozenSet[str]]] = [(root, frozenset([name]))]

    while stack:
        node, visited = stack.pop()
        for record in graph.parents_of(node.name, excluding=visited):
            parent = AncestryTree(record.name)
            node.parents.append(parent)
            stack.append((parent, visited | {record.name}))

    return root


def flatten_ancestry_tree(tree: AncestryTree) -> List[Chain]:
    """One chain per path to a leaf, oldest ancestor first."""
    chains: List[Chain] = []
    stack: List[Tuple[AncestryTree, List[str]]] = [(tree, [tree.name])]

    while stack:
        node, path = stack.pop()
        if not node.parents:
            chains.append(path[::-1])
            continue
        # reversed so the first parent is walked first
        for parent in reversed(node.parents):
            stack.append((parent, path + [parent.name]))

    return chains


def resolve_chains(name: str, graph: DependencyGraph, root_name: str) -> List[Chain]:
    """
    Chains from each direct dependency of `root_name` down to `name`.
    The root itself is trimmed; branches that never reach it are dropped.
    """
    if name == root_name:
        logging.debug(f"{name} is the root package, no dependency chain to report.")
        return []

    tree = build_ancestry_tree(name, graph)
    chains = [
        chain[1:]
        for chain in flatten_ancestry_tree(tree)
        if chain[0] == root_name and len(chain) > 1
    ]
    logging.debug(f"Resolved {len(chains)} chains for {name}.")
    return chains


def filter_shortest_chains(chains: List[Chain]) -> List[Chain]:
    """Keeps the shortest chain per direct dependency (first one wins a tie)."""
    shortest: Dict[str, Chain] = {}
    for chain in chains:
        key = chain[0]
        if key not in shortest or len(chain) < len(shortest[key]):
            shortest[key] = chain
    return list(shortest.values())
