import logging
from typing import Dict, Iterable, List

from cargo_review.core.chains import filter_shortest_chains, resolve_chains
from cargo_review.core.graph import DependencyGraph
from cargo_review.core.model import Chain, Finding, Vulnerability

AggregatedReport = Dict[str, List[Finding]]


class ChainInvariantError(Exception):
    """A chain does not start at a direct dependency or end at the vulnerable package."""


class ChainCache:
    """Filtered chains per vulnerable package, scoped to one aggregation run."""

    def __init__(self) -> None:
        self._chains: Dict[str, List[Chain]] = {}

    def get(self, package: str, graph: DependencyGraph, root_name: str) -> List[Chain]:
        if package in self._chains:
            logging.debug(f"Reusing chains computed for {package}.")
            return [c for c in self._chains[package] if c[-1] == package]

        chains = filter_shortest_chains(resolve_chains(package, graph, root_name))
        self._chains[package] = chains
        return chains


def direct_dependency(chain: Chain, package: str, root_name: str) -> str:
    """Grouping key of a chain, checked against the chain orientation."""
    if not chain or chain[-1] != package or chain[0] == root_name:
        raise ChainInvariantError(f"Malformed chain for {package}: {chain}")
    return chain[0]


def aggregate_vulnerabilities(
    vulnerabilities: Iterable[Vulnerability],
    graph: DependencyGraph,
    root_name: str,
) -> AggregatedReport:
    """
    Groups every vulnerability under the direct dependencies that pull it in.

    Keys keep the order in which direct dependencies were first reached and
    each key's findings keep the audit order.
    """
    cache = ChainCache()
    report: AggregatedReport = {}

    for vuln in vulnerabilities:
        package = vuln.package.name
        chains = cache.get(package, graph, root_name)

        if not chains:
            logging.warning(f"{vuln.advisory.id}: {package} is not reachable from {root_name}.")

        by_dependency: Dict[str, Chain] = {}
        for chain in chains:
            by_dependency[direct_dependency(chain, package, root_name)] = chain

        for dependency, chain in by_dependency.items():
            report.setdefault(dependency, []).append(Finding(vuln.advisory, chain))

    logging.info(f"Aggregated findings under {len(report)} direct dependencies.")
    return report
