import logging
from typing import Any, Dict, Iterable, List

from cargo_review.core.model import DependencyRecord


class DependencyGraph:
    """
    Reverse adjacency over a flat package list: answers "who depends on X".
    Records sharing a name are kept as separate nodes.
    """

    def __init__(self, records: Iterable[DependencyRecord]) -> None:
        self.records: List[DependencyRecord] = list(records)
        self._dependents: Dict[str, List[DependencyRecord]] = {}

        for record in self.records:
            seen = set()
            for dep_name in record.dependencies:
                if dep_name in seen:
                    continue
                seen.add(dep_name)
                self._dependents.setdefault(dep_name, []).append(record)

        logging.debug(f"Dependency graph indexed. {len(self.records)} packages.")

    @classmethod
    def from_packages(cls, packages: Iterable[Dict[str, Any]]) -> "DependencyGraph":
        records = []
        for pkg in packages or []:
            if not isinstance(pkg, dict) or not pkg.get("name"):
                continue
            records.append(DependencyRecord.from_dict(pkg))
        return cls(records)

    def parents_of(self, name: str, excluding: Iterable[str] = ()) -> List[DependencyRecord]:
        excluded = set(excluding)
        return [r for r in self._dependents.get(name, []) if r.name not in excluded]

    def __len__(self) -> int:
        return len(self.records)
