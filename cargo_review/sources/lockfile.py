import logging
import os
import sys
from typing import List

from cargo_review.core.graph import DependencyGraph
from cargo_review.core.model import DependencyRecord
from cargo_review.sources.base import GraphSource

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


class LockfileSource(GraphSource):
    def __init__(self, path: str = "Cargo.lock") -> None:
        self.path = path

    @property
    def name(self) -> str:
        return "Cargo.lock"

    @property
    def required_files(self) -> List[str]:
        return [os.path.basename(self.path)]

    def get_dependencies(self) -> DependencyGraph:
        if not os.path.exists(self.path):
            raise FileNotFoundError(f"{self.path} not found.")

        logging.debug(f"Parsing {self.path}...")
        with open(self.path, "rb") as f:
            data = tomllib.load(f)

        records = []
        for pkg in data.get("package", []):
            name = pkg.get("name")
            if not name:
                continue

            # entries look like "serde", "serde 1.0.0" or "serde 1.0.0 (registry+...)"
            deps = [entry.split()[0] for entry in pkg.get("dependencies", []) if entry.strip()]
            records.append(DependencyRecord(name, deps))

        logging.debug(f"{self.path} parsed. {len(records)} packages.")
        return DependencyGraph(records)
