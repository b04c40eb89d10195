import logging
from typing import List

from cargo_review.cargo import get_metadata_packages
from cargo_review.core.graph import DependencyGraph
from cargo_review.helpers import is_command_exists
from cargo_review.sources.base import GraphSource


class MetadataSource(GraphSource):
    @property
    def name(self) -> str:
        return "cargo metadata"

    @property
    def required_files(self) -> List[str]:
        return ["Cargo.toml"]

    def detect(self, files: List[str]) -> bool:
        return super().detect(files) and is_command_exists("cargo")

    def get_dependencies(self) -> DependencyGraph:
        logging.debug("Reading cargo metadata...")
        graph = DependencyGraph.from_packages(get_metadata_packages())
        logging.debug(f"cargo metadata returned {len(graph)} packages.")
        return graph
