from abc import ABC, abstractmethod
from typing import List

from cargo_review.core.graph import DependencyGraph


class GraphSource(ABC):
    """Base class inherited by every dependency graph source."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Friendly source name (e.g., cargo metadata, Cargo.lock)."""
        pass

    @property
    @abstractmethod
    def required_files(self) -> List[str]:
        """Filenames that must exist in the crate directory."""
        pass

    def detect(self, files: List[str]) -> bool:
        """
        Returns True if this source can be used in the current directory.
        Default implementation checks every required file is present.
        """
        return all(f in files for f in self.required_files)

    @abstractmethod
    def get_dependencies(self) -> DependencyGraph:
        pass
