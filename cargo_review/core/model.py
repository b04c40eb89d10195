from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

# Ordered from the direct dependency of the root down to the vulnerable package.
Chain = List[str]


@dataclass
class DependencyRecord:
    name: str
    dependencies: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DependencyRecord":
        """Accepts the package shape printed by `cargo metadata`."""
        deps = []
        for dep in data.get("dependencies") or []:
            dep_name = dep.get("name") if isinstance(dep, dict) else dep
            if dep_name:
                deps.append(dep_name)
        return cls(data["name"], deps)


@dataclass
class AncestryTree:
    name: str
    parents: List["AncestryTree"] = field(default_factory=list)


@dataclass
class Advisory:
    id: str
    package: str
    title: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Advisory":
        return cls(
            id=data["id"],
            package=data.get("package", ""),
            title=data.get("title") or "",
            description=data.get("description") or "",
        )


@dataclass
class AffectedPackage:
    name: str
    version: str = ""


@dataclass
class Vulnerability:
    advisory: Advisory
    package: AffectedPackage

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Vulnerability":
        advisory = Advisory.from_dict(data["advisory"])
        pkg = data.get("package") or {}
        package = AffectedPackage(pkg.get("name") or advisory.package, pkg.get("version", ""))
        return cls(advisory, package)


@dataclass
class Audit:
    found: bool = False
    vulnerabilities: List[Vulnerability] = field(default_factory=list)
    dependency_count: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Audit":
        vulns = data.get("vulnerabilities") or {}
        return cls(
            found=bool(vulns.get("found")),
            vulnerabilities=[Vulnerability.from_dict(v) for v in vulns.get("list") or []],
            dependency_count=(data.get("lockfile") or {}).get("dependency-count", 0),
        )


@dataclass
class Finding:
    advisory: Advisory
    chain: Chain


class ReviewEvent(str, Enum):
    APPROVE = "APPROVE"
    REQUEST_CHANGES = "REQUEST_CHANGES"


@dataclass
class ReviewComment:
    path: str
    line: int
    body: str


@dataclass
class Review:
    event: ReviewEvent
    body: str = ""
    comments: List[ReviewComment] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Request body for the GitHub "create a review" endpoint."""
        payload: Dict[str, Any] = {"event": self.event.value}
        if self.body:
            payload["body"] = self.body
        if self.comments:
            payload["comments"] = [
                {"path": c.path, "line": c.line, "body": c.body} for c in self.comments
            ]
        return payload
