import logging
from typing import List

from cargo_review.core.aggregator import AggregatedReport, aggregate_vulnerabilities
from cargo_review.core.graph import DependencyGraph
from cargo_review.core.manifest import find_dependency_line
from cargo_review.core.model import Audit, Chain, Finding, Review, ReviewComment, ReviewEvent

ADVISORY_URL = "https://rustsec.org/advisories/{id}"


def advisory_link(advisory_id: str) -> str:
    return f"[{advisory_id}]({ADVISORY_URL.format(id=advisory_id)})"


def render_chain(chain: Chain) -> str:
    """Vulnerable package first (bold), direct dependency last."""
    parts = [f"`{name}`" for name in reversed(chain)]
    parts[0] = f"**{parts[0]}**"
    return " → ".join(parts)


def render_summary(report: AggregatedReport) -> str:
    """
    Review body, e.g.:

        # Found Vulnerability Reports

        - `dependency-1`: [RUSTSEC-0000-0001](...)
        - `dependency-2`
          - [RUSTSEC-0000-0002](...)
          - [RUSTSEC-0000-0003](...)
    """
    total = sum(len(findings) for findings in report.values())
    lines = ["# Found Vulnerability Report" + ("s" if total > 1 else ""), ""]

    for dependency, findings in report.items():
        if len(findings) == 1:
            lines.append(f"- `{dependency}`: {advisory_link(findings[0].advisory.id)}")
        else:
            lines.append(f"- `{dependency}`")
            lines.extend(f"  - {advisory_link(f.advisory.id)}" for f in findings)

    return "\n".join(lines) + "\n"


def render_finding(finding: Finding) -> str:
    advisory = finding.advisory
    return (
        f"# Vulnerability Report {advisory_link(advisory.id)}\n\n"
        f"## Dependency Chain\n\n"
        f"{render_chain(finding.chain)}\n\n"
        f"## {advisory.title}\n\n"
        f"{advisory.description}"
    )


def render_comment(findings: List[Finding]) -> str:
    return "\n\n".join(render_finding(f) for f in findings)


def render_comments(report: AggregatedReport, manifest: str, path: str = "Cargo.toml") -> List[ReviewComment]:
    comments = []
    for dependency, findings in report.items():
        line = find_dependency_line(manifest, dependency)
        if line is None:
            logging.debug(f"No declaration of {dependency} found in {path}, anchoring on line 1.")
            line = 1
        comments.append(ReviewComment(path, line, render_comment(findings)))
    return comments


def build_review(
    audit: Audit,
    graph: DependencyGraph,
    root_name: str,
    manifest: str,
    path: str = "Cargo.toml",
) -> Review:
    if not audit.found:
        return Review(ReviewEvent.APPROVE)

    report = aggregate_vulnerabilities(audit.vulnerabilities, graph, root_name)
    return Review(
        ReviewEvent.REQUEST_CHANGES,
        body=render_summary(report),
        comments=render_comments(report, manifest, path),
    )
