import asyncio
import logging
from typing import List, Optional

from cargo_review.cargo import CargoError, get_audit, get_package_name, read_toml_manifest
from cargo_review.config import Config
from cargo_review.console import print_review
from cargo_review.core.graph import DependencyGraph
from cargo_review.core.model import Audit, Review
from cargo_review.core.report import build_review
from cargo_review.github import submit_review
from cargo_review.helpers import CleanupTask, new_cleanup_tasks_store, parse_command_flags
from cargo_review.sources import detect_source


def prepare_review(audit: Audit, config: Config) -> Review:
    if not audit.found:
        return build_review(audit, DependencyGraph([]), "", "", config.manifest_path)

    root_name = get_package_name(config.manifest_path)

    source = detect_source()
    if not source:
        raise CargoError("No dependency graph source found (Cargo.toml or Cargo.lock).")
    logging.info(f"Reading dependency graph from {source.name}...")
    graph = source.get_dependencies()

    manifest = read_toml_manifest(config.manifest_path)
    return build_review(audit, graph, root_name, manifest, config.manifest_path)


def review_pr(review: Review, config: Config) -> None:
    logging.info(f"Adding review comments to {config.owner}/{config.repository}#{config.pull_request_number} ({config.sha or 'unknown sha'})...")
    asyncio.run(submit_review(config, review))


def run(config: Optional[Config] = None) -> List[CleanupTask]:
    """Runs `cargo audit` and reviews the pull request, or prints the report locally."""
    config = config or Config.from_env()
    cleanup_tasks = new_cleanup_tasks_store()

    logging.info("Running `cargo audit`...")
    audit = get_audit(parse_command_flags(config.args))
    review = prepare_review(audit, config)

    if config.pull_request_number is not None:
        review_pr(review, config)
    else:
        logging.info("Not a pull request event, printing the report instead.")
        print_review(review)

    return cleanup_tasks
