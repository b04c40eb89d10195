import json
import logging
import subprocess
import sys
from typing import Any, Dict, List, Optional

from cargo_review.core.model import Audit

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


class CargoError(Exception):
    pass


def run_cargo(args: List[str], timeout: int = 300, check: bool = True) -> str:
    cmd = ["cargo", *args]
    logging.debug(f"Running {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except (OSError, subprocess.TimeoutExpired) as e:
        logging.error(f"Cargo Error: {e}")
        raise CargoError(f"Fail to run {' '.join(cmd)}: {e}") from e

    if result.stderr:
        logging.debug(result.stderr.strip())

    if check and result.returncode != 0:
        logging.error(f"Cargo Error {result.returncode}: {result.stderr.strip()}")
        raise CargoError(f"{' '.join(cmd)} exited with status {result.returncode}")

    return result.stdout


def _parse_json(output: str, what: str) -> Dict[str, Any]:
    try:
        return json.loads(output)
    except json.JSONDecodeError as e:
        logging.error(f"Unparsable {what} output: {output[:200]!r}")
        raise CargoError(f"Fail to parse {what} output: {e}") from e


def get_audit(extra_args: Optional[List[str]] = None) -> Audit:
    # cargo audit exits non-zero when it finds vulnerabilities
    output = run_cargo(["audit", "--json", *(extra_args or [])], check=False)
    audit = Audit.from_dict(_parse_json(output, "cargo audit"))
    logging.info(
        f"cargo audit checked {audit.dependency_count} dependencies, "
        f"{len(audit.vulnerabilities)} vulnerabilities found."
    )
    return audit


def get_metadata_packages() -> List[Dict[str, Any]]:
    run_cargo(["fetch"])
    output = run_cargo(["metadata", "--offline", "--format-version=1"])
    return _parse_json(output, "cargo metadata").get("packages", [])


def read_toml_manifest(path: str = "Cargo.toml") -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def get_package_name(path: str = "Cargo.toml") -> str:
    """Name of the audited crate, from `cargo read-manifest` or the manifest itself."""
    try:
        output = run_cargo(["read-manifest", "--manifest-path", path])
        return _parse_json(output, "cargo read-manifest")["name"]
    except (CargoError, KeyError) as e:
        logging.warning(f"cargo read-manifest failed ({e}), reading {path} directly.")

    with open(path, "rb") as f:
        data = tomllib.load(f)

    name = data.get("package", {}).get("name")
    if not name:
        raise CargoError(f"No [package] name found in {path}.")
    return name
