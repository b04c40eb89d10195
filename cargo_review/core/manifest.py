"""
Locates the `Cargo.toml` line that declares a dependency.

The scan is line based and deliberately conservative: a miss only means the
review comment is anchored on the first line of the manifest.
"""
import re
from functools import lru_cache
from typing import Optional, Pattern, Tuple

_TABLE_HEADER = re.compile(r"^\s*\[")


@lru_cache(maxsize=256)
def _patterns(name: str) -> Tuple[Pattern[str], Pattern[str], Pattern[str]]:
    target = re.escape(name)

    # [dependencies], [dev-dependencies], [build_dependencies], [dependencies.<name>]
    header = re.compile(
        r'^\s*\[("?)((build|dev)[-_])?dependencies\1(\.("?)' + target + r'\5)?\]'
    )
    # [dependencies.<name>] or `<name> = ...` / `<name>.workspace = ...`
    entry = re.compile(
        r'^\s*(\[("?)((build|dev)[-_])?dependencies\2\.("?)' + target + r'\5\]'
        r'|("?)' + target + r'\6\s*[=.])'
    )
    # dependencies = { other = "1", <name> = ...
    # Keys and values are single tokens so each entry can only be matched one way.
    root_entry = re.compile(
        r'^\s*("?)((build|dev)[-_])?dependencies\1\s*=\s*\{\s*'
        r'(?:(?:[A-Za-z0-9_.-]+|"[^"]*")\s*=\s*(?:"[^"]*"|\{[^}]*\}|[A-Za-z0-9_.+-]+)\s*,\s*)*'
        r'("?)' + target + r'\4\s*[=.]'
    )
    return header, entry, root_entry


def is_dependencies_header(line: str, name: str) -> bool:
    return _patterns(name)[0].match(line) is not None


def is_table_header(line: str) -> bool:
    return _TABLE_HEADER.match(line) is not None


def is_dependency_entry(line: str, name: str) -> bool:
    return _patterns(name)[1].match(line) is not None


def is_root_inline_entry(line: str, name: str) -> bool:
    return _patterns(name)[2].match(line) is not None


def find_dependency_line(manifest: str, name: str) -> Optional[int]:
    """Returns the 1-based line declaring `name`, or None."""
    in_dependencies_block = False
    in_root_table = True

    for number, line in enumerate(manifest.split("\n"), start=1):
        if is_dependencies_header(line, name):
            in_root_table = False
            in_dependencies_block = True
        elif is_table_header(line):
            in_root_table = False
            in_dependencies_block = False

        if in_dependencies_block and is_dependency_entry(line, name):
            return number
        if in_root_table and is_root_inline_entry(line, name):
            return number

    return None
