import logging
import shutil
from dataclasses import dataclass
from typing import Callable, List


@dataclass
class CleanupTask:
    name: str
    task: Callable[[], None]


def new_cleanup_tasks_store() -> List[CleanupTask]:
    return []


def run_with_handling(run: Callable[[], List[CleanupTask]]) -> int:
    """
    Executes `run`, then its cleanup tasks, and turns any error into a failed
    exit status. Cleanup failures are logged and never fail the run.
    """
    try:
        cleanup_tasks = run()
    except Exception as e:
        logging.exception(f"Action failed: {e}")
        return 1

    if cleanup_tasks:
        logging.info("Cleaning up...")
    for cleanup in cleanup_tasks:
        try:
            cleanup.task()
        except Exception as e:
            logging.info(f'Cleanup task "{cleanup.name}" failed: {e}')

    return 0


def parse_command_flags(flags: str) -> List[str]:
    return flags.split()


def is_command_exists(command: str) -> bool:
    return shutil.which(command) is not None
