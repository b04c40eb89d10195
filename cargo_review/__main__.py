import logging
import sys

from cargo_review.app import run
from cargo_review.config import Config
from cargo_review.helpers import run_with_handling


def start():
    config = Config.from_env()
    if config.is_debug:
        logging.getLogger().setLevel(logging.DEBUG)
    return run(config)


def main():
    """ Entrypoint when is installed via pip """
    # Log Configuration
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    sys.exit(run_with_handling(start))

# Development mode
if __name__ == "__main__":
    main()
