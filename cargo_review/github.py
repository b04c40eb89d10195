import json
import logging
from typing import Any, Dict, Optional

import httpx

from cargo_review.__version__ import __version__
from cargo_review.config import Config
from cargo_review.core.model import Review


class ReviewSubmissionError(Exception):
    pass


async def submit_review(
    config: Config,
    review: Review,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """Creates the pull request review through the GitHub REST API."""
    config.require_review_context()

    url = f"/repos/{config.owner}/{config.repository}/pulls/{config.pull_request_number}/reviews"
    payload = review.to_payload()
    logging.info(f"Creating PR review with options:\n{json.dumps(payload, indent=2)}")

    headers = {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {config.token}",
        "X-GitHub-Api-Version": "2022-11-28",
        "User-Agent": f"cargo-review/{__version__}",
    }

    async with httpx.AsyncClient(
        base_url=config.api_url, headers=headers, timeout=45.0, transport=transport
    ) as client:
        try:
            response = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            logging.error(f"Review request failed with error: {e}")
            raise ReviewSubmissionError(f"Review request failed: {e}") from e

    if response.is_error:
        logging.error(f"GitHub API Error {response.status_code}: {response.text}")
        raise ReviewSubmissionError(
            f"Review request failed with status {response.status_code}"
        )

    data = response.json()
    logging.info(f"Created PR review {data.get('id')} ({data.get('html_url', 'no url')}).")
    return data
