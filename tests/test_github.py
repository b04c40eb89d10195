import json
import unittest

import httpx

from cargo_review.config import Config, ConfigError
from cargo_review.core.model import Review, ReviewComment, ReviewEvent
from cargo_review.github import ReviewSubmissionError, submit_review


class TestSubmitReview(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.config = Config(
            token="secret",
            owner="octo",
            repository="crate",
            event={"pull_request": {"number": 7}},
        )
        self.review = Review(
            ReviewEvent.REQUEST_CHANGES,
            body="# Found Vulnerability Report\n",
            comments=[ReviewComment("Cargo.toml", 6, "body")],
        )
        self.requests = []

    def transport(self, status_code, data):
        def handler(request):
            self.requests.append(request)
            return httpx.Response(status_code, json=data)

        return httpx.MockTransport(handler)

    async def test_posts_review(self):
        data = await submit_review(self.config, self.review, transport=self.transport(200, {"id": 1}))

        self.assertEqual(data, {"id": 1})
        request = self.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.url.path, "/repos/octo/crate/pulls/7/reviews")
        self.assertEqual(request.headers["Authorization"], "Bearer secret")
        self.assertEqual(json.loads(request.content), {
            "event": "REQUEST_CHANGES",
            "body": "# Found Vulnerability Report\n",
            "comments": [{"path": "Cargo.toml", "line": 6, "body": "body"}],
        })

    async def test_error_response(self):
        transport = self.transport(422, {"message": "Validation Failed"})

        with self.assertRaises(ReviewSubmissionError):
            await submit_review(self.config, self.review, transport=transport)

    async def test_missing_context(self):
        self.config.token = None

        with self.assertRaises(ConfigError):
            await submit_review(self.config, self.review, transport=self.transport(200, {}))

        self.assertEqual(self.requests, [])
