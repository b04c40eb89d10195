import io
import unittest

from rich.console import Console

from cargo_review.console import print_review
from cargo_review.core.model import Review, ReviewComment, ReviewEvent


class TestPrintReview(unittest.TestCase):

    def setUp(self):
        self.output = io.StringIO()
        self.console = Console(file=self.output, width=100, color_system=None)

    def test_changes_requested(self):
        review = Review(
            ReviewEvent.REQUEST_CHANGES,
            body="# Found Vulnerability Report\n\n- `mid`: RUSTSEC-2024-0001\n",
            comments=[ReviewComment("Cargo.toml", 5, "## Dependency Chain\n\n**`vuln`** → `mid`")],
        )

        print_review(review, self.console)

        text = self.output.getvalue()
        self.assertIn("Changes requested", text)
        self.assertIn("Cargo.toml:5", text)
        self.assertIn("vuln", text)

    def test_approved(self):
        print_review(Review(ReviewEvent.APPROVE), self.console)

        self.assertIn("No vulnerable dependencies found", self.output.getvalue())
