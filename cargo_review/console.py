from typing import Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from cargo_review.core.model import Review, ReviewEvent


def print_review(review: Review, console: Optional[Console] = None) -> None:
    """Shows the review in the terminal when there is no pull request to post it on."""
    console = console or Console()

    if review.event is ReviewEvent.APPROVE:
        console.print("[bold green](•) No vulnerable dependencies found.[/]")
        return

    console.print("[bold red](!) Changes requested[/]")
    console.print(Markdown(review.body))

    for comment in review.comments:
        title = f"[bold]{escape(comment.path)}:{comment.line}[/]"
        console.print(Panel(Markdown(comment.body), title=title, border_style="red"))
