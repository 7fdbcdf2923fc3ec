"""In-app toasts rendered on the terminal with rich."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel

from vboxtrade.notifications.base import Toaster


class ConsoleToaster(Toaster):
    """Prints alert toasts as rich panels."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    def show(self, title: str, body: str) -> None:
        self._console.print(Panel(
            body,
            title=f"[bold yellow]{title}[/bold yellow]",
            border_style="yellow",
        ))
