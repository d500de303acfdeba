from typing import Optional, Protocol

from rich.console import Console
from rich.prompt import Confirm


class UserPrompt(Protocol):
    """Synchronous confirmation and notification capability."""

    def confirm(self, message: str) -> bool: ...

    def notify(self, message: str) -> None: ...


class ConsolePrompt:
    """UserPrompt backed by the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def confirm(self, message: str) -> bool:
        return Confirm.ask(message, console=self.console, default=False)

    def notify(self, message: str) -> None:
        self.console.print(f"[bold yellow]![/bold yellow] {message}")
