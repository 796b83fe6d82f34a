"""Console output helpers.

Provides the shared rich Console and the error panel shown when a
command fails with a DocForgeError.
"""

from __future__ import annotations

import traceback
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

# Shared console instance
_console: Console | None = None

# Verbose mode flag (set by CLI --verbose flag)
_verbose_mode: bool = False


def get_console() -> Console:
    """Get shared console instance (lazy-loaded)."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_verbose_mode(enabled: bool) -> None:
    """Enable or disable tracebacks in error panels."""
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose_mode() -> bool:
    return _verbose_mode


class ErrorRenderer:
    """Renders errors as panels with "Why" and "How to fix" sections.

    Example
    -------
        try:
            load_doclets(path)
        except DocForgeError as e:
            ErrorRenderer.render(e)
            raise typer.Exit(1)

        # +---------------------------------+
        # |  Error: DF-IN-000               |
        # +---------------------------------+
        # | Doclet file not found: x.json   |
        # |                                 |
        # | Why it happened:                |
        # |   The doclet collection ...     |
        # |                                 |
        # | How to fix:                     |
        # |   - Regenerate the doclet dump  |
        # +---------------------------------+
    """

    @staticmethod
    def render(
        exc: BaseException,
        context: str = "",
        show_traceback: Optional[bool] = None,
    ) -> None:
        """Render an exception as an error panel.

        Args:
            exc: Exception to render
            context: Optional context line (e.g. "While publishing doclets.json")
            show_traceback: Override for verbose mode (None = use global setting)
        """
        from docforge.core.exceptions import get_root_cause

        error_code = getattr(exc, "error_code", "DF-ERR-999")
        why = getattr(exc, "why_it_happened", "An unexpected error occurred")
        how_to_fix = list(getattr(exc, "how_to_fix", ["Check the error message"]))

        root_cause = get_root_cause(exc)
        root_message = str(root_cause) if root_cause is not exc else None

        content = ErrorRenderer._build_error_content(
            message=str(exc),
            context=context,
            why=why,
            how_to_fix=how_to_fix,
            root_message=root_message,
        )
        get_console().print(
            Panel(
                content,
                title=f"[bold red]Error: {error_code}[/bold red]",
                border_style="red",
                padding=(1, 2),
            )
        )

        should_show_traceback = (
            show_traceback if show_traceback is not None else is_verbose_mode()
        )
        if should_show_traceback:
            ErrorRenderer._render_traceback(exc)

    @staticmethod
    def _build_error_content(
        message: str,
        context: str,
        why: str,
        how_to_fix: List[str],
        root_message: Optional[str],
    ) -> Text:
        text = Text()

        if context:
            text.append(f"{context}\n\n", style="dim")

        text.append(message, style="bold red")
        text.append("\n\n")

        if root_message and root_message != message:
            text.append("Root cause: ", style="bold yellow")
            text.append(root_message, style="yellow")
            text.append("\n\n")

        text.append("Why it happened:\n", style="bold cyan")
        text.append(f"  {why}\n\n", style="cyan")

        text.append("How to fix:\n", style="bold green")
        for fix in how_to_fix:
            text.append(f"  - {fix}\n", style="green")

        return text

    @staticmethod
    def _render_traceback(exc: BaseException) -> None:
        console = get_console()
        console.print()
        console.print("[dim]--- Traceback (--verbose mode) ---[/dim]")
        tb_text = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        console.print(Text(tb_text, style="dim"))
