"""Console configuration and theme for chaindiag log output.

This module provides the console instance used by the rich log handler so
warnings and debug records render with consistent styling.
"""

from rich.console import Console
from rich.theme import Theme

from chaindiag import __version__ as VERSION

CHAINDIAG_THEME = Theme(
    {
        # --- Semantic Status ---
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "info": "cyan",
        # --- Data & Values ---
        "key": "cyan",
        "value": "green",
        "number": "green",
        "param": "cyan",
        "path": "blue underline",
        # --- Modifiers ---
        "dim": "dim",
        "emphasis": "bold",
    }
)

# Log records go to stderr so tables written to stdout stay clean
console = Console(theme=CHAINDIAG_THEME, stderr=True)

__all__ = ["CHAINDIAG_THEME", "VERSION", "console"]
