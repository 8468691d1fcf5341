"""
Startup banner shown before the settings summary.
"""

from datetime import date
from typing import Optional

from rich.panel import Panel

from . import __version__

ANNOUNCEMENT = "Settings can now also be read from a YAML file with --config"
# Last day the announcement is shown
ANNOUNCEMENT_EXPIRATION = date(2027, 3, 31)


def banner_lines(today: Optional[date] = None) -> list[str]:
    """Lines of the banner, with the announcement until it expires."""
    today = today or date.today()
    lines = [
        f"[bold]Tunnelgate[/bold] {__version__}",
    ]
    if today <= ANNOUNCEMENT_EXPIRATION:
        lines.append(f"[yellow]Announcement:[/yellow] {ANNOUNCEMENT}")
    return lines


def banner(today: Optional[date] = None) -> Panel:
    return Panel.fit("\n".join(banner_lines(today)), border_style="cyan")
