"""
Command Line Interface for Tunnelgate.

Resolves the gateway settings the same way the gateway does at startup
and shows them with every secret redacted.

Built with Typer for automatic tab completion.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.text import Text
from rich.tree import Tree

from . import __version__
from .banner import banner
from .core import get_app_settings, get_logger, setup_logging
from .errors import ConfigurationError
from .settings import Settings, plaintext_target
from .sources import read_settings
from .tree import Node

console = Console()
logger = get_logger(__name__)

app = typer.Typer(
    name="tunnelgate",
    help="Tunnelgate - resolve and inspect VPN gateway settings",
    add_completion=True,
    rich_markup_mode="rich",
)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a YAML settings file"),
]
SecretsDirOption = Annotated[
    Optional[Path],
    typer.Option("--secrets-dir", "-s", help="Directory holding secret files"),
]


def version_callback(value: bool):
    if value:
        console.print(f"tunnelgate version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[bool, typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit.")] = False,
):
    """
    Tunnelgate - resolve and inspect VPN gateway settings

    Settings come from a YAML file, environment variables and secret
    files, in increasing order of precedence.
    """
    app_settings = get_app_settings()
    setup_logging(app_settings.log.level, app_settings.log.format)


def to_rich_tree(node: Node) -> Tree:
    """Convert a settings node into a rich tree."""
    tree = Tree(Text(node.title, style="bold"))
    _add_children(tree, node)
    return tree


def _add_children(tree: Tree, node: Node) -> None:
    for child in node.children:
        _add_children(tree.add(Text(child.title)), child)


def _resolve(config: Optional[Path], secrets_dir: Optional[Path]) -> Settings:
    """Resolve settings or exit with the configuration error."""
    app_settings = get_app_settings()
    try:
        return read_settings(
            secrets_dir=secrets_dir or app_settings.secrets_dir,
            config_file=config or app_settings.config_file,
        )
    except ConfigurationError as e:
        logger.error("Settings are not valid", error=str(e))
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def show(
    config: ConfigOption = None,
    secrets_dir: SecretsDirOption = None,
    plain: Annotated[bool, typer.Option("--plain", help="Print plain text without colors or banner")] = False,
):
    """Show the resolved settings with secrets redacted."""
    settings = _resolve(config, secrets_dir)

    if plain:
        typer.echo(str(settings))
        return

    console.print(banner())
    console.print(to_rich_tree(settings.to_node()))


@app.command()
def check(
    config: ConfigOption = None,
    secrets_dir: SecretsDirOption = None,
):
    """Resolve and validate the settings without printing them."""
    _resolve(config, secrets_dir)
    console.print("[green]Configuration is valid[/green]")


@app.command("dns-target")
def dns_target(
    config: ConfigOption = None,
    secrets_dir: SecretsDirOption = None,
):
    """Show the address used for plaintext DNS."""
    settings = _resolve(config, secrets_dir)
    target = plaintext_target(settings.dns)

    if target.from_provider:
        console.print(f"{target.address} [dim](provider fallback)[/dim]")
    else:
        console.print(f"{target.address} [dim](configured)[/dim]")


def cli():
    """Main entry point."""
    app()


if __name__ == "__main__":
    cli()
