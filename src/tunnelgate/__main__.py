"""
Main entry point for running tunnelgate as a module.

Usage:
    python -m tunnelgate show
    python -m tunnelgate check --config settings.yaml
    python -m tunnelgate dns-target
"""

from .cli import cli

if __name__ == "__main__":
    cli()
