import logging
import click
from rich.console import Console
from rich.table import Table
from services.hash_backend_factory import list_backends as get_backends

logger = logging.getLogger(__name__)

"""
CLI command to show which hash algorithms can be used in this environment.
"""

@click.command("list-backends", help="Show available hash algorithms and their providers.")
@click.option("--fast-only", "-f", is_flag=True, help="Only list the fast non-cryptographic algorithms")
def list_backends(fast_only):
    """Show available hash algorithms and their providers."""
    console = Console()
    table = Table(title="Hash Backends")
    table.add_column("Algorithm", style="cyan")
    table.add_column("Provider")
    table.add_column("Status")
    table.add_column("Details", style="dim")

    for backend in get_backends():
        if fast_only and backend["provider"] == "hashlib":
            continue
        status = "[green]✓ available[/green]" if backend["available"] else "[red]✗ unavailable[/red]"
        details = "" if backend["available"] else f"pip install {backend['package']}"
        table.add_row(backend["algorithm"], backend["provider"], status, details)

    console.print(table)
