"""
CLI helper utilities for consistent error handling and service lookup.
"""

import click
from rich.console import Console
from rich.markup import escape
from typing import Any, Optional

console = Console(stderr=True)


def get_service_from_context(ctx: click.Context, service_name: str = "hashing_service", required: bool = True) -> Optional[Any]:
    """
    Get a service from context with proper error handling.

    Args:
        ctx: Click context object
        service_name: Name of the service to retrieve
        required: Whether the service is required (exit code 1 if missing)

    Returns:
        Service instance or None if not available
    """
    if not ctx.obj:
        if required:
            console.print("❌ No context available. Configuration may not be loaded properly.", style="red")
            ctx.exit(1)
        return None

    if "config_error" in ctx.obj:
        if required:
            console.print(f"❌ Configuration error: {ctx.obj['config_error']}", style="red")
            console.print("💡 Try running: asset-hash config-check", style="yellow")
            ctx.exit(1)
        return None

    service = ctx.obj.get(service_name)
    if not service and required:
        console.print(f"❌ {service_name} not available. Please check your configuration.", style="red")
        ctx.exit(1)
    return service


def report_failure(message: str, error: Exception) -> None:
    """Print a failure with its exception type in a consistent format."""
    console.print(f"❌ {escape(message)}: [bold]{type(error).__name__}[/bold]: {escape(str(error))}", style="red", highlight=False)
