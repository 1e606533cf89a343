"""
Configuration Check CLI Command

This module provides a CLI command to show the effective hashing options (config
file, environment overrides and command line flags combined) and to verify that
the selected hash backend and encoding can actually be used.
"""

import logging
import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from services.hash_backend_factory import get_backend_capability, is_algorithm_available
from services.hashing_service import HashingService
from utils.config.config_normalizer import ConfigNormalizer

logger = logging.getLogger(__name__)

# Sample input used to prove the options produce a digest end to end
PROBE_INPUT = b"asset-hash"


@click.command("config-check")
@click.option("--show-env", is_flag=True, help="Also list the supported environment variables")
@click.pass_context
def config_check(ctx: click.Context, show_env: bool) -> None:
    """
    Show the effective hashing options and verify they are usable.

    Examples:
        asset-hash config-check
        asset-hash -c assets.ini config-check --show-env
        asset-hash --hash sha256 --encoding base62 config-check

    Args:
        ctx (click.Context): Click context containing the shared options.
        show_env (bool): List supported environment variables.

    Returns:
        None. Prints results and exits with code 1 when the options are unusable.
    """
    console = Console()
    obj = ctx.obj or {}

    if "config_error" in obj or not obj.get("options"):
        console.print(Panel(
            f"❌ [bold red]Invalid configuration:[/bold red]\n{escape(str(obj.get('config_error', 'No options loaded')))}",
            title="Configuration Error",
            border_style="red"
        ))
        ctx.exit(1)

    options = obj["options"]
    table = Table(title="Effective Hashing Options")
    table.add_column("Option", style="cyan")
    table.add_column("Value")
    table.add_row("config file", str(obj.get("config_path") or "<none>"))
    table.add_row("hash", options.hash)
    table.add_row("encoding", options.encoding)
    table.add_row("max_length", str(options.max_length) if options.max_length else "unlimited")
    table.add_row("chunk_size", str(obj.get("chunk_size")))
    console.print(table)

    if show_env:
        env_table = Table(title="Environment Overrides")
        env_table.add_column("Variable", style="cyan")
        env_table.add_column("Setting")
        for env_var, (section, key) in sorted(ConfigNormalizer().get_supported_env_vars().items()):
            env_table.add_row(env_var, escape(f"[{section}] {key}"))
        console.print(env_table)

    if not is_algorithm_available(options.hash):
        capability = get_backend_capability(options.hash)
        package = capability.package if capability else options.hash
        console.print(Panel(
            f"❌ [bold red]Hash backend '{options.hash}' is not available.[/bold red]\n"
            f"💡 Install it with: pip install {package}",
            border_style="red"
        ))
        ctx.exit(1)

    service = obj.get("hashing_service") or HashingService(options)
    sample = service.hash_bytes(PROBE_INPUT)
    logger.info(f"Configuration check passed, sample digest {sample}")
    console.print(Panel(
        f"✓ [bold green]Configuration OK[/bold green]\nSample digest: {sample}",
        border_style="green"
    ))
