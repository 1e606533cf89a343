import asyncio
import logging
import click
from services.hash_backend_factory import BackendUnavailableError
from utils.cli_helpers import get_service_from_context, report_failure

logger = logging.getLogger(__name__)

"""
CLI command to print cache-busting file names (<digest><extension>).
"""

@click.command("hashed-name", help="Print the cache-busting name <digest><extension> of each file.")
@click.argument("paths", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option("--show-source", "-s", is_flag=True, help="Prefix each name with the source path")
@click.pass_context
def hashed_name(ctx, paths, show_source):
    """Print the cache-busting name of each file."""
    hashing_service = get_service_from_context(ctx)

    try:
        results = asyncio.run(hashing_service.compute_hashes(paths))
    except (OSError, BackendUnavailableError) as e:
        logger.error(f"Hashing failed: {e}")
        report_failure("Hashing failed", e)
        ctx.exit(1)

    for result in results:
        if show_source:
            click.echo(f"{result.path} -> {result.hashed_name}")
        else:
            click.echo(result.hashed_name)
