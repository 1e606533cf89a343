import asyncio
import logging
import click
from services.hash_backend_factory import BackendUnavailableError
from utils.cli_helpers import get_service_from_context, report_failure

logger = logging.getLogger(__name__)

"""
CLI command to print the digest of one or more files, hashed concurrently.
"""

@click.command("hash-file", help="Print the short digest of each file.")
@click.argument("paths", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print one JSON object per file")
@click.pass_context
def hash_file(ctx, paths, as_json):
    """Print the short digest of each file."""
    hashing_service = get_service_from_context(ctx)

    try:
        results = asyncio.run(hashing_service.compute_hashes(paths))
    except (OSError, BackendUnavailableError) as e:
        logger.error(f"Hashing failed: {e}")
        report_failure("Hashing failed", e)
        ctx.exit(1)

    for result in results:
        if as_json:
            click.echo(result.model_dump_json())
        else:
            click.echo(f"{result.digest}  {result.path}")
