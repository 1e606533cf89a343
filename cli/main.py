"""
Main entry point for the asset-hash CLI.
- Sets up the Click command group and context object.
- Dynamically loads all CLI commands from this directory.
"""
import os
import importlib
import click
import logging
import rich_click as rclick
from pydantic import ValidationError
from utils.asset_hash_config import load_configuration, build_digest_options, get_chunk_size
from utils.logging_config import setup_logging
from services.hashing_service import HashingService

logger = logging.getLogger(__name__)

CONTEXT_KEYS = ("config", "options", "hashing_service", "chunk_size")

@rclick.group()
@click.option('--logfile', '-l', type=click.Path(writable=True), help="Log to file")
@click.option('--verbose', '-v', count=True, help="Set verbosity level (-v = INFO, -vv = DEBUG)")
@click.option('--config', '-c', type=click.Path(), default=None, help="Path to an ini config file with a [hashing] section")
@click.option('--hash', '-H', 'hash_name', type=str, default=None, help="Hash algorithm (default: xxhash128)")
@click.option('--encoding', '-e', type=str, default=None, help="Output encoding: hex, base64, utf8 or baseN (default: base52)")
@click.option('--max-length', '-m', type=click.IntRange(min=0), default=None, help="Maximum digest length, 0 disables truncation (default: 8)")
@click.pass_context
def asset_hash_cli(ctx: click.Context, verbose: int, logfile: str, config: str, hash_name: str, encoding: str, max_length: int) -> None:
    """
    Main CLI group. Sets up the context object with configuration, digest options and the hashing service.
    All subcommands share this context.

    Args:
        ctx (click.Context): Click context for Click command group.
        verbose (int): Verbosity level (-v = INFO, -vv = DEBUG).
        logfile (str): Path to log file.
        config (str): Path to configuration file.
        hash_name (str): Hash algorithm override.
        encoding (str): Encoding override.
        max_length (int): Truncation override.

    Returns:
        None
    """
    # If the context object is already set, return it without reinitializing it
    if ctx.obj and all(k in ctx.obj for k in CONTEXT_KEYS):
        return

    if logfile and os.path.dirname(logfile):
        os.makedirs(os.path.dirname(logfile), exist_ok=True)

    setup_logging(verbosity=verbose, logfile=logfile)

    cfg = None
    try:
        cfg = load_configuration(config)
        options = build_digest_options(cfg, hash=hash_name, encoding=encoding, max_length=max_length)
        chunk_size = get_chunk_size(cfg)
    except (ValidationError, ValueError) as e:
        logger.error(f"❌ Invalid hashing configuration: {e}")
        ctx.obj = {
            "config": cfg,
            "options": None,
            "hashing_service": None,
            "chunk_size": None,
            "config_error": str(e),
            "config_path": config,
        }
        return

    ctx.obj = {
        "config": cfg,
        "options": options,
        "hashing_service": HashingService(options, chunk_size=chunk_size),
        "chunk_size": chunk_size,
        "config_path": config,
    }
    logger.info(f"✓ Hashing with {options.hash}, encoding {options.encoding}, max_length {options.max_length}")


# Dynamic discovery loop: auto-register all CLI commands in this directory
COMMAND_DIR = os.path.dirname(__file__)
for filename in sorted(os.listdir(COMMAND_DIR)):
    # Only import .py files that are not main.py or __init__.py
    if filename.endswith(".py") and filename not in {"main.py", "__init__.py"}:
        command_name = filename[:-3]
        module_name = f"cli.{command_name}"
        try:
            module = importlib.import_module(module_name)
            cli_function = getattr(module, command_name, None)
            if cli_function:
                asset_hash_cli.add_command(cli_function)
            else:
                logger.debug(f"No command function found in {module_name}")
        except Exception as e:
            logger.debug(f"Failed to import {module_name}: {e}")
    else:
        logger.debug(f"Skipping non-Python file: {filename}")

if __name__ == '__main__':
    asset_hash_cli()
