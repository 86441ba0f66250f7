"""
Logging setup for CLI commands.
"""
import logging

from app.core.logging_config import LogCategory


def setup_cli_logging(verbose: bool = False):
    """Send codec logs to stderr; debug output (skipped blocks) only when verbose."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )
    logging.getLogger(LogCategory.APP).setLevel(level)
    logging.getLogger(LogCategory.IMPORT_EXPORT).setLevel(level)
