import logging
import os

import click

from extgallery.cli.ensure import Ensure
from extgallery.core.builder import build_site
from extgallery.core.context import BuildContext, create_context
from extgallery.core.errors import BuildError

logger = logging.getLogger(__name__)

# Enable debug logging if EXTGALLERY_DEBUG environment variable is set
if os.getenv("EXTGALLERY_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="extension-gallery")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Build the extension gallery site.

    Configuration comes from the environment: EXTENSIONS_FILE, EXTENSIONS_DIR,
    BUILD_DIR, STATIC_DIR and INDEX_VIEW.
    """
    try:
        # Only create context if not already provided (e.g., by tests)
        if ctx.obj is None:
            ctx.obj = create_context(os.environ)
        build_ctx: BuildContext = ctx.obj
        result = build_site(build_ctx)
    except (BuildError, OSError) as e:
        Ensure.fail(str(e))

    logger.debug(
        "Built %s: %d entries, %d static files, %d extension files",
        result.index_path,
        result.entry_count,
        result.static_files,
        result.extension_files,
    )


def main() -> None:
    """CLI entry point used by the `extension-gallery` console script."""
    cli()
