"""The site build pipeline.

A strictly linear, single pass: load catalog, copy static assets, copy
extension assets, render the index, write it. The first failure stops the
run; nothing is retried.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from extgallery.cli.output import user_output
from extgallery.core.catalog import load_catalog
from extgallery.core.context import BuildContext
from extgallery.core.materialize import copy_tree
from extgallery.core.render import INDEX_TEMPLATE_NAME, RenderContext, read_template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    """Summary of a completed build."""

    index_path: Path
    entry_count: int
    static_files: int
    extension_files: int


def build_site(ctx: BuildContext) -> BuildResult:
    """Run the full build pipeline.

    The catalog is loaded before anything is written, so a malformed catalog
    leaves the build directory untouched.

    Args:
        ctx: Build context with config, parser and renderer

    Returns:
        BuildResult describing what was written

    Raises:
        CatalogError: If the catalog cannot be loaded
        MaterializeError: If either asset directory cannot be copied
        RenderError: If the template cannot be read, compiled, or evaluated
        OSError: If the rendered index cannot be written
    """
    config = ctx.config

    extensions = load_catalog(config.extensions_file, ctx.parser)

    logger.debug("Copying static assets %s -> %s", config.static_dir, config.build_dir)
    static_files = copy_tree(config.static_dir, config.build_dir)

    extensions_output = config.extensions_output_dir
    logger.debug("Copying extensions %s -> %s", config.extensions_dir, extensions_output)
    extension_files = copy_tree(config.extensions_dir, extensions_output)

    user_output(str(config.index_view))
    template_text = read_template(config.index_view)

    rendered = ctx.renderer.render(
        INDEX_TEMPLATE_NAME,
        template_text,
        RenderContext(
            extensions=tuple(extensions),
            extensions_directory=config.extensions_dir_name,
        ),
    )

    index_path = config.index_output_path
    index_path.write_text(rendered, encoding="utf-8")
    logger.debug("Wrote %s (%d bytes)", index_path, len(rendered))

    return BuildResult(
        index_path=index_path,
        entry_count=len(extensions),
        static_files=static_files,
        extension_files=extension_files,
    )
