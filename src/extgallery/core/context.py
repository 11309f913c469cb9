"""Build context with dependency injection."""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from extgallery.core.catalog import CatalogParser, Json5CatalogParser
from extgallery.core.config import BuildConfig, load_config
from extgallery.core.render import JinjaTemplateRenderer, TemplateRenderer


@dataclass(frozen=True)
class BuildContext:
    """Immutable context holding all dependencies for a build.

    Created at the CLI entry point and passed to build_site.
    Frozen to prevent accidental modification at runtime.
    """

    config: BuildConfig
    parser: CatalogParser
    renderer: TemplateRenderer

    @staticmethod
    def for_test(
        config: BuildConfig | None = None,
        parser: CatalogParser | None = None,
        renderer: TemplateRenderer | None = None,
        root: Path | None = None,
    ) -> "BuildContext":
        """Create a context for tests.

        Unspecified dependencies get production implementations, since both
        are pure and touch no filesystem state of their own.

        Args:
            config: Explicit config. If None, defaults are resolved under root.
            parser: Catalog parser. If None, uses Json5CatalogParser.
            renderer: Template renderer. If None, uses JinjaTemplateRenderer.
            root: Directory the default config paths are placed in. Ignored
                when config is given. Defaults to the current directory.

        Example:
            >>> ctx = BuildContext.for_test(root=tmp_path)
            >>> build_site(ctx)
        """
        if config is None:
            config = config_under(root or Path("."), {})
        return BuildContext(
            config=config,
            parser=parser or Json5CatalogParser(),
            renderer=renderer or JinjaTemplateRenderer(),
        )


def config_under(root: Path, environ: Mapping[str, str]) -> BuildConfig:
    """Load config from environ and anchor its relative paths at root.

    extensions_dir_name keeps the configured text unchanged, so the template
    link prefix matches what a run from inside root would produce.
    """
    config = load_config(environ)
    return BuildConfig(
        extensions_file=root / config.extensions_file,
        extensions_dir=root / config.extensions_dir,
        build_dir=root / config.build_dir,
        static_dir=root / config.static_dir,
        index_view=root / config.index_view,
        extensions_dir_name=config.extensions_dir_name,
    )


def create_context(environ: Mapping[str, str]) -> BuildContext:
    """Create production context with real implementations.

    Args:
        environ: Environment snapshot, normally os.environ

    Raises:
        ConfigError: If an environment variable holds invalid text
    """
    return BuildContext(
        config=load_config(environ),
        parser=Json5CatalogParser(),
        renderer=JinjaTemplateRenderer(),
    )
