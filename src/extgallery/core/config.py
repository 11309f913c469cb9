"""Build configuration loaded from environment variables.

Provides immutable configuration built once at the entry point from an
environment snapshot, so the pipeline never reads os.environ directly.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from extgallery.core.errors import ConfigError

logger = logging.getLogger(__name__)

EXTENSIONS_FILE_VAR = "EXTENSIONS_FILE"
EXTENSIONS_DIR_VAR = "EXTENSIONS_DIR"
BUILD_DIR_VAR = "BUILD_DIR"
STATIC_DIR_VAR = "STATIC_DIR"
INDEX_VIEW_VAR = "INDEX_VIEW"

DEFAULTS: dict[str, str] = {
    EXTENSIONS_FILE_VAR: "extensions.json5",
    EXTENSIONS_DIR_VAR: "extensions",
    BUILD_DIR_VAR: "build",
    STATIC_DIR_VAR: "public",
    INDEX_VIEW_VAR: "index.html",
}

# Used in error messages only
DESCRIPTIONS: dict[str, str] = {
    EXTENSIONS_FILE_VAR: "Extensions file",
    EXTENSIONS_DIR_VAR: "Extension directory",
    BUILD_DIR_VAR: "Build directory",
    STATIC_DIR_VAR: "Static directory",
    INDEX_VIEW_VAR: "Index view",
}

INDEX_OUTPUT_NAME = "index.html"


@dataclass(frozen=True)
class BuildConfig:
    """Immutable build configuration.

    Created once at the CLI entry point and stored in BuildContext.
    All fields are read-only after construction.
    """

    extensions_file: Path
    extensions_dir: Path
    build_dir: Path
    static_dir: Path
    index_view: Path
    extensions_dir_name: str  # EXTENSIONS_DIR text as configured; template link prefix

    @property
    def extensions_output_dir(self) -> Path:
        """Destination of the extensions directory inside the build tree.

        Follows the configured text, so the copy lands where the template's
        link prefix points. Relative paths are mirrored under the build
        directory. Absolute paths and paths climbing out with ".." fall back
        to their final component so the copy stays inside the build tree.
        """
        configured = Path(self.extensions_dir_name)
        if configured.is_absolute() or ".." in configured.parts:
            return self.build_dir / configured.name
        return self.build_dir / configured

    @property
    def index_output_path(self) -> Path:
        return self.build_dir / INDEX_OUTPUT_NAME


def _read_var(environ: Mapping[str, str], name: str) -> str:
    """Return the value of name, or its default when unset.

    Undecodable bytes in os.environ surface as lone surrogates, which fail
    to encode as UTF-8.
    """
    if name not in environ:
        return DEFAULTS[name]

    value = environ[name]
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        msg = f"{DESCRIPTIONS[name]} ({name}) must be a valid unicode string."
        raise ConfigError(msg) from e
    return value


def load_config(environ: Mapping[str, str]) -> BuildConfig:
    """Build a BuildConfig from an environment snapshot.

    Args:
        environ: Mapping of environment variable names to values,
                 typically os.environ

    Returns:
        BuildConfig with defaults applied for unset variables

    Raises:
        ConfigError: If a set variable is not valid unicode text
    """
    extensions_dir = _read_var(environ, EXTENSIONS_DIR_VAR)
    config = BuildConfig(
        extensions_file=Path(_read_var(environ, EXTENSIONS_FILE_VAR)),
        extensions_dir=Path(extensions_dir),
        build_dir=Path(_read_var(environ, BUILD_DIR_VAR)),
        static_dir=Path(_read_var(environ, STATIC_DIR_VAR)),
        index_view=Path(_read_var(environ, INDEX_VIEW_VAR)),
        extensions_dir_name=extensions_dir,
    )
    logger.debug("Resolved build config: %s", config)
    return config
