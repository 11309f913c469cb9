"""Error types raised by the build pipeline.

Core modules raise these and never recover from them. The CLI command is the
single error boundary that turns them into a styled message and exit status 1.
"""


class BuildError(Exception):
    """Base class for every fatal build failure."""


class ConfigError(BuildError):
    """An environment variable holds a value that is not valid text."""


class CatalogError(BuildError):
    """The catalog file could not be read, parsed, or validated."""


class MaterializeError(BuildError):
    """A directory tree could not be copied into the build output."""


class RenderError(BuildError):
    """The index template could not be read, compiled, or evaluated."""
