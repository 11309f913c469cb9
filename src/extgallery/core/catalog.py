"""Catalog record types and the relaxed-JSON catalog loader.

The catalog is a JSON5 document whose top level is an array of extension
entries. Loading is all-or-nothing: one malformed entry fails the whole file.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import json5
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from extgallery.core.errors import CatalogError

logger = logging.getLogger(__name__)


class Versions(BaseModel):
    """Current release plus previously published releases, newest first."""

    model_config = ConfigDict(frozen=True)

    current: str
    past: list[str]


class Contributor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    website: str | None = None
    notes: str | None = None


class License(BaseModel):
    """License identifiers for the extension code and its preview image."""

    model_config = ConfigDict(frozen=True)

    extension: str
    image: str


class Compatibility(BaseModel):
    """A known incompatibility with some other software type/version.

    The catalog key is the reserved word "type"; it is exposed here as
    compat_type and dumped back as "type".
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    compat_type: str = Field(alias="type")
    value: str
    broken: bool = False
    reason: str | None = None


class Example(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    path: str


class CatalogEntry(BaseModel):
    """One listed extension.

    path names the entry's directory under the extensions directory.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    title: str
    description: str
    image: str
    versions: Versions
    contributors: list[Contributor]
    license: License
    incompatible: list[Compatibility]
    documentation: str | None = None
    website: str | None = None
    source: str | None = None
    examples: list[Example] | None = None

    def to_template_data(self) -> dict[str, Any]:
        """Dump to JSON-compatible data using catalog key names.

        Optional fields are always present (None when absent) so templates
        can test them without tripping strict undefined checks.
        """
        return self.model_dump(mode="json", by_alias=True)


class CatalogParser(ABC):
    """Abstract structured-config parser.

    Turns catalog text into validated records. Implementations may swap the
    underlying syntax library without touching the record types.
    """

    @abstractmethod
    def parse[T](self, text: str, schema: type[T]) -> T:
        """Parse text and validate it against schema.

        Args:
            text: Full catalog document
            schema: Target type, e.g. list[CatalogEntry]

        Returns:
            Validated instance of schema

        Raises:
            CatalogError: If text is not valid or does not match schema
        """
        ...


class Json5CatalogParser(CatalogParser):
    """Production parser: json5 for syntax, pydantic for structure."""

    def parse[T](self, text: str, schema: type[T]) -> T:
        try:
            data = json5.loads(text)
        except ValueError as e:
            raise CatalogError(f"Catalog is not valid JSON5: {e}") from e

        try:
            return TypeAdapter(schema).validate_python(data)
        except ValidationError as e:
            raise CatalogError(f"Catalog does not match the expected structure: {e}") from e


def load_catalog(path: Path, parser: CatalogParser) -> list[CatalogEntry]:
    """Read and parse the catalog file.

    Args:
        path: Path to the JSON5 catalog
        parser: Parser used to deserialize the file content

    Returns:
        Catalog entries in file order

    Raises:
        CatalogError: If the file is unreadable, malformed, or fails validation
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogError(f"Could not read catalog file {path}: {e}") from e

    entries = parser.parse(text, list[CatalogEntry])
    logger.debug("Loaded %d catalog entries from %s", len(entries), path)
    return entries
