"""Manifest field extraction.

Pulls a single scalar field (license, repository) out of a project manifest:
- Cargo.toml and other TOML-style manifests: `field = "value"`
- package.json and other JSON-style manifests: `"field": "value",`

Extraction is line-oriented on purpose. Manifests may be partial, malformed
or not even text; a documentation field is never worth failing a run over,
so every ambiguity resolves to "not found" (None) instead of an exception.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

FieldExtractor = Callable[[str, str], str | None]

_QUOTES = "\"'"


def _clean_scalar(value: str) -> str:
    return value.strip().strip(_QUOTES).strip()


def extract_toml_field(content: str, field: str) -> str | None:
    """Extract a scalar field from TOML-style manifest text.

    Matches the first line of the form `field = value`. Dotted or longer keys
    that merely start with the field name (`license-file`, `license.workspace`)
    are not matches, unlike a plain prefix test on the line.

    Args:
        content: Raw manifest text
        field: Key to look for

    Returns:
        Value with surrounding whitespace and quotes removed, or None
    """
    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed.startswith(field):
            continue

        remainder = trimmed[len(field):].lstrip()
        if not remainder.startswith("="):
            continue

        value = _clean_scalar(remainder[1:])
        if value:
            return value

    return None


def extract_json_field(content: str, field: str) -> str | None:
    """Extract a scalar field from JSON-style manifest text.

    Matches the first line containing `"field"` whose value is a non-empty
    scalar. Object values (`"license": {"type": "MIT"}`) are skipped rather
    than parsed.

    Args:
        content: Raw manifest text
        field: Key to look for (without quotes)

    Returns:
        Value with whitespace, trailing commas and quotes removed, or None
    """
    needle = f'"{field}"'

    for line in content.splitlines():
        _, found, after_key = line.partition(needle)
        if not found:
            continue

        _, sep, value_part = after_key.partition(":")
        if not sep:
            continue

        value = _clean_scalar(value_part.strip().rstrip(","))
        if value and not value.startswith("{"):
            return value

    return None


EXTRACTORS: dict[str, FieldExtractor] = {
    "toml": extract_toml_field,
    "json": extract_json_field,
}


@dataclass(frozen=True)
class ManifestSource:
    """A manifest file location paired with the extractor for its format.

    Attributes:
        filename: Path relative to the project root
        extract: Field extractor for the file's format
    """

    filename: str
    extract: FieldExtractor

    def read_field(self, project_root: Path, field: str) -> str | None:
        """Read field from this manifest under project_root.

        Missing and unreadable manifests are skipped silently.

        Args:
            project_root: Target project directory
            field: Field name to extract

        Returns:
            Field value, or None when the manifest or field is unavailable
        """
        path = project_root / self.filename
        try:
            if not path.is_file():
                return None
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping unreadable manifest %s: %s", path, e)
            return None

        value = self.extract(content, field)
        if value is None:
            logger.debug("No %s field in %s", field, path)
        return value


def manifest_source(filename: str, format: str) -> ManifestSource:
    """Build a ManifestSource from a file name and a format name.

    Args:
        filename: Path relative to the project root
        format: "toml" or "json"

    Raises:
        ValueError: If the format is not supported
    """
    try:
        return ManifestSource(filename, EXTRACTORS[format])
    except KeyError:
        raise ValueError(
            f"Unsupported manifest format: {format}. Valid: {sorted(EXTRACTORS)}"
        ) from None


# Checked in order; the first manifest that yields a value wins.
DEFAULT_MANIFESTS: tuple[ManifestSource, ...] = (
    ManifestSource("Cargo.toml", extract_toml_field),
    ManifestSource("package.json", extract_json_field),
)
