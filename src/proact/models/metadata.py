"""Project metadata entity.

ProjectMetadata is resolved once per run from the target project's manifests
and the local git identity, then handed read-only to every renderer.
"""

from dataclasses import dataclass
from typing import Any

# Stand-ins for facts that could not be resolved. They are written into the
# generated files verbatim so a human reader knows what to fill in.
AUTHOR_PLACEHOLDER = "<author>"
LICENSE_PLACEHOLDER = "<license>"


@dataclass(frozen=True)
class ProjectMetadata:
    """Facts about the target project used by the generated documents.

    Attributes:
        current_year: 4-digit year taken from the local clock
        author_name: Git user.name, or AUTHOR_PLACEHOLDER
        author_email: Git user.email, None when unset or blank
        license: First license found in the project manifests, or
            LICENSE_PLACEHOLDER
        repository: First repository URL found in the manifests, None when
            unknown

    author_name and license are never empty; author_email and repository are
    optional and None means "unknown", not an error.
    """

    current_year: str
    author_name: str
    license: str
    author_email: str | None = None
    repository: str | None = None

    def __post_init__(self) -> None:
        if not self.author_name:
            raise ValueError("author_name must not be empty")
        if not self.license:
            raise ValueError("license must not be empty")

    def copyright_string(self) -> str:
        """Format the copyright line, e.g. "Copyright (c) 2025 Jane Doe"."""
        return f"Copyright (c) {self.current_year} {self.author_name}"

    def author_with_email(self) -> str:
        """Format the author as "Name <email>", or just the name."""
        if self.author_email:
            return f"{self.author_name} <{self.author_email}>"
        return self.author_name

    @property
    def has_author(self) -> bool:
        """True when the author was resolved rather than a placeholder."""
        return self.author_name != AUTHOR_PLACEHOLDER

    @property
    def has_license(self) -> bool:
        """True when the license came from a manifest."""
        return self.license != LICENSE_PLACEHOLDER

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for template contexts."""
        return {
            "current_year": self.current_year,
            "author_name": self.author_name,
            "author_email": self.author_email,
            "author": self.author_with_email(),
            "license": self.license,
            "repository": self.repository,
            "copyright": self.copyright_string(),
        }
