"""Project metadata resolution.

Builds the ProjectMetadata record for a target project:
- year: local clock
- author: IdentityResolver (git by default)
- license / repository: first manifest in priority order that has the field

Resolution only reads files and asks the identity resolver; it never fails
over missing or broken inputs, it falls back to placeholders instead.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path

from proact.metadata.extractors import DEFAULT_MANIFESTS, ManifestSource
from proact.metadata.identity import GitIdentityResolver, IdentityResolver
from proact.models.metadata import LICENSE_PLACEHOLDER, ProjectMetadata

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def current_year(now: datetime | None = None) -> str:
    """Return the 4-digit year of now (defaults to the local clock)."""
    return f"{(now or datetime.now()).year:04d}"


def resolve_field(
    project_root: Path,
    field: str,
    manifests: Sequence[ManifestSource] = DEFAULT_MANIFESTS,
) -> str | None:
    """Resolve a field from the first manifest that provides it.

    Args:
        project_root: Target project directory
        field: Field name (e.g., "license")
        manifests: Candidates in priority order

    Returns:
        First value found, or None when no manifest has the field
    """
    for manifest in manifests:
        value = manifest.read_field(project_root, field)
        if value is not None:
            logger.debug("Resolved %s from %s: %s", field, manifest.filename, value)
            return value
    return None


class MetadataResolver:
    """Resolves ProjectMetadata for a target project.

    Usage:
        resolver = MetadataResolver()
        metadata = resolver.resolve(Path("../my-project"))
    """

    def __init__(
        self,
        identity_resolver: IdentityResolver | None = None,
        manifests: Sequence[ManifestSource] = DEFAULT_MANIFESTS,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the metadata resolver.

        Args:
            identity_resolver: Author lookup (defaults to git config)
            manifests: Manifest candidates in priority order
            clock: Source of the current time (defaults to datetime.now)
        """
        self.identity_resolver = identity_resolver or GitIdentityResolver()
        self.manifests = tuple(manifests)
        self._clock = clock or datetime.now

    def resolve(self, project_root: Path) -> ProjectMetadata:
        """Resolve metadata for project_root.

        Args:
            project_root: Target project directory

        Returns:
            ProjectMetadata with placeholders for anything unresolved
        """
        identity = self.identity_resolver.resolve_identity()

        license = resolve_field(project_root, "license", self.manifests)
        if license is None:
            logger.debug("No license found in manifests, using %s", LICENSE_PLACEHOLDER)
            license = LICENSE_PLACEHOLDER

        repository = resolve_field(project_root, "repository", self.manifests)
        if repository is None:
            logger.debug("No repository found in manifests")

        return ProjectMetadata(
            current_year=current_year(self._clock()),
            author_name=identity.name,
            author_email=identity.email,
            license=license,
            repository=repository,
        )
