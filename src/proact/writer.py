"""Artifact writer with create/overwrite/append decisions.

Each target goes through one existence probe, which alone picks the
MergeDecision:

    REPLACE policy: missing -> CREATE, present -> OVERWRITE
    MERGE policy:   missing -> CREATE, present -> APPEND_WITH_SEPARATOR

An append keeps the existing bytes verbatim and adds a timestamped
separator followed by the new content. Under dry-run the same decision and
size figures are computed and reported, but nothing on disk changes.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from proact.models.artifacts import Artifact, MergeDecision, WritePolicy, WriteResult

logger = logging.getLogger(__name__)

SEPARATOR_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S"


class ArtifactError(Exception):
    """A generated artifact could not be written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{message}: {path}")


class ExistingContentReadError(ArtifactError):
    """The existing target could not be read, so it cannot be appended to."""


class ArtifactWriteError(ArtifactError):
    """The target (or its directory) could not be written."""


def format_separator(timestamp: datetime) -> str:
    """Build the marker inserted between existing and appended content.

    Args:
        timestamp: Time of the append

    Returns:
        e.g. "\\n\\n---- Added 20250114T093012 ----\\n\\n"
    """
    return f"\n\n---- Added {timestamp.strftime(SEPARATOR_TIMESTAMP_FORMAT)} ----\n\n"


def ensure_directory(path: Path, dry_run: bool = False) -> bool:
    """Create path (and parents) unless it exists.

    Args:
        path: Directory to create
        dry_run: Report only

    Returns:
        True if the directory did not exist beforehand

    Raises:
        ArtifactWriteError: If the directory cannot be created
    """
    if path.is_dir():
        logger.debug("# Directory already exists: %s", path)
        return False

    logger.debug("mkdir -p %s", path)
    if not dry_run:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArtifactWriteError(path, f"Cannot create directory ({e})") from e
    return True


class ArtifactWriter:
    """Writes artifacts according to their policy.

    Usage:
        writer = ArtifactWriter(dry_run=False)
        result = writer.write(path, content, WritePolicy.MERGE)
    """

    def __init__(
        self,
        dry_run: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the writer.

        Args:
            dry_run: Decide and report without touching the filesystem
            clock: Source of separator timestamps (defaults to datetime.now)
        """
        self.dry_run = dry_run
        self._clock = clock or datetime.now

    def decide(self, path: Path, policy: WritePolicy = WritePolicy.MERGE) -> MergeDecision:
        """Pick the decision for path from a single existence probe."""
        if not path.exists():
            return MergeDecision.CREATE
        if policy is WritePolicy.MERGE:
            return MergeDecision.APPEND_WITH_SEPARATOR
        return MergeDecision.OVERWRITE

    def write_artifact(self, artifact: Artifact) -> WriteResult:
        """Write a rendered artifact."""
        return self.write(artifact.path, artifact.content, artifact.policy)

    def write(
        self,
        path: Path,
        content: str,
        policy: WritePolicy = WritePolicy.MERGE,
    ) -> WriteResult:
        """Write content to path.

        Args:
            path: Target file
            content: New content
            policy: REPLACE or MERGE

        Returns:
            WriteResult describing what was (or would be) done

        Raises:
            ExistingContentReadError: If an existing MERGE target is unreadable
            ArtifactWriteError: If the target cannot be written
        """
        decision = self.decide(path, policy)
        new_data = content.encode("utf-8")

        if decision is MergeDecision.APPEND_WITH_SEPARATOR:
            return self._append(path, new_data)

        existing_bytes = self._existing_size(path) if decision is MergeDecision.OVERWRITE else 0
        logger.debug("write %s (%d bytes)", path, len(new_data))

        if not self.dry_run:
            self._store(path, new_data)

        return WriteResult(
            path=path,
            decision=decision,
            new_bytes=len(new_data),
            existing_bytes=existing_bytes,
            written_bytes=len(new_data),
            dry_run=self.dry_run,
        )

    def _append(self, path: Path, new_data: bytes) -> WriteResult:
        separator = format_separator(self._clock()).encode("utf-8")

        if self.dry_run:
            existing_size = self._existing_size(path)
        else:
            existing = self._read_existing(path)
            existing_size = len(existing)

        logger.debug(
            "append %s (existing: %d bytes + separator + new: %d bytes)",
            path,
            existing_size,
            len(new_data),
        )

        if not self.dry_run:
            self._store(path, existing + separator + new_data)

        return WriteResult(
            path=path,
            decision=MergeDecision.APPEND_WITH_SEPARATOR,
            new_bytes=len(new_data),
            existing_bytes=existing_size,
            written_bytes=existing_size + len(separator) + len(new_data),
            dry_run=self.dry_run,
        )

    def _read_existing(self, path: Path) -> bytes:
        try:
            existing = path.read_bytes()
            existing.decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ExistingContentReadError(path, f"Cannot read existing file ({e})") from e
        return existing

    @staticmethod
    def _existing_size(path: Path) -> int:
        # Size for reporting only
        try:
            return path.stat().st_size
        except OSError:
            return 0

    @staticmethod
    def _store(path: Path, data: bytes) -> None:
        try:
            path.write_bytes(data)
        except OSError as e:
            raise ArtifactWriteError(path, f"Cannot write file ({e})") from e
