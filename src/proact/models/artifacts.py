"""Generated artifact entities.

This module contains entities describing what gets written where:
- WritePolicy: How an artifact treats a pre-existing target file
- MergeDecision: What the writer chose to do for one target
- Artifact: A rendered document and its destination
- WriteResult: Outcome of writing (or dry-running) one artifact
- GenerationReport: Everything a single run did
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from proact.models.metadata import ProjectMetadata


class WritePolicy(Enum):
    """How an artifact treats a target that already exists."""

    REPLACE = "replace"  # create or overwrite
    MERGE = "merge"  # create or append with separator


class MergeDecision(Enum):
    """Decision taken for a single target file.

    Decided by one existence probe right before the write. MERGE targets only
    ever get CREATE or APPEND_WITH_SEPARATOR.
    """

    CREATE = "create"
    OVERWRITE = "overwrite"
    APPEND_WITH_SEPARATOR = "append"

    @property
    def label(self) -> str:
        """Past-tense label for console output."""
        return {
            MergeDecision.CREATE: "Created",
            MergeDecision.OVERWRITE: "Overwrote",
            MergeDecision.APPEND_WITH_SEPARATOR: "Appended to",
        }[self]

    @property
    def dry_run_label(self) -> str:
        """Conditional label for dry-run console output."""
        return {
            MergeDecision.CREATE: "Would create",
            MergeDecision.OVERWRITE: "Would overwrite",
            MergeDecision.APPEND_WITH_SEPARATOR: "Would append to",
        }[self]


@dataclass
class Artifact:
    """A rendered document waiting to be written.

    Attributes:
        name: Short identifier (e.g., "instructions", "license")
        path: Destination file
        content: Full rendered text
        policy: Create/overwrite or create/append behaviour
    """

    name: str
    path: Path
    content: str
    policy: WritePolicy = WritePolicy.REPLACE


@dataclass
class WriteResult:
    """Outcome of writing one artifact.

    Attributes:
        path: Target file
        decision: What was (or would have been) done
        new_bytes: Size of the newly generated content
        existing_bytes: Size of the target before the write (0 when absent)
        written_bytes: Size of the file after the write, or the size it
            would have under dry-run
        dry_run: True when nothing was touched
    """

    path: Path
    decision: MergeDecision
    new_bytes: int
    existing_bytes: int = 0
    written_bytes: int = 0
    dry_run: bool = False

    @property
    def label(self) -> str:
        """Console label for this result."""
        return self.decision.dry_run_label if self.dry_run else self.decision.label

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "path": str(self.path),
            "decision": self.decision.value,
            "new_bytes": self.new_bytes,
            "existing_bytes": self.existing_bytes,
            "written_bytes": self.written_bytes,
            "dry_run": self.dry_run,
        }


@dataclass
class GenerationReport:
    """Everything a single run wrote (or would have written).

    Attributes:
        target: Target project directory
        output_dir: Directory holding the generated documentation
        metadata: Metadata the documents were rendered with
        results: One entry per artifact, in write order
        dry_run: True when the run made no changes
        created_output_dir: True when output_dir did not exist beforehand
    """

    target: Path
    output_dir: Path
    metadata: ProjectMetadata
    results: list[WriteResult] = field(default_factory=list)
    dry_run: bool = False
    created_output_dir: bool = False
