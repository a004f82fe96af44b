"""Proact data models.

This module exports the core entities used throughout the application:
- ProjectMetadata: Resolved author/license/repository facts
- Artifact: A rendered document and its destination
- WritePolicy / MergeDecision: Create, overwrite or append
- WriteResult / GenerationReport: What a run did
"""

from proact.models.artifacts import (
    Artifact,
    GenerationReport,
    MergeDecision,
    WritePolicy,
    WriteResult,
)
from proact.models.metadata import (
    AUTHOR_PLACEHOLDER,
    LICENSE_PLACEHOLDER,
    ProjectMetadata,
)

__all__ = [
    "AUTHOR_PLACEHOLDER",
    "LICENSE_PLACEHOLDER",
    "ProjectMetadata",
    "Artifact",
    "GenerationReport",
    "MergeDecision",
    "WritePolicy",
    "WriteResult",
]
