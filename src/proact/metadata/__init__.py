"""Project metadata resolution.

- extractors: Line-oriented field extraction from manifests
- identity: Author identity from git (or a fixed fake)
- resolver: Combines both into a ProjectMetadata record
"""

from proact.metadata.extractors import (
    DEFAULT_MANIFESTS,
    ManifestSource,
    extract_json_field,
    extract_toml_field,
    manifest_source,
)
from proact.metadata.identity import (
    GitIdentityResolver,
    Identity,
    IdentityResolver,
    StaticIdentityResolver,
)
from proact.metadata.resolver import MetadataResolver, current_year, resolve_field

__all__ = [
    "DEFAULT_MANIFESTS",
    "ManifestSource",
    "extract_json_field",
    "extract_toml_field",
    "manifest_source",
    "GitIdentityResolver",
    "Identity",
    "IdentityResolver",
    "StaticIdentityResolver",
    "MetadataResolver",
    "current_year",
    "resolve_field",
]
