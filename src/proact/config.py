"""Proact configuration system.

Configuration is YAML-based and lives in the target project, so a project can
pin its own output layout. CLI flags (--output-dir, --dry-run, --no-legal,
--no-learnings) override it per run. Supports environment variable
substitution (${VAR}) in string values.

Configuration file discovery (in priority order):
1. CLI --config argument
2. <target>/.proact/config.yaml
3. <target>/proact.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from proact.metadata.extractors import EXTRACTORS, ManifestSource, manifest_source
from proact.metadata.identity import DEFAULT_GIT_TIMEOUT

# =============================================================================
# Configuration Dataclasses
# =============================================================================


def _require_name(value: str, what: str) -> None:
    if not value or not value.strip():
        raise ValueError(f"{what} must not be empty")


@dataclass
class OutputConfig:
    """Output configuration.

    Attributes:
        dir: Documentation directory, relative to the target unless absolute
        instructions_file: File name of the main instructions document
    """

    dir: str = "docs"
    instructions_file: str = "ai_agent_instructions.md"

    def __post_init__(self) -> None:
        _require_name(self.dir, "output.dir")
        _require_name(self.instructions_file, "output.instructions_file")


@dataclass
class LegalConfig:
    """LICENSE/COPYRIGHT generation, written to the target root.

    Attributes:
        enabled: Whether legal files are generated
        license_file: File name of the license
        copyright_file: File name of the copyright notice
    """

    enabled: bool = True
    license_file: str = "LICENSE"
    copyright_file: str = "COPYRIGHT"

    def __post_init__(self) -> None:
        _require_name(self.license_file, "legal.license_file")
        _require_name(self.copyright_file, "legal.copyright_file")


@dataclass
class LearningsConfig:
    """Cumulative learnings log.

    Attributes:
        enabled: Whether the learnings log is written
        file: File name inside the output directory
        source: Markdown file to append instead of the bundled seed,
            relative to the target project unless absolute. A configured
            source that does not exist skips the learnings log.
    """

    enabled: bool = True
    file: str = "learnings.md"
    source: str | None = None

    def __post_init__(self) -> None:
        _require_name(self.file, "learnings.file")


@dataclass
class ManifestConfig:
    """An extra manifest consulted for license/repository.

    Attributes:
        file: Path relative to the target project
        format: "toml" or "json"
    """

    file: str
    format: str = "toml"

    def __post_init__(self) -> None:
        _require_name(self.file, "metadata.manifests[].file")
        if self.format not in EXTRACTORS:
            raise ValueError(
                f"Invalid manifest format: {self.format}. Valid: {set(EXTRACTORS)}"
            )

    def to_source(self) -> ManifestSource:
        return manifest_source(self.file, self.format)


@dataclass
class MetadataConfig:
    """Metadata resolution settings.

    Attributes:
        manifests: Extra manifests, checked after Cargo.toml and package.json
        git_timeout: Seconds allowed for each git config lookup
    """

    manifests: list[ManifestConfig] = field(default_factory=list)
    git_timeout: float = DEFAULT_GIT_TIMEOUT

    def __post_init__(self) -> None:
        if self.git_timeout <= 0:
            raise ValueError(f"metadata.git_timeout must be positive (got {self.git_timeout})")


@dataclass
class ProactConfig:
    """Top-level Proact configuration.

    Attributes:
        output: Output directory and instructions file name
        legal: LICENSE/COPYRIGHT generation
        learnings: Learnings log
        metadata: Metadata resolution
    """

    output: OutputConfig = field(default_factory=OutputConfig)
    legal: LegalConfig = field(default_factory=LegalConfig)
    learnings: LearningsConfig = field(default_factory=LearningsConfig)
    metadata: MetadataConfig = field(default_factory=MetadataConfig)

    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax, e.g. `source: "${HOME}/notes/learnings.md"`.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in the target project.

    Search order:
    1. <start_path>/.proact/config.yaml
    2. <start_path>/proact.yaml

    Args:
        start_path: Target project directory (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".proact" / "config.yaml",
        start_path / "proact.yaml",
    ]

    for candidate in candidates:
        if candidate.is_file():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> ProactConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        ProactConfig instance

    Raises:
        ValueError: If a value is invalid
    """
    data = substitute_env_vars(data)

    config = ProactConfig()

    if "output" in data:
        output_data = data["output"] or {}
        config.output = OutputConfig(
            dir=str(output_data.get("dir", config.output.dir)),
            instructions_file=output_data.get(
                "instructions_file", config.output.instructions_file
            ),
        )

    if "legal" in data:
        legal_data = data["legal"] or {}
        config.legal = LegalConfig(
            enabled=legal_data.get("enabled", True),
            license_file=legal_data.get("license_file", config.legal.license_file),
            copyright_file=legal_data.get("copyright_file", config.legal.copyright_file),
        )

    if "learnings" in data:
        learnings_data = data["learnings"] or {}
        config.learnings = LearningsConfig(
            enabled=learnings_data.get("enabled", True),
            file=learnings_data.get("file", config.learnings.file),
            source=learnings_data.get("source"),
        )

    if "metadata" in data:
        metadata_data = data["metadata"] or {}
        manifests = []
        for manifest_data in metadata_data.get("manifests") or []:
            if isinstance(manifest_data, dict):
                manifests.append(
                    ManifestConfig(
                        file=manifest_data.get("file", ""),
                        format=manifest_data.get("format", "toml"),
                    )
                )
        config.metadata = MetadataConfig(
            manifests=manifests,
            git_timeout=metadata_data.get("git_timeout", DEFAULT_GIT_TIMEOUT),
        )

    return config


def load_config(
    config_path: Path | None = None,
    start_path: Path | None = None,
    auto_discover: bool = True,
) -> ProactConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        start_path: Target project directory used for discovery
        auto_discover: Whether to search for config file if not specified

    Returns:
        ProactConfig instance (defaults when no file is found)

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
        ValueError: If the file is not a YAML mapping or has invalid values
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file(start_path)
    else:
        found_path = None

    if found_path is None:
        return ProactConfig()

    with open(found_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {found_path}")

    config = load_config_from_dict(data)
    config._config_path = found_path
    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# Proact Configuration

# Where the agent documentation goes (relative to the project root)
output:
  dir: "docs"
  instructions_file: "ai_agent_instructions.md"

# LICENSE and COPYRIGHT in the project root (overwritten on every run)
legal:
  enabled: true
  license_file: "LICENSE"
  copyright_file: "COPYRIGHT"

# Learnings log (appended to on every run, never overwritten)
learnings:
  enabled: true
  file: "learnings.md"
  # source: "${HOME}/notes/learnings.md"

# Manifests consulted for license/repository after Cargo.toml and package.json
metadata:
  # manifests:
  #   - file: "pyproject.toml"
  #     format: "toml"
  git_timeout: 10
'''
