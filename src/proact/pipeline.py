"""Documentation generation pipeline.

Coordinates a single run against a target project:
1. Validate the target and resolve the output directory
2. Resolve ProjectMetadata once
3. Render every artifact
4. Write artifacts in a fixed order through ArtifactWriter

Nothing is written until every artifact has rendered.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from proact.config import ProactConfig
from proact.metadata import DEFAULT_MANIFESTS, GitIdentityResolver, MetadataResolver
from proact.metadata.identity import IdentityResolver
from proact.models.artifacts import Artifact, GenerationReport, WritePolicy
from proact.models.metadata import ProjectMetadata
from proact.templates import DocumentRenderer
from proact.utils.logging import get_logger
from proact.writer import ArtifactWriter, ensure_directory

logger = get_logger(__name__)


@dataclass
class PipelineOptions:
    """Per-run overrides for the configuration.

    Attributes:
        output_dir: Documentation directory (overrides output.dir)
        dry_run: Report what would be done without touching the filesystem
        include_legal: Generate LICENSE and COPYRIGHT
        include_learnings: Generate/append the learnings log
    """

    output_dir: Path | None = None
    dry_run: bool = False
    include_legal: bool = True
    include_learnings: bool = True


def resolve_output_dir(target: Path, output_dir: Path) -> Path:
    """Resolve output_dir relative to target unless it is absolute."""
    if output_dir.is_absolute():
        return output_dir
    return target / output_dir


class GenerationPipeline:
    """Generates the agent documentation set for one target project.

    Usage:
        pipeline = GenerationPipeline(config)
        report = pipeline.run(Path("../my-project"), PipelineOptions(dry_run=True))
    """

    def __init__(
        self,
        config: ProactConfig | None = None,
        identity_resolver: IdentityResolver | None = None,
        renderer: DocumentRenderer | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Proact configuration (uses defaults if None)
            identity_resolver: Author lookup (defaults to git config)
            renderer: Document renderer
            clock: Source of the current time for year and separators
        """
        self.config = config or ProactConfig()
        self._clock = clock or datetime.now
        self._renderer = renderer or DocumentRenderer()

        manifests = DEFAULT_MANIFESTS + tuple(
            m.to_source() for m in self.config.metadata.manifests
        )
        self._metadata_resolver = MetadataResolver(
            identity_resolver=identity_resolver
            or GitIdentityResolver(timeout=self.config.metadata.git_timeout),
            manifests=manifests,
            clock=self._clock,
        )

    def run(self, target: Path, options: PipelineOptions | None = None) -> GenerationReport:
        """Generate documentation for target.

        Args:
            target: Target project directory
            options: Per-run options

        Returns:
            GenerationReport with one WriteResult per artifact

        Raises:
            ValueError: If target is missing or not a directory, or a
                template fails to render
            ArtifactError: If an artifact cannot be read or written
        """
        options = options or PipelineOptions()

        if not target.exists():
            raise ValueError(f"Target path does not exist: {target}")
        if not target.is_dir():
            raise ValueError(f"Target path must be a directory: {target}")

        output_dir = resolve_output_dir(
            target, options.output_dir or Path(self.config.output.dir)
        )
        logger.debug("Target project: %s", target)
        logger.debug("Output directory: %s", output_dir)
        if options.dry_run:
            logger.debug("Mode: DRY RUN (no files will be created)")

        metadata = self._metadata_resolver.resolve(target)
        logger.debug("Copyright: %s", metadata.copyright_string())
        logger.debug("License: %s", metadata.license)
        if not metadata.has_author:
            logger.debug("No git user.name configured, using %s", metadata.author_name)
        if not metadata.has_license:
            logger.debug("No license found in manifests, using %s", metadata.license)

        artifacts = self.build_artifacts(target, output_dir, metadata, options)

        report = GenerationReport(
            target=target,
            output_dir=output_dir,
            metadata=metadata,
            dry_run=options.dry_run,
        )
        report.created_output_dir = ensure_directory(output_dir, dry_run=options.dry_run)

        writer = ArtifactWriter(dry_run=options.dry_run, clock=self._clock)
        for artifact in artifacts:
            result = writer.write_artifact(artifact)
            logger.structured(
                logging.DEBUG,
                f"{result.label}: {result.path}",
                artifact=artifact.name,
                **result.to_dict(),
            )
            report.results.append(result)

        logger.info(
            "%s %d artifact(s) for %s",
            "Planned" if options.dry_run else "Wrote",
            len(report.results),
            target.resolve().name,
        )
        return report

    def build_artifacts(
        self,
        target: Path,
        output_dir: Path,
        metadata: ProjectMetadata,
        options: PipelineOptions,
    ) -> list[Artifact]:
        """Render every artifact for this run, in write order."""
        renderer = self._renderer
        config = self.config

        learnings = (
            self._learnings_artifact(target, output_dir) if options.include_learnings else None
        )

        artifacts = [
            Artifact(
                name="instructions",
                path=output_dir / config.output.instructions_file,
                content=renderer.render_instructions(
                    project_name=target.resolve().name,
                    metadata=metadata,
                    output_dir=self._display_dir(target, output_dir),
                    learnings_file=config.learnings.file if learnings else None,
                ),
            ),
            Artifact("process", output_dir / "process.md", renderer.render_process()),
            Artifact("tools", output_dir / "tools.md", renderer.render_tools()),
        ]

        if options.include_legal and config.legal.enabled:
            artifacts.append(
                Artifact(
                    "copyright",
                    target / config.legal.copyright_file,
                    renderer.render_copyright(metadata),
                )
            )
            artifacts.append(
                Artifact(
                    "license",
                    target / config.legal.license_file,
                    renderer.render_license(metadata),
                )
            )

        if learnings is not None:
            artifacts.append(learnings)

        return artifacts

    def _learnings_artifact(self, target: Path, output_dir: Path) -> Artifact | None:
        learnings_config = self.config.learnings
        if not learnings_config.enabled:
            return None

        source = None
        if learnings_config.source:
            # Relative sources live in the target project, like the config file
            source = target / Path(learnings_config.source).expanduser()
        if source is not None and not source.is_file():
            logger.debug("# No learnings file found at %s, skipping", source)
            return None

        try:
            content = self._renderer.render_learnings(source)
        except (OSError, UnicodeDecodeError) as e:
            raise ValueError(f"Cannot read learnings source {source}: {e}") from e

        return Artifact(
            name="learnings",
            path=output_dir / learnings_config.file,
            content=content,
            policy=WritePolicy.MERGE,
        )

    @staticmethod
    def _display_dir(target: Path, output_dir: Path) -> str:
        try:
            return output_dir.relative_to(target).as_posix()
        except ValueError:
            return output_dir.as_posix()
