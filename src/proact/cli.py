"""Proact CLI interface.

Commands:
- generate: Write the AI agent documentation set into a project
- init: Create a default .proact/config.yaml in a project
- info: Show version and build information

Global options:
- --config: Path to configuration file (defaults to discovery in the target)
- --verbose: Enable verbose output, including every file operation
- --quiet: Suppress info messages
- --ci: JSON log output
- --version: Show version and exit
"""

from pathlib import Path
from typing import Annotated

import typer

from proact import __version__
from proact.config import create_default_config, load_config
from proact.utils.logging import configure_from_cli, get_logger
from proact.writer import ArtifactError

app = typer.Typer(
    name="proact",
    help="Generate documentation for AI coding agents",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config_path: Path | None = None
_log_flags: dict[str, bool] = {"verbose": False, "quiet": False, "ci": False}
_logger = get_logger()

DOCUMENTATION_SUMMARY = [
    "AI agent instructions",
    "Development process guidelines (process.md)",
    "Development tools reference (tools.md)",
    "Copyright notice (COPYRIGHT)",
    "MIT License file (LICENSE)",
    "Continuous improvement practices",
    "Playwright MCP setup instructions",
    "Quality standards and testing requirements",
    "Learnings from development issues (learnings.md)",
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"proact {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Proact - Documentation for AI coding agents.

    Generates instructions, process and tooling references, legal files and a
    cumulative learnings log so AI coding agents follow best practices.
    """
    global _config_path

    _config_path = config
    _log_flags.update(verbose=verbose, quiet=quiet, ci=ci)
    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)


# =============================================================================
# generate command
# =============================================================================


@app.command()
def generate(
    target: Annotated[
        Path,
        typer.Argument(
            help="Path to an existing project directory",
            metavar="TARGET",
        ),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Output directory for generated documentation (default: docs)",
            metavar="DIR",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without actually doing it",
        ),
    ] = False,
    no_legal: Annotated[
        bool,
        typer.Option(
            "--no-legal",
            help="Do not write LICENSE and COPYRIGHT",
        ),
    ] = False,
    no_learnings: Annotated[
        bool,
        typer.Option(
            "--no-learnings",
            help="Do not write or append the learnings log",
        ),
    ] = False,
) -> None:
    """Generate AI agent documentation for a project.

    Writes the documentation set into TARGET/docs (or --output-dir) and the
    legal files into TARGET. An existing learnings log is appended to, never
    overwritten.

    Exit codes:
        0: Documentation generated (or dry run completed)
        1: Invalid target, configuration or write error
    """
    from proact.pipeline import GenerationPipeline, PipelineOptions

    # Dry-run implies verbose
    verbose = _log_flags["verbose"] or dry_run
    if dry_run and not _log_flags["verbose"]:
        configure_from_cli(verbose=True, quiet=False, ci=_log_flags["ci"])

    _logger.debug(f"Proact v{__version__}")

    try:
        config = load_config(config_path=_config_path, start_path=target)
        if config.config_path:
            _logger.debug(f"Loaded config from: {config.config_path}")
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    options = PipelineOptions(
        output_dir=output_dir,
        dry_run=dry_run,
        include_legal=not no_legal,
        include_learnings=not no_learnings,
    )

    try:
        report = GenerationPipeline(config=config).run(target, options)
    except (ValueError, ArtifactError) as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    if dry_run:
        typer.echo("🔍 DRY RUN completed - no files were created")
    else:
        typer.echo("✅ AI agent documentation generated successfully!")

    for result in report.results:
        typer.echo(f"📄 {result.label}: {result.path}")

    if verbose:
        typer.echo("\nDocumentation includes:")
        for item in DOCUMENTATION_SUMMARY:
            typer.echo(f"  • {item}")


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    target: Annotated[
        Path,
        typer.Argument(
            help="Project directory to initialize",
            exists=True,
            file_okay=False,
        ),
    ] = Path("."),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
) -> None:
    """Create a default .proact/config.yaml in a project."""
    from proact.models.artifacts import WritePolicy
    from proact.writer import ArtifactWriter, ensure_directory

    config_file = target / ".proact" / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    try:
        ensure_directory(config_file.parent)
        ArtifactWriter().write(config_file, create_default_config(), WritePolicy.REPLACE)
    except ArtifactError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    typer.echo(f"✅ Created config: {config_file}")


# =============================================================================
# info command
# =============================================================================


@app.command()
def info() -> None:
    """Show version, license and build information."""
    from proact.utils.version import get_build_info

    for line in get_build_info().lines():
        typer.echo(line)


if __name__ == "__main__":
    app()
