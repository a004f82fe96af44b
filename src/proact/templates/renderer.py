"""Template renderer for the generated documentation.

Renders every artifact from Jinja2 templates shipped inside the package.
Output depends only on the inputs (metadata, project name), so two runs on
the same day against the same project render identical text.
"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from proact.models.metadata import ProjectMetadata

logger = logging.getLogger(__name__)

INSTRUCTIONS_TEMPLATE = "ai_agent_instructions.md.j2"
PROCESS_TEMPLATE = "process.md.j2"
TOOLS_TEMPLATE = "tools.md.j2"
LEARNINGS_TEMPLATE = "learnings.md.j2"
LICENSE_TEMPLATE = "LICENSE.j2"
COPYRIGHT_TEMPLATE = "COPYRIGHT.j2"


class DocumentRenderer:
    """Renders the documentation set.

    Usage:
        renderer = DocumentRenderer()
        text = renderer.render_license(metadata)
    """

    def __init__(self) -> None:
        self._env = Environment(
            loader=PackageLoader("proact", "templates"),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, **context: Any) -> str:
        """Render a packaged template.

        Args:
            template_name: Template file name
            **context: Template variables

        Returns:
            Rendered text

        Raises:
            ValueError: If the template is missing or fails to render
        """
        try:
            template = self._env.get_template(template_name)
            rendered = template.render(**context)
        except TemplateError as e:
            logger.error("Failed to render %s: %s", template_name, e)
            raise ValueError(f"Template rendering failed for {template_name}: {e}") from e

        logger.debug("Rendered %s (%d characters)", template_name, len(rendered))
        return rendered

    # -------------------------------------------------------------------------
    # Legal documents
    # -------------------------------------------------------------------------

    def render_license(self, metadata: ProjectMetadata) -> str:
        """Render the MIT license text.

        The copyright line is the only varying part.
        """
        return self.render(LICENSE_TEMPLATE, copyright=metadata.copyright_string())

    def render_copyright(self, metadata: ProjectMetadata) -> str:
        """Render the COPYRIGHT notice."""
        return self.render(
            COPYRIGHT_TEMPLATE,
            copyright=metadata.copyright_string(),
            license=metadata.license,
        )

    # -------------------------------------------------------------------------
    # Agent documentation
    # -------------------------------------------------------------------------

    def render_instructions(
        self,
        project_name: str,
        metadata: ProjectMetadata,
        output_dir: str = "docs",
        learnings_file: str | None = "learnings.md",
    ) -> str:
        """Render the main AI agent instructions document.

        Args:
            project_name: Display name of the target project
            metadata: Resolved project metadata
            output_dir: Documentation directory as shown to the agent
            learnings_file: Learnings log name, None when not generated
        """
        return self.render(
            INSTRUCTIONS_TEMPLATE,
            project_name=project_name,
            metadata=metadata.to_dict(),
            docs_dir=output_dir,
            learnings_file=learnings_file,
        )

    def render_process(self) -> str:
        return self.render(PROCESS_TEMPLATE)

    def render_tools(self) -> str:
        return self.render(TOOLS_TEMPLATE)

    def render_learnings(self, source: Path | None = None) -> str:
        """Render the learnings seed.

        Args:
            source: User-provided learnings file to use verbatim instead of
                the bundled seed

        Raises:
            OSError: If source cannot be read
        """
        if source is not None:
            return source.read_text(encoding="utf-8")
        return self.render(LEARNINGS_TEMPLATE)
