"""Proact - Onboarding documentation for AI coding agents.

Proact writes a small, static documentation set into a target project so that
AI coding agents working there follow the same process every time:

- ai_agent_instructions.md: how the agent is expected to work
- process.md / tools.md: development process and tooling reference
- LICENSE / COPYRIGHT: legal files built from resolved project metadata
- learnings.md: cumulative log, appended to rather than overwritten
"""

__version__ = "0.1.0"
__author__ = "Proact Contributors"
__license__ = "MIT"
__repository__ = "https://github.com/proact/proact"
