"""Proact template rendering.

Jinja2 templates for every generated artifact live next to this module.
"""

from proact.templates.renderer import DocumentRenderer

__all__ = ["DocumentRenderer"]
