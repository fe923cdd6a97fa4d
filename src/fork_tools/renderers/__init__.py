"""Report renderers."""

from fork_tools.renderers.json import render_json
from fork_tools.renderers.markdown import render_markdown

RENDERERS = {
    "markdown": render_markdown,
    "json": render_json,
}

__all__ = ["RENDERERS", "render_json", "render_markdown"]
