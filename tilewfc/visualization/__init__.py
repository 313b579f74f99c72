"""Plain and colorized text rendering."""

from .text_renderer import (
    render_tile,
    render_tiles,
    render_superposition,
    render_superpositions,
    render_direction,
    render_rule,
    render_rules,
)

__all__ = [
    'render_tile',
    'render_tiles',
    'render_superposition',
    'render_superpositions',
    'render_direction',
    'render_rule',
    'render_rules',
]
