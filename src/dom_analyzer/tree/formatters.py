"""Output formats for render units.

Turns the renderer's units into an HTML fragment for the web page, an indented
outline for terminals, or plain dictionaries for JSON.
"""

import html
import json
from typing import Any, Dict, List, Optional, Sequence

from dom_analyzer.shared.config import RenderConfig
from dom_analyzer.tree.renderer import ElementBox, RenderUnit, TextLeaf


def to_html(units: Sequence[RenderUnit], config: Optional[RenderConfig] = None) -> str:
    """Render units as nested ``<div>`` markup.

    Every piece of document content is escaped, so the fragment can be embedded
    into a page as-is.
    """
    config = config or RenderConfig()
    return "".join(_unit_to_html(unit, config) for unit in units)


def _unit_to_html(unit: RenderUnit, config: RenderConfig) -> str:
    margin = f"ml-{unit.depth * config.indent_step}"
    key = html.escape(unit.key, quote=True)

    if isinstance(unit, TextLeaf):
        label = html.escape(f'{config.text_label}: "{unit.text}"')
        return (
            f'<div data-key="{key}" class="{margin} my-1 p-2 rounded '
            f'{html.escape(unit.style)} text-gray-700">{label}</div>'
        )

    parts = [
        f'<div data-key="{key}" class="{margin} my-1 p-2 rounded '
        f'{html.escape(unit.style)} flex flex-col">',
        '<div class="flex items-center">',
        f'<div class="mr-2 font-bold text-gray-800">&lt;{html.escape(unit.tag_name)}&gt;</div>',
    ]
    if unit.attributes:
        parts.append('<div class="flex">')
        for chip in unit.attributes:
            parts.append(
                f'<span data-key="{html.escape(chip.key, quote=True)}" '
                f'class="{html.escape(chip.style)} text-sm text-gray-600 mr-2 px-1 rounded">'
                f"{html.escape(chip.label)}</span>"
            )
        parts.append("</div>")
    parts.append("</div>")

    if unit.children:
        parts.append('<div class="pl-4">')
        for child in unit.visible_children:
            parts.append(_unit_to_html(child, config))
        parts.append("</div>")

    parts.append("</div>")
    return "".join(parts)


def to_text(
    units: Sequence[RenderUnit],
    indent: str = "  ",
    show_styles: bool = False,
    config: Optional[RenderConfig] = None,
) -> str:
    """Render units as an indented outline, one line per unit."""
    config = config or RenderConfig()
    lines: List[str] = []

    def _walk(unit: RenderUnit, level: int) -> None:
        if isinstance(unit, TextLeaf):
            line = f'{config.text_label}: "{unit.text}"'
        else:
            line = f"<{unit.tag_name}>"
            if unit.attributes:
                line += " " + " ".join(chip.label for chip in unit.attributes)
        if show_styles:
            line += f"  [{unit.style}]"
        lines.append(indent * level + line)

        if isinstance(unit, ElementBox):
            for child in unit.visible_children:
                _walk(child, level + 1)

    for unit in units:
        _walk(unit, 0)
    return "\n".join(lines)


def to_dicts(units: Sequence[RenderUnit]) -> List[Dict[str, Any]]:
    """Convert units to JSON-ready dictionaries."""
    return [unit.to_dict() for unit in units]


def to_json(units: Sequence[RenderUnit], indent: Optional[int] = 2) -> str:
    """Convert units to a JSON document."""
    return json.dumps(to_dicts(units), indent=indent)
