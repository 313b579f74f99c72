"""
Text Renderer
=============

Plain and ANSI-colored text views of tile grids, superposition grids and
learned rules. Read-only: nothing here touches solver state.

Plain mode:
    s / c / l    resolved tiles
    2, 3, ...    unresolved cell, number of candidates left
    ?            empty superposition (contradiction)

Color mode paints cells with colorama backgrounds. Unresolved cells mix the
channels of their candidates (COAST red, LAND green, SEA blue).
"""

from typing import Dict, Iterable, List, Sequence

import colorama

from tilewfc.core.definitions import Tile, Direction, TILE_TO_CHAR
from tilewfc.generation.rules import AdjacencyRule
from tilewfc.generation.superposition import Superposition

TILE_COLORS: Dict[Tile, str] = {
    Tile.SEA: colorama.Back.BLUE + colorama.Fore.WHITE,
    Tile.COAST: colorama.Back.YELLOW + colorama.Fore.WHITE,
    Tile.LAND: colorama.Back.GREEN + colorama.Fore.WHITE,
}

# Candidate mixes -> closest ANSI background
MIX_COLORS: Dict[frozenset, str] = {
    frozenset({Tile.COAST, Tile.LAND, Tile.SEA}): colorama.Back.WHITE + colorama.Fore.BLACK,
    frozenset({Tile.COAST, Tile.LAND}): colorama.Back.YELLOW + colorama.Fore.WHITE,
    frozenset({Tile.COAST, Tile.SEA}): colorama.Back.MAGENTA + colorama.Fore.WHITE,
    frozenset({Tile.LAND, Tile.SEA}): colorama.Back.CYAN + colorama.Fore.WHITE,
}

DIRECTION_STYLES: Dict[Direction, str] = {
    Direction.UP: colorama.Fore.GREEN,
    Direction.DOWN: colorama.Fore.RED,
    Direction.RIGHT: colorama.Fore.CYAN,
    Direction.LEFT: colorama.Fore.MAGENTA,
}

UNKNOWN_STYLE = colorama.Back.BLACK + colorama.Fore.WHITE


def _paint(style: str, text: str) -> str:
    return style + text + colorama.Style.RESET_ALL


def render_tile(tile: Tile, color: bool = False) -> str:
    char = TILE_TO_CHAR.get(Tile(tile), '?')
    if not color:
        return char
    return _paint(TILE_COLORS.get(Tile(tile), UNKNOWN_STYLE), char)


def render_tiles(grid: Iterable[Sequence[int]], color: bool = False) -> str:
    """One line per row. Accepts rows of Tile or a (H, W) ordinal array."""
    lines = []
    for row in grid:
        lines.append(''.join(render_tile(Tile(int(v)), color) for v in row))
    return '\n'.join(lines)


def render_superposition(sp: Superposition, color: bool = False) -> str:
    if not sp:
        return _paint(UNKNOWN_STYLE, '?') if color else '?'
    if len(sp) == 1:
        return render_tile(sp[0], color)

    # Counts above 9 would break the grid alignment
    label = str(len(sp)) if len(sp) < 10 else '+'
    if not color:
        return label
    return _paint(MIX_COLORS.get(frozenset(sp), UNKNOWN_STYLE), label)


def render_superpositions(grid: List[List[Superposition]], color: bool = False) -> str:
    """Diagnostic view of a superposition grid."""
    return '\n'.join(''.join(render_superposition(sp, color) for sp in row) for row in grid)


def render_direction(direction: Direction, color: bool = False) -> str:
    letter = direction.name[0]
    if not color:
        return letter
    return _paint(colorama.Back.BLACK + DIRECTION_STYLES[direction] + colorama.Style.BRIGHT, letter)


def render_rule(rule: AdjacencyRule, color: bool = False) -> str:
    """Three characters: tile, neighbor, direction (e.g. "scR")."""
    return render_tile(rule.tile, color) + render_tile(rule.neighbor, color) + render_direction(rule.direction, color)


def render_rules(rules: Iterable[AdjacencyRule], color: bool = False) -> str:
    return '\n'.join(render_rule(rule, color) for rule in rules)
