"""Render Queens puzzles into a printable landscape PDF pack."""

from __future__ import annotations

import datetime as _dt
import math
from pathlib import Path
from typing import Optional, Sequence

from project_config import get_section
from queens.model import BOARD_SIZE, Puzzle

PDF_CONFIG = get_section("pdf", default={})
LAYOUT_CONFIG = PDF_CONFIG.get("layout", {})
PAGE_CONFIG = PDF_CONFIG.get("page", {})
OUTPUT_CONFIG = PDF_CONFIG.get("output", {})

LAYOUT_ROWS = int(LAYOUT_CONFIG.get("rows", 2))
LAYOUT_COLS = int(LAYOUT_CONFIG.get("cols", 2))
PUZZLES_PER_PAGE = max(1, LAYOUT_ROWS * LAYOUT_COLS)
DEFAULT_MARGIN_CM = float(PAGE_CONFIG.get("margin_cm", 3.0))
DEFAULT_GAP_CM = float(PAGE_CONFIG.get("gap_cm", 2.0))
PAGE_WIDTH_CM = float(PAGE_CONFIG.get("width_cm", 29.7))
PAGE_HEIGHT_CM = float(PAGE_CONFIG.get("height_cm", 21.0))
FOOTER_OFFSET_CM = float(PAGE_CONFIG.get("footer_offset_cm", 1.0))
OUTPUT_PREFIX = str(OUTPUT_CONFIG.get("filename_prefix", "queens_9x9_pack"))
INCH_PER_CM = 0.3937007874

REGION_COLORS = (
    "#f4a3a3",
    "#f7c98b",
    "#f3ee8a",
    "#b5e3a1",
    "#9fd8e0",
    "#a9bdf2",
    "#cfb1ef",
    "#f2b6d8",
    "#d6d0c4",
)


def default_output_path() -> Path:
    timestamp = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path(f"{OUTPUT_PREFIX}_{timestamp}.pdf")


def draw_puzzle(ax, puzzle: Puzzle, *, show_solution: bool = False) -> None:
    """Draw one puzzle on ``ax`` in unit coordinates (row 0 at the top)."""

    from matplotlib.patches import Rectangle

    n = BOARD_SIZE
    cell = 1.0 / n
    grid = puzzle.region_grid
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_aspect("equal")
    ax.axis("off")

    for r in range(n):
        for c in range(n):
            color = REGION_COLORS[grid[r][c] % len(REGION_COLORS)]
            ax.add_patch(
                Rectangle((c * cell, 1 - (r + 1) * cell), cell, cell, facecolor=color, edgecolor="none")
            )

    # Thin lines inside a region, thick ones on region borders.
    for r in range(n):
        for c in range(n):
            x0, y_top = c * cell, 1 - r * cell
            if c + 1 < n:
                width = 2.5 if grid[r][c] != grid[r][c + 1] else 0.4
                ax.plot([x0 + cell, x0 + cell], [y_top - cell, y_top], color="k", linewidth=width)
            if r + 1 < n:
                width = 2.5 if grid[r][c] != grid[r + 1][c] else 0.4
                ax.plot([x0, x0 + cell], [y_top - cell, y_top - cell], color="k", linewidth=width)
    ax.add_patch(Rectangle((0, 0), 1, 1, fill=False, edgecolor="k", linewidth=3.0))

    queens = puzzle.solution if show_solution else puzzle.revealed_queens
    revealed = set(puzzle.revealed_queens)
    for queen in queens:
        x = (queen.col + 0.5) * cell
        y = 1 - (queen.row + 0.5) * cell
        face = "k" if queen in revealed else "#555555"
        ax.scatter([x], [y], marker="*", s=180, color=face, zorder=3)


def render_pdf(
    puzzles: Sequence[Puzzle],
    out_path: Optional[Path | str] = None,
    *,
    margin_cm: float = DEFAULT_MARGIN_CM,
    gap_cm: float = DEFAULT_GAP_CM,
    footer: str = "",
    with_solutions: bool = False,
) -> Path:
    """Lay ``puzzles`` out ``LAYOUT_ROWS`` x ``LAYOUT_COLS`` per page.

    With ``with_solutions`` an answer-key page set follows the puzzles.
    Returns the written path.
    """

    if not puzzles:
        raise ValueError("at least one puzzle is required")

    from matplotlib.backends.backend_pdf import PdfPages
    import matplotlib.pyplot as plt

    target = Path(out_path) if out_path is not None else default_output_path()
    target.parent.mkdir(parents=True, exist_ok=True)

    page_w_in = PAGE_WIDTH_CM * INCH_PER_CM
    page_h_in = PAGE_HEIGHT_CM * INCH_PER_CM
    margin_in = margin_cm * INCH_PER_CM
    gap_in = gap_cm * INCH_PER_CM

    avail_w = page_w_in - 2 * margin_in - gap_in * (LAYOUT_COLS - 1)
    avail_h = page_h_in - 2 * margin_in - gap_in * (LAYOUT_ROWS - 1)
    grid_size = min(avail_w / LAYOUT_COLS, avail_h / LAYOUT_ROWS)
    if grid_size <= 0:
        raise ValueError("margins and gaps leave no room for the puzzles")

    footer_y = (FOOTER_OFFSET_CM * INCH_PER_CM) / page_h_in
    pages = math.ceil(len(puzzles) / PUZZLES_PER_PAGE)
    passes = (False, True) if with_solutions else (False,)

    with PdfPages(target) as pdf:
        for show_solution in passes:
            for page_num in range(pages):
                fig = plt.figure(figsize=(page_w_in, page_h_in))
                page_puzzles = puzzles[page_num * PUZZLES_PER_PAGE:(page_num + 1) * PUZZLES_PER_PAGE]
                for index, puzzle in enumerate(page_puzzles):
                    row, col = divmod(index, LAYOUT_COLS)
                    left = margin_in + col * (grid_size + gap_in)
                    bottom = margin_in + (LAYOUT_ROWS - 1 - row) * (grid_size + gap_in)
                    ax = fig.add_axes(
                        [left / page_w_in, bottom / page_h_in, grid_size / page_w_in, grid_size / page_h_in],
                        frameon=False,
                    )
                    draw_puzzle(ax, puzzle, show_solution=show_solution)

                label = "Solutions" if show_solution else footer
                if label:
                    fig.text(0.5, footer_y, label, ha="center", va="bottom", fontsize=8)
                pdf.savefig(fig)
                plt.close(fig)

    return target


__all__ = ["draw_puzzle", "render_pdf", "default_output_path"]
