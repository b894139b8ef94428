"""
Timeline Image Rendering

Draws a TimelineGrid as a PNG: one square per visible week, 52 per row,
colored by lived/future state and event intensity. The current week is
outlined.
"""

import io
import logging

from PIL import Image, ImageDraw, ImageFont

from lifeweeks.timeline.grid import IntensityTier, TimelineGrid, WeekCell, WeekState
from lifeweeks.timeline.weeks import WEEKS_PER_YEAR

logger = logging.getLogger(__name__)

CELL_SIZE = 12  # pixels
CELL_GAP = 3  # pixels between cells
GRID_PADDING = 30  # pixels around the grid
HEADER_HEIGHT = 50  # pixels for the title line

# Colors (RGB)
BACKGROUND_COLOR = (255, 255, 255)
TEXT_COLOR = (50, 50, 50)
FUTURE_COLOR = (229, 231, 235)
LIVED_COLOR = (96, 165, 250)
CURRENT_OUTLINE = (74, 222, 128)
INTENSITY_COLORS = {
    IntensityTier.NONE: LIVED_COLOR,
    IntensityTier.LOW: (251, 191, 36),
    IntensityTier.MEDIUM: (249, 115, 22),
    IntensityTier.HIGH: (147, 51, 234),
}


def cell_color(cell: WeekCell) -> tuple[int, int, int]:
    if cell.state is WeekState.FUTURE and not cell.event_count:
        return FUTURE_COLOR
    return INTENSITY_COLORS[cell.intensity]


def render_grid_png(grid: TimelineGrid, title: str = "") -> bytes:
    """Render ``grid`` and return PNG bytes."""
    columns = WEEKS_PER_YEAR
    rows = max(1, -(-len(grid.cells) // columns))
    step = CELL_SIZE + CELL_GAP

    width = GRID_PADDING * 2 + columns * step - CELL_GAP
    height = GRID_PADDING * 2 + HEADER_HEIGHT + rows * step - CELL_GAP

    image = Image.new("RGB", (width, height), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    heading = title or "Life in Weeks"
    draw.text(
        (GRID_PADDING, GRID_PADDING),
        f"{heading}: {grid.weeks_lived:,} weeks lived ({grid.life_progress}%)",
        fill=TEXT_COLOR,
        font=font,
    )

    top = GRID_PADDING + HEADER_HEIGHT
    for position, cell in enumerate(grid.cells):
        row, col = divmod(position, columns)
        x0 = GRID_PADDING + col * step
        y0 = top + row * step
        box = [x0, y0, x0 + CELL_SIZE - 1, y0 + CELL_SIZE - 1]
        draw.rectangle(box, fill=cell_color(cell))
        if cell.is_current:
            draw.rectangle(box, outline=CURRENT_OUTLINE, width=2)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    logger.debug(f"Rendered timeline image {width}x{height} with {len(grid.cells)} weeks")
    return buffer.getvalue()
