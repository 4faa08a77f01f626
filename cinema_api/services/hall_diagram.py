"""Seating chart rendering for the /hall endpoint.

The layout is fixed: a screen bar across the top, a grid of square seats
below it and a legend on the right. Only occupancy is random, and the random
source is passed in so a seeded ``random.Random`` reproduces an image exactly.
"""

import io
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from cinema_api.core.exceptions import EncodingError

DEFAULT_ROWS = 8
DEFAULT_COLS = 12
DEFAULT_OCCUPIED_PCT = 30

SEAT_SIZE = 36
SEAT_GAP = 6
MARGIN = 20
LEGEND_WIDTH = 220
SCREEN_HEIGHT = 16
GRID_TOP = MARGIN + 24
LEGEND_ITEM_HEIGHT = 28
LEGEND_BOX = 18
VIP_ROWS = 2

Color = Tuple[int, int, int]

WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)
COLOR_FREE: Color = (0, 180, 0)
COLOR_OCCUPIED: Color = (200, 0, 0)
COLOR_VIP_FREE: Color = (0, 70, 200)
COLOR_VIP_OCCUPIED: Color = (150, 50, 150)
COLOR_SEAT_BORDER: Color = (30, 30, 30)
COLOR_SCREEN: Color = (120, 120, 120)

# (vip, occupied) -> fill
SEAT_PALETTE = {
    (False, False): COLOR_FREE,
    (False, True): COLOR_OCCUPIED,
    (True, False): COLOR_VIP_FREE,
    (True, True): COLOR_VIP_OCCUPIED,
}

LEGEND = [
    ("Free", COLOR_FREE),
    ("Occupied", COLOR_OCCUPIED),
    ("VIP Free", COLOR_VIP_FREE),
    ("VIP Occupied", COLOR_VIP_OCCUPIED),
]


@dataclass(frozen=True)
class Seat:
    row: int
    col: int
    vip: bool
    occupied: bool

    @property
    def label(self) -> str:
        return f"{row_letter(self.row)}{self.col + 1}"

    @property
    def color(self) -> Color:
        return SEAT_PALETTE[(self.vip, self.occupied)]


def row_letter(row: int) -> str:
    """A..Z, then AA, AB, ... like spreadsheet columns."""
    letters = ""
    row += 1
    while row > 0:
        row, rem = divmod(row - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def parse_int_or_default(value, default: int) -> int:
    """Positive int parsed from ``value``; anything else gives ``default``."""
    if value is None or value == "":
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    if parsed <= 0:
        return default
    return parsed


def image_size(rows: int, cols: int) -> Tuple[int, int]:
    width = MARGIN * 2 + cols * (SEAT_SIZE + SEAT_GAP) - SEAT_GAP + LEGEND_WIDTH
    height = MARGIN * 2 + rows * (SEAT_SIZE + SEAT_GAP) - SEAT_GAP
    return width, height


def seat_origin(row: int, col: int) -> Tuple[int, int]:
    """Top-left pixel of a seat square."""
    return MARGIN + col * (SEAT_SIZE + SEAT_GAP), GRID_TOP + row * (SEAT_SIZE + SEAT_GAP)


def build_seats(rows: int, cols: int, occupied_pct: int, rng: random.Random) -> List[Seat]:
    seats = []
    for row in range(rows):
        vip = row >= rows - VIP_ROWS
        for col in range(cols):
            occupied = rng.randrange(100) < occupied_pct
            seats.append(Seat(row=row, col=col, vip=vip, occupied=occupied))
    return seats


def _ascent(font) -> int:
    if hasattr(font, "getmetrics"):
        return font.getmetrics()[0]
    # bitmap fallback font has no metrics
    return 11


def _draw_text(draw: ImageDraw.ImageDraw, x: int, baseline: int, text: str, font, fill: Color = BLACK) -> None:
    draw.text((x, baseline - _ascent(font)), text, font=font, fill=fill)


def _draw_box(draw: ImageDraw.ImageDraw, x: int, y: int, size: int, fill: Color) -> None:
    # outline is drawn inside the box bounds, 1px wide
    draw.rectangle((x, y, x + size - 1, y + size - 1), fill=fill, outline=COLOR_SEAT_BORDER, width=1)


def render_hall_diagram(rows: int = DEFAULT_ROWS,
                        cols: int = DEFAULT_COLS,
                        occupied_pct: int = DEFAULT_OCCUPIED_PCT,
                        rng: Optional[random.Random] = None) -> Image.Image:
    rows = parse_int_or_default(rows, DEFAULT_ROWS)
    cols = parse_int_or_default(cols, DEFAULT_COLS)
    occupied_pct = parse_int_or_default(occupied_pct, DEFAULT_OCCUPIED_PCT)
    if rng is None:
        rng = random.Random()

    width, height = image_size(rows, cols)
    img = Image.new("RGB", (width, height), WHITE)
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    grid_right = MARGIN + cols * (SEAT_SIZE + SEAT_GAP) - SEAT_GAP
    draw.rectangle((MARGIN, MARGIN, grid_right - 1, MARGIN + SCREEN_HEIGHT - 1), fill=COLOR_SCREEN)
    _draw_text(draw, MARGIN, MARGIN - 2, "SCREEN", font)

    for seat in build_seats(rows, cols, occupied_pct, rng):
        x, y = seat_origin(seat.row, seat.col)
        _draw_box(draw, x, y, SEAT_SIZE, seat.color)
        _draw_text(draw, x + 4, y + SEAT_SIZE // 2 + 6, seat.label, font)

    legend_x = grid_right + 20
    legend_y = MARGIN + 10
    for i, (name, fill) in enumerate(LEGEND):
        item_y = legend_y + i * LEGEND_ITEM_HEIGHT
        _draw_box(draw, legend_x, item_y, LEGEND_BOX, fill)
        _draw_text(draw, legend_x + 24, item_y + 14, name, font)
    _draw_text(draw, legend_x, legend_y + 5 * LEGEND_ITEM_HEIGHT, f"Rows: {rows}  Cols: {cols}", font)

    return img


def encode_png(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    try:
        img.save(buf, format="PNG")
    except (OSError, ValueError) as e:
        logging.error(f"failed to encode hall diagram: {e}", exc_info=True)
        raise EncodingError("failed to generate image")
    return buf.getvalue()
