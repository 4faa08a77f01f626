import random
import time
from typing import Optional
from fastapi import APIRouter, Query, Response

from cinema_api.services.hall_diagram import (
    DEFAULT_COLS,
    DEFAULT_OCCUPIED_PCT,
    DEFAULT_ROWS,
    encode_png,
    parse_int_or_default,
    render_hall_diagram,
)

router = APIRouter(tags=["hall"])


@router.get("/hall", response_class=Response,
            responses={200: {"content": {"image/png": {}}}},
            summary="Render a seating chart with randomly occupied seats")
def hall_diagram(rows: Optional[str] = Query(None),
                 cols: Optional[str] = Query(None),
                 occupied_pct: Optional[str] = Query(None, alias="occupiedPct")):
    # bad values are not rejected, each one falls back to its own default
    img = render_hall_diagram(
        rows=parse_int_or_default(rows, DEFAULT_ROWS),
        cols=parse_int_or_default(cols, DEFAULT_COLS),
        occupied_pct=parse_int_or_default(occupied_pct, DEFAULT_OCCUPIED_PCT),
        rng=random.Random(time.time_ns()),
    )
    return Response(content=encode_png(img), media_type="image/png")
