from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException
from rgbtone.dependencies import get_context
from rgbtone.internal.app_context import AppContext
from rgbtone.internal.color_codec import Color, read_hex_input, read_rgb_input
from rgbtone.internal.models import (
    SavedColor, SavedColorsResponse, SaveColorRequest, SaveColorResponse,
)


router = APIRouter(
    prefix="/api",
    tags=["colors"]
)

Context = Annotated[AppContext, Depends(get_context)]


def _saved_colors(colors: list[Color], shorthand: bool) -> list[SavedColor]:
    return [SavedColor.from_color(c, shorthand) for c in colors]


@router.get("/colors", response_model=SavedColorsResponse)
def get_colors(ctx: Context):
    return {"colors": _saved_colors(ctx.saved_colors.colors, ctx.shorthand)}

@router.post("/colors", response_model=SaveColorResponse)
def save_color(req: SaveColorRequest, ctx: Context):
    if req.mode == "hex":
        color = read_hex_input(req.value, ctx.shorthand)
    else:
        color = read_rgb_input(req.value)

    colors, saved = ctx.saved_colors.try_save(color)
    return {
        "saved": saved,
        "colors": _saved_colors(colors, ctx.shorthand),
    }

@router.delete("/colors", response_model=SavedColorsResponse)
def clear_colors(ctx: Context, confirm: bool = False):
    if not confirm:
        raise HTTPException(status_code=400, detail="Removing all saved colors requires confirm=true")

    return {"colors": _saved_colors(ctx.saved_colors.clear(), ctx.shorthand)}
