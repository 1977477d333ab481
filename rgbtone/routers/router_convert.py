from typing import Annotated
from fastapi import APIRouter, Depends
from rgbtone.dependencies import get_context
from rgbtone.internal.app_context import AppContext
from rgbtone.internal.color_codec import read_hex_input, read_rgb_input
from rgbtone.internal.models import ColorResponse, SettingsResponse


router = APIRouter(
    prefix="/api",
    tags=["convert"]
)

Context = Annotated[AppContext, Depends(get_context)]


@router.get("/settings", response_model=SettingsResponse)
def get_settings(ctx: Context):
    return {
        "shorthand": ctx.config.shorthand,
        "max_save": ctx.config.max_save,
    }

# Each call recomputes the color from the submitted text alone.
@router.get("/convert/hex", response_model=ColorResponse)
def convert_hex(value: str, ctx: Context):
    color = read_hex_input(value, ctx.shorthand)
    return ColorResponse.from_color(color, ctx.shorthand)

@router.get("/convert/rgb", response_model=ColorResponse)
def convert_rgb(value: str, ctx: Context):
    color = read_rgb_input(value)
    return ColorResponse.from_color(color, ctx.shorthand)
