from typing import Literal
from pydantic import BaseModel, Field
from rgbtone.internal.color_codec import (
    Color, RGB, Contrast, compute_contrast, display_hex, display_rgb,
)


class RGBModel(BaseModel):
    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)


class SavedColorRecord(BaseModel):
    """One persisted entry. Three digit hex is tolerated for older payloads."""
    hex: str = Field(pattern=r"^([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
    rgb: RGBModel

    @classmethod
    def from_color(cls, color: Color) -> "SavedColorRecord":
        return cls(hex=color.hex, rgb=RGBModel(r=color.rgb.r, g=color.rgb.g, b=color.rgb.b))


class ColorResponse(BaseModel):
    valid: bool
    hex: str
    rgb: RGBModel | None
    display_hex: str
    display_rgb: str
    contrast: Contrast | None

    @classmethod
    def from_color(cls, color: Color, shorthand: bool) -> "ColorResponse":
        return cls(
            valid=color.valid,
            hex=color.hex,
            rgb=_rgb_model(color.rgb),
            display_hex=display_hex(color, shorthand),
            display_rgb=display_rgb(color.rgb),
            contrast=compute_contrast(color.hex) if color.valid else None,
        )


class SavedColor(BaseModel):
    hex: str
    rgb: RGBModel
    display_hex: str
    display_rgb: str
    contrast: Contrast

    @classmethod
    def from_color(cls, color: Color, shorthand: bool) -> "SavedColor":
        return cls(
            hex=color.hex,
            rgb=_rgb_model(color.rgb),
            display_hex=display_hex(color, shorthand),
            display_rgb=display_rgb(color.rgb),
            contrast=compute_contrast(color.hex),
        )


class SavedColorsResponse(BaseModel):
    colors: list[SavedColor]


class SaveColorRequest(BaseModel):
    value: str
    mode: Literal["hex", "rgb"] = "hex"


class SaveColorResponse(SavedColorsResponse):
    saved: bool


class SettingsResponse(BaseModel):
    shorthand: bool
    max_save: int


def _rgb_model(rgb: RGB | None) -> RGBModel | None:
    if rgb is None:
        return None
    return RGBModel(r=rgb.r, g=rgb.g, b=rgb.b)
