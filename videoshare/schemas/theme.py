"""
Theme customization schema
"""

from pydantic import Field
from typing import Optional

from videoshare.schemas.base import CamelModel

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class ThemeSettingsSchema(CamelModel):
    primary_color: str = Field("#3b82f6", pattern=HEX_COLOR)
    secondary_color: str = Field("#f97316", pattern=HEX_COLOR)
    accent_color: str = Field("#8b5cf6", pattern=HEX_COLOR)
    logo_text: str = Field("VideoShare", max_length=50)
    logo_url: Optional[str] = None
    border_radius: float = Field(0.5, ge=0, le=2)
    enable_ads: bool = False
    dark_mode: bool = False
