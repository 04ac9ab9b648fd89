"""
Theme settings model for site customization
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ThemeSettings:
    primary_color: str = "#3b82f6"
    secondary_color: str = "#f97316"
    accent_color: str = "#8b5cf6"
    logo_text: str = "VideoShare"
    logo_url: Optional[str] = None
    border_radius: float = 0.5
    enable_ads: bool = False
    dark_mode: bool = False
