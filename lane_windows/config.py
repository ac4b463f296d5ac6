from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WindowSettings(BaseSettings):
    scale_step: float = Field(0.5, gt=0, lt=1)
    min_scale: float = Field(0.05, gt=0)
    aspect_ratio: float = Field(1.5, gt=0)
    model_config = SettingsConfigDict(env_prefix="LANE_WINDOWS_", env_file=".env", extra="ignore")


class DetectionSettings(BaseSettings):
    gaussian_kernel: int = 5
    canny_low: Optional[int] = None
    canny_high: Optional[int] = None
    auto_canny_sigma: float = 0.33
    hough_rho: float = 2.0
    hough_threshold: int = 15
    min_line_length: int = 20
    max_line_gap: int = 30
    slope_threshold: float = 0.4
    # region of interest, in pixels from each frame border
    up_margin: int = Field(0, ge=0)
    down_margin: int = Field(0, ge=0)
    side_margin: int = Field(0, ge=0)
    model_config = SettingsConfigDict(env_prefix="LANE_DETECT_", env_file=".env", extra="ignore")
