"""Toolpath generation package."""

from .base import (
    LineDirection,
    PassKind,
    RasterLine,
    Toolpath,
    XRasterLine,
    YRasterLine,
    ZPass,
)

__all__ = [
    "LineDirection",
    "PassKind",
    "RasterLine",
    "Toolpath",
    "XRasterLine",
    "YRasterLine",
    "ZPass",
]
