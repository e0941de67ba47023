"""Tool settings: the persisted / shareable subset of job parameters.

Only the cutter and feed values are stored; stock size and raster strategy
belong to each job.  Settings decoded from disk or from a shared link are
accepted whole or not at all: a missing or non-numeric field rejects the
entire payload rather than falling back to defaults.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from ..core.params import SurfacingParams

logger = logging.getLogger(__name__)

URL_PREFIX = "#tool="


class SettingsError(ValueError):
    """Raised when stored or imported tool settings are malformed."""


@dataclass(frozen=True)
class ToolSettings:
    """Cutter, feeds and depth step, serialized to ~/.rastermaster/tool_settings.json."""

    bit_diameter: float
    stepover_percent: float
    feed_rate: float
    plunge_rate: float
    spindle_rpm: float
    retract_height: float
    depth_per_pass: float

    @staticmethod
    def _path() -> Path:
        return Path.home() / ".rastermaster" / "tool_settings.json"

    @classmethod
    def from_params(cls, params: SurfacingParams) -> ToolSettings:
        return cls(**{f.name: getattr(params, f.name) for f in fields(cls)})

    def apply(self, params: SurfacingParams) -> SurfacingParams:
        """Return a copy of *params* with these tool values."""
        return replace(params, **asdict(self))

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Any) -> ToolSettings:
        """Strictly decode a mapping.

        Every field must be present and be a number; extra keys are ignored.
        """
        if not isinstance(d, dict):
            raise SettingsError("Tool settings must be a JSON object")
        values = {}
        for f in fields(cls):
            value = d.get(f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise SettingsError(f"Invalid or missing field: {f.name}")
            values[f.name] = value
        return cls(**values)

    # ------------------------------------------------------------------
    # File persistence
    # ------------------------------------------------------------------

    def save(self, path: Optional[Path] = None) -> Path:
        p = Path(path) if path is not None else self._path()
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Saved tool settings to %s", p)
        return p

    @classmethod
    def load(cls, path: Optional[Path] = None) -> Optional[ToolSettings]:
        """Load saved settings, or None if nothing has been saved.

        Raises SettingsError if the file exists but cannot be used.
        """
        p = Path(path) if path is not None else cls._path()
        if not p.exists():
            return None
        try:
            data = json.loads(p.read_text())
        except json.JSONDecodeError as exc:
            raise SettingsError(f"{p} is not valid JSON: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def clear(cls, path: Optional[Path] = None) -> None:
        p = Path(path) if path is not None else cls._path()
        if p.exists():
            p.unlink()
            logger.info("Removed tool settings %s", p)

    # ------------------------------------------------------------------
    # Shareable links
    # ------------------------------------------------------------------

    def to_url_fragment(self) -> str:
        """Encode as ``#tool=<base64 JSON>`` for a shareable link."""
        payload = json.dumps(self.to_dict(), separators=(",", ":"))
        return URL_PREFIX + base64.b64encode(payload.encode("utf-8")).decode("ascii")

    @classmethod
    def from_url_fragment(cls, fragment: str) -> ToolSettings:
        """Decode a fragment produced by ``to_url_fragment``.

        A full URL is accepted too; everything before ``#`` is ignored.
        """
        if "#" in fragment:
            fragment = fragment[fragment.index("#"):]
        if not fragment.startswith(URL_PREFIX):
            raise SettingsError(
                f"Invalid URL format: must start with {URL_PREFIX}"
            )
        encoded = fragment[len(URL_PREFIX):]
        try:
            payload = base64.b64decode(encoded, validate=True).decode("utf-8")
            data = json.loads(payload)
        except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise SettingsError(f"Could not decode tool settings: {exc}") from exc
        return cls.from_dict(data)
