"""Onboarding configuration persistence.

Stores user-tunable onboarding knobs (auto-launch toggle and delay, spotlight
metrics) in a small versioned JSON file.

Design principles:
- Pure logic (no Qt import) so it can be unit-tested headless.
- Explicit schema with version field to enable future migrations.
- Graceful fallback: corrupt or incompatible files produce defaults instead of raising.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
import json
import logging
from pathlib import Path
from typing import Any, Dict

from bizops import settings
from bizops.design.spotlight import SpotlightMetrics

__all__ = ["OnboardingConfig", "load_config", "save_config", "CONFIG_VERSION"]

CONFIG_VERSION = 1  # Increment when structure changes

DEFAULT_FILENAME = "onboarding_config.json"

log = logging.getLogger(__name__)


@dataclass(slots=True)
class OnboardingConfig:
    """Serializable onboarding configuration.

    Attributes
    ----------
    version: Schema version for migration handling.
    auto_launch_enabled: Whether page tours start automatically on first visit.
    auto_launch_delay_ms: Delay between page change and tour start.
    highlight_padding: Spotlight cutout inflation around the target.
    tooltip_padding: Gap between target and tooltip; also the viewport margin.
    tooltip_width, tooltip_height: Tooltip box size used for placement.
    """

    version: int = CONFIG_VERSION
    auto_launch_enabled: bool = True
    auto_launch_delay_ms: int = settings.AUTO_LAUNCH_DELAY_MS
    highlight_padding: int = settings.HIGHLIGHT_PADDING
    tooltip_padding: int = settings.TOOLTIP_PADDING
    tooltip_width: int = settings.TOOLTIP_WIDTH
    tooltip_height: int = settings.TOOLTIP_HEIGHT

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OnboardingConfig":
        defaults = cls()
        return cls(
            version=int(data.get("version", CONFIG_VERSION)),
            auto_launch_enabled=bool(data.get("auto_launch_enabled", True)),
            auto_launch_delay_ms=max(0, int(data.get("auto_launch_delay_ms", defaults.auto_launch_delay_ms))),
            highlight_padding=int(data.get("highlight_padding", defaults.highlight_padding)),
            tooltip_padding=int(data.get("tooltip_padding", defaults.tooltip_padding)),
            tooltip_width=int(data.get("tooltip_width", defaults.tooltip_width)),
            tooltip_height=int(data.get("tooltip_height", defaults.tooltip_height)),
        )

    def spotlight_metrics(self) -> SpotlightMetrics:
        return SpotlightMetrics(
            highlight_padding=self.highlight_padding,
            tooltip_padding=self.tooltip_padding,
            tooltip_width=self.tooltip_width,
            tooltip_height=self.tooltip_height,
        )


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path(settings.DATA_DIR)
    return base / DEFAULT_FILENAME


def load_config(base_dir: str | Path | None = None) -> OnboardingConfig:
    """Load onboarding config from directory (defaults to ``settings.DATA_DIR``)."""
    path = _resolve_path(base_dir)
    if not path.exists():
        return OnboardingConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        cfg = OnboardingConfig.from_dict(data)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        log.warning("Onboarding config %s unreadable (%s); using defaults", path, exc)
        return OnboardingConfig()
    if cfg.version != CONFIG_VERSION:
        # Only the on/off preference survives a schema change
        return OnboardingConfig(auto_launch_enabled=cfg.auto_launch_enabled)
    return cfg


def save_config(cfg: OnboardingConfig, base_dir: str | Path | None = None) -> Path:
    """Persist onboarding config to directory.

    Returns the path written for convenience.
    """
    path = _resolve_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path
