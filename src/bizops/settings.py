"""Global configuration and constants for the onboarding tour subsystem."""

from __future__ import annotations

import os
from typing import Final

DATA_DIR: Final = os.environ.get("BIZOPS_DATA_DIR", "data")
LOG_LEVEL: Final = os.environ.get("BIZOPS_LOG_LEVEL", "INFO")

# Completion sets are stored one entry per user: prefix + stable user id
STORAGE_KEY_PREFIX: Final = "bizops-completed-tours-"
STORAGE_FILENAME: Final = "tour_storage.json"

# Gives page widgets time to mount before the spotlight tries to locate them
AUTO_LAUNCH_DELAY_MS: Final = 500

# Spotlight metrics (pixels)
HIGHLIGHT_PADDING: Final = 8
TOOLTIP_PADDING: Final = 16
TOOLTIP_WIDTH: Final = 320
TOOLTIP_HEIGHT: Final = 180
