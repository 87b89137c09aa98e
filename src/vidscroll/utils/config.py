"""Configuration management."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULTS = {
    # Replace with your own key, or set it from the Settings window
    "api_key": "",
    "region_code": "US",
    "page_size": 15,
    "search_url": "https://www.googleapis.com/youtube/v3/search",
    "request_timeout": 10,
}


class Config:
    """Manages application configuration."""

    def __init__(self, config_file: Path = None):
        if config_file is None:
            # Use user's home directory for config
            config_file = Path.home() / "vidscroll_settings.json"
        self.file = Path(config_file)
        self.data = dict(DEFAULTS)
        self.load()

    def load(self):
        """Load configuration from file."""
        if self.file.exists():
            try:
                with open(self.file, 'r', encoding='utf-8') as f:
                    self.data.update(json.load(f))
            except (OSError, ValueError) as e:
                logger.warning(f"Ignoring unreadable config {self.file}: {e}")

    def save(self):
        """Save configuration to file."""
        try:
            self.file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=2)
        except OSError as e:
            logger.error(f"Could not save config {self.file}: {e}")

    @property
    def api_key(self) -> str:
        return str(self.data.get("api_key") or "")

    @property
    def region_code(self) -> str:
        return str(self.data.get("region_code") or DEFAULTS["region_code"])

    @property
    def search_url(self) -> str:
        return str(self.data.get("search_url") or DEFAULTS["search_url"])

    @property
    def page_size(self) -> int:
        try:
            return int(self.data["page_size"])
        except (KeyError, TypeError, ValueError):
            return DEFAULTS["page_size"]

    @property
    def request_timeout(self) -> float:
        try:
            timeout = float(self.data["request_timeout"])
        except (KeyError, TypeError, ValueError):
            return DEFAULTS["request_timeout"]
        if timeout <= 0:
            logger.warning(f"Ignoring non-positive request_timeout {timeout}")
            return DEFAULTS["request_timeout"]
        return timeout

    def set_api_key(self, key: str):
        """Set the API key."""
        self.data["api_key"] = key.strip()
        self.save()

    def set_region_code(self, region: str):
        """Set the region code results are localized to."""
        self.data["region_code"] = region.strip().upper() or DEFAULTS["region_code"]
        self.save()
