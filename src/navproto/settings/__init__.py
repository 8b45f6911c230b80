"""navproto settings package."""

from navproto.settings.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
