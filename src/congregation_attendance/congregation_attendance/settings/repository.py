from __future__ import annotations

from typing import Optional, Protocol

from .model import Settings


class SettingsRepository(Protocol):
    def get_settings(self) -> Optional[Settings]:
        """Return the stored settings, or None when nothing was saved yet."""

        raise NotImplementedError

    def set_settings(self, settings: Settings) -> None:
        raise NotImplementedError
