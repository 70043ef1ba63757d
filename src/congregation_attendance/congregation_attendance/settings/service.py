from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_negative
from ..core.constants import DEFAULT_ACCESS_PASSWORD
from ..core.exceptions import AuthenticationError, ValidationError
from .model import CategoryThresholds, Settings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


def validate_thresholds(thresholds: CategoryThresholds) -> CategoryThresholds:
    attention = require_non_negative(thresholds.attention, "Attention threshold")
    low = require_non_negative(thresholds.low, "Low threshold")
    critical = require_non_negative(thresholds.critical, "Critical threshold")
    if not attention <= low <= critical:
        raise ValidationError("Thresholds must be non-decreasing (attention <= low <= critical)")
    return thresholds


class SettingsService:
    """Loads settings once and replaces them only through :meth:`update`."""

    def __init__(self, settings: SettingsRepository, *, default_password: str = DEFAULT_ACCESS_PASSWORD):
        self._repo = settings
        self._default_password = default_password
        self._current: Optional[Settings] = None

    def get(self) -> Settings:
        if self._current is None:
            stored = self._repo.get_settings()
            if stored is None:
                stored = Settings(access_password_hash=generate_password_hash(self._default_password))
                logger.info("No stored settings, using defaults")
            self._current = stored
        return self._current

    def update(
        self,
        *,
        thresholds: Optional[CategoryThresholds] = None,
        new_password: Optional[str] = None,
    ) -> Settings:
        current = self.get()
        updated = current

        if thresholds is not None:
            updated = replace(updated, thresholds=validate_thresholds(thresholds))
        if new_password is not None:
            require_min_length(new_password, "Password", 4)
            updated = replace(updated, access_password_hash=generate_password_hash(new_password))

        self._repo.set_settings(updated)
        self._current = updated
        logger.info(
            "Settings updated (thresholds=%s, password_changed=%s)",
            updated.thresholds,
            new_password is not None,
        )
        return updated

    def authenticate(self, password: str) -> None:
        try:
            ok = check_password_hash(self.get().access_password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hash values
            ok = False
        if not ok:
            raise AuthenticationError("Invalid access password")
