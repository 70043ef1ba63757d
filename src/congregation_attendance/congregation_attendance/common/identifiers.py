from __future__ import annotations

import uuid


def new_id() -> str:
    """Short random identifier for members and attendance records."""
    return uuid.uuid4().hex[:12]
