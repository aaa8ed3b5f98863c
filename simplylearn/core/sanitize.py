from typing import Optional

import bleach


def strip_markup(value: Optional[str]) -> Optional[str]:
    """Drop every tag and return trimmed plain text (None stays None)."""
    if value is None:
        return None
    cleaned = bleach.clean(value, tags=[], attributes={}, strip=True)
    return cleaned.strip()
