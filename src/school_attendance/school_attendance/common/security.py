from __future__ import annotations

import hmac
from typing import Optional


def verify_device_token(expected: Optional[str], candidate: Optional[str]) -> bool:
    """Constant-time check of a reader's shared secret.

    An empty ``expected`` means device authentication is switched off.
    """

    expected = (expected or "").strip()
    if not expected:
        return True
    return hmac.compare_digest((candidate or "").strip().encode("utf-8"), expected.encode("utf-8"))
