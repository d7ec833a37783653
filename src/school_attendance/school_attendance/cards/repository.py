from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import PersonKind
from .model import CardBinding


class CardRepository(Protocol):
    def find_active(self, kind: PersonKind, card_number: str) -> Optional[CardBinding]:
        """Active binding for ``card_number`` in the card table of ``kind``."""

        raise NotImplementedError
