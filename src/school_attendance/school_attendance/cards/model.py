from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PersonKind


@dataclass(frozen=True)
class CardBinding:
    """Association between a physical card and one person."""

    card_number: str
    person_id: int
    person_kind: PersonKind
    is_active: bool = True


@dataclass(frozen=True)
class ResolvedCard:
    """Outcome of resolving a scan: who punched, and with which card."""

    person_id: int
    person_kind: PersonKind
    card_number: str
