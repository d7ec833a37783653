from __future__ import annotations

import logging

from ..core.constants import CARD_NUMBER_PAD_WIDTH
from ..core.enums import PersonKind
from ..core.exceptions import CardNotRegistered
from .model import ResolvedCard
from .repository import CardRepository

logger = logging.getLogger(__name__)

# Student cards are searched first. If a card number is active in both tables
# the student binding wins; no conflict detection is done here.
SEARCH_ORDER = (PersonKind.STUDENT, PersonKind.STAFF)


def card_number_variants(card_number: str) -> list[str]:
    """Spellings a reader may send for the same card.

    Readers disagree on leading zeros, so try the exact value, the value
    zero-padded to the enrolment width, then the value with zeros stripped.
    """

    variants = [card_number, card_number.rjust(CARD_NUMBER_PAD_WIDTH, "0")]
    stripped = card_number.lstrip("0")
    if stripped and stripped != card_number:
        variants.append(stripped)

    unique: list[str] = []
    for v in variants:
        if v not in unique:
            unique.append(v)
    return unique


class CardResolver:
    def __init__(self, cards: CardRepository):
        self._cards = cards

    def resolve(self, card_number: str) -> ResolvedCard:
        variants = card_number_variants(card_number)
        for kind in SEARCH_ORDER:
            for candidate in variants:
                binding = self._cards.find_active(kind, candidate)
                if binding is not None:
                    logger.debug("Card %s matched %s %s as %r", card_number, kind.value, binding.person_id, candidate)
                    return ResolvedCard(
                        person_id=binding.person_id,
                        person_kind=kind,
                        card_number=card_number,
                    )

        raise CardNotRegistered(card_number)
