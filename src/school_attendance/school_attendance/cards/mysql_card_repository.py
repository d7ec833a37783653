from __future__ import annotations

from typing import Optional

from ..core.enums import PersonKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import CardBinding
from .repository import CardRepository

_CARD_TABLES = {
    PersonKind.STUDENT: ("rfid_cards_students", "student_id"),
    PersonKind.STAFF: ("rfid_cards_teachers", "teacher_id"),
}


class MySQLCardRepository(CardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_active(self, kind: PersonKind, card_number: str) -> Optional[CardBinding]:
        table, person_col = _CARD_TABLES[kind]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT card_number, {person_col} AS person_id
                FROM {table}
                WHERE card_number=%s AND is_active=1
                ORDER BY card_id DESC
                LIMIT 1
                """,
                (card_number,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return CardBinding(
                card_number=r["card_number"],
                person_id=int(r["person_id"]),
                person_kind=kind,
                is_active=True,
            )
