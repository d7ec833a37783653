from __future__ import annotations

from typing import Optional

from ..core.enums import PersonKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Person
from .repository import PersonRepository


def _optional_int(value) -> Optional[int]:
    return int(value) if value is not None else None


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_student(self, student_id: int) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.student_id, s.name, s.name_bn, s.photo_url, s.shift_id,
                       c.name AS class_name, sec.name AS section_name
                FROM students s
                LEFT JOIN classes c ON c.class_id = s.class_id
                LEFT JOIN sections sec ON sec.section_id = s.section_id
                WHERE s.student_id=%s
                """,
                (student_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Person(
                person_id=int(row["student_id"]),
                kind=PersonKind.STUDENT,
                name=row["name"],
                name_bn=row.get("name_bn"),
                photo_url=row.get("photo_url"),
                shift_id=_optional_int(row.get("shift_id")),
                class_name=row.get("class_name"),
                section_name=row.get("section_name"),
            )

    def get_staff(self, teacher_id: int) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT teacher_id, name, name_bn, photo_url, designation, shift_id
                FROM teachers
                WHERE teacher_id=%s
                """,
                (teacher_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Person(
                person_id=int(row["teacher_id"]),
                kind=PersonKind.STAFF,
                name=row["name"],
                name_bn=row.get("name_bn"),
                photo_url=row.get("photo_url"),
                shift_id=_optional_int(row.get("shift_id")),
                designation=row.get("designation"),
            )
