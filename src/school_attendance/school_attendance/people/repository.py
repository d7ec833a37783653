from __future__ import annotations

from typing import Optional, Protocol

from .model import Person


class PersonRepository(Protocol):
    """Read access to the roster.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_student(self, student_id: int) -> Optional[Person]:
        raise NotImplementedError

    def get_staff(self, teacher_id: int) -> Optional[Person]:
        raise NotImplementedError
