from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import PersonKind


@dataclass(frozen=True)
class Person:
    """Domain entity: a student or staff member as seen by the punch core.

    Plain data object, read from the roster tables owned by the admin app.
    """

    person_id: int
    kind: PersonKind
    name: str
    name_bn: Optional[str] = None
    photo_url: Optional[str] = None
    shift_id: Optional[int] = None
    # Students only.
    class_name: Optional[str] = None
    section_name: Optional[str] = None
    # Staff only.
    designation: Optional[str] = None
