"""Insertion-ordered student roster."""

import copy
from typing import Any, Iterator

from .config import SAMPLE_STUDENTS

EDITABLE_FIELDS = ("name", "raw")


class Roster:
    """
    Ordered collection of student records keyed by integer id.

    New ids are max(existing ids) + 1, or 1 for an empty roster. The
    roster also remembers the next id it will hand out, so an id freed
    by removing the last student is never reused.

    Usage:
        roster = Roster.sample()
        student = roster.add()
        roster.update(student["id"], "raw", "72.5")
        roster.remove(1)
    """

    def __init__(self, students: list[dict] | None = None, next_id: int | None = None):
        self._students = [dict(s) for s in students or []]
        self._next_id = max(next_id or 1, self._max_id() + 1)

    @classmethod
    def sample(cls) -> "Roster":
        """Create a roster seeded with the demo students."""
        return cls(copy.deepcopy(SAMPLE_STUDENTS))

    @classmethod
    def from_dict(cls, data: dict) -> "Roster":
        """Rebuild a roster from to_dict() output."""
        students = data.get("students", [])
        for student in students:
            if not isinstance(student["id"], int) or isinstance(student["id"], bool):
                raise ValueError(f"Student id must be an integer, got {student['id']!r}")
        return cls(students, data.get("next_id"))

    def to_dict(self) -> dict:
        """Serialize the roster to a JSON-friendly dict."""
        return {
            "students": [dict(s) for s in self._students],
            "next_id": self._next_id,
        }

    def _max_id(self) -> int:
        return max((s["id"] for s in self._students), default=0)

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def students(self) -> list[dict]:
        """Copies of the student records in display order."""
        return [dict(s) for s in self._students]

    def add(self, name: str | None = None, raw: Any = 0) -> dict:
        """
        Append a new student.

        Args:
            name: Display name (default: 'Student {id}')
            raw: Raw score (default: 0)

        Returns:
            The created student record.
        """
        student_id = self._next_id
        student = {
            "id": student_id,
            "name": name if name is not None else f"Student {student_id}",
            "raw": raw,
        }
        self._students.append(student)
        self._next_id = student_id + 1
        return dict(student)

    def get(self, student_id: int) -> dict | None:
        """Return a copy of the student with the given id, or None."""
        for student in self._students:
            if student["id"] == student_id:
                return dict(student)
        return None

    def remove(self, student_id: int) -> bool:
        """
        Remove a student.

        Returns:
            True if removed, False if no student has that id.
        """
        for index, student in enumerate(self._students):
            if student["id"] == student_id:
                del self._students[index]
                return True
        return False

    def update(self, student_id: int, field: str, value: Any) -> bool:
        """
        Set a student's name or raw score in place.

        Raises:
            ValueError: If field is not an editable field.

        Returns:
            True if updated, False if no student has that id.
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Cannot edit field '{field}' (expected one of: {', '.join(EDITABLE_FIELDS)})")

        for student in self._students:
            if student["id"] == student_id:
                student[field] = value
                return True
        return False

    def __iter__(self) -> Iterator[dict]:
        return iter(self.students)

    def __len__(self) -> int:
        return len(self._students)
