from typing import Any, Callable, Dict, Union

from pydantic import ValidationError

from schoolplacement.core.auth import AuthorizationGate
from schoolplacement.core.engine import PlacementEngine
from schoolplacement.core.errors import ErrorCode, Result, guarded
from schoolplacement.core.models import Student
from schoolplacement.core.payloads import StudentPayload, coerce_payload
from schoolplacement.core.repositories import Repository
from schoolplacement.core.rules import MAX_SCORE
from schoolplacement.logger import get_logger


class StudentCatalog:
    """
    Student records. Each student is placed once, at creation.

    With ``requires_ministry`` set, only the ministry may add students.
    """

    def __init__(
        self,
        repo: Repository[Student],
        engine: PlacementEngine,
        gate: AuthorizationGate,
        id_factory: Callable[[], str],
        requires_ministry: bool = False,
    ):
        self.repo = repo
        self.engine = engine
        self.gate = gate
        self.id_factory = id_factory
        self.requires_ministry = requires_ministry

    @guarded("Failed to add student")
    def add(self, payload: Union[StudentPayload, Dict[str, Any]], caller: str) -> Result:
        try:
            data = coerce_payload(StudentPayload, payload)
        except ValidationError as e:
            return Result.fail(ErrorCode.INVALID_INPUT, f"Invalid student payload: {e}")

        # falsy check: a score of 0 is treated as missing
        if not data.name or not data.county or not data.phone or not data.score:
            return Result.fail(ErrorCode.INVALID_INPUT, "Incomplete input data!")
        if not 0 <= data.score <= MAX_SCORE:
            return Result.fail(ErrorCode.INVALID_INPUT, f"Score must be between 0 and {MAX_SCORE}")

        if self.requires_ministry:
            denied = self.gate.check(caller)
            if denied is not None:
                return denied

        placed = self.engine.place(data.score)
        if not placed:
            return placed

        student = Student(
            id=self.id_factory(),
            name=data.name,
            phone=data.phone,
            score=data.score,
            county=data.county,
            highschool=placed.value,
        )
        self.repo.insert(student.id, student)
        get_logger().info("Student added", student_id=student.id, highschool_id=student.highschool.id)
        return Result.ok(student)

    @guarded("Failed to get student")
    def get(self, student_id: str) -> Result:
        if not student_id:
            return Result.fail(ErrorCode.INVALID_INPUT, "Invalid ID")
        student = self.repo.get(student_id)
        if student is None:
            return Result.fail(ErrorCode.NOT_FOUND, f"Student {student_id} not found")
        return Result.ok(student)

    @guarded("Failed to get students")
    def list_all(self) -> Result:
        students = self.repo.values()
        if not students:
            return Result.fail(ErrorCode.EMPTY_RESULT, "No students found")
        return Result.ok(students)

    @guarded("Failed to search students")
    def search_by_name(self, name: str) -> Result:
        if not name:
            return Result.fail(ErrorCode.INVALID_INPUT, "Invalid name")
        needle = name.lower()
        matches = [s for s in self.repo.values() if needle in s.name.lower()]
        if not matches:
            return Result.fail(ErrorCode.EMPTY_RESULT, "No students found")
        return Result.ok(matches)
