import uuid
from typing import Any, Callable, Dict, Optional, Union

from schoolplacement.config import Settings, load_settings
from schoolplacement.core.auth import AuthorizationGate
from schoolplacement.core.engine import PlacementEngine
from schoolplacement.core.errors import Result
from schoolplacement.core.highschools import HighschoolCatalog
from schoolplacement.core.ministry import MinistryRegistry
from schoolplacement.core.models import Highschool, Ministry, SchoolLevel, Student
from schoolplacement.core.payloads import HighschoolPayload, StudentPayload, UpdateHighschoolPayload
from schoolplacement.core.repositories import InMemoryRepository, Repository, SqlRepository
from schoolplacement.core.students import StudentCatalog
from schoolplacement.database import HighschoolRow, MinistryRow, StudentRow, get_session_factory, init_database
from schoolplacement.logger import configure_logger, get_logger


def new_id() -> str:
    return uuid.uuid4().hex


class PlacementService:
    def __init__(
        self,
        ministry_repo: Repository[Ministry],
        highschool_repo: Repository[Highschool],
        student_repo: Repository[Student],
        id_factory: Callable[[], str] = new_id,
        student_requires_ministry: bool = False,
    ):
        self.registry = MinistryRegistry(ministry_repo, id_factory)
        self.gate = AuthorizationGate(self.registry)
        self.engine = PlacementEngine(highschool_repo)
        self.highschools = HighschoolCatalog(highschool_repo, self.gate, id_factory)
        self.students = StudentCatalog(
            student_repo,
            self.engine,
            self.gate,
            id_factory,
            requires_ministry=student_requires_ministry,
        )

    def _track(self, operation: str, result: Result) -> Result:
        log = get_logger()
        log.record_operation()
        if not result.success:
            log.record_error(result.error.value)
            log.debug("Operation failed", operation=operation, error=result.error.value, detail=result.message)
        return result

    # --- writes ---

    def initialize_ministry(self, caller: str) -> Result:
        return self._track("initialize_ministry", self.registry.initialize(caller))

    def add_highschool(self, payload: Union[HighschoolPayload, Dict[str, Any]], caller: str) -> Result:
        return self._track("add_highschool", self.highschools.add(payload, caller))

    def update_highschool(self, payload: Union[UpdateHighschoolPayload, Dict[str, Any]], caller: str) -> Result:
        return self._track("update_highschool", self.highschools.update(payload, caller))

    def delete_highschool(self, highschool_id: str, caller: str) -> Result:
        return self._track("delete_highschool", self.highschools.delete(highschool_id, caller))

    def add_student(self, payload: Union[StudentPayload, Dict[str, Any]], caller: str) -> Result:
        return self._track("add_student", self.students.add(payload, caller))

    # --- reads ---

    def current_ministry(self) -> Optional[Ministry]:
        return self.registry.current()

    def get_highschool(self, highschool_id: str) -> Result:
        return self._track("get_highschool", self.highschools.get(highschool_id))

    def list_highschools(self) -> Result:
        return self._track("list_highschools", self.highschools.list_all())

    def search_highschools_by_name(self, name: str) -> Result:
        return self._track("search_highschools_by_name", self.highschools.search_by_name(name))

    def search_highschools_by_county(self, county: str) -> Result:
        return self._track("search_highschools_by_county", self.highschools.search_by_county(county))

    def search_highschools_by_level(self, level_or_rank: Union[SchoolLevel, str, float]) -> Result:
        return self._track("search_highschools_by_level", self.highschools.search_by_level(level_or_rank))

    def get_student(self, student_id: str) -> Result:
        return self._track("get_student", self.students.get(student_id))

    def list_students(self) -> Result:
        return self._track("list_students", self.students.list_all())

    def search_students_by_name(self, name: str) -> Result:
        return self._track("search_students_by_name", self.students.search_by_name(name))


def build_service(
    settings: Optional[Settings] = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> PlacementService:
    """Build a PlacementService; an empty database_url keeps everything in memory."""
    if settings is None:
        settings = load_settings()

    configure_logger(
        level=settings.log_level,
        log_dir=settings.log_dir,
        enable_file=settings.log_to_file,
    )

    if settings.database_url:
        session_factory = get_session_factory(init_database(settings.database_url))
        ministry_repo = SqlRepository(session_factory, MinistryRow, Ministry.from_dict)
        highschool_repo = SqlRepository(session_factory, HighschoolRow, Highschool.from_dict)
        student_repo = SqlRepository(session_factory, StudentRow, Student.from_dict)
    else:
        ministry_repo = InMemoryRepository()
        highschool_repo = InMemoryRepository()
        student_repo = InMemoryRepository()

    return PlacementService(
        ministry_repo,
        highschool_repo,
        student_repo,
        id_factory=id_factory or new_id,
        student_requires_ministry=settings.student_requires_ministry,
    )
