from typing import Callable, Optional

from schoolplacement.core.errors import ErrorCode, Result, guarded
from schoolplacement.core.models import Ministry
from schoolplacement.core.repositories import Repository
from schoolplacement.logger import get_logger


class MinistryRegistry:
    """
    Holds the single Ministry record and answers "is this caller the ministry?".

    The registry is passed explicitly to every component that needs
    authorization; there is no module-level ministry state.
    """

    def __init__(self, repo: Repository[Ministry], id_factory: Callable[[], str]):
        self.repo = repo
        self.id_factory = id_factory

    @guarded("Failed to initialize ministry")
    def initialize(self, caller: str) -> Result:
        if self.is_initialized():
            return Result.fail(ErrorCode.ALREADY_INITIALIZED, "Ministry has already been initialized")
        if not caller:
            return Result.fail(ErrorCode.INVALID_INPUT, "Caller identity is required")

        ministry = Ministry(id=self.id_factory(), authority=caller)
        self.repo.insert(ministry.id, ministry)
        get_logger().info("Ministry initialized", ministry_id=ministry.id, authority=caller)
        return Result.ok(ministry)

    def is_initialized(self) -> bool:
        return not self.repo.is_empty()

    def current(self) -> Optional[Ministry]:
        ministries = self.repo.values()
        return ministries[0] if ministries else None

    def is_authority(self, caller: str) -> bool:
        ministry = self.current()
        return ministry is not None and ministry.authority == caller
