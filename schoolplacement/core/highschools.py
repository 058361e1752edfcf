from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from schoolplacement.core.auth import AuthorizationGate
from schoolplacement.core.errors import ErrorCode, Result, guarded
from schoolplacement.core.models import Highschool, SchoolLevel
from schoolplacement.core.payloads import HighschoolPayload, UpdateHighschoolPayload, coerce_payload
from schoolplacement.core.repositories import Repository
from schoolplacement.core.rules import resolve_level
from schoolplacement.logger import get_logger

NOT_FOUND_MSG = "No highschools found"


def _level_from(level: Optional[SchoolLevel], level_rank: Optional[float]) -> Optional[SchoolLevel]:
    # explicit level wins; a falsy rank (including 0) counts as missing
    if level:
        return level
    if level_rank:
        return resolve_level(level_rank)
    return None


def _non_empty(items: List[Highschool]) -> Result:
    if not items:
        return Result.fail(ErrorCode.EMPTY_RESULT, NOT_FOUND_MSG)
    return Result.ok(items)


class HighschoolCatalog:
    def __init__(self, repo: Repository[Highschool], gate: AuthorizationGate, id_factory: Callable[[], str]):
        self.repo = repo
        self.gate = gate
        self.id_factory = id_factory

    @guarded("Failed to add highschool")
    def add(self, payload: Union[HighschoolPayload, Dict[str, Any]], caller: str) -> Result:
        denied = self.gate.check_initialized()
        if denied is not None:
            return denied
        denied = self.gate.check(caller)
        if denied is not None:
            return denied

        try:
            data = coerce_payload(HighschoolPayload, payload)
        except ValidationError as e:
            return Result.fail(ErrorCode.INVALID_INPUT, f"Invalid highschool payload: {e}")

        level = _level_from(data.level, data.level_rank)
        if not data.name or not data.county or not data.phone or level is None:
            return Result.fail(ErrorCode.INVALID_INPUT, "Incomplete input data!")

        highschool = Highschool(
            id=self.id_factory(),
            name=data.name,
            phone=data.phone,
            level=level,
            county=data.county,
        )
        self.repo.insert(highschool.id, highschool)
        get_logger().info("Highschool added", highschool_id=highschool.id, level=level.value)
        return Result.ok(highschool)

    @guarded("Failed to get highschool")
    def get(self, highschool_id: str) -> Result:
        if not highschool_id:
            return Result.fail(ErrorCode.INVALID_INPUT, "Invalid ID")
        highschool = self.repo.get(highschool_id)
        if highschool is None:
            return Result.fail(ErrorCode.NOT_FOUND, f"Highschool {highschool_id} not found")
        return Result.ok(highschool)

    @guarded("Failed to get highschools")
    def list_all(self) -> Result:
        return _non_empty(self.repo.values())

    @guarded("Failed to search highschools")
    def search_by_name(self, name: str) -> Result:
        if not name:
            return Result.fail(ErrorCode.INVALID_INPUT, "Invalid name")
        needle = name.lower()
        return _non_empty([hs for hs in self.repo.values() if needle in hs.name.lower()])

    @guarded("Failed to search highschools")
    def search_by_county(self, county: str) -> Result:
        if not county:
            return Result.fail(ErrorCode.INVALID_INPUT, "Invalid county")
        needle = county.lower()
        return _non_empty([hs for hs in self.repo.values() if needle in hs.county.lower()])

    @guarded("Failed to search highschools")
    def search_by_level(self, level_or_rank: Union[SchoolLevel, str, float]) -> Result:
        if not level_or_rank:
            return Result.fail(ErrorCode.INVALID_INPUT, "Invalid level")
        try:
            level = resolve_level(level_or_rank)
        except ValueError as e:
            return Result.fail(ErrorCode.INVALID_INPUT, str(e))
        return _non_empty([hs for hs in self.repo.values() if hs.level == level])

    @guarded("Failed to update highschool")
    def update(self, payload: Union[UpdateHighschoolPayload, Dict[str, Any]], caller: str) -> Result:
        denied = self.gate.check(caller)
        if denied is not None:
            return denied

        try:
            data = coerce_payload(UpdateHighschoolPayload, payload)
        except ValidationError as e:
            return Result.fail(ErrorCode.INVALID_INPUT, f"Invalid update payload: {e}")

        if not data.id:
            return Result.fail(ErrorCode.INVALID_INPUT, "Invalid ID")
        level = _level_from(data.level, data.level_rank)
        if level is None or not data.phone:
            return Result.fail(ErrorCode.INVALID_INPUT, "Incomplete input data!")

        current = self.repo.get(data.id)
        if current is None:
            return Result.fail(ErrorCode.NOT_FOUND, f"Highschool {data.id} not found")

        updated = replace(current, level=level, phone=data.phone)
        self.repo.insert(updated.id, updated)
        get_logger().info("Highschool updated", highschool_id=updated.id, level=level.value)
        return Result.ok(updated)

    @guarded("Failed to delete highschool")
    def delete(self, highschool_id: str, caller: str) -> Result:
        denied = self.gate.check(caller)
        if denied is not None:
            return denied
        if not highschool_id:
            return Result.fail(ErrorCode.INVALID_INPUT, "Invalid ID")

        # students keep their snapshot of this school; nothing cascades
        removed = self.repo.remove(highschool_id)
        get_logger().info("Highschool removed", highschool_id=highschool_id, existed=removed is not None)
        return Result.ok(f"Highschool {highschool_id} removed successfully")
