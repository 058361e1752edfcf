from typing import Optional

from schoolplacement.core.errors import ErrorCode, Result, guarded
from schoolplacement.core.models import Highschool
from schoolplacement.core.repositories import Repository
from schoolplacement.core.rules import required_level
from schoolplacement.logger import get_logger


class PlacementEngine:
    def __init__(self, repo: Repository[Highschool]):
        self.repo = repo

    @guarded("Failed to place student")
    def place(self, score: float) -> Result:
        log = get_logger()
        log.record_placement_attempt()

        highschools = self.repo.values()
        if not highschools:
            log.record_placement_failure(ErrorCode.NO_HIGHSCHOOLS.value)
            return Result.fail(ErrorCode.NO_HIGHSCHOOLS, "No highschools available for placement")

        level = required_level(score)

        # scan everything; a later school of the same level replaces an earlier one
        chosen: Optional[Highschool] = None
        for hs in highschools:
            if hs.level == level:
                chosen = hs

        if chosen is None:
            log.record_placement_failure(ErrorCode.NO_MATCH.value)
            log.info("No highschool matches required level", score=score, level=level.value)
            return Result.fail(ErrorCode.NO_MATCH, f"No {level.value} highschool available for score {score:g}")

        log.record_placement_success(level.value)
        log.debug("Student placed", score=score, level=level.value, highschool_id=chosen.id)
        return Result.ok(chosen)
