"""
Tests for level classification thresholds.
"""

import pytest

from schoolplacement.core.models import SchoolLevel
from schoolplacement.core.rules import classify_rank, required_level, resolve_level


@pytest.mark.parametrize("rank, expected", [
    (5, SchoolLevel.NATIONAL),
    (4, SchoolLevel.NATIONAL),
    (3.5, SchoolLevel.NATIONAL),
    (3, SchoolLevel.COUNTY),
    (2, SchoolLevel.SUB_COUNTY),
    (1, SchoolLevel.DISTRICT),
    (0, SchoolLevel.DISTRICT),
])
def test_classify_rank_boundaries(rank, expected):
    assert classify_rank(rank) is expected


@pytest.mark.parametrize("score, expected", [
    (1000, SchoolLevel.NATIONAL),
    (800, SchoolLevel.NATIONAL),
    (799, SchoolLevel.COUNTY),
    (500, SchoolLevel.COUNTY),
    (499, SchoolLevel.SUB_COUNTY),
    (300, SchoolLevel.SUB_COUNTY),
    (299, SchoolLevel.DISTRICT),
    (1, SchoolLevel.DISTRICT),
])
def test_required_level_boundaries(score, expected):
    assert required_level(score) is expected


def test_score_799_does_not_require_sub_county():
    assert required_level(799) is not SchoolLevel.SUB_COUNTY


class TestResolveLevel:
    """resolve_level accepts names, enum members and numeric ranks."""

    def test_enum_passes_through(self):
        assert resolve_level(SchoolLevel.DAYSCHOOL) is SchoolLevel.DAYSCHOOL

    def test_name_is_case_insensitive(self):
        assert resolve_level("sub_county") is SchoolLevel.SUB_COUNTY

    def test_rank_is_classified(self):
        assert resolve_level(4) is SchoolLevel.NATIONAL
        assert resolve_level(2.0) is SchoolLevel.SUB_COUNTY

    @pytest.mark.parametrize("bad", ["PRIMARY", True, None, [4]])
    def test_unknown_values_raise(self, bad):
        with pytest.raises(ValueError):
            resolve_level(bad)
