from dataclasses import FrozenInstanceError

import pytest

from schoolplacement.core.models import Highschool, SchoolLevel, Student


def test_level_ranks_are_ordered():
    assert SchoolLevel.DISTRICT.rank < SchoolLevel.SUB_COUNTY.rank < SchoolLevel.COUNTY.rank < SchoolLevel.NATIONAL.rank
    assert SchoolLevel.DAYSCHOOL.rank == 0


def test_records_are_immutable():
    hs = Highschool(id="h1", name="Alpha", phone="1", level=SchoolLevel.NATIONAL, county="X")
    with pytest.raises(FrozenInstanceError):
        hs.phone = "2"


def test_student_dict_round_trip_keeps_highschool_snapshot():
    hs = Highschool(id="h1", name="Alpha", phone="1", level=SchoolLevel.NATIONAL, county="X")
    st = Student(id="s1", name="Bo", phone="2", score=850, county="X", highschool=hs)

    data = st.to_dict()

    assert data["highschool"]["level"] == "NATIONAL"
    assert Student.from_dict(data) == st


def test_student_without_highschool_round_trips():
    st = Student(id="s1", name="Bo", phone="2", score=850, county="X")
    assert Student.from_dict(st.to_dict()) == st
