from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Dict, Any


class SchoolLevel(str, Enum):
    NATIONAL = "NATIONAL"
    COUNTY = "COUNTY"
    SUB_COUNTY = "SUB_COUNTY"
    DISTRICT = "DISTRICT"
    DAYSCHOOL = "DAYSCHOOL"

    @property
    def rank(self) -> int:
        return _LEVEL_RANKS[self]


# DAYSCHOOL sits outside the ranked ladder; it is only ever set by name
_LEVEL_RANKS = {
    SchoolLevel.DAYSCHOOL: 0,
    SchoolLevel.DISTRICT: 1,
    SchoolLevel.SUB_COUNTY: 2,
    SchoolLevel.COUNTY: 3,
    SchoolLevel.NATIONAL: 4,
}


@dataclass(frozen=True)
class Ministry:
    id: str
    authority: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ministry":
        return cls(id=data["id"], authority=data["authority"])


@dataclass(frozen=True)
class Highschool:
    id: str
    name: str
    phone: str
    level: SchoolLevel
    county: str

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["level"] = self.level.value
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Highschool":
        return cls(
            id=data["id"],
            name=data["name"],
            phone=data["phone"],
            level=SchoolLevel(data["level"]),
            county=data["county"],
        )


@dataclass(frozen=True)
class Student:
    id: str
    name: str
    phone: str
    score: float
    county: str
    # snapshot of the school taken at placement time, not a live link
    highschool: Optional[Highschool] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "score": self.score,
            "county": self.county,
            "highschool": self.highschool.to_dict() if self.highschool else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Student":
        hs = data.get("highschool")
        return cls(
            id=data["id"],
            name=data["name"],
            phone=data["phone"],
            score=data["score"],
            county=data["county"],
            highschool=Highschool.from_dict(hs) if hs else None,
        )
