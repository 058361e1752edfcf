from typing import Any, Dict, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schoolplacement.core.models import SchoolLevel
from schoolplacement.core.rules import resolve_level

P = TypeVar("P", bound=BaseModel)


# Every field is optional here so that missing data reaches the catalogs and
# is reported as InvalidInput, the same as an empty string.

def _coerce_level(v: Any) -> Optional[SchoolLevel]:
    # names match case-insensitively, numbers are ranks; ValueError becomes a ValidationError
    if not v:
        return None
    return resolve_level(v)


class HighschoolPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    level: Optional[SchoolLevel] = None
    level_rank: Optional[float] = Field(default=None, alias="levelRank")
    county: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def coerce_level(cls, v: Any) -> Optional[SchoolLevel]:
        return _coerce_level(v)


class UpdateHighschoolPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    level: Optional[SchoolLevel] = None
    level_rank: Optional[float] = Field(default=None, alias="levelRank")
    phone: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def coerce_level(cls, v: Any) -> Optional[SchoolLevel]:
        return _coerce_level(v)


class StudentPayload(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    score: Optional[float] = None
    county: Optional[str] = None


def coerce_payload(model: Type[P], payload: Union[P, Dict[str, Any], None]) -> P:
    """Accept a payload model or a plain dict.

    Raises pydantic.ValidationError for malformed input; catalogs map it to
    InvalidInput.
    """
    if isinstance(payload, model):
        return payload
    return model.model_validate(payload or {})
