from pydantic import BaseModel, ConfigDict, Field, conint
from typing import List

Percentage = conint(strict=True, ge=0, le=100)


class FeatureRecord(BaseModel):
    """Shape of a feature record as persisted in the store."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", strict=True)

    global_: bool = Field(False, alias="global")
    percentage: Percentage = 0
    users: List[int] = []
    groups: List[str] = []


class FeatureInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    percentage: int = 0
    groups: List[str] = []
    users: List[int] = []
    global_: List[str] = Field(default_factory=list, alias="global", description="features active globally")


class GlobalInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    global_: List[str] = Field(default_factory=list, alias="global")
