import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Set

from pydantic import ValidationError

from rollout.errors import CorruptStateError
from rollout.schemas import FeatureRecord

logger = logging.getLogger(__name__)


class HasId(Protocol):
    """Anything that can stand in for a user: it only needs an ``id``."""

    id: Any


def user_id_of(user: HasId) -> int:
    """Numeric identifier of a user-like object."""
    try:
        return int(user.id)
    except (TypeError, ValueError) as e:
        raise ValueError(f"user id must be numeric, got {user.id!r}") from e


@dataclass
class FeatureState:
    """Activation configuration of a single feature.

    The default instance is the state of a feature nobody has touched yet:
    inactive for every user.
    """

    globally: bool = False
    percentage: int = 0
    users: Set[int] = field(default_factory=set)
    groups: Set[str] = field(default_factory=set)

    def is_empty(self) -> bool:
        return self == FeatureState()

    def serialize(self) -> str:
        payload = {
            "global": self.globally,
            "percentage": self.percentage,
            "users": sorted(self.users),
            "groups": sorted(self.groups),
        }
        return json.dumps(payload, sort_keys=True, separators=(",", ":"))

    @classmethod
    def deserialize(cls, raw: Optional[str], key: str = "<unknown>") -> "FeatureState":
        # missing and empty records both mean "never configured"
        if not raw:
            return cls()
        try:
            record = FeatureRecord.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.error("corrupt feature record key=%s: %s", key, e)
            raise CorruptStateError(key, str(e)) from e
        return cls(
            globally=record.global_,
            percentage=record.percentage,
            users=set(record.users),
            groups=set(record.groups),
        )
