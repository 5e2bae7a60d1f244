from typing import Any, Optional, Tuple

from rollout.models import FeatureState, user_id_of
from rollout.services.bucketing import in_bucket
from rollout.services.groups import GroupRegistry


def _numeric_id(user: Any) -> Optional[int]:
    try:
        return user_id_of(user)
    except ValueError:
        return None


def evaluate_feature(state: FeatureState, user: Optional[Any], groups: GroupRegistry) -> Tuple[bool, str]:
    if state.globally:
        return True, "global"
    if user is None:
        return False, "no-user"
    # users with non-numeric ids can only match through groups
    user_id = _numeric_id(user)
    if user_id is not None:
        if user_id in state.users:
            return True, "user"
        if state.percentage > 0 and in_bucket(user_id, state.percentage):
            return True, f"rollout-{state.percentage}%"
    for name in sorted(state.groups):
        if groups.evaluate(name, user):
            return True, f"group:{name}"
    return False, "inactive"
