import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]

ALL = "all"


def _always(user: Any) -> bool:
    return True


class GroupRegistry:
    """Process-local mapping of group name to user predicate.

    Nothing here is persisted; the host process has to define its groups
    again after every restart. The ``all`` group is always present.
    """

    def __init__(self) -> None:
        self._groups: Dict[str, Predicate] = {ALL: _always}

    def define(self, name: str, predicate: Predicate) -> None:
        if name == ALL:
            raise ValueError(f"group '{ALL}' is reserved and always active")
        self._groups[name] = predicate
        logger.debug("group.defined name=%s", name)

    def evaluate(self, name: str, user: Any) -> bool:
        predicate = self._groups.get(name)
        if predicate is None:
            return False
        return bool(predicate(user))

    def names(self) -> List[str]:
        return sorted(self._groups)

    def __contains__(self, name: str) -> bool:
        return name in self._groups
