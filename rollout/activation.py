import logging
from typing import Callable, List

from pydantic import TypeAdapter

from rollout.metrics import ACTIVATIONS
from rollout.models import FeatureState, HasId, user_id_of
from rollout.schemas import Percentage
from rollout.storage import NAMESPACE, KeyValueStore

logger = logging.getLogger(__name__)

SEPARATOR = ":"

_percentage = TypeAdapter(Percentage)


class ActivationStore:
    """Read-modify-write access to feature records.

    Every write loads the current record, applies one change and stores the
    result under the same key. There is no compare-and-swap: two writers
    touching the same feature at once can lose one of the updates. Callers
    that need stronger guarantees must serialize writes themselves.
    """

    def __init__(self, store: KeyValueStore, namespace: str = NAMESPACE):
        self.store = store
        self.namespace = namespace

    def key(self, feature: str) -> str:
        if SEPARATOR in feature:
            raise ValueError(f"feature name may not contain {SEPARATOR!r}: {feature!r}")
        return f"{self.namespace}{SEPARATOR}{feature}"

    def get(self, feature: str) -> FeatureState:
        key = self.key(feature)
        return FeatureState.deserialize(self.store.get(key), key=key)

    def features(self) -> List[str]:
        prefix = f"{self.namespace}{SEPARATOR}"
        names = (k[len(prefix):] for k in self.store.keys(prefix))
        # keys of nested namespaces ("<namespace>:sub:x") are not ours
        return sorted(name for name in names if name and SEPARATOR not in name)

    def _update(self, feature: str, action: str, mutate: Callable[[FeatureState], None]) -> FeatureState:
        state = self.get(feature)
        mutate(state)
        self.store.set(self.key(feature), state.serialize())
        ACTIVATIONS.labels(feature, action).inc()
        logger.debug("feature.%s key=%s state=%s", action, feature, state)
        return state

    def activate_group(self, feature: str, group: str) -> FeatureState:
        return self._update(feature, "activate_group", lambda s: s.groups.add(group))

    def deactivate_group(self, feature: str, group: str) -> FeatureState:
        return self._update(feature, "deactivate_group", lambda s: s.groups.discard(group))

    def activate_user(self, feature: str, user: HasId) -> FeatureState:
        user_id = user_id_of(user)
        return self._update(feature, "activate_user", lambda s: s.users.add(user_id))

    def deactivate_user(self, feature: str, user: HasId) -> FeatureState:
        user_id = user_id_of(user)
        return self._update(feature, "deactivate_user", lambda s: s.users.discard(user_id))

    def activate_percentage(self, feature: str, percentage: int) -> FeatureState:
        percentage = _percentage.validate_python(percentage)

        def apply(state: FeatureState) -> None:
            state.percentage = percentage

        return self._update(feature, "activate_percentage", apply)

    def deactivate_percentage(self, feature: str) -> FeatureState:
        def apply(state: FeatureState) -> None:
            state.percentage = 0

        return self._update(feature, "deactivate_percentage", apply)

    def activate_globally(self, feature: str) -> FeatureState:
        def apply(state: FeatureState) -> None:
            state.globally = True

        return self._update(feature, "activate_globally", apply)

    def deactivate_globally(self, feature: str) -> FeatureState:
        def apply(state: FeatureState) -> None:
            state.globally = False

        return self._update(feature, "deactivate_globally", apply)

    def deactivate_all(self, feature: str) -> FeatureState:
        def apply(state: FeatureState) -> None:
            state.globally = False
            state.percentage = 0
            state.users.clear()
            state.groups.clear()

        return self._update(feature, "deactivate_all", apply)
