import logging
from typing import Any, Dict, Optional

from rollout.activation import ActivationStore
from rollout.metrics import EVALS
from rollout.models import HasId
from rollout.services.evaluator import evaluate_feature
from rollout.services.groups import GroupRegistry, Predicate
from rollout.services.info import InfoReporter
from rollout.storage import NAMESPACE, REDIS_URL, KeyValueStore, RedisStore

logger = logging.getLogger(__name__)


class Legacy(ActivationStore):
    """Feature activation engine with modulo-based percentage bucketing.

    Usage:
        rollout = Legacy.from_url()
        rollout.define_group("staff", lambda user: user.is_staff)
        rollout.activate_group("chat", "staff")

        if rollout.is_active("chat", current_user):
            ...

    Group predicates are held in memory only and must be defined again by
    the host process after a restart.
    """

    def __init__(self, store: KeyValueStore, groups: Optional[GroupRegistry] = None, namespace: str = NAMESPACE):
        super().__init__(store, namespace=namespace)
        self.groups = groups if groups is not None else GroupRegistry()
        self.reporter = InfoReporter(self)

    @classmethod
    def from_url(cls, url: str = REDIS_URL, groups: Optional[GroupRegistry] = None, namespace: str = NAMESPACE) -> "Legacy":
        return cls(RedisStore.from_url(url), groups=groups, namespace=namespace)

    def define_group(self, name: str, predicate: Predicate) -> None:
        self.groups.define(name, predicate)

    def is_active(self, feature: str, user: Optional[HasId] = None) -> bool:
        enabled, reason = evaluate_feature(self.get(feature), user, self.groups)
        EVALS.labels(feature, str(enabled)).inc()
        logger.debug("feature.evaluated key=%s enabled=%s reason=%s", feature, enabled, reason)
        return enabled

    def info(self, feature: Optional[str] = None) -> Dict[str, Any]:
        return self.reporter.info(feature)
