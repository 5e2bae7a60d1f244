from rollout.activation import ActivationStore
from rollout.errors import CorruptStateError, RolloutError, StorageUnavailableError
from rollout.legacy import Legacy
from rollout.models import FeatureState, HasId
from rollout.services.bucketing import in_bucket
from rollout.services.groups import GroupRegistry
from rollout.storage import KeyValueStore, RedisStore

__all__ = [
    "ActivationStore",
    "CorruptStateError",
    "FeatureState",
    "GroupRegistry",
    "HasId",
    "KeyValueStore",
    "Legacy",
    "RedisStore",
    "RolloutError",
    "StorageUnavailableError",
    "in_bucket",
]
