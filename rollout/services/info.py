from typing import Any, Dict, List, Optional

from rollout.activation import ActivationStore
from rollout.schemas import FeatureInfo, GlobalInfo


class InfoReporter:
    """Snapshots of persisted activation state."""

    def __init__(self, activation: ActivationStore):
        self.activation = activation

    def global_features(self) -> List[str]:
        return [name for name in self.activation.features() if self.activation.get(name).globally]

    def info(self, feature: Optional[str] = None) -> Dict[str, Any]:
        if feature is None:
            return GlobalInfo(global_=self.global_features()).model_dump(by_alias=True)
        state = self.activation.get(feature)
        snapshot = FeatureInfo(
            percentage=state.percentage,
            groups=sorted(state.groups),
            users=sorted(state.users),
            global_=self.global_features(),
        )
        return snapshot.model_dump(by_alias=True)
