from launchpad_sdk.deployment.creation import create_token_on_chain
from launchpad_sdk.deployment.orchestrator import DeploymentOrchestrator
from launchpad_sdk.deployment.state import (
    LEGAL_TRANSITIONS,
    DeploymentMode,
    DeploymentState,
    DeploymentStatus,
    DeploymentStep,
)

__all__ = [
    "LEGAL_TRANSITIONS",
    "DeploymentMode",
    "DeploymentOrchestrator",
    "DeploymentState",
    "DeploymentStatus",
    "DeploymentStep",
    "create_token_on_chain",
]
