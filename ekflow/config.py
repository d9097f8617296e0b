"""Configuration for ekflow graph algorithms."""

from dataclasses import dataclass


@dataclass
class FlowConfig:
    """Defaults shared by the graph model and the max-flow algorithms."""

    # Residual weights must be strictly greater than this to be traversed
    epsilon: float = 0.0

    # Edge attribute holding capacities / residual capacities / flows
    weight_attr: str = "weight"

    # Node attribute holding the opaque node payload
    payload_attr: str = "payload"


# Global configuration instance
FLOW_CONFIG = FlowConfig()
