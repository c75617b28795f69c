"""
Drawing Policy Registry - the named ways a base polygon evolves.

Policies are looked up by the `policy` field of AnimationConfig. Unknown
names fall back to 'rotational' so a typo in a config file still animates.
"""

from typing import Dict, List

DEFAULT_POLICY = "rotational"

# Registry of all available policies
_POLICIES: Dict[str, object] = {}


def register_policy(policy) -> None:
    """Register a policy object under its name."""
    _POLICIES[policy.name] = policy


def get_policy(name: str):
    """Get policy by name. Falls back to 'rotational' if not found."""
    return _POLICIES.get(name) or _POLICIES.get(DEFAULT_POLICY)


def get_policy_info(name: str) -> dict:
    """Get policy metadata: name and description."""
    policy = _POLICIES.get(name)
    if not policy:
        return {}
    return {"name": policy.name, "description": policy.description}


def list_policies() -> List[str]:
    """List all registered policy names."""
    return list(_POLICIES.keys())


# --- Register policies at import time ---
from .rotational import RotationalPolicy  # noqa: E402
from .static import StaticPolicy  # noqa: E402

register_policy(RotationalPolicy())
register_policy(StaticPolicy())
