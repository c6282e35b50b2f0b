"""
Version helpers for the MVM Python SDK.
"""

from __future__ import annotations

# Bump this when publishing
__version__ = "0.1.0"


def user_agent() -> str:
    """Default User-Agent for HTTP clients, e.g. 'mvm-sdk-py/0.1.0'."""
    return f"mvm-sdk-py/{__version__}"


__all__ = ["__version__", "user_agent"]
