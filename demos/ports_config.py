"""
Port configuration for the demo applications.

Usage:
    from demos.ports_config import get_port, get_url

    port = get_port("intake")
"""

from typing import Dict

# ═══════════════════════════════════════════════════════════════════════════
# PORT ASSIGNMENTS
# ═══════════════════════════════════════════════════════════════════════════

PORTS: Dict[str, int] = {
    # Label intake form (upload, review, send)
    "intake": 8500,
}

PORT_METADATA: Dict[str, Dict[str, str]] = {
    "intake": {
        "name": "Label Code Intake Form",
        "framework": "Streamlit",
        "path": "demos/intake",
        "launch": "launch.py",
    },
}

# ═══════════════════════════════════════════════════════════════════════════
# HELPER FUNCTIONS
# ═══════════════════════════════════════════════════════════════════════════


def get_port(demo_name: str) -> int:
    """Get port number for a specific demo.

    Raises:
        KeyError: If demo_name is not recognized
    """
    if demo_name not in PORTS:
        valid_names = ", ".join(PORTS.keys())
        raise KeyError(f"Unknown demo name '{demo_name}'. Valid options: {valid_names}")
    return PORTS[demo_name]


def get_url(demo_name: str, host: str = "localhost") -> str:
    """Get full URL for a specific demo.

    Example:
        >>> get_url("intake")
        'http://localhost:8500'
    """
    return f"http://{host}:{get_port(demo_name)}"
