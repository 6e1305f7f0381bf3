from __future__ import annotations

# Import built-in adapters to register them.
from udpecho.plugins.adapters.ethernet.udp import udp_adapter  # noqa: F401
