"""
turret package
==============

Client-side modules for the Radar Turret console.
"""

__all__ = [
    "constants",
    "config",
    "state",
    "decay",
    "renderer",
    "device",
    "sync_client",
    "commands",
    "panels",
    "logs",
    "binder",
    "gui",
]

__version__ = "1.0"
