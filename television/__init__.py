"""Channel prototypes, the cable, channels, templates and actions for a fuzzy finder."""

__version__ = "0.11.9"

__all__ = [
    "action",
    "cable",
    "channel",
    "entry",
    "prototypes",
    "remote_control",
    "templates",
]