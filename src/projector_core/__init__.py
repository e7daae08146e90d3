"""Stock & crypto signal projector: indicators, rule scoring and AI opinion fusion."""

__version__ = "0.1.0"
