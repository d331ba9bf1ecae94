"""Forgejo label tools.

Resolve label names and IDs against a Forgejo repository and apply them to
issues:
- configuration loaded from `.env`
- structured logging
- a cached, thread-safe label name/ID resolver
"""

__version__ = "0.1.0"

from forgejo_labels.config import ForgejoSettings
from forgejo_labels.labels import LabelResolutionError, LabelResolver, ResolvedLabel

__all__ = [
    "__version__",
    "ForgejoSettings",
    "LabelResolutionError",
    "LabelResolver",
    "ResolvedLabel",
]
