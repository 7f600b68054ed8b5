# Consumers import from `src.components.mobile` without knowing the file layout.

from .choice import mobile_choice

__all__ = [
    "mobile_choice",
]
