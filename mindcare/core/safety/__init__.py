"""
Safety Layer

Crisis phrase screening for free-text chat input.
"""
from .crisis import CRISIS_PHRASES, HELPLINES, Helpline, detect_crisis, is_crisis

__all__ = [
    "CRISIS_PHRASES",
    "HELPLINES",
    "Helpline",
    "detect_crisis",
    "is_crisis",
]
