"""
Crisis Phrase Screen

Flags chat input mentioning self-harm or suicide so the caller can show
helpline information. Screening never blocks or alters the assessment.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

CRISIS_PHRASES: Tuple[str, ...] = (
    "suicide", "suicidal", "kill myself", "end my life", "want to die",
    "die", "death", "ending it", "no point living", "better off dead",
    "harm myself", "hurt myself", "self harm", "cutting", "overdose",
    "jump", "hang myself", "end it all", "give up on life", "can't go on",
)


@dataclass(frozen=True)
class Helpline:
    name: str
    phone: str
    availability: str

    def to_dict(self) -> dict:
        return {"name": self.name, "phone": self.phone, "availability": self.availability}


HELPLINES: Tuple[Helpline, ...] = (
    Helpline("AASRA - Suicide Prevention Helpline", "91-9820466726", "24/7 Crisis Support"),
    Helpline("Vandrevala Foundation Helpline", "1860-2662-345", "Free, 24/7 Mental Health Support"),
    Helpline("iCall - TISS Helpline", "91-9152987821", "Mon-Sat, 8 AM - 10 PM"),
    Helpline("Fortis Stress Helpline", "8376-804-102", "24/7 Crisis Support"),
)


def detect_crisis(text: str) -> List[str]:
    """Crisis phrases contained in the text (case-insensitive), in table order."""
    if not text:
        return []
    lowered = text.lower()
    return [phrase for phrase in CRISIS_PHRASES if phrase in lowered]


def is_crisis(text: str) -> bool:
    return bool(detect_crisis(text))
