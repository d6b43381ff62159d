"""
Free-Text Keyword Rules

Module selection for the "Other" intake flow. The respondent's own words
(initial description, emotional answer, coping answer) are scanned for
keyword groups; each triggered group contributes its candidate modules.

Design principles:
  - The table is plain data: one KeywordGroup per row, enumerable and
    testable row by row.
  - Matching is case-insensitive substring containment.
  - Groups are evaluated independently; one answer may trigger several.
  - Row order is significant: it fixes the first-seen order of modules.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Tuple, Any

# Question ids in the "other" questionnaire whose answers are scanned
DESCRIPTION_QUESTION_ID = "1"
EMOTION_QUESTION_ID     = "7"
COPING_QUESTION_ID      = "8"

SCANNED_QUESTION_IDS: Tuple[str, ...] = (
    DESCRIPTION_QUESTION_ID,
    EMOTION_QUESTION_ID,
    COPING_QUESTION_ID,
)

# Padding order when fewer than MAX_RECOMMENDATIONS modules were triggered
FALLBACK_MODULES: Tuple[str, ...] = ("cbt", "mindfulness", "video", "stress")

MAX_RECOMMENDATIONS = 4


@dataclass(frozen=True)
class KeywordGroup:
    """One row of the keyword table."""
    tag: str
    keywords: Tuple[str, ...]
    module_ids: Tuple[str, ...]          # 1-2 candidate modules

    def matches(self, texts: Iterable[str]) -> bool:
        lowered = [t.lower() for t in texts if t]
        return any(kw in text for text in lowered for kw in self.keywords)


KEYWORD_GROUPS: Tuple[KeywordGroup, ...] = (
    KeywordGroup("anxiety",    ("anxious", "worry", "panic", "fear"),          ("mindfulness", "cbt")),
    KeywordGroup("depression", ("depress", "sad", "hopeless", "empty"),        ("gratitude", "cbt")),
    KeywordGroup("stress",     ("stress", "overwhelm", "burnout"),             ("stress", "mindfulness")),
    KeywordGroup("trauma",     ("trauma", "ptsd", "flashback"),                ("video", "art")),
    KeywordGroup("sleep",      ("sleep", "insomnia", "tired"),                 ("music", "mindfulness")),
    KeywordGroup("self-worth", ("confidence", "self-esteem", "worth"),         ("gratitude", "act")),
    KeywordGroup("rumination", ("overthink", "ruminate", "negative thoughts"), ("cbt", "mindfulness")),
)


def scanned_texts(responses: Mapping[str, Any]) -> List[str]:
    """Return the free-text answers that keyword matching looks at."""
    texts = []
    for qid in SCANNED_QUESTION_IDS:
        value = responses.get(qid)
        texts.append(str(value) if value is not None else "")
    return texts


def triggered_groups(responses: Mapping[str, Any]) -> List[KeywordGroup]:
    """Keyword groups triggered by the answers, in table order."""
    texts = scanned_texts(responses)
    return [group for group in KEYWORD_GROUPS if group.matches(texts)]


def select_free_text_modules(responses: Mapping[str, Any]) -> List[str]:
    """
    Pick up to four module ids from free-text answers.

    Triggered modules are de-duplicated keeping first-seen order, padded
    from FALLBACK_MODULES (skipping ids already present), then truncated.
    """
    selected: List[str] = []
    for group in triggered_groups(responses):
        for module_id in group.module_ids:
            if module_id not in selected:
                selected.append(module_id)

    for module_id in FALLBACK_MODULES:
        if len(selected) >= MAX_RECOMMENDATIONS:
            break
        if module_id not in selected:
            selected.append(module_id)

    return selected[:MAX_RECOMMENDATIONS]
