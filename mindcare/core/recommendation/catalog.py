"""
Static Catalogs

Issues, questionnaires and the therapy module catalog. Everything here is
module-level constant data: loaded once at import, read-only thereafter.

Every predefined questionnaire follows the same ten-question layout:
two open-ended, two closed (Yes/No), two scaling, two behavioural,
one reflective and one future-oriented prompt.
"""
from __future__ import annotations

from typing import Dict, List

from mindcare.utils.exceptions import CatalogError, UnknownIssueError
from .base import (
    OTHER_ISSUE_ID,
    Issue,
    Question,
    QuestionKind,
    Questionnaire,
    TherapyModule,
)

YES_NO = ("Yes", "No")


# ── Question builders ─────────────────────────────────────────────────────────

def _text(qid: str, text: str, category: str) -> Question:
    return Question(id=qid, text=text, kind=QuestionKind.FREE_TEXT, category=category)


def _binary(qid: str, text: str) -> Question:
    return Question(id=qid, text=text, kind=QuestionKind.BINARY, category="closed", options=YES_NO)


def _rating(qid: str, text: str, scale_min: int = 1, scale_max: int = 10) -> Question:
    return Question(
        id=qid, text=text, kind=QuestionKind.RATING, category="scaling",
        scale_min=scale_min, scale_max=scale_max,
    )


def _standard(
    issue_id: str,
    open_1: str, open_2: str,
    closed_1: str, closed_2: str,
    scale_1: str, scale_2: str,
    behave_1: str, behave_2: str,
    reflective: str, future: str,
    scale_1_max: int = 10,
) -> Questionnaire:
    """Build a questionnaire in the standard ten-question layout."""
    return Questionnaire(
        issue_id=issue_id,
        issue_name=ISSUES[issue_id].name,
        questions=(
            _text("1", open_1, "open-ended"),
            _text("2", open_2, "open-ended"),
            _binary("3", closed_1),
            _binary("4", closed_2),
            _rating("5", scale_1, scale_max=scale_1_max),
            _rating("6", scale_2),
            _text("7", behave_1, "behavioral"),
            _text("8", behave_2, "behavioral"),
            _text("9", reflective, "reflective"),
            _text("10", future, "future-oriented"),
        ),
    )


# ── Issues ────────────────────────────────────────────────────────────────────

_ISSUE_LIST: List[Issue] = [
    Issue("anxiety-disorders", "Anxiety Disorders",
          "Persistent worry, fear, and anxiety symptoms"),
    Issue("depression", "Depression & Low Mood",
          "Sadness, hopelessness, and depressive symptoms"),
    Issue("stress", "Stress & Burnout",
          "Overwhelm, exhaustion, and chronic stress"),
    Issue("insomnia", "Insomnia & Sleep Problems",
          "Sleep difficulties and sleep disorders"),
    Issue("trauma", "Trauma & PTSD",
          "Trauma responses and post-traumatic stress"),
    Issue("self-esteem", "Low Self-Esteem & Self-Doubt",
          "Poor self-image and confidence issues"),
    Issue("emotional-dysregulation", "Emotional Dysregulation",
          "Difficulty managing and controlling emotions"),
    Issue("negative-thoughts", "Negative Thought Patterns & Overthinking",
          "Rumination and persistent negative thinking"),
    Issue("social-anxiety", "Social Anxiety",
          "Fear and anxiety in social situations"),
    Issue("adjustment", "Adjustment & Identity Issues",
          "Life transitions and identity concerns"),
    Issue(OTHER_ISSUE_ID, "Other", "Issues not listed above"),
]

ISSUES: Dict[str, Issue] = {issue.issue_id: issue for issue in _ISSUE_LIST}


# ── Therapy modules ───────────────────────────────────────────────────────────

_MODULE_LIST: List[TherapyModule] = [
    TherapyModule("cbt", "CBT Thought Records", "cognitive"),
    TherapyModule("mindfulness", "Mindfulness & Breathing", "mindfulness"),
    TherapyModule("stress", "Stress Management", "stress"),
    TherapyModule("gratitude", "Gratitude Journal", "positive"),
    TherapyModule("music", "Relaxation Music", "relaxation"),
    TherapyModule("tetris", "Tetris Therapy", "gamified"),
    TherapyModule("art", "Art & Color Therapy", "creative"),
    TherapyModule("exposure", "Exposure Therapy", "behavioral"),
    TherapyModule("video", "Video Therapy", "educational"),
    TherapyModule("act", "Acceptance & Commitment Therapy", "acceptance"),
]

THERAPY_MODULES: Dict[str, TherapyModule] = {m.module_id: m for m in _MODULE_LIST}


# ── Questionnaires ────────────────────────────────────────────────────────────

QUESTIONNAIRES: Dict[str, Questionnaire] = {
    "anxiety-disorders": _standard(
        "anxiety-disorders",
        "Can you describe a recent situation where you felt anxious? What was happening around you and what thoughts went through your mind?",
        "How does anxiety feel in your body? Describe the physical sensations you experience when you're anxious.",
        "Do you experience panic attacks (sudden intense fear with physical symptoms)?",
        "Have you been diagnosed with an anxiety disorder by a healthcare professional?",
        "On a scale of 1-10, how would you rate your average anxiety level over the past week?",
        "How much does anxiety interfere with your daily life? (1 = not at all, 10 = completely disrupts my life)",
        "What do you typically do when you start feeling anxious? Describe your usual coping strategies.",
        "Do you avoid certain places, people, or situations because of anxiety? If so, which ones?",
        "When you think about your anxiety, what do you believe might be the underlying causes or triggers?",
        "What would your life look like if you could better manage your anxiety? What specific changes would you hope to see?",
    ),
    "depression": _standard(
        "depression",
        "Can you describe what a typical day feels like for you when you're experiencing depression? Walk me through your thoughts and feelings.",
        "Tell me about activities or hobbies you used to enjoy. How do you feel about them now?",
        "Have you experienced significant changes in your sleep patterns (sleeping too much or too little)?",
        "Have you had thoughts of death or suicide?",
        "On a scale of 1-10, how would you rate your overall mood over the past two weeks?",
        "How would you rate your energy levels on a typical day? (1 = no energy at all, 10 = full of energy)",
        "How do you typically spend your days? Describe your daily routine and activities.",
        "When you feel overwhelmed by sadness, what do you usually do? What helps or doesn't help?",
        "Looking back, when did you first notice these feelings of depression? What do you think might have contributed to them?",
        "What would feeling better look like to you? What specific goals would you like to work toward in your recovery?",
    ),
    "stress": _standard(
        "stress",
        "Describe your most stressful day recently. What happened and how did you feel throughout the day?",
        "Tell me about the main sources of stress in your life right now. What situations or responsibilities feel overwhelming?",
        "Do you experience physical symptoms when stressed (headaches, muscle tension, stomach issues)?",
        "Do you currently have a regular relaxation or stress-relief routine?",
        "On a scale of 1-10, how would you rate your current stress level?",
        "How well do you feel you currently manage stress? (1 = very poorly, 10 = very well)",
        "What do you typically do when you feel overwhelmed by stress? Describe your usual responses or coping strategies.",
        "How does stress affect your daily habits (eating, sleeping, exercise, work performance)?",
        "When you reflect on your stress patterns, what do you notice about when and why you feel most stressed?",
        "What would your ideal stress management look like? What specific skills or changes would help you feel more in control?",
    ),
    "insomnia": _standard(
        "insomnia",
        "Describe a typical night for you. What happens from when you get into bed until you fall asleep?",
        "Tell me about how poor sleep affects your daily life. What do you notice about your mood, energy, and functioning?",
        "Do you wake up frequently during the night (more than twice)?",
        "Do you currently use any sleep medications or aids?",
        "How many hours of sleep do you typically get per night?",
        "On a scale of 1-10, how would you rate your sleep quality when you do sleep?",
        "What do you typically do in the hour before bedtime? Describe your evening routine.",
        "When you can't fall asleep, what do you usually do? How do you try to cope with sleeplessness?",
        "What do you think are the main factors contributing to your sleep difficulties? What patterns have you noticed?",
        "What would good sleep look like for you? What specific improvements in your sleep would make the biggest difference in your life?",
        scale_1_max=12,
    ),
    "trauma": _standard(
        "trauma",
        "If you feel comfortable sharing, can you tell me about the traumatic experience(s) that brought you here? Take your time and share only what feels safe.",
        "Describe how trauma has affected your daily life. What changes have you noticed in yourself since the traumatic event(s)?",
        "Do you experience flashbacks, nightmares, or intrusive memories related to the trauma?",
        "Do you avoid certain places, people, or situations that remind you of the trauma?",
        "On a scale of 1-10, how safe do you feel in your daily life right now?",
        "How much do trauma symptoms interfere with your daily functioning? (1 = not at all, 10 = completely)",
        "How do you typically respond when you're triggered or reminded of the trauma? What do you do to cope?",
        "How have your relationships and social connections changed since the traumatic event? How do you interact with others now?",
        "What have you learned about yourself and your resilience through this experience? What strengths have you discovered?",
        "What would healing look like for you? What specific goals do you have for your recovery and moving forward?",
    ),
    "self-esteem": _standard(
        "self-esteem",
        "How do you typically talk to yourself in your mind? What kinds of thoughts do you have about yourself throughout the day?",
        "Describe a recent situation where you felt particularly bad about yourself. What happened and what went through your mind?",
        "Do you often compare yourself to others (on social media, at work, in social situations)?",
        "Do you have difficulty accepting compliments or positive feedback from others?",
        "On a scale of 1-10, how would you rate your overall self-confidence?",
        "How much do you like yourself as a person? (1 = not at all, 10 = completely)",
        "How do you typically react to criticism or feedback? What do you do when someone points out a mistake?",
        "What do you do when you accomplish something or receive praise? How do you handle your successes?",
        "When you think about your self-worth, what messages or beliefs about yourself do you think you learned growing up?",
        "What would having healthy self-esteem look like for you? How would you like to feel about yourself and treat yourself?",
    ),
    "emotional-dysregulation": _standard(
        "emotional-dysregulation",
        "Describe what it feels like when your emotions become overwhelming. Walk me through a recent intense emotional experience.",
        "Tell me about how your emotions affect your relationships. What do others notice about your emotional responses?",
        "Do your emotions often feel much stronger than the situation seems to warrant?",
        "Do you have difficulty calming down once you become emotionally upset?",
        "On a scale of 1-10, how intense are your emotions when they occur?",
        "How quickly do your emotions change throughout a typical day? (1 = very stable, 10 = constantly changing)",
        "What do you typically do when you feel emotionally overwhelmed? Describe your usual responses or actions.",
        "How do you express your emotions? Do you tend to keep them inside, express them outwardly, or something else?",
        "What patterns do you notice in your emotional responses? Are there specific triggers or situations that consistently affect you?",
        "What would emotional balance look like for you? How would you like to experience and manage your emotions differently?",
    ),
    "negative-thoughts": _standard(
        "negative-thoughts",
        "Describe what goes through your mind during a typical overthinking episode. What kinds of thoughts loop in your head?",
        "Tell me about a recent situation where negative thinking took over. What happened and how did your thoughts spiral?",
        "Do you often replay conversations or events in your mind repeatedly?",
        "Do you frequently imagine worst-case scenarios or catastrophic outcomes?",
        "On a scale of 1-10, how much time do you spend overthinking or ruminating each day?",
        "How much do negative thought patterns interfere with your daily life? (1 = not at all, 10 = completely)",
        "What do you typically do when you notice yourself stuck in negative thinking? How do you try to break the cycle?",
        "How do these thought patterns affect your behavior and decision-making? What do you do differently when caught in negative thinking?",
        "When you step back and observe your thinking patterns, what do you notice? What themes or triggers do you recognize?",
        "What would it be like to have more balanced, helpful thinking patterns? How would your life be different?",
    ),
    "social-anxiety": _standard(
        "social-anxiety",
        "Describe your experience in social situations. What goes through your mind before, during, and after social interactions?",
        "Tell me about a recent social situation that felt particularly challenging. What made it difficult and how did you handle it?",
        "Do you avoid social events, gatherings, or situations because of anxiety?",
        "Do you experience physical symptoms (sweating, blushing, trembling) in social situations?",
        "On a scale of 1-10, how anxious do you typically feel in social situations?",
        "How much do you worry about being judged or embarrassed by others? (1 = never, 10 = constantly)",
        "What do you typically do to prepare for or cope with social situations? Describe your strategies or safety behaviors.",
        "How has social anxiety affected your relationships, work, or school? What opportunities have you missed or avoided?",
        "What do you think others actually think about you versus what you fear they think? What evidence do you have for your social fears?",
        "What would social confidence look like for you? What specific social goals would you like to work toward?",
    ),
    "adjustment": _standard(
        "adjustment",
        "Describe the major life changes or transitions you're currently experiencing. What has shifted in your life recently?",
        "Tell me about how these changes have affected your sense of who you are. What feels different about yourself or your identity?",
        "Are you currently going through a major life transition (career change, relationship change, moving, etc.)?",
        "Do you feel uncertain about your life direction or future path?",
        "On a scale of 1-10, how confident do you feel about who you are as a person right now?",
        "How well are you coping with the changes in your life? (1 = very poorly, 10 = very well)",
        "How do you typically handle major changes or transitions? What strategies do you use to adapt?",
        "What support systems or resources do you turn to during times of change? How do you seek help or guidance?",
        "What core values and beliefs remain important to you despite the changes you're experiencing? What stays constant about who you are?",
        "How do you envision yourself adapting and growing through this transition? What kind of person do you hope to become?",
    ),
    # Free-form intake. Answers 1, 7 and 8 drive keyword-based module selection.
    OTHER_ISSUE_ID: Questionnaire(
        issue_id=OTHER_ISSUE_ID,
        issue_name=ISSUES[OTHER_ISSUE_ID].name,
        questions=(
            _text("1", "Please describe the mental health concern or issue you are experiencing. What brings you here today?", "open-ended"),
            _text("2", "When did you first notice this issue? How long have you been experiencing it?", "open-ended"),
            _text("3", "How is this issue affecting your daily life, relationships, work, or other important areas?", "open-ended"),
            _rating("4", "On a scale of 1-10, how much is this issue impacting your overall well-being? (1 = minimal impact, 10 = severe impact)"),
            _rating("5", "How often do you experience this issue? (1 = rarely, 10 = constantly)"),
            _text("6", "Do you experience any physical symptoms related to this issue? (e.g., headaches, fatigue, sleep problems, appetite changes)", "behavioral"),
            _text("7", "What emotions do you typically feel when this issue occurs? Describe your emotional experience.", "open-ended"),
            _text("8", "What have you tried so far to manage or cope with this issue? What has helped or not helped?", "behavioral"),
            _text("9", "What do you think might be contributing to or triggering this issue? Are there specific situations or patterns you have noticed?", "reflective"),
            _text("10", "What would improvement look like for you? What specific goals do you hope to achieve through therapy?", "future-oriented"),
        ),
    ),
}


# ── Fixed-issue recommendation table (issue → 4 module ids, priority order) ──

ISSUE_RECOMMENDATIONS: Dict[str, List[str]] = {
    "anxiety-disorders":       ["cbt", "mindfulness", "exposure", "music"],
    "depression":              ["cbt", "gratitude", "video", "act"],
    "stress":                  ["stress", "mindfulness", "music", "art"],
    "insomnia":                ["mindfulness", "music", "video", "stress"],
    "trauma":                  ["video", "mindfulness", "art", "act"],
    "self-esteem":             ["gratitude", "cbt", "video", "act"],
    "emotional-dysregulation": ["mindfulness", "cbt", "art", "video"],
    "negative-thoughts":       ["cbt", "mindfulness", "video", "gratitude"],
    "social-anxiety":          ["exposure", "cbt", "video", "mindfulness"],
    "adjustment":              ["video", "act", "gratitude", "art"],
}


# ── Lookups ───────────────────────────────────────────────────────────────────

def resolve_issue_id(issue_key: str) -> str:
    """
    Map an issue id or display name (case-insensitive) to its issue id.

    Raises:
        UnknownIssueError: if nothing matches.
    """
    key = (issue_key or "").strip().lower()
    if key in ISSUES:
        return key
    for issue in _ISSUE_LIST:
        if issue.name.lower() == key:
            return issue.issue_id
    raise UnknownIssueError(
        f"Unknown issue: {issue_key!r}. Valid: {list(ISSUES)}",
        issue=issue_key,
    )


def get_issue(issue_key: str) -> Issue:
    return ISSUES[resolve_issue_id(issue_key)]


def get_questionnaire(issue_key: str) -> Questionnaire:
    return QUESTIONNAIRES[resolve_issue_id(issue_key)]


def get_module(module_id: str) -> TherapyModule:
    try:
        return THERAPY_MODULES[module_id]
    except KeyError:
        raise CatalogError(
            f"Unknown therapy module: {module_id!r}",
            details={"module_id": module_id, "valid_modules": list(THERAPY_MODULES)},
        ) from None


def list_issues() -> List[Issue]:
    return list(_ISSUE_LIST)


def list_modules() -> List[TherapyModule]:
    return list(_MODULE_LIST)
