"""
Display labels for emotions.

Kept apart from :class:`emogo.models.Emotion` so validation never depends on
presentation text.
"""

from .models import Emotion

EMOTION_LABELS: dict[str, str] = {
    Emotion.HAPPY: "Happy 😀",
    Emotion.CALM: "Calm 😐",
    Emotion.SAD: "Sad 😢",
    Emotion.ANGRY: "Angry 😡",
}


def label_for(value: str) -> str:
    """Return the display label for ``value``, or the raw value if unknown."""
    return EMOTION_LABELS.get(value, value)
