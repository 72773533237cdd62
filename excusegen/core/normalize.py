"""
Tone and length canonicalization.

The UI offers display labels ("Technical Jargon", "Quick one-liner"); storage,
the catalog and the selector work on canonical keys ("technical", "short").
Lookups ignore case and surrounding whitespace and accept canonical keys as
input. Unknown input comes back trimmed and lower-cased, so normalizing twice
gives the same result as normalizing once.
"""

TONE_LABELS = {
    "believable": "Believable",
    "absurd": "Absurd",
    "dramatic": "Dramatic",
    "mysterious": "Mysterious",
    "technical": "Technical Jargon",
    "detailed": "Overly Detailed",
}

LENGTH_LABELS = {
    "short": "Quick one-liner",
    "medium": "Short paragraph",
    "long": "Elaborate story",
}

CANONICAL_TONES = tuple(TONE_LABELS)
CANONICAL_LENGTHS = tuple(LENGTH_LABELS)

# display label (lower-cased) -> canonical key
_TONE_BY_LABEL = {label.lower(): key for key, label in TONE_LABELS.items()}
_LENGTH_BY_LABEL = {label.lower(): key for key, label in LENGTH_LABELS.items()}


def _normalize(value: str, by_label: dict) -> str:
    if value is None:
        return ""
    key = value.strip().lower()
    return by_label.get(key, key)


def normalize_tone(value: str) -> str:
    """Map a tone display label or canonical key to its canonical key."""
    return _normalize(value, _TONE_BY_LABEL)


def normalize_length(value: str) -> str:
    """Map a length display label or canonical key to its canonical key."""
    return _normalize(value, _LENGTH_BY_LABEL)


def display_tone(value: str) -> str:
    """Display label for a tone; unknown tones are returned unchanged."""
    return TONE_LABELS.get(normalize_tone(value), value)


def display_length(value: str) -> str:
    """Display label for a length; unknown lengths are returned unchanged."""
    return LENGTH_LABELS.get(normalize_length(value), value)
