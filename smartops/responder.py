"""
Keyword responder for the chat assistant.

Categories are checked in priority order and the first one with a keyword
present wins. A keyword matches at the start of a word, so "costs" and
"healthy" match while "ai" inside "against" does not.
"""

import re

FALLBACK = "fallback"

FALLBACK_REPLY = (
    "I'm analyzing your request. Our specialized team handles complex "
    "cases—would you like to book a strategic audit?"
)

# (category, keywords, reply) in priority order
RULES: tuple[tuple[str, tuple[str, ...], str], ...] = (
    (
        "cost",
        ("saving", "cost"),
        "Our automated CloudOps typically reduces infrastructure spend by 30-45%. "
        "We achieve this through real-time instance rightsizing and automated "
        "waste elimination.",
    ),
    (
        "health",
        ("health", "status", "up"),
        "All systems are currently performing at 99.99% efficiency across "
        "US-East, EU-West, and APAC nodes. You can see live metrics in our "
        "dashboard.",
    ),
    (
        "ai",
        ("ai", "model", "machine"),
        "We specialize in deploying GPU-optimized infrastructure for LLMs and "
        "deep learning. Our core currently processes over 1M AI-driven "
        "deployments monthly.",
    ),
    (
        "security",
        ("security", "threat", "secure"),
        "Our architecture is built on Zero-Trust principles. We use real-time "
        "AI anomaly detection to block suspicious patterns before they reach "
        "your data layer.",
    ),
)

_PATTERNS = [
    (category, re.compile(r"\b(?:" + "|".join(map(re.escape, keywords)) + ")"), reply)
    for category, keywords, reply in RULES
]

REPLIES = {category: reply for category, _, reply in RULES}
REPLIES[FALLBACK] = FALLBACK_REPLY


def classify(query) -> str:
    """Return the category name for *query*, or ``"fallback"``."""
    if not isinstance(query, str):
        return FALLBACK
    text = query.lower()
    for category, pattern, _ in _PATTERNS:
        if pattern.search(text):
            return category
    return FALLBACK


def respond(query) -> str:
    """Map a free-text query to its canned reply. Never raises."""
    return REPLIES[classify(query)]
