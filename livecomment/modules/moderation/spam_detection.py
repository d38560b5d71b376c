"""NG word matching.

Matching is literal, case-sensitive substring containment: no wildcards, no
regex, no normalization. An empty phrase never matches anything.
"""

from typing import Iterable, Optional


def matches(body: str, phrase: str) -> bool:
    """Check whether ``phrase`` occurs in ``body``.

    Args:
        body: Comment text
        phrase: NG word

    Returns:
        True if phrase is non-empty and a substring of body
    """
    return bool(phrase) and phrase in body


def any_match(body: str, phrases: Iterable[str]) -> bool:
    """Check whether any of ``phrases`` occurs in ``body``."""
    return any(matches(body, phrase) for phrase in phrases)


class BannedPhraseMatcher:
    """Checks comment bodies against a stream's effective banned set."""

    def __init__(self, phrases: Iterable[str]):
        # Deduplicate, drop empties, keep registration order for reporting
        seen: dict[str, None] = {}
        for phrase in phrases:
            if phrase:
                seen.setdefault(phrase, None)
        self.phrases: tuple[str, ...] = tuple(seen)

    def __len__(self) -> int:
        return len(self.phrases)

    def __bool__(self) -> bool:
        return bool(self.phrases)

    def first_match(self, body: str) -> Optional[str]:
        """Return the first phrase found in ``body``, or None."""
        for phrase in self.phrases:
            if phrase in body:
                return phrase
        return None

    def matches(self, body: str) -> bool:
        return self.first_match(body) is not None
