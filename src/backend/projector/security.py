"""Bounding and screening of wizard input.

Starting hints and answers are pasted verbatim into every transcript the
generation service sees, and template/domain names are typed at the
command line. Both are bounded here before the engine sees them.
"""

import re


class InputSanitizer:
    """Clean up text typed into the wizard."""

    MAX_MESSAGE_LENGTH = 10000
    MAX_NAME_LENGTH = 200

    # Phrases that try to steer the question generator instead of answering it
    INJECTION_PATTERNS = [
        r"(ignore|disregard|forget)\s+(previous|above|all)\s+(instructions?|prompts?)",
        r"new\s+instructions?:",
        r"system\s*:",
        r"\[system\]",
        r"<\|(im_start|endoftext)\|>",
    ]
    _INJECTION_RE = re.compile("|".join(INJECTION_PATTERNS), re.IGNORECASE)
    _CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")

    @classmethod
    def sanitize_message(cls, message: str | None) -> str:
        """Bound a starting hint or free-text answer for the transcript.

        Args:
            message: Text as typed, possibly None.

        Returns:
            The text cut to MAX_MESSAGE_LENGTH, trimmed, with any
            characters that cannot be encoded as UTF-8 dropped.
        """
        if not message:
            return ""
        bounded = message[: cls.MAX_MESSAGE_LENGTH].strip()
        return bounded.encode("utf-8", errors="ignore").decode("utf-8")

    @classmethod
    def sanitize_name(cls, name: str | None) -> str:
        """Bound a template or domain name and drop control characters."""
        if not name:
            return ""
        return cls._CONTROL_CHARS_RE.sub("", name[: cls.MAX_NAME_LENGTH].strip())

    @classmethod
    def detect_injection_attempt(cls, text: str) -> bool:
        """Whether an answer reads like instructions aimed at the generator.

        Flagged answers are still recorded; the CLI only logs a warning.
        """
        return cls._INJECTION_RE.search(text) is not None
