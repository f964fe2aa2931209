"""Post-processing of provider output before it is cached."""

import re

# Hebrew accents (U+0591-U+05AF) and points/vowels (U+05B0-U+05C7).
_HEBREW_MARKS = re.compile(r"[\u0591-\u05C7]")


def strip_hebrew_niqqud(text: str) -> str:
    """
    Remove Hebrew niqqud (vowel points) and cantillation marks.

    UI text is written unpointed; machine translation sometimes adds points.

    Args:
        text: Translated text.

    Returns:
        Text with the marks removed; other characters untouched.
    """
    return _HEBREW_MARKS.sub("", text)


def clean_translation(text: str, target_language: str) -> str:
    """
    Apply language-specific cleanup to a translated string.

    Only translated values pass through here. Source strings are cache keys
    and are never normalized.
    """
    if target_language == "he":
        return strip_hebrew_niqqud(text)
    return text
