from __future__ import annotations

__all__ = ["remove_non_alphabetic", "to_initials", "to_title_case"]


def to_initials(text: str | None) -> str:
    """Upper-cased first letter of each space separated word ("hello world" -> "HW")."""
    if not text or not text.strip():
        return ""
    words = (word.strip() for word in text.split(" "))
    return "".join(word[0].upper() for word in words if word)


def remove_non_alphabetic(text: str | None) -> str:
    if not text:
        return ""
    return "".join(ch for ch in text if ch.isalpha())


def to_title_case(text: str | None) -> str | None:
    # None / "" are returned as-is
    if not text:
        return text
    return " ".join(word[:1].upper() + word[1:] for word in text.lower().split(" "))
