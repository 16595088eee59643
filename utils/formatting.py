# utils/formatting.py
from typing import Optional


def display_name(name: str) -> str:
    """capitalize the first letter only; 'mr-mime' -> 'Mr-mime'"""
    s = name or ""
    return s[:1].upper() + s[1:]


def evolves_at_label(min_level: Optional[int]) -> Optional[str]:
    if min_level is None:
        return None
    return f"Evoluciona al nivel {min_level}"
