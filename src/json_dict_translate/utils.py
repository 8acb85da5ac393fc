"""Utility functions for json-dict-translate."""

from __future__ import annotations

import json
from pathlib import Path

import pycountry

# Handle some common special cases
SPECIAL_CASES = {
    "zh": "Chinese",
    "zh-cn": "Chinese (Simplified)",
    "zh-tw": "Chinese (Traditional)",
}


def get_language_name(code: str) -> str:
    """
    Get the full language name from a language tag.

    Args:
        code: ISO 639-1 or ISO 639-3 language code (e.g., 'de', 'fr', 'deu')

    Returns:
        Full language name (e.g., 'German', 'French')

    Raises:
        ValueError: If the language code is not recognized
    """
    code_lower = code.lower()
    if code_lower in SPECIAL_CASES:
        return SPECIAL_CASES[code_lower]

    language = pycountry.languages.get(alpha_2=code_lower)
    if language:
        return language.name

    # Try alpha_3 code as fallback
    language = pycountry.languages.get(alpha_3=code_lower)
    if language:
        return language.name

    raise ValueError(f"Unknown language code: {code}")


def supported_languages() -> dict[str, str]:
    """Return every two-letter language tag (plus Chinese variants) mapped to its name, sorted by tag."""
    languages = {
        language.alpha_2: language.name
        for language in pycountry.languages
        if hasattr(language, "alpha_2")
    }
    languages.update(SPECIAL_CASES)
    return dict(sorted(languages.items()))


def load_dictionary(path: Path) -> dict[str, str]:
    """
    Read a flat name-value dictionary from a JSON file.

    Key order of the file is preserved.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON object of string values
    """
    if not path.exists():
        raise FileNotFoundError(f"File '{path}' not found.")

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}, got {type(data).__name__}")

    for key, value in data.items():
        if not isinstance(value, str):
            raise ValueError(
                f"Value of '{key}' in {path} is not a string ({type(value).__name__})"
            )

    return data


def save_dictionary(path: Path, dictionary: dict[str, str | None]) -> None:
    """Write a name-value dictionary to a pretty-printed JSON file. Failed values are written as null."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(dictionary, f, ensure_ascii=False, indent=4)
        f.write("\n")
