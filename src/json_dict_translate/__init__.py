"""json-dict-translate: Translate the values of flat JSON dictionaries using OpenAI."""

__version__ = "0.1.0"

from .engine import TranslationFailure, translate_dictionary
from .provider import (
    AUTO_DETECT,
    OpenAITranslationProvider,
    TranslationProvider,
    TranslationProviderError,
)
from .utils import get_language_name, load_dictionary, save_dictionary, supported_languages

__all__ = [
    "__version__",
    "AUTO_DETECT",
    "OpenAITranslationProvider",
    "TranslationFailure",
    "TranslationProvider",
    "TranslationProviderError",
    "get_language_name",
    "load_dictionary",
    "save_dictionary",
    "supported_languages",
    "translate_dictionary",
]
