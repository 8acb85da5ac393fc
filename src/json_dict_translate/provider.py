"""Translation providers: a single text translation call per request."""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod

from dotenv import find_dotenv, load_dotenv
from openai import AsyncOpenAI, OpenAIError

from .utils import get_language_name, supported_languages

# Load environment variables from .env file in current working directory
load_dotenv(find_dotenv(usecwd=True))

# Model configuration - can be overridden via environment variables or .env file
TRANSLATION_MODEL = os.environ.get("OPENAI_TRANSLATION_MODEL", "gpt-5-mini")

# Source language sentinel meaning "let the provider detect the language"
AUTO_DETECT = "auto"

TRANSLATION_SCHEMA = {
    "type": "object",
    "properties": {"translation": {"type": "string"}},
    "required": ["translation"],
    "additionalProperties": False,
}


class TranslationProviderError(Exception):
    """A single translation call failed."""

    def __init__(self, message: str, detail: BaseException | None = None):
        super().__init__(message)
        self.detail = detail


class TranslationProvider(ABC):
    """Abstract translation provider."""

    @abstractmethod
    async def translate_one(self, text: str, source_tag: str, target_tag: str) -> str:
        """
        Translate text from source_tag to target_tag.

        Args:
            text: Text to translate (may be empty)
            source_tag: Source language tag, or AUTO_DETECT
            target_tag: Target language tag

        Returns:
            Translated text

        Raises:
            TranslationProviderError: If the provider call fails
        """

    def supported_languages(self) -> dict[str, str]:
        """Language tags understood by this provider, mapped to display names."""
        return supported_languages()


def _get_client() -> AsyncOpenAI:
    """Get async OpenAI client."""
    api_key = os.environ.get("OPENAI_API_KEY")
    if not api_key:
        raise ValueError(
            "OPENAI_API_KEY environment variable not set. "
            "Set it in your environment or in a .env file."
        )
    return AsyncOpenAI(api_key=api_key)


class OpenAITranslationProvider(TranslationProvider):
    """
    Translate text with OpenAI chat completions.

    Uses Structured Outputs so the reply is always {"translation": "..."}.
    No retries: a rate limit or any other API error fails the call.
    """

    def __init__(self, client: AsyncOpenAI | None = None, model: str = TRANSLATION_MODEL):
        self.client = client if client is not None else _get_client()
        self.model = model

    def _build_messages(self, text: str, source_tag: str, target_tag: str) -> list[dict]:
        target_language = get_language_name(target_tag)
        if source_tag == AUTO_DETECT:
            source_description = "text in any language (detect the language yourself)"
        else:
            source_description = f"{get_language_name(source_tag)} text"

        input_text = json.dumps({"translation": text}, ensure_ascii=False)
        prompt = (
            f"Translate the following JSON containing {source_description} to {target_language}:\n"
            f"```\n{input_text}\n```\n"
        )

        system_content = """You are a helpful assistant that translates text between languages. The content to translate is provided as JSON. You provide the output as JSON matching the exact same structure.

Rules:
- Keep the "translation" key exactly as it is
- Text enclosed in braces like '{placeholder}' is filled in by the application later. Keep it exactly as written; its position can change to fit the target language grammar.
- If the text is empty, return an empty string"""

        return [
            {"role": "system", "content": system_content},
            {"role": "user", "content": prompt},
        ]

    async def translate_one(self, text: str, source_tag: str, target_tag: str) -> str:
        try:
            messages = self._build_messages(text, source_tag, target_tag)
        except ValueError as e:
            raise TranslationProviderError(
                f"Unsupported language pair '{source_tag}' -> '{target_tag}': {e}", e
            ) from e

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "translation_output",
                        "schema": TRANSLATION_SCHEMA,
                        "strict": True,
                    },
                },
            )
        except OpenAIError as e:
            raise TranslationProviderError(f"OpenAI request failed: {e}", e) from e

        try:
            choice = response.choices[0]
            message = choice.message
            refusal = getattr(message, "refusal", None)
            content = message.content
        except (IndexError, AttributeError, TypeError) as e:
            raise TranslationProviderError(f"Malformed response: {response!r}", e) from e

        # Handle refusals
        if refusal:
            raise TranslationProviderError(f"Model refused to translate: {refusal}")

        # Check for incomplete response
        if getattr(choice, "finish_reason", None) == "length":
            raise TranslationProviderError("Response was truncated due to length limit")

        try:
            parsed = json.loads(content)
            translation = parsed["translation"]
        except (json.JSONDecodeError, TypeError, KeyError) as e:
            raise TranslationProviderError(f"Malformed response: {content!r}", e) from e

        if not isinstance(translation, str):
            raise TranslationProviderError(f"Malformed response: {content!r}")
        return translation
