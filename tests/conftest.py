"""Shared fixtures: a scriptable in-memory translation provider."""

import asyncio

import pytest

from json_dict_translate.provider import TranslationProvider, TranslationProviderError


class StubProvider(TranslationProvider):
    """
    Provider double that never touches the network.

    translations maps source text to translated text (default: "<target>:<text>"),
    failures lists texts that raise TranslationProviderError, and delays maps
    texts to a sleep in seconds before answering.
    """

    def __init__(self, translations=None, failures=(), delays=None):
        self.translations = translations or {}
        self.failures = set(failures)
        self.delays = delays or {}
        self.calls = []
        self.completed = []

    async def translate_one(self, text, source_tag, target_tag):
        self.calls.append((text, source_tag, target_tag))
        await asyncio.sleep(self.delays.get(text, 0))
        if text in self.failures:
            raise TranslationProviderError(f"cannot translate {text!r}")
        self.completed.append(text)
        return self.translations.get(text, f"{target_tag}:{text}")


@pytest.fixture
def stub_provider():
    """Factory for StubProvider instances."""
    return StubProvider


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep local configuration out of the tests."""
    monkeypatch.delenv("MAX_CONCURRENT_REQUESTS", raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
