"""Concurrent translation of every value in a flat dictionary."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from typing import Callable

from .provider import TranslationProvider, TranslationProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslationFailure:
    """Diagnostic for a value that could not be translated."""

    key: str
    value: str
    source_tag: str
    target_tag: str
    error: BaseException

    def __str__(self) -> str:
        return (
            f"Error translating '{self.value}' (key '{self.key}') "
            f"from '{self.source_tag}' to '{self.target_tag}': {self.error}"
        )


FailureCallback = Callable[[TranslationFailure], None]


async def _translate_entry(
    provider: TranslationProvider,
    key: str,
    value: str,
    source_tag: str,
    target_tag: str,
    settled: dict[str, str | None],
    limiter: asyncio.Semaphore | None,
) -> TranslationFailure | None:
    """
    Translate a single value and record the outcome in settled under its key.

    Returns the logged TranslationFailure if the provider call failed, None otherwise.
    """
    try:
        async with limiter if limiter is not None else contextlib.nullcontext():
            settled[key] = await provider.translate_one(value, source_tag, target_tag)
    except TranslationProviderError as e:
        settled[key] = None
        failure = TranslationFailure(key, value, source_tag, target_tag, e)
        logger.warning("%s", failure)
        return failure
    return None


async def translate_dictionary(
    dictionary: dict[str, str],
    provider: TranslationProvider,
    source_tag: str,
    target_tag: str,
    *,
    on_failure: FailureCallback | None = None,
    max_concurrency: int | None = None,
) -> dict[str, str | None]:
    """
    Translate every value of dictionary from source_tag to target_tag.

    All values are submitted to the provider at once. A value whose
    translation fails is logged and mapped to None; it never aborts the
    other translations. Once every call has settled, on_failure is called
    for each failed value in key order. An exception raised by on_failure
    is not caught and propagates to the caller.

    Args:
        dictionary: Flat key-value dictionary to translate
        provider: Provider used for every value
        source_tag: Source language tag, or AUTO_DETECT (passed through as-is)
        target_tag: Target language tag
        on_failure: Called once per failed value with its diagnostic, after all calls settle
        max_concurrency: Optional cap on in-flight provider calls (None = unbounded)

    Returns:
        A new dictionary with the same keys in the same order as dictionary
    """
    if dictionary is None:
        raise TypeError("dictionary must not be None")

    # Output order follows the input, never completion order
    keys = list(dictionary)
    if not keys:
        return {}

    limiter = asyncio.Semaphore(max_concurrency) if max_concurrency else None
    settled: dict[str, str | None] = {}

    tasks = [
        _translate_entry(
            provider,
            key,
            dictionary[key],
            source_tag,
            target_tag,
            settled,
            limiter,
        )
        for key in keys
    ]

    # Run all value translations in parallel
    outcomes = await asyncio.gather(*tasks, return_exceptions=True)

    failures = []
    for key, outcome in zip(keys, outcomes):
        if isinstance(outcome, BaseException):
            # Anything other than a provider error escaped the entry; still only that key fails
            settled[key] = None
            outcome = TranslationFailure(key, dictionary[key], source_tag, target_tag, outcome)
            logger.warning("%s", outcome)
        if outcome is not None:
            failures.append(outcome)

    # Callbacks run after every call has settled, once per failed key
    if on_failure is not None:
        for failure in failures:
            on_failure(failure)

    return {key: settled.get(key) for key in keys}
