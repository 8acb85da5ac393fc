"""Command-line interface for json-dict-translate."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
import time
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from . import __version__
from .engine import TranslationFailure, translate_dictionary
from .provider import AUTO_DETECT, OpenAITranslationProvider, TranslationProvider
from .utils import load_dictionary, save_dictionary, supported_languages

# Input language argument meaning "detect automatically"
AUTO_DETECT_ARG = "."


class ListLanguagesAction(argparse.Action):
    """Print the supported language tags and exit."""

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        print("Supported languages:")
        for code, name in supported_languages().items():
            print(f"    {code:<15} {name}")
        parser.exit()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-dict-translate",
        description="Translate all values in a JSON file to other language(s) using OpenAI's API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Translate en.json in English to fr.json in French
  json-dict-translate en.json fr.json en fr

  # Detect the input language automatically
  json-dict-translate some.json de.json . de

  # Translate to French, German and Spanish, writing fr.json, de.json
  # and es.json into the current directory
  json-dict-translate en.json ./ fr,de,es

Example files:
  [ input: en.json ]
  {
      "Title": "Hello World",
      "Content": "A simple, automated translation."
  }
  [ output: fr.json ]
  {
      "Title": "Bonjour le monde",
      "Content": "Une traduction simple et automatisée."
  }

Values that could not be translated are written as null.

Environment Variables:
  OPENAI_API_KEY             Your OpenAI API key (required)
  OPENAI_TRANSLATION_MODEL   Model used for translations (default: gpt-5-mini)
  MAX_CONCURRENT_REQUESTS    Cap on parallel requests per file (default: unlimited)
        """,
    )

    parser.add_argument(
        "input_file",
        type=Path,
        help="Input JSON file",
    )

    parser.add_argument(
        "output_path",
        type=Path,
        help="Output JSON file or a directory",
    )

    parser.add_argument(
        "input_lang",
        type=str,
        help="Input language or '.' to detect the language automatically",
    )

    parser.add_argument(
        "output_langs",
        type=str,
        help="Output language(s), comma separated. If more than one is specified "
        "then output_path must be an existing directory.",
    )

    parser.add_argument(
        "-l",
        "--list-languages",
        action=ListLanguagesAction,
        help="List the supported language codes and exit",
    )

    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not log individual translation failures",
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def _max_concurrency() -> int | None:
    value = int(os.environ.get("MAX_CONCURRENT_REQUESTS", "0"))
    return value if value > 0 else None


async def translate_file(
    provider: TranslationProvider,
    dictionary: dict[str, str],
    source_tag: str,
    target_tags: list[str],
    output_path: Path,
    max_concurrency: int | None = None,
) -> dict[str, int]:
    """
    Translate dictionary into each target language in turn and save the results.

    Returns a dict mapping each target tag to its number of failed values.
    """
    is_output_directory = output_path.is_dir()
    failure_counts = {}

    for target_tag in target_tags:
        if is_output_directory:
            output_file = output_path / f"{target_tag}.json"
        else:
            output_file = output_path

        print(f"Translating to {target_tag} ...")

        failures: list[TranslationFailure] = []
        start_time = time.perf_counter()
        translated = await translate_dictionary(
            dictionary,
            provider,
            source_tag,
            target_tag,
            on_failure=failures.append,
            max_concurrency=max_concurrency,
        )
        elapsed = time.perf_counter() - start_time

        print(f"Translated in {elapsed:.3f}s. Saving translation to {output_file} ...")
        if failures:
            print(f"  {len(failures)} of {len(dictionary)} values could not be translated (written as null)")
        save_dictionary(output_file, translated)
        failure_counts[target_tag] = len(failures)

    return failure_counts


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    # Load environment variables from .env file in current working directory
    load_dotenv(find_dotenv(usecwd=True))

    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.ERROR if args.quiet else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if not args.input_file.is_file():
        print(f"Error: File '{args.input_file}' not found.", file=sys.stderr)
        return 1

    requested_tags = [tag.strip() for tag in args.output_langs.split(",") if tag.strip()]
    if not requested_tags:
        print("Error: At least one output language must be specified.", file=sys.stderr)
        return 1

    if len(requested_tags) > 1 and not args.output_path.is_dir():
        print(f"Error: Output directory not found: '{args.output_path}'.", file=sys.stderr)
        return 1

    try:
        max_concurrency = _max_concurrency()
        dictionary = load_dictionary(args.input_file)
        provider = OpenAITranslationProvider()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Same table --list-languages prints
    languages = provider.supported_languages()

    source_tag = AUTO_DETECT if args.input_lang == AUTO_DETECT_ARG else args.input_lang
    if source_tag != AUTO_DETECT and source_tag.lower() not in languages:
        print(f"Error: Unknown language code: {source_tag}", file=sys.stderr)
        return 1

    target_tags = []
    for target_tag in requested_tags:
        if target_tag.lower() not in languages:
            print(f"Skipping {target_tag}: Unknown language code: {target_tag}")
            continue
        target_tags.append(target_tag)

    if not target_tags:
        print("Error: No valid output languages to translate to.", file=sys.stderr)
        return 1

    try:
        asyncio.run(
            translate_file(
                provider,
                dictionary,
                source_tag,
                target_tags,
                args.output_path,
                max_concurrency,
            )
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    print("All done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
