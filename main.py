"""
Entry point for the JSON translation tool.

Usage:
    python main.py                         # uses TARGET_LANG and DEEPL_API_KEY from .env
    python main.py --lang FR
    python main.py --lang DE --input data/strings.json --output data/strings.de.json
    python main.py --lang Japanese --backend openai --model gpt-4o
"""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

import config
from json_translate.client import build_translator
from json_translate.errors import JsonTranslateError
from json_translate.runner import run
from json_translate.settings import BACKENDS, load_settings


# ── CLI ────────────────────────────────────────────────────────────────────────

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Translate every string value of a JSON file, caching results per language."
    )
    parser.add_argument(
        "--lang", "-l",
        default=None,
        help='Target language code, e.g. "DE", "FR" (default: $TARGET_LANG)',
    )
    parser.add_argument(
        "--input", "-i",
        default=config.INPUT_FILE,
        dest="input_path",
        help=f"Input JSON file (default: {config.INPUT_FILE})",
    )
    parser.add_argument(
        "--output", "-o",
        default=config.OUTPUT_FILE,
        dest="output_path",
        help="Output JSON file (default: <data-dir>/<timestamp>_<LANG>.json)",
    )
    parser.add_argument(
        "--cache",
        default=config.CACHE_FILE,
        dest="cache_path",
        help="Cache file (default: <data-dir>/cache_<LANG>.json)",
    )
    parser.add_argument(
        "--data-dir",
        default=config.DATA_DIR,
        help=f"Directory for default output and cache files (default: {config.DATA_DIR})",
    )
    parser.add_argument(
        "--backend",
        default=config.BACKEND,
        choices=BACKENDS,
        help=f"Translation service (default: {config.BACKEND})",
    )
    parser.add_argument(
        "--model", "-m",
        default=config.MODEL,
        help=f"OpenAI model for the openai backend (default: {config.MODEL})",
    )
    parser.add_argument(
        "--no-progress",
        action="store_false",
        dest="progress",
        help="Hide the progress bar",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every translation request",
    )
    return parser.parse_args(argv)


# ── Main ───────────────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()

    try:
        settings = load_settings(
            backend=args.backend,
            data_dir=args.data_dir,
            input_path=args.input_path,
            target_lang=args.lang,
            output_path=args.output_path,
            cache_path=args.cache_path,
            model=args.model,
            temperature=config.TEMPERATURE,
        )
        translator = build_translator(settings)

        print(f"Target language : {settings.target_lang}")
        print(f"Backend         : {settings.backend}")
        print(f"Input           : {settings.input_path}")
        print(f"Cache           : {settings.cache_path}\n")

        stats = run(settings, translator, progress=args.progress)
    except JsonTranslateError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    print(f"\n  Strings         : {stats.strings}")
    print(f"  From cache      : {stats.cache_hits}")
    print(f"  API calls       : {stats.api_calls}")
    print(f"  Saved → {settings.output_path}\n")
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
