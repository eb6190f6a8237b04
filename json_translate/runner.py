"""
End-to-end run: cache + input → walk → output + cache.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tqdm import tqdm

from json_translate.cache import TranslationCache
from json_translate.client import Translator
from json_translate.files import read_json, write_json
from json_translate.settings import RunConfig
from json_translate.walker import iter_strings, translate_value

logger = logging.getLogger(__name__)


@dataclass
class RunStats:
    strings: int = 0
    cache_hits: int = 0
    api_calls: int = 0


def run(settings: RunConfig, translator: Translator, progress: bool = True) -> RunStats:
    """
    Translate settings.input_path into settings.output_path.

    Strings already in the cache are reused; every other non-empty string is
    sent to `translator` and the result is added to the cache. The output file
    is written only after every string has been translated. The cache is
    saved on every exit path once the walk starts, including a failed
    translation or output write, so work already paid for is kept.

    Raises:
        InputError:       input missing or not valid JSON.
        TranslationError: the backend failed; no output file is written.
        OutputWriteError: the output file could not be written.
    """
    lang = settings.target_lang
    cache = TranslationCache.load(settings.cache_path, lang)
    document = read_json(settings.input_path)

    stats = RunStats()
    total = sum(1 for _ in iter_strings(document))

    try:
        with tqdm(total=total, desc="  Translating", unit="str", disable=not progress) as bar:

            def resolve(text: str) -> str:
                stats.strings += 1
                cached = cache.get(text, lang)
                if cached is not None:
                    stats.cache_hits += 1
                else:
                    stats.api_calls += 1
                    cached = translator.translate(text, lang)
                    cache.put(text, lang, cached)
                bar.update(1)
                return cached

            translated = translate_value(document, resolve)

        write_json(settings.output_path, translated)
    finally:
        _save_cache(cache, settings)

    logger.info(
        "Translated %d string(s) into %s: %d from cache, %d API call(s).",
        stats.strings, lang, stats.cache_hits, stats.api_calls,
    )
    return stats


def _save_cache(cache: TranslationCache, settings: RunConfig) -> None:
    # Save failures are logged, never raised.
    try:
        cache.save(settings.cache_path)
    except OSError as exc:
        logger.error("Failed to save cache to %s: %s", settings.cache_path, exc)
