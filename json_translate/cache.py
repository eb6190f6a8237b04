"""
Per-language translation cache backed by a JSON file.

One file holds one target language, so the on-disk format is a flat JSON
object mapping source text to translated text:

    data/cache_DE.json  →  {"Hello": "Hallo", "Bye": "Tschüss"}

Entries never expire. Deleting the file forces everything to be translated
again.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from json_translate.errors import CacheLoadError

logger = logging.getLogger(__name__)


def cache_path_for(data_dir: str | Path, target_lang: str) -> Path:
    """Default cache location for a target language, e.g. data/cache_DE.json."""
    return Path(data_dir) / f"cache_{target_lang}.json"


class TranslationCache:
    """In-memory map of source text → translation for a single target language."""

    def __init__(self, target_lang: str, entries: dict[str, str] | None = None):
        self.target_lang = target_lang
        self._entries: dict[str, str] = dict(entries or {})

    # ── lookup / update ───────────────────────────────────────────────────────

    def get(self, text: str, target_lang: str) -> str | None:
        """Cached translation of `text`, or None. Other languages always miss."""
        if target_lang != self.target_lang:
            return None
        return self._entries.get(text)

    def put(self, text: str, target_lang: str, translated: str) -> None:
        """Store a translation, replacing any earlier one for the same text."""
        if target_lang != self.target_lang:
            raise ValueError(
                f"Cache holds {self.target_lang!r} translations, got {target_lang!r}"
            )
        self._entries[text] = translated

    @property
    def entries(self) -> dict[str, str]:
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, text: object) -> bool:
        return text in self._entries

    # ── persistence ───────────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: str | Path, target_lang: str) -> "TranslationCache":
        """
        Read a cache file, falling back to an empty cache.

        A missing file is normal on the first run. A file that cannot be read
        or parsed is reported as a warning and ignored; the run goes on with an
        empty cache and the next save overwrites the bad file.
        """
        path = Path(path)
        if not path.exists():
            logger.info("No cache file at %s, starting with an empty cache.", path)
            return cls(target_lang)

        try:
            entries = _read_entries(path)
        except CacheLoadError as exc:
            logger.warning("%s Starting with an empty cache.", exc)
            return cls(target_lang)

        logger.info("Loaded %d cached translation(s) from %s.", len(entries), path)
        return cls(target_lang, entries)

    def save(self, path: str | Path) -> None:
        """
        Write the whole cache to `path`, replacing the previous file.

        The data goes to a sibling temporary file first and is then moved over
        the target, so readers only ever see a complete cache.

        Raises:
            OSError: if the directory or file cannot be written.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(self._entries, f, ensure_ascii=False, indent=2)
                f.write("\n")
            os.replace(tmp_path, path)
        except OSError:
            if tmp_path.exists():
                tmp_path.unlink()
            raise
        logger.debug("Saved %d cached translation(s) to %s.", len(self._entries), path)


def _read_entries(path: Path) -> dict[str, str]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, UnicodeDecodeError) as exc:
        raise CacheLoadError(f"Cannot read cache file {path}: {exc}.") from exc
    except json.JSONDecodeError as exc:
        raise CacheLoadError(f"Cache file {path} is not valid JSON: {exc}.") from exc

    if not isinstance(raw, dict):
        raise CacheLoadError(
            f"Cache file {path} must contain a JSON object, got {type(raw).__name__}."
        )

    entries: dict[str, str] = {}
    skipped = 0
    for key, value in raw.items():
        if isinstance(value, str):
            entries[key] = value
        else:
            skipped += 1
    if skipped:
        logger.warning("Ignored %d non-string entry(ies) in cache file %s.", skipped, path)
    return entries
