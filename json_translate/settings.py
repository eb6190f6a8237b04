"""
Run configuration: resolved once at start-up, immutable afterwards.
"""

from __future__ import annotations

import os
import time
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from json_translate.cache import cache_path_for
from json_translate.errors import ConfigurationError

BACKENDS = ("deepl", "openai")

_API_KEY_VARS = {
    "deepl": "DEEPL_API_KEY",
    "openai": "OPENAI_API_KEY",
}


@dataclass(frozen=True)
class RunConfig:
    api_key: str
    target_lang: str
    input_path: Path
    output_path: Path
    cache_path: Path
    backend: str = "deepl"
    model: str | None = None
    temperature: float | None = None
    api_url: str | None = None


def default_output_path(data_dir: str | Path, target_lang: str, timestamp: int | None = None) -> Path:
    """data/<unix-timestamp>_<lang>.json, so successive runs never overwrite each other."""
    if timestamp is None:
        timestamp = int(time.time())
    return Path(data_dir) / f"{timestamp}_{target_lang}.json"


def load_settings(
    *,
    backend: str,
    data_dir: str | Path,
    input_path: str | Path,
    target_lang: str | None = None,
    output_path: str | Path | None = None,
    cache_path: str | Path | None = None,
    model: str | None = None,
    temperature: float | None = None,
    environ: Mapping[str, str] | None = None,
) -> RunConfig:
    """
    Combine command-line values with the environment into a RunConfig.

    Explicit arguments win over environment variables. Nothing is read from or
    written to disk here.

    Raises:
        ConfigurationError: unknown backend, or a missing API key / target language.
    """
    env = os.environ if environ is None else environ

    if backend not in BACKENDS:
        raise ConfigurationError(
            f"Unknown backend {backend!r}; expected one of: {', '.join(BACKENDS)}"
        )

    key_var = _API_KEY_VARS[backend]
    api_key = (env.get(key_var) or "").strip()
    if not api_key:
        raise ConfigurationError(
            f"{key_var} is not set. Add it to your environment or .env file."
        )

    lang = (target_lang or env.get("TARGET_LANG") or "").strip()
    if not lang:
        raise ConfigurationError(
            "TARGET_LANG is not set. Pass --lang or add it to your environment or .env file."
        )
    if backend == "deepl":
        lang = lang.upper()

    return RunConfig(
        api_key=api_key,
        target_lang=lang,
        input_path=Path(input_path),
        output_path=Path(output_path) if output_path else default_output_path(data_dir, lang),
        cache_path=Path(cache_path) if cache_path else cache_path_for(data_dir, lang),
        backend=backend,
        model=model,
        temperature=temperature,
        api_url=(env.get("DEEPL_API_URL") or None) if backend == "deepl" else None,
    )
