"""
Shared fixtures: an in-memory translator and RunConfig builders.
"""

import pytest

from json_translate.errors import TranslationError
from json_translate.settings import RunConfig


class FakeTranslator:
    """Dictionary-backed translator that records every call."""

    def __init__(self, mapping=None, fail_on=()):
        self.mapping = dict(mapping or {})
        self.fail_on = set(fail_on)
        self.calls = []

    def translate(self, text, target_lang):
        self.calls.append((text, target_lang))
        if text in self.fail_on:
            raise TranslationError("DeepL character quota exceeded", status=456)
        return self.mapping.get(text, f"{text} [{target_lang}]")


@pytest.fixture
def make_translator():
    return FakeTranslator


@pytest.fixture
def sample_document():
    return {"greeting": "Hello", "count": 3, "nested": {"farewell": "Bye"}}


@pytest.fixture
def make_settings(tmp_path):
    """Build a RunConfig whose files all live under tmp_path/data."""

    def _make(target_lang="DE", **overrides):
        data_dir = tmp_path / "data"
        values = dict(
            api_key="test-key:fx",
            target_lang=target_lang,
            input_path=data_dir / "input.json",
            output_path=data_dir / "output.json",
            cache_path=data_dir / f"cache_{target_lang}.json",
        )
        values.update(overrides)
        return RunConfig(**values)

    return _make
