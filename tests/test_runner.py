"""
End-to-end tests for a translation run with a fake backend.
"""

import json

import pytest

from json_translate.errors import InputError, OutputWriteError, TranslationError
from json_translate.runner import run


def write(path, value):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")


def read(path):
    return json.loads(path.read_text(encoding="utf-8"))


# =============================================================================
# Scenarios
# =============================================================================


class TestScenarios:
    def test_translate_into_german(self, make_settings, make_translator, sample_document):
        settings = make_settings("DE")
        write(settings.input_path, sample_document)
        translator = make_translator({"Hello": "Hallo", "Bye": "Tschüss"})

        stats = run(settings, translator, progress=False)

        assert read(settings.output_path) == {
            "greeting": "Hallo",
            "count": 3,
            "nested": {"farewell": "Tschüss"},
        }
        assert read(settings.cache_path) == {"Hello": "Hallo", "Bye": "Tschüss"}
        assert translator.calls == [("Hello", "DE"), ("Bye", "DE")]
        assert (stats.strings, stats.cache_hits, stats.api_calls) == (2, 0, 2)

    def test_prepopulated_cache_is_used(self, make_settings, make_translator, sample_document):
        settings = make_settings("FR")
        write(settings.input_path, sample_document)
        write(settings.cache_path, {"Hello": "Salut"})
        translator = make_translator({"Hello": "Bonjour", "Bye": "Au revoir"})

        stats = run(settings, translator, progress=False)

        output = read(settings.output_path)
        assert output["greeting"] == "Salut"
        assert output["nested"]["farewell"] == "Au revoir"
        assert translator.calls == [("Bye", "FR")]
        assert read(settings.cache_path) == {"Hello": "Salut", "Bye": "Au revoir"}
        assert (stats.cache_hits, stats.api_calls) == (1, 1)


# =============================================================================
# Cache behaviour across runs
# =============================================================================


class TestCacheAcrossRuns:
    def test_second_run_makes_no_calls(self, make_settings, make_translator, sample_document):
        settings = make_settings("DE")
        write(settings.input_path, sample_document)
        run(settings, make_translator({"Hello": "Hallo", "Bye": "Tschüss"}), progress=False)
        first_output = read(settings.output_path)

        second = make_translator()
        stats = run(settings, second, progress=False)

        assert second.calls == []
        assert stats.api_calls == 0
        assert stats.cache_hits == 2
        assert read(settings.output_path) == first_output

    def test_repeated_text_is_fetched_once(self, make_settings, make_translator):
        settings = make_settings("DE")
        write(settings.input_path, ["Hello", {"a": "Hello"}, ["Hello"]])
        translator = make_translator({"Hello": "Hallo"})

        stats = run(settings, translator, progress=False)

        assert read(settings.output_path) == ["Hallo", {"a": "Hallo"}, ["Hallo"]]
        assert translator.calls == [("Hello", "DE")]
        assert stats.cache_hits == 2

    def test_empty_strings_never_reach_backend(self, make_settings, make_translator):
        settings = make_settings("DE")
        write(settings.input_path, {"a": ""})
        translator = make_translator()

        run(settings, translator, progress=False)

        assert read(settings.output_path) == {"a": ""}
        assert translator.calls == []

    def test_malformed_cache_is_replaced(self, make_settings, make_translator, sample_document):
        settings = make_settings("DE")
        write(settings.input_path, sample_document)
        settings.cache_path.write_text("{oops", encoding="utf-8")

        run(settings, make_translator({"Hello": "Hallo", "Bye": "Tschüss"}), progress=False)

        assert read(settings.cache_path) == {"Hello": "Hallo", "Bye": "Tschüss"}


# =============================================================================
# Failures
# =============================================================================


class TestFailures:
    def test_translation_failure_aborts_without_output(
        self, make_settings, make_translator, sample_document
    ):
        settings = make_settings("DE")
        write(settings.input_path, sample_document)
        translator = make_translator({"Hello": "Hallo"}, fail_on={"Bye"})

        with pytest.raises(TranslationError) as excinfo:
            run(settings, translator, progress=False)

        assert excinfo.value.text == "Bye"
        assert not settings.output_path.exists()
        # Translations obtained before the failure are kept for the next run.
        assert read(settings.cache_path) == {"Hello": "Hallo"}

    def test_missing_input(self, make_settings, make_translator):
        settings = make_settings("DE")

        with pytest.raises(InputError, match="not found"):
            run(settings, make_translator(), progress=False)

    def test_invalid_input(self, make_settings, make_translator):
        settings = make_settings("DE")
        settings.input_path.parent.mkdir(parents=True)
        settings.input_path.write_text('{"a": ', encoding="utf-8")
        translator = make_translator()

        with pytest.raises(InputError, match="Invalid JSON"):
            run(settings, translator, progress=False)
        assert translator.calls == []

    def test_unwritable_output(self, make_settings, make_translator, sample_document, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        settings = make_settings("DE", output_path=blocker / "out.json")
        write(settings.input_path, sample_document)

        with pytest.raises(OutputWriteError):
            run(settings, make_translator(), progress=False)

        # The translations were fetched before the write failed and must survive it.
        assert read(settings.cache_path) == {"Hello": "Hello [DE]", "Bye": "Bye [DE]"}

    def test_input_nested_beyond_parser_limit(self, make_settings, make_translator):
        settings = make_settings("DE")
        settings.input_path.parent.mkdir(parents=True)
        depth = 100_000
        settings.input_path.write_text("[" * depth + '"x"' + "]" * depth, encoding="utf-8")
        translator = make_translator()

        with pytest.raises(InputError, match="nested too deeply"):
            run(settings, translator, progress=False)
        assert translator.calls == []
        assert not settings.output_path.exists()


# =============================================================================
# Deeply nested documents
# =============================================================================


class TestDeepNesting:
    def test_deeply_nested_document(self, make_settings, make_translator):
        settings = make_settings("DE")
        depth = 300
        settings.input_path.parent.mkdir(parents=True)
        settings.input_path.write_text(
            '{"a": ' * depth + '"Hello"' + "}" * depth, encoding="utf-8"
        )

        stats = run(settings, make_translator({"Hello": "Hallo"}), progress=False)

        node = read(settings.output_path)
        for _ in range(depth):
            node = node["a"]
        assert node == "Hallo"
        assert stats.api_calls == 1
