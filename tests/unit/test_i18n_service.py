"""Unit tests for the Translator (message lookup with language fallback)."""

import json

import pytest

from src.services.i18n_service import (
    PACKAGE_LOCALES_DIR,
    Translator,
    default_candidate_dirs,
    load_catalog_dir,
)
from src.services import translation_defaults
from src.services.translation_defaults import TRANSLATION_DEFAULTS


def _write_catalog(path, catalogs):
    path.mkdir(parents=True, exist_ok=True)
    for language, data in catalogs.items():
        (path / f"{language}.json").write_text(json.dumps(data), encoding="utf-8")


class TestTranslate:
    """Tests for translate() resolution order."""

    def test_requested_language(self, translator):
        assert translator.translate("auth.invalid_credentials", "zh-CN") == "邮箱或密码错误"
        assert translator.translate("auth.invalid_credentials", "zh-TW") == "電子郵件或密碼錯誤"

    def test_default_language_when_omitted(self, translator):
        assert translator.translate("auth.invalid_credentials") == "Invalid email or password"

    def test_unsupported_language_falls_back_to_default(self, translator):
        assert translator.translate("auth.invalid_credentials", "fr") == "Invalid email or password"

    def test_unknown_key_returns_key(self, translator):
        assert translator.translate("no.such.key", "en") == "no.such.key"
        assert translator.translate("no.such.key", "zh-CN") == "no.such.key"

    def test_missing_segment_in_language_falls_back_to_default(self):
        t = Translator(
            {
                "en": {"auth": {"invalid_token": "Invalid token", "only_en": "English only"}},
                "de": {"auth": {"invalid_token": "Ungültiges Token"}},
            }
        )
        assert t.translate("auth.invalid_token", "de") == "Ungültiges Token"
        assert t.translate("auth.only_en", "de") == "English only"

    def test_partial_key_resolving_to_section_returns_key(self, translator):
        assert translator.translate("auth", "en") == "auth"

    def test_key_past_leaf_returns_key(self, translator):
        assert translator.translate("auth.invalid_token.extra", "en") == "auth.invalid_token.extra"

    def test_empty_language_uses_default(self, translator):
        assert translator.translate("users.not_found", "") == "User not found"


class TestDefaultLanguage:
    """Tests for set_default_language()."""

    def test_switches_fallback(self, translator):
        translator.set_default_language("zh-CN")
        assert translator.default_language == "zh-CN"
        assert translator.translate("auth.invalid_token") == "无效的令牌"
        assert translator.translate("auth.invalid_token", "fr") == "无效的令牌"

    def test_unknown_language_is_noop(self, translator):
        translator.set_default_language("fr")
        assert translator.default_language == "en"

    def test_constructor_ignores_unloaded_default(self):
        t = Translator({"zh-CN": {"a": "b"}}, default_language="en")
        assert t.default_language == "zh-CN"
        assert t.translate("a", "en") == "b"


class TestSupportedLanguages:

    def test_builtin_languages(self, translator):
        assert set(translator.get_supported_languages()) == {"en", "zh-CN", "zh-TW"}

    def test_empty_catalog_uses_builtin(self):
        t = Translator({})
        assert t.source == "builtin"
        assert set(t.get_supported_languages()) == set(TRANSLATION_DEFAULTS)


class TestCatalogIsReadOnly:

    def test_nested_mappings_cannot_be_mutated(self, translator):
        with pytest.raises(TypeError):
            translator._catalog["en"]["auth"]["invalid_token"] = "changed"

    def test_source_dict_changes_do_not_leak(self):
        source = {"en": {"greeting": "hello"}}
        t = Translator(source)
        source["en"]["greeting"] = "changed"
        assert t.translate("greeting") == "hello"


class TestLoad:
    """Tests for Translator.load() directory selection."""

    def test_first_existing_directory_wins(self, tmp_path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        _write_catalog(first, {"en": {"msg": "from first"}})
        _write_catalog(second, {"en": {"msg": "from second"}, "de": {"msg": "zweite"}})

        t = Translator.load([tmp_path / "missing", first, second])

        assert t.source == str(first)
        assert t.translate("msg") == "from first"
        assert t.get_supported_languages() == ["en"]

    def test_unparseable_directory_is_skipped(self, tmp_path):
        broken = tmp_path / "broken"
        broken.mkdir()
        (broken / "en.json").write_text("{not json", encoding="utf-8")
        good = tmp_path / "good"
        _write_catalog(good, {"en": {"msg": "ok"}})

        t = Translator.load([broken, good])

        assert t.source == str(good)
        assert t.translate("msg") == "ok"

    def test_non_object_json_is_skipped(self, tmp_path):
        bad = tmp_path / "bad"
        bad.mkdir()
        (bad / "en.json").write_text("[1, 2]", encoding="utf-8")

        t = Translator.load([bad])

        assert t.source == "builtin"

    def test_empty_directory_is_skipped(self, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        good = tmp_path / "good"
        _write_catalog(good, {"en": {"msg": "ok"}})

        assert Translator.load([empty, good]).source == str(good)

    def test_falls_back_to_builtin_catalog(self, tmp_path):
        t = Translator.load([tmp_path / "nope"])

        assert t.source == "builtin"
        assert t.translate("auth.invalid_credentials", "zh-CN") == "邮箱或密码错误"

    def test_default_language_applied(self, tmp_path):
        d = tmp_path / "loc"
        _write_catalog(d, {"en": {"m": "en"}, "zh-CN": {"m": "zh"}})

        t = Translator.load([d], default_language="zh-CN")

        assert t.translate("m", "fr") == "zh"


class TestPackagedCatalog:
    """The shipped locale files and the built-in fallback must agree."""

    def test_packaged_dir_is_first_builtin_candidate(self):
        assert default_candidate_dirs()[0] == PACKAGE_LOCALES_DIR
        assert default_candidate_dirs(["/extra"])[0].as_posix() == "/extra"

    def test_packaged_files_match_builtin_defaults(self):
        assert load_catalog_dir(PACKAGE_LOCALES_DIR) == TRANSLATION_DEFAULTS

    def test_builtin_defaults_are_a_plain_catalog(self):
        assert translation_defaults.__doc__.startswith("Bundled fallback translation catalog")
        assert isinstance(TRANSLATION_DEFAULTS, dict)
        assert set(TRANSLATION_DEFAULTS) == {"en", "zh-CN", "zh-TW"}
