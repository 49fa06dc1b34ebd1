"""
Tests for user settings persistence and string lookup.
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from stashify_tui import i18n
from stashify_tui.settings import Settings, SettingsStore
from stashify_tui.theme import THEMES, TOKENS, theme, theme_name


@pytest.fixture(autouse=True)
def english():
    i18n.set_language("en")
    yield
    i18n.set_language("en")


class TestSettingsStore:

    def test_defaults_when_missing(self, tmp_path):
        assert SettingsStore(tmp_path).load() == Settings()

    def test_update_saves(self, tmp_path):
        store = SettingsStore(tmp_path)
        store.update(language="ta", high_contrast=True)
        assert SettingsStore(tmp_path).load() == Settings(language="ta", high_contrast=True)

    def test_unknown_setting_rejected(self, tmp_path):
        with pytest.raises(AttributeError):
            SettingsStore(tmp_path).update(volume=3)

    def test_unreadable_file_gives_defaults(self, tmp_path):
        (tmp_path / "settings.json").write_text("][", encoding="utf-8")
        assert SettingsStore(tmp_path).load() == Settings()

    @pytest.mark.parametrize("content", ['["en"]', '"ta"', "3", "null"])
    def test_json_that_is_not_an_object_gives_defaults(self, tmp_path, content):
        (tmp_path / "settings.json").write_text(content, encoding="utf-8")
        assert SettingsStore(tmp_path).load() == Settings()

    def test_wrongly_typed_values_ignored(self, tmp_path):
        (tmp_path / "settings.json").write_text(
            json.dumps({"language": ["ta"], "high_contrast": "yes"}),
            encoding="utf-8",
        )
        assert SettingsStore(tmp_path).load() == Settings()

    def test_unknown_keys_and_language_ignored(self, tmp_path):
        (tmp_path / "settings.json").write_text(
            json.dumps({"language": "fr", "high_contrast": True, "volume": 3}),
            encoding="utf-8",
        )
        settings = SettingsStore(tmp_path).load()
        assert settings.language == "en"
        assert settings.high_contrast is True


class TestStrings:

    def test_english(self):
        assert i18n.t("moments") == "Moments"

    def test_tamil(self):
        i18n.set_language("ta")
        assert i18n.t("moments") == "தருணங்கள்"

    def test_tamil_falls_back_to_english(self):
        i18n.set_language("ta")
        assert i18n.t("games.leaderboard") == "Leaderboard"

    def test_missing_key_is_returned(self):
        assert i18n.t("no.such.key") == "no.such.key"

    def test_unknown_language_is_english(self):
        i18n.set_language("fr")
        assert i18n.get_language() == "en"


class TestThemes:

    def test_high_contrast_wins(self):
        assert theme_name(dark=False, high_contrast=True) == "stashify-contrast"

    @pytest.mark.parametrize("dark,expected", [
        (True, "stashify-dark"),
        (False, "stashify-light"),
    ])
    def test_light_and_dark(self, dark, expected):
        assert theme_name(dark=dark, high_contrast=False) == expected

    def test_every_name_is_a_theme(self):
        names = {entry.name for entry in THEMES}
        for dark in (True, False):
            for contrast in (True, False):
                assert theme_name(dark, contrast) in names

    def test_tokens_follow_the_active_palette(self):
        assert theme(dark=True) is TOKENS["dark"]
        assert theme(dark=True, high_contrast=True) is TOKENS["contrast"]
        assert theme()["primary"] == "#D97757"

    def test_every_palette_has_tab_icon_colors(self):
        for palette in TOKENS.values():
            assert {"tab_icon_default", "tab_icon_selected"} <= set(palette)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
