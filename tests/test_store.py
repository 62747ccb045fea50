"""Tests for notepilot.config (Settings model and settings.json store)."""

import json
from pathlib import Path

from notepilot.config.config import Settings, normalize_keys, to_patch
from notepilot.config.store import (
    load_settings,
    mask_api_key,
    masked_view,
    save_settings,
    update_settings,
)


class TestSettingsModel:
    def test_defaults(self):
        s = Settings()
        assert s.temperature == 0.7
        assert s.max_tokens == 1000
        assert s.is_verified is False
        assert s.provider == ""
        assert s.hotkey(0) == "ctrl+shift+h"
        assert s.hotkey(3) == "ctrl+shift+l"

    def test_accepts_persisted_key_names(self):
        s = Settings.from_store(
            {"API_Endpoint": "https://x/v1", "Max_Tokens": "256", "isVerified": True},
        )
        assert s.api_endpoint == "https://x/v1"
        assert s.max_tokens == 256
        assert s.is_verified is True

    def test_to_store_uses_persisted_names(self):
        data = Settings(api_key="k").to_store()
        assert data["API_Key"] == "k"
        assert data["isVerified"] is False
        assert data["Custom_Prompt_1"] == ""

    def test_custom_prompt_slots(self):
        s = Settings(custom_prompt_2="Translate")
        assert s.custom_prompt(2) == "Translate"
        assert s.custom_prompt(1) == ""

    def test_api_key_not_in_repr(self):
        assert "sk-secret" not in repr(Settings(api_key="sk-secret"))

    def test_key_mapping_helpers(self):
        assert to_patch({"is_verified": False}) == {"isVerified": False}
        assert normalize_keys({"Model": "m", "model": "n", "junk": 1}) == {
            "model": "n",
        }


class TestStore:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        assert load_settings(tmp_path / "none.json") == Settings()

    def test_round_trip(self, tmp_path: Path):
        path = tmp_path / "nested" / "settings.json"
        save_settings(Settings(model="gpt-4", temperature=0.1), path)
        loaded = load_settings(path)
        assert loaded.model == "gpt-4"
        assert loaded.temperature == 0.1
        assert json.loads(path.read_text())["Model"] == "gpt-4"

    def test_corrupt_file_is_repaired_to_defaults(self, tmp_path: Path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        assert load_settings(path) == Settings()

    def test_non_object_file(self, tmp_path: Path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")
        assert load_settings(path) == Settings()

    def test_invalid_field_falls_back_to_default(self, tmp_path: Path):
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps({"Max_Tokens": "lots", "Model": "yi-large"}),
        )
        loaded = load_settings(path)
        assert loaded.max_tokens == 1000
        assert loaded.model == "yi-large"

    def test_update_settings_merges_patch(self, tmp_path: Path):
        path = tmp_path / "settings.json"
        save_settings(Settings(api_key="k", model="m"), path)
        updated = update_settings({"isVerified": True}, path)
        assert updated.is_verified is True
        assert updated.api_key == "k"
        assert load_settings(path).is_verified is True


class TestMasking:
    def test_mask_api_key(self):
        assert mask_api_key("") == ""
        assert mask_api_key("abc") == "***"
        assert mask_api_key("sk-abcdefghijk") == "sk-*******hijk"

    def test_masked_view_hides_key(self):
        view = masked_view(Settings(api_key="sk-abcdefghijk"))
        assert "abcdefg" not in view["API_Key"]
