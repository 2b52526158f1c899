"""Tests for bulksum.config."""

import json
from pathlib import Path

import pytest

from bulksum.config import Config, LengthClass, ProviderName, SourceConfig, SourceKind, load_config
from bulksum.errors import ConfigError, SourceNotFoundError

from .helpers import base_config_data


class TestLoadConfig:
    def test_loads_yaml_with_defaults(self, config: Config) -> None:
        project = config.config
        assert project.name == "Test Project"
        assert [s.id for s in project.sources] == ["s1", "s2"]
        assert project.settings.summary_length == LengthClass.MEDIUM
        assert project.settings.provider == ProviderName.CLI
        assert project.settings.model is None
        assert project.sources[0].enabled is True
        assert project.sources[0].keywords is None

    def test_accepts_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bulk-summarize.json"
        path.write_text(json.dumps(base_config_data()), encoding="utf-8")
        project = load_config(path)
        assert project.settings.summary_prompt == "Summarize {title} from {source}"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Config not found"):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("name: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_enumerates_every_violated_field(self, write_config) -> None:
        data = base_config_data(summary_length="huge", max_items_per_source=0)
        del data["name"]
        del data["settings"]["summary_prompt"]
        data["sources"][1]["url"] = "not a url"

        with pytest.raises(ConfigError) as excinfo:
            write_config(data).config

        errors = excinfo.value.errors
        assert any(e.startswith("name:") for e in errors)
        assert any(e.startswith("settings.summary_length:") for e in errors)
        assert any(e.startswith("settings.max_items_per_source:") for e in errors)
        assert any(e.startswith("settings.summary_prompt:") for e in errors)
        assert any(e.startswith("sources.1.url:") for e in errors)
        assert len(errors) == 5

    def test_requires_at_least_one_source(self, write_config) -> None:
        data = base_config_data()
        data["sources"] = []
        with pytest.raises(ConfigError) as excinfo:
            write_config(data).config
        assert any(e.startswith("sources:") for e in excinfo.value.errors)

    def test_rejects_duplicate_source_ids(self, write_config) -> None:
        data = base_config_data()
        data["sources"][1]["id"] = "s1"
        with pytest.raises(ConfigError) as excinfo:
            write_config(data).config
        assert any("Duplicate source id: s1" in e for e in excinfo.value.errors)

    def test_rejects_path_like_source_id(self, write_config) -> None:
        data = base_config_data()
        data["sources"][0]["id"] = "../escape"
        with pytest.raises(ConfigError) as excinfo:
            write_config(data).config
        assert any(e.startswith("sources.0.id:") for e in excinfo.value.errors)


class TestConfigManager:
    def test_output_dir_override(self, config: Config, tmp_path: Path) -> None:
        assert config.output_root == tmp_path / "summaries"
        assert config.get_source_dir("s1") == tmp_path / "summaries" / "s1"

    def test_output_dir_from_settings(self, tmp_path: Path, write_config) -> None:
        config = write_config()
        config.output_dir_override = None
        assert config.output_root == Path("summaries")

    def test_llm_api_key_from_env(self, config: Config, monkeypatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert config.get_llm_config()["api_key"] == "sk-test"


class TestSelectSources:
    def test_all_enabled(self, write_config) -> None:
        data = base_config_data()
        data["sources"][1]["enabled"] = False
        config = write_config(data)
        assert [s.id for s in config.select_sources()] == ["s1"]
        assert [s.id for s in config.select_sources(include_disabled=True)] == ["s1", "s2"]

    def test_exact_id_wins(self, config: Config) -> None:
        assert [s.id for s in config.select_sources("s1")] == ["s1"]

    def test_name_fragment_case_insensitive(self, config: Config) -> None:
        assert [s.id for s in config.select_sources("source two")] == ["s2"]

    def test_id_fragment(self, config: Config) -> None:
        assert [s.id for s in config.select_sources("s")] == ["s1", "s2"]

    def test_missing_source_raises(self, config: Config) -> None:
        with pytest.raises(SourceNotFoundError):
            config.select_sources("nothing-like-this")


class TestGetSource:
    def test_exact_id(self, config: Config) -> None:
        assert config.get_source("s2").name == "Source Two"

    def test_fragment_does_not_match(self, config: Config) -> None:
        with pytest.raises(SourceNotFoundError):
            config.get_source("s")

    def test_includes_disabled(self, write_config) -> None:
        data = base_config_data()
        data["sources"][1]["enabled"] = False
        assert write_config(data).get_source("s2").id == "s2"


class TestSourceKind:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://www.youtube.com/@channel", SourceKind.CHANNEL),
            ("https://www.youtube.com/playlist?list=PL123", SourceKind.PLAYLIST),
            ("https://www.youtube.com/feeds/videos.xml?channel_id=UC1", SourceKind.FEED),
            ("https://example.com/blog/rss", SourceKind.FEED),
            ("https://example.com/index.xml", SourceKind.FEED),
        ],
    )
    def test_inferred_kind(self, url: str, expected: SourceKind) -> None:
        source = SourceConfig(id="x", name="X", url=url)
        assert source.resolved_kind == expected

    def test_explicit_kind_wins(self) -> None:
        source = SourceConfig(id="x", name="X", url="https://www.youtube.com/@c", kind="playlist")
        assert source.resolved_kind == SourceKind.PLAYLIST


class TestLengthClass:
    def test_ordinal(self) -> None:
        ranks = [length.rank for length in LengthClass]
        assert ranks == sorted(ranks)
        assert LengthClass.SHORT.rank < LengthClass.MEDIUM.rank < LengthClass.XXL.rank
