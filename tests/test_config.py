"""Tests for configuration loading and YAML parsing."""

import pytest

from repo_shell.config import (
    parse_simple_yaml,
    load_config,
    get_default_config,
    _merge_config,
    Config,
)


class TestParseSimpleYaml:
    """Tests for the minimal YAML parser."""

    def test_empty_document(self):
        result = parse_simple_yaml("")
        assert result == {}

    def test_simple_key_value(self):
        result = parse_simple_yaml("key: value")
        assert result == {"key": "value"}

    def test_integer_value(self):
        result = parse_simple_yaml("max_output_lines: 4000")
        assert result == {"max_output_lines": 4000}

    def test_float_value(self):
        result = parse_simple_yaml("open_delay: 0.70")
        assert result == {"open_delay": 0.70}

    def test_boolean_true(self):
        result = parse_simple_yaml("enabled: true")
        assert result == {"enabled": True}

    def test_boolean_false(self):
        result = parse_simple_yaml("enabled: false")
        assert result == {"enabled": False}

    def test_null_value(self):
        result = parse_simple_yaml("token: null")
        assert result == {"token": None}

    def test_quoted_string_double(self):
        result = parse_simple_yaml('message: "hello world"')
        assert result == {"message": "hello world"}

    def test_quoted_string_single(self):
        result = parse_simple_yaml("message: 'hello world'")
        assert result == {"message": "hello world"}

    def test_double_quoted_escapes(self):
        result = parse_simple_yaml(r'about: "line one\nline two\t!"')
        assert result == {"about": "line one\nline two\t!"}

    def test_single_quoted_doubled_quote(self):
        result = parse_simple_yaml("about: 'it''s me'")
        assert result == {"about": "it's me"}

    def test_quoted_date_stays_string(self):
        result = parse_simple_yaml('birth_date: "1996-10-17"')
        assert result == {"birth_date": "1996-10-17"}

    def test_url_value_keeps_colon(self):
        result = parse_simple_yaml("github: https://github.com/someone")
        assert result == {"github": "https://github.com/someone"}

    def test_comments_ignored(self):
        yaml = """
# This is a comment
key: value  # inline comment
# Another comment
other: data
"""
        result = parse_simple_yaml(yaml)
        assert result == {"key": "value", "other": "data"}

    def test_hash_inside_quotes_is_not_a_comment(self):
        result = parse_simple_yaml('title: "issue #42"')
        assert result == {"title": "issue #42"}

    def test_nested_dict(self):
        yaml = """
remote:
  owner: someone
  branch: main
"""
        result = parse_simple_yaml(yaml)
        assert result == {
            "remote": {
                "owner": "someone",
                "branch": "main"
            }
        }

    def test_simple_list(self):
        yaml = """
items:
  - one
  - two
  - three
"""
        result = parse_simple_yaml(yaml)
        assert result == {"items": ["one", "two", "three"]}

    def test_list_of_dicts(self):
        yaml = """
themes:
  - key: gruvbox
    name: Gruvbox
  - key: matrix
    name: Matrix
"""
        result = parse_simple_yaml(yaml)
        assert result == {
            "themes": [
                {"key": "gruvbox", "name": "Gruvbox"},
                {"key": "matrix", "name": "Matrix"}
            ]
        }

    def test_deeply_nested(self):
        yaml = """
level1:
  level2:
    level3:
      value: deep
"""
        result = parse_simple_yaml(yaml)
        assert result == {
            "level1": {
                "level2": {
                    "level3": {
                        "value": "deep"
                    }
                }
            }
        }

    def test_special_characters_in_value(self):
        yaml = r"""
pattern: '^\s*\[?\s*Exits:\s*.*\]?\s*$'
"""
        result = parse_simple_yaml(yaml)
        assert result["pattern"] == r'^\s*\[?\s*Exits:\s*.*\]?\s*$'

    def test_comments_before_nested_content(self):
        """Comments between key and nested content should be skipped."""
        yaml = """
remote:
  # This is a comment
  owner: someone
"""
        result = parse_simple_yaml(yaml)
        assert result == {"remote": {"owner": "someone"}}

    def test_key_without_value_or_block(self):
        result = parse_simple_yaml("token:\nother: 1")
        assert result == {"token": None, "other": 1}


class TestDefaults:
    def test_default_config_has_all_sections(self):
        config = get_default_config()
        assert config.remote is not None
        assert config.prompt is not None
        assert config.profile is not None
        assert config.ui is not None

    def test_default_remote(self):
        config = get_default_config()
        assert config.remote.api_base == "https://api.github.com"
        assert config.remote.branch == "main"
        assert config.remote.token is None
        assert config.remote.timeout is None

    def test_default_prompt(self):
        config = get_default_config()
        assert (config.prompt.user, config.prompt.host) == ("guest", "peetzie")
        assert config.prompt.home == "/home/guest"

    def test_default_ui_settings(self):
        config = get_default_config()
        assert config.ui.max_output_lines == 5000
        assert config.ui.open_delay == 0.7
        assert config.theme == "catppuccin-mocha"


class TestConfigMerging:
    """Tests for merging parsed YAML into a Config."""

    def test_remote_values(self):
        yaml = """
remote:
  owner: octocat
  repo: hello-world
  branch: dev
  api_base: https://ghe.example.com/api/v3/
  timeout: 5
"""
        config = get_default_config()
        _merge_config(config, parse_simple_yaml(yaml))
        assert config.remote.owner == "octocat"
        assert config.remote.repo == "hello-world"
        assert config.remote.branch == "dev"
        assert config.remote.api_base == "https://ghe.example.com/api/v3"
        assert config.remote.timeout == 5.0

    def test_partial_section_keeps_defaults(self):
        config = get_default_config()
        _merge_config(config, parse_simple_yaml("prompt:\n  user: visitor"))
        assert config.prompt.user == "visitor"
        assert config.prompt.host == "peetzie"

    def test_profile_links_can_be_unset(self):
        config = get_default_config()
        config.profile.github = "https://github.com/x"
        _merge_config(config, parse_simple_yaml("profile:\n  github: null"))
        assert config.profile.github is None

    def test_theme_and_ui(self):
        config = get_default_config()
        _merge_config(config, parse_simple_yaml("theme: matrix\nui:\n  max_output_lines: 100"))
        assert config.theme == "matrix"
        assert config.ui.max_output_lines == 100

    def test_non_dict_is_ignored(self):
        config = get_default_config()
        _merge_config(config, [])
        assert config == Config()


class TestLoadConfig:
    def test_load_from_path(self, tmp_path):
        path = tmp_path / "mine.yml"
        path.write_text("remote:\n  owner: octocat\n  repo: spoon-knife\n", encoding="utf-8")
        config = load_config(str(path))
        assert config.remote.owner == "octocat"
        assert config.remote.repo == "spoon-knife"
        assert config.remote.branch == "main"

    def test_missing_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yml"))

    def test_missing_name_lists_search_paths(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(FileNotFoundError, match="Searched"):
            load_config("does-not-exist")

    def test_user_config_dir_is_searched(self, tmp_path, monkeypatch):
        configs = tmp_path / ".repo-shell" / "configs"
        configs.mkdir(parents=True)
        (configs / "work.yml").write_text("theme: gruvbox\n", encoding="utf-8")
        monkeypatch.setattr("repo_shell.config._get_user_data_dir", lambda: tmp_path / ".repo-shell")
        assert load_config("work").theme == "gruvbox"

    def test_cwd_configs_dir_is_searched(self, tmp_path, monkeypatch):
        (tmp_path / "configs").mkdir()
        (tmp_path / "configs" / "local.yml").write_text("theme: matrix\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("repo_shell.config._get_user_data_dir", lambda: tmp_path / "empty")
        assert load_config("local").theme == "matrix"

    def test_bundled_default(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("repo_shell.config._get_user_data_dir", lambda: tmp_path / "empty")
        config = load_config()
        assert config.remote.repo == "whoami.sh"
        assert config.profile.birth_date == "1996-10-17"
        assert "{age}" in config.profile.about
