"""
Tests for configuration loading and environment layering.
"""

import pytest

from linketysplit import ConfigError, PublicationConfig, load_env_file, load_publication_config
from linketysplit.core.environment import build_environment


class TestPublicationConfig:
    def test_defaults(self, api_key):
        config = PublicationConfig.from_mapping({"LINKETYSPLIT_API_KEY": api_key})
        assert config.origin == "https://linketysplit.com"
        assert config.timeout_seconds == 30.0
        assert config.publication_api_url == "https://linketysplit.com/api/v1/publication"
        assert config.purchase_link_url == "https://linketysplit.com/purchase-link"

    @pytest.mark.parametrize("values", [{}, {"LINKETYSPLIT_API_KEY": "   "}])
    def test_api_key_required(self, values):
        with pytest.raises(ConfigError, match="LINKETYSPLIT_API_KEY"):
            PublicationConfig.from_mapping(values)

    def test_origin_trailing_slash_is_stripped(self, api_key):
        config = PublicationConfig.from_mapping(
            {"LINKETYSPLIT_API_KEY": api_key, "LINKETYSPLIT_ORIGIN": "http://localhost:8000/"}
        )
        assert config.purchase_link_url == "http://localhost:8000/purchase-link"

    @pytest.mark.parametrize("origin", ["linketysplit.com", "ftp://linketysplit.com", ""])
    def test_invalid_origin(self, api_key, origin):
        with pytest.raises(ConfigError, match="LINKETYSPLIT_ORIGIN"):
            PublicationConfig.from_mapping(
                {"LINKETYSPLIT_API_KEY": api_key, "LINKETYSPLIT_ORIGIN": origin}
            )

    @pytest.mark.parametrize("timeout", ["soon", "0", "-3"])
    def test_invalid_timeout(self, api_key, timeout):
        with pytest.raises(ConfigError, match="LINKETYSPLIT_TIMEOUT_SECONDS"):
            PublicationConfig.from_mapping(
                {"LINKETYSPLIT_API_KEY": api_key, "LINKETYSPLIT_TIMEOUT_SECONDS": timeout}
            )

    def test_repr_hides_api_key(self, config):
        assert config.api_key not in repr(config)


class TestLoadPublicationConfig:
    def test_reads_env_file(self, tmp_path, api_key):
        env_file = tmp_path / ".env"
        env_file.write_text(
            f"# publication settings\nLINKETYSPLIT_API_KEY={api_key}\nLINKETYSPLIT_TIMEOUT_SECONDS=12\n",
            encoding="utf-8",
        )
        config = load_publication_config(env_file=str(env_file), base={})
        assert config.api_key == api_key
        assert config.timeout_seconds == 12.0

    def test_base_wins_over_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("LINKETYSPLIT_API_KEY=from-file\n", encoding="utf-8")
        config = load_publication_config(
            env_file=str(env_file), base={"LINKETYSPLIT_API_KEY": "from-base"}
        )
        assert config.api_key == "from-base"

    def test_keyword_arguments_win(self, tmp_path):
        config = load_publication_config(
            env_file=None,
            base={"LINKETYSPLIT_API_KEY": "from-base"},
            overrides={"LINKETYSPLIT_API_KEY": "from-override"},
            api_key="from-kwarg",
            timeout_seconds=3,
        )
        assert config.api_key == "from-kwarg"
        assert config.timeout_seconds == 3.0

    def test_missing_file_is_ignored(self, tmp_path):
        config = load_publication_config(
            env_file=str(tmp_path / "missing.env"),
            base={"LINKETYSPLIT_API_KEY": "key"},
        )
        assert config.api_key == "key"


class TestEnvironment:
    def test_parses_quotes_export_and_comments(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "\n".join(
                [
                    "# comment",
                    "export LINKETYSPLIT_API_KEY='quoted key'",
                    'LINKETYSPLIT_ORIGIN="http://localhost:8000"',
                    "not a pair",
                    "=orphan",
                ]
            ),
            encoding="utf-8",
        )
        environment = build_environment(env_file=str(env_file), base={})
        assert dict(environment.variables) == {
            "LINKETYSPLIT_API_KEY": "quoted key",
            "LINKETYSPLIT_ORIGIN": "http://localhost:8000",
        }
        assert environment.get("MISSING", "fallback") == "fallback"

    def test_load_env_file_keeps_existing_keys(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("A=file\nB=file\n", encoding="utf-8")
        target = {"A": "existing"}

        merged = load_env_file(str(env_file), environ=target)

        assert target == {"A": "existing", "B": "file"}
        assert merged == target
