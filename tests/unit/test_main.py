"""
Unit tests for the command-line driver.
"""

import json

import pytest

from in_memory_web_api.__main__ import build_config, build_parser, heroes, load_seed, main


ENV_NAMES = ("DELAY", "DELETE_404", "HOST", "ROOT_PATH", "LOG_LEVEL", "LOG_FORMAT")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep IN_MEMORY_API_* from the outer environment out of these tests."""
    for name in ENV_NAMES:
        monkeypatch.delenv(f"IN_MEMORY_API_{name}", raising=False)


class TestMain:

    def test_demo(self, capsys):
        """Test the list, upsert, list demo."""
        assert main([]) == 0

        out = capsys.readouterr().out
        assert "[GET] /app/heroes" in out
        assert "[PUT] /app/heroes/7" in out
        assert "201" in out
        assert "Windstorm: the great" in out

    def test_single_request(self, capsys):
        assert main(["GET", "app/heroes/3"]) == 0

        assert "Magneta" in capsys.readouterr().out

    def test_error_status_exit_code(self, capsys):
        assert main(["GET", "app/heroes/99"]) == 1

        assert "404" in capsys.readouterr().out

    def test_post_with_body(self, capsys):
        assert main(["POST", "app/heroes", "--body", '{"name": "Dr. IQ"}']) == 0

        out = capsys.readouterr().out
        assert "app/heroes//5" in out

    def test_delete_404_flag(self, capsys):
        assert main(["DELETE", "app/heroes/99"]) == 0
        assert main(["--delete-404", "DELETE", "app/heroes/99"]) == 1

    def test_method_without_url(self):
        with pytest.raises(SystemExit):
            main(["GET"])

    def test_invalid_config(self, capsys):
        assert main(["--root-path", "api", "GET", "app/heroes"]) == 2

        assert "root_path" in capsys.readouterr().err

    def test_seed_file(self, tmp_path, capsys):
        seed_file = tmp_path / "db.json"
        seed_file.write_text(json.dumps({"villains": [{"id": "joker"}]}))

        assert main(["--seed", str(seed_file), "GET", "app/villains/joker"]) == 0
        assert "joker" in capsys.readouterr().out

    def test_missing_seed_file(self, tmp_path, capsys):
        assert main(["--seed", str(tmp_path / "nope.json"), "GET", "app/x"]) == 2


class TestSeeds:

    def test_heroes_fresh_each_call(self):
        first = heroes()
        first["heroes"].clear()

        assert len(heroes()["heroes"]) == 4

    def test_load_seed_rereads_file(self, tmp_path):
        seed_file = tmp_path / "db.json"
        seed_file.write_text('{"a": []}')
        seed = load_seed(str(seed_file))

        assert seed() == {"a": []}
        seed_file.write_text('{"b": []}')
        assert seed() == {"b": []}


class TestEnvironment:
    """Flags override IN_MEMORY_API_* variables, which override defaults."""

    def test_delete_404_from_env(self, monkeypatch, capsys):
        monkeypatch.setenv("IN_MEMORY_API_DELETE_404", "1")

        assert main(["DELETE", "app/heroes/99"]) == 1
        assert "404" in capsys.readouterr().out

    def test_root_path_from_env(self, monkeypatch, capsys):
        monkeypatch.setenv("IN_MEMORY_API_ROOT_PATH", "/api/")

        assert main(["GET", "http://localhost/api/app/heroes/2"]) == 0
        assert "Bombasto" in capsys.readouterr().out

    def test_flags_win_over_env(self, monkeypatch):
        monkeypatch.setenv("IN_MEMORY_API_DELAY", "250")
        monkeypatch.setenv("IN_MEMORY_API_HOST", "env.example.com")

        config = build_config(build_parser().parse_args(["--delay", "5"]))

        assert config.delay == 5
        assert config.host == "env.example.com"

    def test_defaults_without_env_or_flags(self):
        config = build_config(build_parser().parse_args([]))

        assert config.delay == 0
        assert config.delete_404 is False
        assert config.root_path == "/"
        assert config.log_level == "INFO"

    def test_unparsable_env(self, monkeypatch, capsys):
        monkeypatch.setenv("IN_MEMORY_API_DELAY", "soon")

        assert main(["GET", "app/heroes"]) == 2
        assert "error" in capsys.readouterr().err
