from click.testing import CliRunner

import mssqlpreset.cli as cli_module


class FakeRunner:
    captured = {}

    def __init__(self, mssql, detach=False):
        FakeRunner.captured = {"preset": mssql, "detach": detach}

    def run(self):
        return 0


def test_cli_uses_config_and_allows_cli_override(tmp_path, monkeypatch):
    config_file = tmp_path / "preset.yml"
    config_file.write_text(
        "database: config_db\n"
        "license: true\n"
        "wait_timeout: 45\n"
        "queries:\n"
        "  - create table t(id int)\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(cli_module, "PresetRunner", FakeRunner)

    result = CliRunner().invoke(
        cli_module.main,
        ["--config", str(config_file), "--database", "cli_db", "--detach"],
    )

    assert result.exit_code == 0, result.output
    config = FakeRunner.captured["preset"].config
    assert config.database == "cli_db"
    assert config.license is True
    assert config.wait_timeout == 45.0
    assert config.queries == ("create table t(id int)",)
    assert FakeRunner.captured["detach"] is True


def test_cli_repeated_queries_override_config_list(tmp_path, monkeypatch):
    config_file = tmp_path / "preset.yml"
    config_file.write_text("queries:\n  - select 2\n", encoding="utf-8")
    monkeypatch.setattr(cli_module, "PresetRunner", FakeRunner)

    result = CliRunner().invoke(
        cli_module.main,
        ["--config", str(config_file), "--query", "S1", "--query", "S2"],
    )

    assert result.exit_code == 0, result.output
    assert FakeRunner.captured["preset"].config.queries == ("S1", "S2")


def test_cli_uses_default_config_file_when_present(tmp_path, monkeypatch):
    (tmp_path / ".mssqlpreset.yml").write_text("password: 'Str0ng!pw'\n", encoding="utf-8")
    monkeypatch.setattr(cli_module, "PresetRunner", FakeRunner)
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, [])

    assert result.exit_code == 0, result.output
    config = FakeRunner.captured["preset"].config
    assert config.password == "Str0ng!pw"
    assert config.database == "mydb"
    assert config.license is False


def test_cli_reports_invalid_options(monkeypatch):
    monkeypatch.setattr(cli_module, "PresetRunner", FakeRunner)

    result = CliRunner().invoke(cli_module.main, ["--port", "0"])

    assert result.exit_code != 0
    assert "Invalid option 'port'" in result.output


def test_cli_accepts_numeric_version_from_config(tmp_path, monkeypatch):
    config_file = tmp_path / "preset.yml"
    config_file.write_text("version: 2019\n", encoding="utf-8")
    monkeypatch.setattr(cli_module, "PresetRunner", FakeRunner)

    result = CliRunner().invoke(cli_module.main, ["--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert FakeRunner.captured["preset"].image() == "mcr.microsoft.com/mssql/server:2019"
