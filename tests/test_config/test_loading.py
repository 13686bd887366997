from pathlib import Path

import pytest
import structlog

import folio.config as config_module
from folio.config import Config, LoggingConfig
from folio.exceptions import ConfigurationError
from folio.logging import configure_logging


def test_load_prefers_local_config_yaml(monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)

    home_cfg = tmp_path / "home_config.yaml"
    home_cfg.write_text("model:\n  model: llama3.2\n", encoding="utf-8")
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", home_cfg)

    (tmp_path / "config.yaml").write_text(
        "model:\n  model: qwen3:8b\nagent:\n  max_iterations: 8\n",
        encoding="utf-8",
    )

    cfg = Config.load()

    assert cfg.model.model == "qwen3:8b"
    assert cfg.agent.max_iterations == 8


def test_load_falls_back_to_default_path_when_no_local(monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    home_cfg = tmp_path / "home_config.yaml"
    home_cfg.write_text("model:\n  base_url: http://gpu-box:11434\n", encoding="utf-8")
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", home_cfg)

    cfg = Config.load()

    assert cfg.model.base_url == "http://gpu-box:11434"


def test_defaults_without_any_file(monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")

    cfg = Config.load()

    assert cfg.model.provider == "ollama"
    assert cfg.model.model == "llama3.1:8b"
    assert cfg.agent.max_iterations == 5
    assert cfg.logging.file == "app.log"


def test_env_overrides_nested_values(monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")
    monkeypatch.setenv("FOLIO_AGENT__MAX_ITERATIONS", "3")

    cfg = Config.load()

    assert cfg.agent.max_iterations == 3


def test_env_beats_yaml_for_the_same_key(monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")
    (tmp_path / "config.yaml").write_text(
        "model:\n  model: from-yaml\n  base_url: http://yaml-host:11434\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("FOLIO_MODEL__MODEL", "from-env")

    cfg = Config.load()

    assert cfg.model.model == "from-env"
    assert cfg.model.base_url == "http://yaml-host:11434"


def test_non_mapping_yaml_is_rejected(tmp_path: Path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        Config.from_yaml(bad)


def test_save_round_trips_through_yaml(tmp_path: Path):
    cfg = Config()
    cfg.model.model = "mistral"
    target = tmp_path / "saved.yaml"

    cfg.save(target)

    assert Config.from_yaml(target).model.model == "mistral"


def test_resolved_workspace_path_anchors_relative_to_runtime_base(tmp_path: Path):
    cfg = Config()
    cfg.workspace.path = "./files"

    assert cfg.resolved_workspace_path(tmp_path) == (tmp_path / "files").resolve()


def test_configure_logging_appends_lines_to_file(monkeypatch, tmp_path: Path):
    log_file = tmp_path / "logs" / "app.log"
    monkeypatch.setattr(
        config_module,
        "_config",
        Config(logging=LoggingConfig(level="INFO", file=str(log_file))),
    )
    try:
        configure_logging()
        logger = structlog.get_logger("test_logging")
        logger.info("first event")
        logger.debug("hidden event")
        try:
            raise RuntimeError("kaboom")
        except RuntimeError:
            logger.error("failed event", exc_info=True)
    finally:
        structlog.reset_defaults()

    text = log_file.read_text(encoding="utf-8")
    assert "first event" in text
    assert "hidden event" not in text
    assert "[info" in text
    assert "[error" in text
    assert "RuntimeError: kaboom" in text
