import logging

from starfleet.game.infra.logging import (
    JsonFormatter,
    build_logging_config,
    configure_logging,
    shutdown_logging,
)


def test_json_formatter_includes_fields_and_message() -> None:
    logger = logging.getLogger("test.json.formatter")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn=__file__,
        lno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
        extra={"custom": 1},
    )
    payload = JsonFormatter().format(record)
    assert '"msg":"hello world"' in payload
    assert '"custom":1' in payload


def test_build_logging_config_reads_level_and_format(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("STARFLEET_APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FORMAT", "json")
    monkeypatch.setenv("STARFLEET_LOG_TO_FILE", "0")
    config = build_logging_config()
    assert config.level_name == "DEBUG"
    assert config.console_format == "json"
    assert config.file_path is None

    configure_logging(config)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1


def test_configured_file_sink_writes_json_lines(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("STARFLEET_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.delenv("STARFLEET_LOG_DIR", raising=False)
    monkeypatch.delenv("STARFLEET_LOG_TO_FILE", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    configure_logging(build_logging_config())

    logging.getLogger("test.logging.file").info("hello")
    shutdown_logging()

    files = list((tmp_path / "appdata" / "logs").glob("starfleet_run_*.jsonl"))
    assert files
    assert '"msg":"hello"' in files[0].read_text(encoding="utf-8")
