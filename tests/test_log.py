import logging

from dgengine.log import TRACE, get_logger, init_file, init_stdout


def test_init_stdout_writes_name_and_message(capsys):
    logger = init_stdout("engine-out")
    logger.info("hello there")
    out = capsys.readouterr().out
    assert "engine-out: hello there" in out
    assert out.startswith("[")


def test_get_logger_returns_initialised(capsys):
    logger = init_stdout("engine-current")
    assert get_logger() is logger
    assert get_logger().name == "engine-current"


def test_trace_level_enabled(capsys):
    logger = init_stdout("engine-trace")
    assert logger.isEnabledFor(TRACE)
    logger.log(TRACE, "fine detail")
    assert "fine detail" in capsys.readouterr().out


def test_init_file_writes_to_file(tmp_path):
    path = tmp_path / "engine.log"
    logger = init_file("engine-file", str(path))
    logger.error("disk message")
    for handler in logger.handlers:
        handler.flush()
    text = path.read_text(encoding="utf-8")
    assert "engine-file: disk message" in text


def test_reinit_replaces_handlers(tmp_path, capsys):
    init_stdout("engine-reinit")
    logger = init_stdout("engine-reinit")
    assert len(logger.handlers) == 1
    logger.warning("once")
    assert capsys.readouterr().out.count("once") == 1
    assert logging.getLevelName(TRACE) == "TRACE"