"""Tests for loguru-based service logging."""

from loguru import logger

from movielist.config import MovieListConfig


class TestSetupLogging:
    def setup_method(self):
        logger.remove()

    def test_no_file_sink_without_log_dir(self, tmp_path, monkeypatch):
        monkeypatch.delenv("LOG_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        config = MovieListConfig(_env_file=None, api_key="k")
        config.setup_logging()
        logger.info("stderr only")
        assert not (tmp_path / "movielist.log").exists()

    def test_setup_creates_log_dir(self, tmp_path):
        log_dir = tmp_path / "logs"
        config = MovieListConfig(_env_file=None, api_key="k", log_dir=log_dir)
        config.setup_logging()
        assert log_dir.exists()

    def test_setup_adds_file_sink(self, tmp_path):
        log_dir = tmp_path / "logs"
        config = MovieListConfig(_env_file=None, api_key="k", log_dir=log_dir)
        config.setup_logging()
        logger.bind(stage="test").info("hello from test")
        content = (log_dir / "movielist.log").read_text()
        assert "hello from test" in content

    def test_stage_context_in_output(self, tmp_path):
        log_dir = tmp_path / "logs"
        config = MovieListConfig(_env_file=None, api_key="k", log_dir=log_dir)
        config.setup_logging()
        logger.bind(stage="fanout").info("dispatching")
        content = (log_dir / "movielist.log").read_text()
        assert "fanout" in content

    def test_default_stage_empty(self, tmp_path):
        log_dir = tmp_path / "logs"
        config = MovieListConfig(_env_file=None, api_key="k", log_dir=log_dir)
        config.setup_logging()
        logger.info("no stage bound")
        content = (log_dir / "movielist.log").read_text()
        assert "no stage bound" in content
