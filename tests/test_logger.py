"""Run-context logging tests"""
import logging
from logging.handlers import RotatingFileHandler

from cost_basis.utils import constants
from cost_basis.utils.logger import get_run_context, logger, set_run_context


class TestRunContext:
    def test_test_context_is_console_only(self):
        set_run_context('test')
        assert get_run_context() == 'test'
        assert not any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
        assert len(logger.handlers) == 1

    def test_cli_context_writes_a_log_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(constants, 'LOG_DIR', tmp_path / 'logs')
        set_run_context('cli')
        file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1

        logger.warning('No matching withdrawal for deposit')
        file_handlers[0].flush()
        written = list((tmp_path / 'logs').glob('*.cli.log'))
        assert len(written) == 1
        assert '[cli]: No matching withdrawal' in written[0].read_text(encoding='utf-8')

    def test_handlers_replaced_not_stacked(self):
        set_run_context('test')
        set_run_context('test')
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO
