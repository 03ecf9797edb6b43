import logging
from unittest.mock import patch

from geolocation_analysis import logger as logger_module


class TestConfigureLogger:

    def teardown_method(self):
        logger_module.DEBUG_MODE = False
        logger_module.setup_logger(debug_mode=False)

    def test_default_is_info(self):
        logger = logger_module.configure_logger_from_environment()

        assert logger.level == logging.INFO
        assert logger_module.get_debug_mode() is False

    def test_debug_mode(self, monkeypatch):
        monkeypatch.setenv("LOG_MODE", "debug")

        logger = logger_module.configure_logger_from_environment()

        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)
        assert logger_module.get_debug_mode() is True

    def test_single_handler(self):
        logger_module.setup_logger()
        logger = logger_module.setup_logger()

        assert len(logger.handlers) == 1

    def test_stack_trace_only_in_debug(self):
        with patch.object(logger_module.logger, "error") as mock_error:
            logger_module.DEBUG_MODE = False
            logger_module.print_stack_trace()
            mock_error.assert_not_called()

            logger_module.DEBUG_MODE = True
            logger_module.print_stack_trace()
            mock_error.assert_called_once()
