"""
Unit tests for exit_codes module.
"""

from unittest.mock import Mock

from socialgraph.utils.exit_codes import (
    EXIT_CODES,
    EXIT_CONFIG_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_IO_ERROR,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    describe_exit_code,
    log_exit,
)

ALL_CODES = [EXIT_SUCCESS, EXIT_CONFIG_ERROR, EXIT_INPUT_ERROR, EXIT_RUNTIME_ERROR, EXIT_IO_ERROR]


class TestExitCodeConstants:
    def test_exit_code_values(self):
        assert EXIT_SUCCESS == 0
        assert EXIT_CONFIG_ERROR == 1
        assert EXIT_INPUT_ERROR == 2
        assert EXIT_RUNTIME_ERROR == 3
        assert EXIT_IO_ERROR == 5

    def test_every_code_described(self):
        assert set(EXIT_CODES) == set(ALL_CODES)
        for name, description in EXIT_CODES.values():
            assert name and description


class TestDescribe:
    def test_known_code(self):
        assert describe_exit_code(EXIT_INPUT_ERROR) == ("INPUT_ERROR", "Input data errors")

    def test_unknown_code(self):
        assert describe_exit_code(42) == ("UNKNOWN(42)", "Unknown exit code: 42")


class TestLogExit:
    def test_success_logs_info(self):
        logger = Mock()

        log_exit(logger, EXIT_SUCCESS, "done")

        logger.info.assert_called_once_with("Exit: SUCCESS - done")
        logger.error.assert_not_called()

    def test_success_without_message(self):
        logger = Mock()

        log_exit(logger, EXIT_SUCCESS)

        logger.info.assert_called_once_with("Exit: SUCCESS")

    def test_error_logs_error(self):
        logger = Mock()

        log_exit(logger, EXIT_IO_ERROR, "disk full")

        logger.error.assert_called_once_with(
            "Exit with error: IO_ERROR (Filesystem errors) - disk full"
        )

    def test_error_without_message(self):
        logger = Mock()

        log_exit(logger, EXIT_CONFIG_ERROR)

        logger.error.assert_called_once_with("Exit with error: CONFIG_ERROR (Configuration errors)")
