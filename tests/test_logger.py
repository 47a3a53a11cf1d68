"""
Test suite per EciesLogger
"""

import io
import logging

import pytest

from ecies_mue.exceptions import IntegrityError
from ecies_mue.utils.logger import EciesLogger


class TestEciesLogger:

    def test_logger_is_cached(self):
        first = EciesLogger.get_logger("ECIES_TEST_CACHE", console_output=False)
        second = EciesLogger.get_logger("ECIES_TEST_CACHE", console_output=False)
        assert first is second
        assert first.propagate is False

    def test_silent_logger_has_null_handler(self):
        logger = EciesLogger.get_logger("ECIES_TEST_SILENT", console_output=False)
        assert [type(handler) for handler in logger.handlers] == [logging.NullHandler]

    def test_stream_output_format(self):
        stream = io.StringIO()
        logger = EciesLogger.get_logger("ECIES_TEST_STREAM", stream=stream)
        logger.info("frame rejected")

        assert "[ECIES_TEST_STREAM] [INFO] frame rejected" in stream.getvalue()

    def test_console_output_goes_to_stderr(self, capsys):
        logger = EciesLogger.get_logger("ECIES_TEST_CONSOLE")
        logger.warning("tag mismatch")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[ECIES_TEST_CONSOLE] [WARNING] tag mismatch" in captured.err

    def test_set_level(self):
        stream = io.StringIO()
        logger = EciesLogger.get_logger("ECIES_TEST_LEVEL", stream=stream)
        logger.debug("hidden")

        EciesLogger.set_level("ECIES_TEST_LEVEL", logging.DEBUG)
        logger.debug("shown")

        assert logger.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in logger.handlers)
        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_set_level_unknown_logger_is_ignored(self):
        EciesLogger.set_level("ECIES_TEST_MISSING", logging.DEBUG)

    def test_codec_never_logs_plaintext(self, alice, bob):
        stream = io.StringIO()
        logger = EciesLogger.get_logger("ECIES_TEST_CODEC", level=logging.DEBUG, stream=stream)
        alice.logger = logger
        bob.logger = logger

        secret = b"very secret plaintext"
        bob.decrypt(alice.encrypt(secret))

        content = stream.getvalue()
        assert "Encrypted" in content
        assert "Decrypted" in content
        assert "very secret plaintext" not in content
        assert alice.private_key.to_hex() not in content

    def test_codec_warns_on_rejected_frame(self, alice, bob, message):
        stream = io.StringIO()
        bob.logger = EciesLogger.get_logger("ECIES_TEST_REJECT", stream=stream)

        frame = bytearray(alice.encrypt(message))
        frame[-1] ^= 0x01
        with pytest.raises(IntegrityError):
            bob.decrypt(bytes(frame))

        assert "[WARNING]" in stream.getvalue()
