# test_basemodules -- tests for the elementary helper modules
#
# author: MidiTools contributors, 2024

import pytest

from basemodules.operatingsystem import OperatingSystem
from basemodules.simpleassertion import Assertion
from basemodules.simplelogging import Logging, Logging_Level
from basemodules.ttbase import adaptToRange, iif, isInRange
from basemodules.validitychecker import ValidityChecker

#====================

class TestTTBase:

    def test_iif(self):
        assert iif(True, 1, 2) == 1
        assert iif(False, 1, 2) == 2

    @pytest.mark.parametrize("value, isCyclic, expectedValue", [
        (130, False, 127), (-3, False, 0), (130, True, 2), (-1, True, 127),
        (64, True, 64)
    ])
    def test_adapt_to_range(self, value, isCyclic, expectedValue):
        assert adaptToRange(value, 0, 127, isCyclic) == expectedValue

    def test_is_in_range(self):
        assert isInRange(0, 0, 127)
        assert not isInRange(128, 0, 127)


class TestValidityChecker:

    @pytest.mark.parametrize("value, realIsAllowed, rangeKind, isOkay", [
        ("12", False, "", True), ("-3", False, "", True),
        ("-3", False, ">=0", False), ("0", False, ">0", False),
        ("2.5", False, "", False), ("2.5", True, ">0", True),
        ("abc", True, "", False)
    ])
    def test_number_strings(self, value, realIsAllowed, rangeKind,
                            isOkay):
        assert ValidityChecker.isNumberString(value, "value",
                                              realIsAllowed,
                                              rangeKind) == isOkay

    def test_one_of(self):
        assert ValidityChecker.isOneOf("wrap", "policy", ("clamp", "wrap"))
        assert not ValidityChecker.isOneOf("x", "policy", ("clamp",))


class TestAssertion:

    def test_failure_raises_given_class(self):
        with pytest.raises(KeyError):
            Assertion.check(False, "missing", KeyError)

        Assertion.check(True, "never raised", KeyError)


class TestOperatingSystem:

    @pytest.mark.parametrize("fileName, expectedResult", [
        ("song.mid", ("song", "mid")),
        ("dir/song.v2.mid", ("dir/song.v2", "mid")),
        ("dir.v2/song", ("dir.v2/song", "")),
        (".hidden", (".hidden", ""))
    ])
    def test_split_extension(self, fileName, expectedResult):
        assert OperatingSystem.splitExtension(fileName) == expectedResult

    def test_console_message_goes_to_stderr(self, capsys):
        OperatingSystem.showMessageOnConsole("hello")
        captured = capsys.readouterr()
        assert captured.err == "hello\n"
        assert captured.out == ""


class TestLogging:

    def test_buffered_lines_reach_log_file(self, tmp_path):
        fileName = str(tmp_path / "trace.log")
        Logging.setLevel(Logging_Level.verbose)
        Logging.trace("--: before file %d", 1)
        Logging.setFileName(fileName, False)
        Logging.trace(">>: after file")
        Logging.finalize()

        with open(fileName, encoding="utf-8") as logFile:
            text = logFile.read()

        assert text.startswith("START LOGGING")
        assert "before file 1" in text
        assert ">>TestLogging.test_buffered_lines_reach_log_file" in text
        assert text.endswith("END LOGGING\n")

    def test_disabled_logging_writes_nothing(self, tmp_path):
        fileName = str(tmp_path / "trace.log")
        Logging.setLevel(Logging_Level.verbose)
        Logging.setFileName(fileName, False)
        Logging.setEnabled(False)
        Logging.trace("--: hidden")

        with open(fileName, encoding="utf-8") as logFile:
            assert "hidden" not in logFile.read()
