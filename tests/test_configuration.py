# test_configuration -- tests for the configuration file reader and the
#                       MIDI tools settings
#
# author: MidiTools contributors, 2024

import pytest

from basemodules.configurationfile import ConfigurationFile

from adjustermodules.miditools_configuration import MidiToolsConfiguration
from adjustermodules.miditoolserrors import ArgumentError

#====================

def _writeFile (directory, text):
    path = directory / "settings.txt"
    path.write_text(text, encoding="utf-8")
    return str(path)

#====================

class TestConfigurationFile:

    def test_value_kinds(self, tmp_path):
        fileName = _writeFile(tmp_path,
                              "-- some comment\n"
                              "flag = yes\n"
                              "count = 12\n"
                              "mask = 0x10\n"
                              "ratio = 2.5\n"
                              "name = plain text -- trailing comment\n"
                              "quoted = \"a -- b\"\n"
                              "long = first \\\n"
                              "       second\n")
        configurationFile = ConfigurationFile(fileName)
        assert { key : configurationFile.value(key)
                 for key in configurationFile.keySet() } \
               == { "flag": True, "count": 12, "mask": 16, "ratio": 2.5,
                    "name": "plain text", "quoted": "a -- b",
                    "long": "first second" }

    def test_default_value(self, tmp_path):
        configurationFile = ConfigurationFile(_writeFile(tmp_path, ""))
        assert configurationFile.value("missing", 3) == 3
        assert configurationFile.value("missing") is None


class TestMidiToolsConfiguration:

    def test_defaults(self, configuration):
        assert configuration.desiredPitchBendRange == 12
        assert configuration.cleanUpTolerance == 10
        assert configuration.valueOverflowPolicy == "none"
        assert not configuration.verboseLoggingIsActive

    @pytest.mark.parametrize("settingMap", [
        { "desiredPitchBendRange": 0 }, { "vibratoRange": 200.0 },
        { "cleanUpTickGap": 0 }, { "valueOverflowPolicy": "ignore" },
        { "outputFileSuffix": "" }
    ])
    def test_bad_settings(self, settingMap):
        with pytest.raises(ArgumentError):
            MidiToolsConfiguration(**settingMap)

    def test_from_file(self, tmp_path):
        fileName = _writeFile(tmp_path,
                              "-- midi tools settings\n"
                              "vibratoRange = 7.5\n"
                              "reverbRange = 30\n"
                              "cleanUpTolerance = 4\n"
                              "verboseLoggingIsActive = YES\n"
                              "outputFileSuffix = \"fixed\"\n"
                              "unknownKey = 1\n")
        configuration = MidiToolsConfiguration.fromFile(fileName)
        assert configuration.vibratoRange == 7.5
        assert configuration.reverbRange == 30.0
        assert configuration.cleanUpTolerance == 4
        assert configuration.verboseLoggingIsActive
        assert configuration.outputFileSuffix == "fixed"
        assert configuration.desiredPitchBendRange == 12

    def test_bad_file_value(self, tmp_path):
        fileName = _writeFile(tmp_path, "cleanUpTolerance = 2.5\n")

        with pytest.raises(ArgumentError):
            MidiToolsConfiguration.fromFile(fileName)

    def test_file_not_in_utf8(self, tmp_path):
        path = tmp_path / "settings.txt"
        path.write_bytes(b"outputFileSuffix = \"\xe4nderung\"\n")

        with pytest.raises(ArgumentError):
            MidiToolsConfiguration.fromFile(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ArgumentError):
            MidiToolsConfiguration.fromFile(str(tmp_path / "missing.txt"))

    def test_overrides_skip_missing_values(self, configuration):
        result = configuration.withOverrides(verboseLoggingIsActive=None,
                                             valueOverflowPolicy="clamp")
        assert result.valueOverflowPolicy == "clamp"
        assert not result.verboseLoggingIsActive
        assert configuration.valueOverflowPolicy == "none"
