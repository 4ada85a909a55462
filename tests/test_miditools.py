# test_miditools -- end to end tests for the command line program
#
# author: MidiTools contributors, 2024

import pytest

from adjustermodules.midifilehandler import MidiFileHandler
from adjustermodules.miditools import main, outputFileName

from midibuilder import controlChange, controllerValueList, makeSequence

#====================

def _writeSong (directory, eventList=None):
    """Writes a single track midi file into <directory> and returns its
       name"""

    fileName = str(directory / "song.mid")
    eventList = eventList or [controlChange(0, 0, 11, 90),
                              controlChange(10, 0, 7, 50)]
    MidiFileHandler().writeFile(fileName, makeSequence(eventList), 1)
    return fileName

#====================

class TestOutputFileName:

    @pytest.mark.parametrize("fileName, expectedResult", [
        ("dir/song.mid", "dir/song-out.mid"),
        ("song", "song-out"),
        ("dir.v2/song", "dir.v2/song-out")
    ])
    def test_suffix_is_inserted(self, fileName, expectedResult):
        assert outputFileName(fileName, "out") == expectedResult


class TestMain:

    def test_transformations_are_written(self, tmp_path, capsys):
        fileName = _writeSong(tmp_path)
        assert main([fileName, "-e", "-a", "7", "5"]) == 0
        sequence, formatVariant = \
            MidiFileHandler().readFile(str(tmp_path / "song-out.mid"))
        assert formatVariant == 1
        assert controllerValueList(sequence, 7) == [(0, 95), (10, 55)]
        errorOutput = capsys.readouterr().err
        assert "Channels adjusted: 1" in errorOutput
        assert "Wrote " in errorOutput

    def test_negative_channel_parameter(self, tmp_path):
        fileName = _writeSong(tmp_path)
        assert main([fileName, "-s", "7", "10", "-1"]) == 0
        sequence, _ = \
            MidiFileHandler().readFile(str(tmp_path / "song-out.mid"))
        assert controllerValueList(sequence, 7) == [(10, 40)]

    def test_verbose_output(self, tmp_path, capsys):
        fileName = _writeSong(tmp_path)
        assert main([fileName, "--verbose", "-e"]) == 0
        assert "Channel 1: Changed expression of 90 to volume at tick 0" \
               in capsys.readouterr().err

    def test_configuration_file(self, tmp_path):
        fileName = _writeSong(tmp_path)
        configurationFileName = tmp_path / "settings.txt"
        configurationFileName.write_text("outputFileSuffix = \"fixed\"\n",
                                         encoding="utf-8")
        assert main([fileName, "--config", str(configurationFileName),
                     "-e"]) == 0
        assert (tmp_path / "song-fixed.mid").is_file()

    def test_logging_file(self, tmp_path):
        fileName = _writeSong(tmp_path)
        loggingFileName = tmp_path / "trace.log"
        assert main([fileName, "--logging", str(loggingFileName),
                     "-e"]) == 0
        assert "ExpressionAdjuster.apply" \
               in loggingFileName.read_text(encoding="utf-8")

    def test_unwritable_logging_file(self, tmp_path, capsys):
        fileName = _writeSong(tmp_path)
        loggingFileName = tmp_path / "missing" / "trace.log"
        assert main([fileName, "--logging", str(loggingFileName),
                     "-e"]) == 2
        assert "ERROR: cannot write logging file" \
               in capsys.readouterr().err
        assert not (tmp_path / "song-out.mid").exists()

    def test_configuration_file_not_in_utf8(self, tmp_path):
        fileName = _writeSong(tmp_path)
        configurationFileName = tmp_path / "settings.txt"
        configurationFileName.write_bytes(b"outputFileSuffix = \"\xff\"\n")
        assert main([fileName, "--config", str(configurationFileName),
                     "-e"]) == 2
        assert not (tmp_path / "song-out.mid").exists()

    def test_missing_transformation(self, tmp_path, capsys):
        fileName = _writeSong(tmp_path)
        assert main([fileName]) == 2
        errorOutput = capsys.readouterr().err
        assert "ERROR: at least one transformation is required" \
               in errorOutput
        assert "usage: midiTools" in errorOutput

    def test_bad_transformation_parameter(self, tmp_path, capsys):
        fileName = _writeSong(tmp_path)
        assert main([fileName, "-a", "x", "5"]) == 2
        assert "ERROR:" in capsys.readouterr().err
        assert not (tmp_path / "song-out.mid").exists()

    def test_missing_midi_file(self, tmp_path):
        assert main([str(tmp_path / "missing.mid"), "-e"]) == 2

    def test_corrupt_midi_file(self, tmp_path, capsys):
        fileName = tmp_path / "song.mid"
        fileName.write_bytes(b"not a midi file")
        assert main([str(fileName), "-e"]) == 1
        assert "ERROR:" in capsys.readouterr().err

    def test_overflow_error(self, tmp_path):
        fileName = _writeSong(tmp_path)
        assert main([fileName, "--overflow", "error",
                     "-a", "7", "100"]) == 1
        assert not (tmp_path / "song-out.mid").exists()

    def test_unknown_option(self, tmp_path):
        fileName = _writeSong(tmp_path)

        with pytest.raises(SystemExit) as exceptionInfo:
            main([fileName, "--bogus"])

        assert exceptionInfo.value.code == 2
