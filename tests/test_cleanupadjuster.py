# test_cleanupadjuster -- tests for removing near-duplicate events
#
# author: MidiTools contributors, 2024

import pytest

from adjustermodules.cleanupadjuster import CleanUpAdjuster
from adjustermodules.miditoolserrors import ArgumentError

from midibuilder import controlChange, controllerValueList, makeSequence, \
                        pitchBend, pitchBendValueList

#====================

def _volumeSequence (valueList, tickDistance=10):
    return makeSequence([ controlChange(i * tickDistance, 0, 7, value)
                          for i, value in enumerate(valueList) ])

#--------------------

def _cleanUp (configuration, sequence, argumentList):
    adjuster = CleanUpAdjuster(configuration)
    parameters = adjuster.parseParameters("-c", argumentList)
    adjuster.apply(parameters, sequence)

#--------------------

def _values (sequence, controllerNumber=7):
    return [ value
             for _, value in controllerValueList(sequence,
                                                 controllerNumber) ]

#====================

class TestCleanUp:

    def test_small_changes_are_removed(self, configuration, capsys):
        sequence = _volumeSequence([10, 12, 14, 16, 18, 20, 18])
        _cleanUp(configuration, sequence, ["7"])
        assert _values(sequence) == [10, 20, 18]
        assert "Event 7 cleaned up on channels: 1" \
               in capsys.readouterr().err

    def test_clean_up_is_idempotent(self, configuration):
        sequence = _volumeSequence([10, 12, 14, 16, 18, 20, 18])
        _cleanUp(configuration, sequence, ["7"])
        _cleanUp(configuration, sequence, ["7"])
        assert _values(sequence) == [10, 20, 18]

    def test_difference_of_tolerance_is_kept(self, configuration):
        sequence = _volumeSequence([10, 20, 25, 30])
        _cleanUp(configuration, sequence, ["7"])
        assert _values(sequence) == [10, 20, 30]

    def test_explicit_tolerance(self, configuration):
        sequence = _volumeSequence([10, 12, 14, 16])
        _cleanUp(configuration, sequence, ["7", "3"])
        assert _values(sequence) == [10, 14, 16]

    def test_last_event_of_group_is_kept(self, configuration):
        sequence = makeSequence([controlChange(0, 0, 7, 10),
                                 controlChange(10, 0, 7, 12),
                                 controlChange(1000, 0, 7, 14),
                                 controlChange(1010, 0, 7, 15)])
        _cleanUp(configuration, sequence, ["7"])
        assert _values(sequence) == [10, 12, 14, 15]

    def test_explicit_tick_gap(self, configuration):
        sequence = makeSequence([controlChange(0, 0, 7, 10),
                                 controlChange(10, 0, 7, 12),
                                 controlChange(1000, 0, 7, 14),
                                 controlChange(1010, 0, 7, 15)])
        _cleanUp(configuration, sequence, ["7", "10", "2000"])
        assert _values(sequence) == [10, 15]

    def test_pitch_bends(self, configuration, capsys):
        sequence = makeSequence([pitchBend(0, 1, 8192),
                                 pitchBend(10, 1, 8195),
                                 pitchBend(20, 1, 8300)])
        _cleanUp(configuration, sequence, ["pitch-bend"])
        assert pitchBendValueList(sequence) == [(0, 8192), (20, 8300)]
        assert "Pitch Bend events cleaned up on channels: 2" \
               in capsys.readouterr().err

    def test_other_events_are_untouched(self, configuration):
        sequence = makeSequence([controlChange(0, 0, 7, 10),
                                 controlChange(5, 0, 11, 11),
                                 controlChange(10, 0, 7, 11),
                                 controlChange(15, 0, 11, 12),
                                 controlChange(20, 0, 7, 50)])
        _cleanUp(configuration, sequence, ["7"])
        assert _values(sequence) == [10, 50]
        assert _values(sequence, 11) == [11, 12]

    @pytest.mark.parametrize("argumentList", [
        [], ["128"], ["program-change"], ["7", "-1"], ["7", "10", "0"],
        ["7", "1", "2", "3"]
    ])
    def test_bad_parameters(self, configuration, argumentList):
        with pytest.raises(ArgumentError):
            CleanUpAdjuster(configuration).parseParameters("-c",
                                                           argumentList)
