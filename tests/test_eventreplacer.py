# test_eventreplacer -- tests for the vibrato and reverb adjusters
#
# author: MidiTools contributors, 2024

import pytest

from adjustermodules.eventreplacer import ReverbAdjuster, VibratoAdjuster
from adjustermodules.miditoolserrors import ArgumentError

from midibuilder import controlChange, controllerValueList, makeSequence

#====================

def _adjust (adjusterClass, configuration, sequence, argumentList=()):
    adjuster = adjusterClass(configuration)
    parameters = adjuster.parseParameters("-x", list(argumentList))
    adjuster.apply(parameters, sequence)

#====================

class TestVibrato:

    def test_full_modulation_gives_full_range(self, configuration):
        sequence = makeSequence([controlChange(0, 0, 1, 127)])
        _adjust(VibratoAdjuster, configuration, sequence)
        assert controllerValueList(sequence, 77) == [(0, 5)]
        assert controllerValueList(sequence, 1) == [(0, 127)]

    def test_baseline_and_duplicates(self, configuration, capsys):
        sequence = makeSequence([controlChange(50, 2, 77, 99),
                                 controlChange(100, 2, 1, 64),
                                 controlChange(200, 2, 1, 64),
                                 controlChange(300, 2, 1, 0)])
        _adjust(VibratoAdjuster, configuration, sequence)
        assert controllerValueList(sequence, 77) \
               == [(0, 0), (100, 3), (300, 0)]
        assert all(event.message.channel == 2
                   for event in sequence.trackList()[0]
                   if event.channelMessage() is not None)
        assert "Vibrato added to channels: 3" in capsys.readouterr().err

    def test_silent_modulation_keeps_track(self, configuration):
        sequence = makeSequence([controlChange(0, 0, 1, 0),
                                 controlChange(10, 0, 77, 40)])
        _adjust(VibratoAdjuster, configuration, sequence)
        assert controllerValueList(sequence, 77) == [(10, 40)]

    def test_explicit_range(self, configuration):
        sequence = makeSequence([controlChange(0, 0, 1, 127),
                                 controlChange(10, 0, 1, 1)])
        _adjust(VibratoAdjuster, configuration, sequence, ["20"])
        assert controllerValueList(sequence, 77) == [(0, 20), (10, 1)]

    @pytest.mark.parametrize("argumentList",
                             [["200"], ["-1"], ["x"], ["1", "2"]])
    def test_bad_parameters(self, configuration, argumentList):
        with pytest.raises(ArgumentError):
            VibratoAdjuster(configuration).parseParameters("-v",
                                                           argumentList)


class TestReverb:

    def test_reverb_is_replaced_in_place(self, configuration):
        sequence = makeSequence([controlChange(0, 0, 91, 127),
                                 controlChange(10, 0, 91, 100)])
        _adjust(ReverbAdjuster, configuration, sequence)
        assert controllerValueList(sequence, 91) == [(0, 26), (10, 21)]

    def test_tracks_are_handled_separately(self, configuration):
        sequence = makeSequence([controlChange(0, 0, 91, 127)],
                                [controlChange(0, 1, 91, 0)])
        _adjust(ReverbAdjuster, configuration, sequence)
        assert controllerValueList(sequence, 91, 0) == [(0, 26)]
        assert controllerValueList(sequence, 91, 1) == [(0, 0)]
