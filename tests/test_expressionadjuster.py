# test_expressionadjuster -- tests for converting expression into volume
#
# author: MidiTools contributors, 2024

import pytest

from adjustermodules.expressionadjuster import ExpressionAdjuster
from adjustermodules.miditoolserrors import ArgumentError

from midibuilder import controlChange, controllerValueList, makeSequence

#====================

class TestExpression:

    def test_expression_becomes_volume(self, configuration, capsys):
        sequence = makeSequence([controlChange(0, 3, 11, 90),
                                 controlChange(10, 3, 7, 100)])
        adjuster = ExpressionAdjuster(configuration)
        adjuster.apply(adjuster.parseParameters("-e", []), sequence)
        assert controllerValueList(sequence, 7) == [(0, 90), (10, 100)]
        assert controllerValueList(sequence, 11) == []
        assert sequence.trackList()[0][0].message.channel == 3
        assert "Channels adjusted: 4" in capsys.readouterr().err

    def test_nothing_to_convert(self, configuration, capsys):
        sequence = makeSequence([controlChange(0, 0, 7, 100)])
        ExpressionAdjuster(configuration).apply(None, sequence)
        assert "Did not find any expression events." \
               in capsys.readouterr().err

    def test_parameters_are_rejected(self, configuration):
        with pytest.raises(ArgumentError):
            ExpressionAdjuster(configuration).parseParameters("-e", ["1"])
