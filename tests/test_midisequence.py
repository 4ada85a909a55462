# test_midisequence -- tests for the in-memory midi sequence model
#
# author: MidiTools contributors, 2024

import pytest

from adjustermodules.midisequence import ChannelMessage, MidiCommand, \
                                         MidiTrack, TrackChangeBuffer, \
                                         pitchBendValue, \
                                         splitPitchBendValue

from midibuilder import controlChange, pitchBend, programChange, trackEnd

#====================

class TestPitchBendValues:

    def test_center_is_split_into_data_bytes(self):
        assert splitPitchBendValue(8192) == (0, 64)
        assert pitchBendValue(0, 64) == 8192

    def test_set_value_splits_fourteen_bits(self):
        message = pitchBend(0, 0, 8192).message
        message.setValue(9000)
        assert (message.data1, message.data2) == (40, 70)
        assert message.value() == 9000

    def test_controller_value_is_second_data_byte(self):
        message = controlChange(0, 0, 7, 100).message
        message.setValue(90)
        assert (message.data1, message.data2) == (7, 90)


class TestChannelMessage:

    def test_program_change_ignores_second_data_byte(self):
        first = ChannelMessage(MidiCommand.programChange, 0, 5, 0)
        second = ChannelMessage(MidiCommand.programChange, 0, 5, 33)
        assert first == second

    def test_copy_is_independent(self):
        message = controlChange(0, 3, 7, 100).message
        other = message.copy()
        other.data2 = 1
        assert message.data2 == 100
        assert other.channel == 3

    def test_kind_queries(self):
        assert controlChange(0, 0, 7, 1).message.isControlChange(7)
        assert not controlChange(0, 0, 7, 1).message.isControlChange(8)
        assert pitchBend(0, 0, 1).message.isPitchBend()
        assert programChange(0, 0, 1).message.isProgramChange()


class TestMidiTrack:

    def test_events_are_ordered_by_tick_stably(self):
        first = controlChange(10, 0, 7, 1)
        second = controlChange(5, 0, 7, 2)
        third = controlChange(10, 0, 7, 3)
        track = MidiTrack([first, second, third])
        assert [ event.tick for event in track ] == [5, 10, 10]
        assert track[1] is first
        assert track[2] is third

    def test_track_end_stays_last_and_moves_with_later_events(self):
        track = MidiTrack([controlChange(0, 0, 7, 1), trackEnd(100)])
        event = controlChange(200, 0, 7, 2)
        track.add(event)
        assert track[1] is event
        assert track[2].isTrackEnd()
        assert track[2].tick == 200

    def test_earlier_event_goes_before_track_end(self):
        track = MidiTrack([trackEnd(100)])
        track.add(controlChange(50, 0, 7, 2))
        assert len(track) == 2
        assert track[1].isTrackEnd()
        assert track[1].tick == 100

    def test_remove_compares_by_identity(self):
        first = controlChange(0, 0, 7, 1)
        second = controlChange(0, 0, 7, 1)
        track = MidiTrack([first, second])
        assert track.removeAll([first]) == 1
        assert len(track) == 1
        assert track[0] is second
        assert track.removeAll([first]) == 0

    def test_negative_tick_is_rejected(self):
        with pytest.raises(AssertionError):
            MidiTrack().add(controlChange(-1, 0, 7, 1))

    def test_remove_all_returns_count(self):
        eventList = [ controlChange(tick, 0, 7, 1) for tick in range(4) ]
        track = MidiTrack(eventList)
        assert track.removeAll(eventList[1:3]) == 2
        assert [ event.tick for event in track ] == [0, 3]


class TestTrackChangeBuffer:

    def test_changes_are_deferred_until_applied(self):
        event = controlChange(10, 0, 7, 1)
        track = MidiTrack([event, trackEnd(10)])
        changeBuffer = TrackChangeBuffer(track)

        for currentEvent in track:
            if currentEvent is event:
                changeBuffer.scheduleDeletion(currentEvent)
                changeBuffer.scheduleInsertion(controlChange(0, 0, 7, 2))

        assert len(track) == 2
        assert track[0] is event
        changeBuffer.apply()
        assert [ event.tick for event in track ] == [0, 10]
        assert track[0].message.data2 == 2

    def test_applied_changes_are_counted(self):
        event = controlChange(10, 0, 7, 1)
        changeBuffer = TrackChangeBuffer(MidiTrack([event]))
        changeBuffer.scheduleDeletion(event)
        changeBuffer.scheduleInsertion(controlChange(0, 0, 7, 2))
        changeBuffer.scheduleInsertion(controlChange(1, 0, 7, 3))
        assert changeBuffer.applyInsertions() == 2
        assert changeBuffer.applyDeletions() == 1

    def test_discarded_deletions_are_not_applied(self):
        event = controlChange(10, 0, 7, 1)
        track = MidiTrack([event])
        changeBuffer = TrackChangeBuffer(track)
        changeBuffer.scheduleDeletion(event)
        changeBuffer.discardDeletions()
        changeBuffer.apply()
        assert track[0] is event

    def test_deleting_foreign_event_fails(self):
        changeBuffer = TrackChangeBuffer(MidiTrack())
        changeBuffer.scheduleDeletion(controlChange(0, 0, 7, 1))

        with pytest.raises(AssertionError):
            changeBuffer.applyDeletions()
