# notepitchadjuster -- adds pitch bends to the notes of a channel such
#                      that all notes can later be set to a common base
#                      note without changing the melody
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

import math
from dataclasses import dataclass
from fractions import Fraction

from basemodules.simpleassertion import Assertion
from basemodules.simplelogging import Logging
from basemodules.simpletypes import Integer, Natural, Real, String, \
                                    StringList
from basemodules.ttbase import isInRange

from .midiadjuster import MidiAdjuster
from .midisequence import ChannelMessage, MidiCommand, MidiSequence, \
                          TimedEvent, TrackChangeBuffer, dataByteMaximum, \
                          pitchBendCenter, pitchBendMaximum, \
                          splitPitchBendValue
from .miditoolserrors import ArgumentError, RangeArithmeticError

#====================

@dataclass(frozen=True)
class NotePitchParameters:
    """The one-based channel of the notes, the base note all notes are
       bent from and the pitch bend range in semitones"""

    channel        : Natural
    baseNote       : Natural
    pitchBendRange : Real

#====================

class NotePitchAdjuster (MidiAdjuster):
    """Adds a pitch bend at every note on event of a channel whose value
       bends the base note to the played note.  The notes themselves
       stay unchanged; chords are not taken into account.
       Usage: -n <channel> <baseNote> [range]"""

    #--------------------
    # LOCAL FEATURES
    #--------------------

    @classmethod
    def _pitchBendValue (cls,
                         pitchBendRange : Real,
                         semitoneCount : Integer,
                         tick : Natural) -> Natural:
        """Returns the pitch bend value bending by <semitoneCount> for
           <pitchBendRange>; <tick> is only used for error reporting"""

        stepSize = Fraction(pitchBendCenter) / Fraction(pitchBendRange)
        result = math.floor(stepSize * semitoneCount + pitchBendCenter)
        Assertion.check(isInRange(result, 0, 2 * pitchBendCenter),
                        ("at tick %d the pitch bend value cannot be %d"
                         + " (adjusting by %d)")
                        % (tick, result, semitoneCount),
                        RangeArithmeticError)
        # zero offset stays centered; only the top value is capped
        return min(result, pitchBendMaximum)

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    def parseParameters (self,
                         flag : String,
                         argumentList : StringList) -> NotePitchParameters:
        """Reads the channel, the base note and the optional pitch bend
           range from <argumentList>"""

        Logging.trace(">>: %r", argumentList)

        self._checkParameterCount(flag, argumentList, 2, 3)
        channel = self._parseInteger(flag, argumentList[0], "channel",
                                     ">0")
        baseNote = self._parseInteger(flag, argumentList[1], "base note",
                                      ">=0")
        pitchBendRange = self._configuration.notePitchBendRange

        if channel > 16:
            raise ArgumentError("channel for %s must be in 1..16 - %r"
                                % (flag, argumentList[0]))

        if baseNote > dataByteMaximum:
            raise ArgumentError("base note for %s must be in 0..127 - %r"
                                % (flag, argumentList[1]))

        if len(argumentList) > 2:
            pitchBendRange = self._parseReal(flag, argumentList[2],
                                             "pitch bend range", ">0")

        result = NotePitchParameters(channel, baseNote, pitchBendRange)
        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def apply (self,
               parameters : NotePitchParameters,
               sequence : MidiSequence):
        """Inserts the pitch bends for the notes of the selected channel
           in all tracks of <sequence>"""

        Logging.trace(">>: %r", parameters)

        cls = self.__class__
        channel = parameters.channel - 1
        currentAdjustment = None
        insertionCount = 0

        for track in sequence.trackList():
            changeBuffer = TrackChangeBuffer(track)

            for event in track:
                message = event.channelMessage()

                if (message is None or not message.isNoteOn()
                    or message.channel != channel):
                    continue

                semitoneCount = message.data1 - parameters.baseNote

                if semitoneCount == currentAdjustment:
                    continue

                currentAdjustment = semitoneCount
                value = cls._pitchBendValue(parameters.pitchBendRange,
                                            semitoneCount, event.tick)
                data1, data2 = splitPitchBendValue(value)
                bendMessage = ChannelMessage(MidiCommand.pitchBend,
                                             channel, data1, data2)
                changeBuffer.scheduleInsertion(TimedEvent(event.tick,
                                                          bendMessage))
                self._verboseLog("Added Pitch Bend of %d at tick %d"
                                 % (value, event.tick),
                                 channel)

            insertionCount += changeBuffer.applyInsertions()

        if insertionCount == 0:
            self._showMessage("Did not find any notes to adjust.")
        else:
            self._showChannelListMessage({ channel },
                                         "Pitch Bend added to channels")

        Logging.trace("<<")
