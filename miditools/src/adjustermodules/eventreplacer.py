# eventreplacer -- derives the values of some controller from the
#                  values of another controller scaled into a target
#                  range; used for vibrato and reverb adjustment
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

import math
from dataclasses import dataclass
from fractions import Fraction

from basemodules.simplelogging import Logging
from basemodules.simpletypes import Boolean, Natural, Object, Real, \
                                    String, StringList

from .midiadjuster import MidiAdjuster
from .midisequence import MidiController, MidiSequence, MidiTrack, \
                          TrackChangeBuffer, dataByteMaximum
from .miditoolserrors import ArgumentError

#====================

@dataclass(frozen=True)
class ScaledReplacementParameters:
    """The range the source controller values are scaled into"""

    targetRange : Real

#====================

class ScaledEventReplacer (MidiAdjuster):
    """Replaces all events of a destination controller by events
       derived from a source controller with its values scaled into a
       target range.  Source and destination controller may be the
       same.  Subclasses define the controllers, the default range and
       the display name."""

    _sourceControllerNumber      = None
    _destinationControllerNumber = None
    _displayName                 = ""

    #--------------------
    # LOCAL FEATURES
    #--------------------

    def _defaultTargetRange (self) -> Real:
        """Returns target range used when no range is given on the
           command line"""

        raise NotImplementedError

    #--------------------

    def _scheduleStaleDeletions (self,
                                 changeBuffer : TrackChangeBuffer,
                                 track : MidiTrack,
                                 sourceControllerNumber : Natural,
                                 destinationControllerNumber : Natural) \
                                 -> Boolean:
        """Schedules all destination controller events in <track> for
           deletion and tells whether there is some source controller
           event with a non-zero value"""

        Logging.trace(">>: %r", track)

        result = False

        for event in track:
            if self.eventMatches(event, destinationControllerNumber):
                changeBuffer.scheduleDeletion(event)

            if self.eventMatches(event, sourceControllerNumber):
                result = result or event.message.data2 > 0

        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def _scheduleReplacements (self,
                               changeBuffer : TrackChangeBuffer,
                               track : MidiTrack,
                               sourceControllerNumber : Natural,
                               destinationControllerNumber : Natural,
                               targetRange : Real,
                               displayName : String,
                               channelSet : Object):
        """Schedules a destination controller event for each source
           controller event in <track> whose scaled value differs from
           the previous one; when the first source event does not occur
           at the start of the track, a zero value event is scheduled at
           the start"""

        Logging.trace(">>: range = %r", targetRange)

        scaleFactor = Fraction(targetRange) / dataByteMaximum
        lastValue = None

        for event in track:
            if not self.eventMatches(event, sourceControllerNumber):
                continue

            channel = event.message.channel

            if lastValue is None and event.tick > 0:
                lastValue = 0
                self._scheduleControllerEvent(changeBuffer, 0, channel,
                                              destinationControllerNumber,
                                              lastValue, displayName)

            newValue = math.ceil(scaleFactor * event.message.data2)

            if newValue != lastValue:
                lastValue = newValue
                channelSet.add(channel)
                self._scheduleControllerEvent(changeBuffer, event.tick,
                                              channel,
                                              destinationControllerNumber,
                                              newValue, displayName)

        Logging.trace("<<")

    #--------------------

    def _scheduleControllerEvent (self,
                                  changeBuffer : TrackChangeBuffer,
                                  tick : Natural,
                                  channel : Natural,
                                  controllerNumber : Natural,
                                  value : Natural,
                                  displayName : String):
        """Schedules a new control change event at <tick>"""

        changeBuffer.scheduleInsertion(
            self.makeControlChangeEvent(tick, channel, controllerNumber,
                                        value))
        self._verboseLog("Added %s of %d at tick %d"
                         % (displayName, value, tick),
                         channel)

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    def parseParameters (self,
                         flag : String,
                         argumentList : StringList) \
                         -> ScaledReplacementParameters:
        """Reads the optional target range from <argumentList>"""

        Logging.trace(">>: %r", argumentList)

        self._checkParameterCount(flag, argumentList, 0, 1)

        if len(argumentList) == 0:
            targetRange = self._defaultTargetRange()
        else:
            targetRange = self._parseReal(flag, argumentList[0],
                                          "range", ">=0")

            if targetRange > dataByteMaximum:
                raise ArgumentError("range for %s must not exceed %d - %r"
                                    % (flag, dataByteMaximum,
                                       argumentList[0]))

        result = ScaledReplacementParameters(targetRange)
        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def apply (self,
               parameters : ScaledReplacementParameters,
               sequence : MidiSequence):
        """Replaces the destination controller events in all tracks of
           <sequence>"""

        cls = self.__class__
        self.replaceEvents(sequence, cls._sourceControllerNumber,
                           cls._destinationControllerNumber,
                           parameters.targetRange, cls._displayName)

    #--------------------

    def replaceEvents (self,
                       sequence : MidiSequence,
                       sourceControllerNumber : Natural,
                       destinationControllerNumber : Natural,
                       targetRange : Real,
                       displayName : String):
        """Replaces all events of <destinationControllerNumber> in
           <sequence> by events derived from
           <sourceControllerNumber> with values scaled into
           <targetRange>; <displayName> is used for the console
           messages"""

        Logging.trace(">>: source = %d, destination = %d, range = %r",
                      sourceControllerNumber, destinationControllerNumber,
                      targetRange)

        channelSet = set()

        for track in sequence.trackList():
            changeBuffer = TrackChangeBuffer(track)
            isNeeded = self._scheduleStaleDeletions(
                           changeBuffer, track, sourceControllerNumber,
                           destinationControllerNumber)

            if not isNeeded:
                changeBuffer.discardDeletions()
            else:
                self._scheduleReplacements(changeBuffer, track,
                                           sourceControllerNumber,
                                           destinationControllerNumber,
                                           targetRange, displayName,
                                           channelSet)
                changeBuffer.apply()

        self._showChannelListMessage(channelSet,
                                     displayName + " added to channels")
        Logging.trace("<<")

#====================

class VibratoAdjuster (ScaledEventReplacer):
    """Derives vibrato depth events from the modulation wheel events.
       Usage: -v [range]"""

    _sourceControllerNumber      = MidiController.modulation
    _destinationControllerNumber = MidiController.vibratoDepth
    _displayName                 = "Vibrato"

    def _defaultTargetRange (self) -> Real:
        return self._configuration.vibratoRange

#====================

class ReverbAdjuster (ScaledEventReplacer):
    """Rescales the reverb send events into a smaller range.
       Usage: -r [range]"""

    _sourceControllerNumber      = MidiController.reverbSend
    _destinationControllerNumber = MidiController.reverbSend
    _displayName                 = "Reverb"

    def _defaultTargetRange (self) -> Real:
        return self._configuration.reverbRange
