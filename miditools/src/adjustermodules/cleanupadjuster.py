# cleanupadjuster -- removes redundant controller or pitch bend events
#                    lying within a tolerance of their predecessors
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

from dataclasses import dataclass

from basemodules.simplelogging import Logging
from basemodules.simpletypes import Boolean, Integer, List, Natural, \
                                    Object, String, StringList
from basemodules.ttbase import iif

from .midiadjuster import MidiAdjuster, pitchBendMarker
from .midisequence import MidiSequence, MidiTrack, TrackChangeBuffer

#====================

@dataclass(frozen=True)
class CleanUpParameters:
    """The events to be cleaned up (a controller number or the pitch
       bend marker), the value tolerance and the minimum tick distance
       separating two event groups"""

    eventSelector : Object
    tolerance     : Natural
    tickGap       : Natural

#====================

class CleanUpAdjuster (MidiAdjuster):
    """Thins out event series with many near-duplicate values.  The
       matching events of a track are partitioned into groups
       separated by tick gaps; within a group events whose value does
       not differ significantly from the last kept value are deleted,
       while the final event of each group is always kept.
       Usage: -c <event|pitch-bend> [tolerance] [tickGap]"""

    #--------------------
    # LOCAL FEATURES
    #--------------------

    @classmethod
    def _eventGroupList (cls,
                         track : MidiTrack,
                         eventSelector : Object,
                         tickGap : Natural) -> List:
        """Returns the events in <track> matching <eventSelector> as a
           list of groups; a new group starts whenever the tick distance
           to the previous matching event is at least <tickGap>"""

        Logging.trace(">>: selector = %r, tickGap = %d",
                      eventSelector, tickGap)

        result = []
        previousTick = None

        for event in track:
            if cls.eventMatches(event, eventSelector):
                isNewGroup = (previousTick is None
                              or event.tick - previousTick >= tickGap)

                if isNewGroup:
                    result.append([])

                result[-1].append(event)
                previousTick = event.tick

        Logging.trace("<<: %d groups", len(result))
        return result

    #--------------------

    @classmethod
    def _isInsignificant (cls,
                          value : Integer,
                          baseValue : Integer,
                          tolerance : Natural) -> Boolean:
        """Tells whether <value> is a repetition of <baseValue> or lies
           strictly within <tolerance> of it"""

        return (value == baseValue
                or baseValue < value < baseValue + tolerance
                or baseValue - tolerance < value < baseValue)

    #--------------------

    def _scheduleGroupDeletions (self,
                                 changeBuffer : TrackChangeBuffer,
                                 eventGroup : List,
                                 parameters : CleanUpParameters,
                                 channelSet : Object):
        """Schedules the insignificant events in <eventGroup> for
           deletion; the last event of the group is never deleted"""

        cls = self.__class__
        eventKindName = iif(parameters.eventSelector == pitchBendMarker,
                            "Pitch Bend event",
                            "event %s" % parameters.eventSelector)
        baseValue = None

        for event in eventGroup[:-1]:
            value = event.message.value()

            if baseValue is None:
                baseValue = value
            elif cls._isInsignificant(value, baseValue,
                                      parameters.tolerance):
                changeBuffer.scheduleDeletion(event)
                channelSet.add(event.message.channel)
                self._verboseLog("Deleted %s at tick %d"
                                 % (eventKindName, event.tick),
                                 event.message.channel)
            else:
                baseValue = value

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    def parseParameters (self,
                         flag : String,
                         argumentList : StringList) -> CleanUpParameters:
        """Reads the event selector, the optional tolerance and the
           optional tick gap from <argumentList>"""

        Logging.trace(">>: %r", argumentList)

        configuration = self._configuration
        self._checkParameterCount(flag, argumentList, 1, 3)
        eventSelector = self._parseEventSelector(flag, argumentList[0],
                                                 [pitchBendMarker])
        tolerance = configuration.cleanUpTolerance
        tickGap = configuration.cleanUpTickGap

        if len(argumentList) > 1:
            tolerance = self._parseInteger(flag, argumentList[1],
                                           "tolerance", ">=0")

        if len(argumentList) > 2:
            tickGap = self._parseInteger(flag, argumentList[2],
                                         "tick gap", ">0")

        result = CleanUpParameters(eventSelector, tolerance, tickGap)
        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def apply (self,
               parameters : CleanUpParameters,
               sequence : MidiSequence):
        """Removes the insignificant events selected by <parameters>
           from all tracks of <sequence>"""

        Logging.trace(">>: %r", parameters)

        channelSet = set()

        for track in sequence.trackList():
            changeBuffer = TrackChangeBuffer(track)
            eventGroupList = self._eventGroupList(track,
                                                  parameters.eventSelector,
                                                  parameters.tickGap)

            for eventGroup in eventGroupList:
                self._scheduleGroupDeletions(changeBuffer, eventGroup,
                                             parameters, channelSet)

            changeBuffer.applyDeletions()

        eventKindName = iif(parameters.eventSelector == pitchBendMarker,
                            "Pitch Bend events",
                            "Event %s" % parameters.eventSelector)
        self._showChannelListMessage(channelSet,
                                     eventKindName
                                     + " cleaned up on channels")

        Logging.trace("<<")
