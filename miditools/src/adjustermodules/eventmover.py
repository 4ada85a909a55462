# eventmover -- moves the first occurrence of selected events to the
#               start of each track
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

from dataclasses import dataclass

from basemodules.simplelogging import Logging
from basemodules.simpletypes import List, Natural, String, StringList

from .midiadjuster import MidiAdjuster, pitchBendMarker, \
                          programChangeMarker
from .midisequence import MidiSequence, MidiTrack, TimedEvent, \
                          TrackChangeBuffer
from .miditoolserrors import ArgumentError

#====================

@dataclass(frozen=True)
class EventMoveParameters:
    """The event selectors (controller numbers or markers) whose first
       occurrences are moved"""

    eventSelectorList : List

#====================

class EventMover (MidiAdjuster):
    """Moves the first event of each selected kind in a track to tick
       zero.  Events already at tick zero stay where they are; note on
       events at tick zero are moved behind the relocated events.
       Usage: -m <event|pitch-bend|program-change>..."""

    #--------------------
    # LOCAL FEATURES
    #--------------------

    def _moveInTrack (self,
                      track : MidiTrack,
                      eventSelectorList : List) -> Natural:
        """Moves the first occurrences of <eventSelectorList> in
           <track> to tick zero and returns the number of relocated
           events"""

        Logging.trace(">>: %r", eventSelectorList)

        changeBuffer = TrackChangeBuffer(track)
        pendingSelectorList = list(eventSelectorList)
        initialNoteOnEventList = []
        result = 0

        for event in track:
            if event.tick > 0 and len(pendingSelectorList) == 0:
                break

            message = event.channelMessage()

            if message is None:
                continue
            elif event.tick == 0 and message.isNoteOn():
                initialNoteOnEventList.append(event)
                continue

            selectorList = [ selector for selector in pendingSelectorList
                             if self.eventMatches(event, selector) ]

            if len(selectorList) > 0:
                pendingSelectorList.remove(selectorList[0])

                if event.tick > 0:
                    Logging.trace("--: moving %r", event)
                    changeBuffer.scheduleInsertion(
                        TimedEvent(0, message.copy()))
                    changeBuffer.scheduleDeletion(event)
                    result += 1

        if result > 0:
            # notes at the start must follow the relocated events
            for event in initialNoteOnEventList:
                changeBuffer.scheduleInsertion(
                    TimedEvent(0, event.message.copy()))
                changeBuffer.scheduleDeletion(event)

            changeBuffer.applyInsertions()
            changeBuffer.applyDeletions()

        Logging.trace("<<: %d", result)
        return result

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    def parseParameters (self,
                         flag : String,
                         argumentList : StringList) -> EventMoveParameters:
        """Reads the event selectors from <argumentList>"""

        Logging.trace(">>: %r", argumentList)

        if len(argumentList) == 0:
            raise ArgumentError("at least one event must be passed to %s"
                                % flag)

        eventSelectorList = []

        for st in argumentList:
            eventSelector = \
                self._parseEventSelector(flag, st,
                                         [pitchBendMarker,
                                          programChangeMarker])

            if eventSelector not in eventSelectorList:
                eventSelectorList.append(eventSelector)

        result = EventMoveParameters(tuple(eventSelectorList))
        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def apply (self,
               parameters : EventMoveParameters,
               sequence : MidiSequence):
        """Moves the first occurrences of the selected events to the
           start in all tracks of <sequence>"""

        Logging.trace(">>: %r", parameters)

        movedEventCount = 0

        for track in sequence.trackList():
            movedEventCount += self._moveInTrack(
                                   track, parameters.eventSelectorList)

        if movedEventCount == 0:
            self._showMessage("Did not move any events.")
        else:
            self._showMessage("Moved %d events." % movedEventCount)

        Logging.trace("<<")
