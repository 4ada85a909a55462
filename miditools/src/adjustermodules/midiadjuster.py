# midiadjuster -- the common base of all MIDI adjusters providing
#                 parameter parsing, event matching and console
#                 reporting
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

from basemodules.operatingsystem import OperatingSystem
from basemodules.simplelogging import Logging
from basemodules.simpletypes import Boolean, Integer, Natural, Object, \
                                    Real, String, StringList
from basemodules.ttbase import iif
from basemodules.validitychecker import ValidityChecker

from .midisequence import ChannelMessage, MidiCommand, TimedEvent
from .miditools_configuration import MidiToolsConfiguration
from .miditoolserrors import ArgumentError

#====================

# the event selector meaning "all pitch bend events"
pitchBendMarker = "pitch-bend"

# the event selector meaning "all program change events"
programChangeMarker = "program-change"

#====================

class MidiAdjuster:
    """Common base class of all adjusters.  An adjuster is created for
       a configuration, converts the command line parameters of its
       flag into a parameter object (<parseParameters>) and then
       changes a midi sequence in place according to those parameters
       (<apply>)."""

    _rangeKindToArticleMap = { ""    : "an",
                               ">0"  : "a positive",
                               ">=0" : "a non-negative" }

    #--------------------
    # LOCAL FEATURES
    #--------------------

    def _checkParameterCount (self,
                              flag : String,
                              argumentList : StringList,
                              minimumCount : Natural,
                              maximumCount : Natural):
        """Raises an argument error when the length of <argumentList>
           for <flag> is not within <minimumCount> and
           <maximumCount>"""

        count = len(argumentList)
        expectation = iif(minimumCount == maximumCount,
                          "%d" % minimumCount,
                          "%d-%d" % (minimumCount, maximumCount))
        isOkay = ValidityChecker.isValid(minimumCount <= count <= maximumCount,
                                         "bad parameter count for %s: %d"
                                         % (flag, count))

        if not isOkay:
            raise ArgumentError("incorrect number of parameters passed"
                                + " to %s (expected %s)"
                                % (flag, expectation))

    #--------------------

    def _parseEventSelector (self,
                             flag : String,
                             st : String,
                             allowedMarkerList : StringList) -> Object:
        """Converts <st> into an event selector for <flag>: either a
           controller number or one of the markers in
           <allowedMarkerList>"""

        Logging.trace(">>: flag = %s, st = %r", flag, st)

        if st in allowedMarkerList:
            result = st
        else:
            result = self._parseInteger(flag, st, "event number", ">=0")

            if not ValidityChecker.isValid(result <= 127,
                                           "event number out of range"):
                raise ArgumentError("event number for %s must be in"
                                    " 0..127 - %r" % (flag, st))

        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def _parseInteger (self,
                       flag : String,
                       st : String,
                       valueName : String,
                       rangeKind : String = "") -> Integer:
        """Converts <st> into an integer named <valueName> for <flag>
           with optional <rangeKind>; raises an argument error on
           failure"""

        cls = self.__class__

        if not ValidityChecker.isNumberString(st, valueName, False,
                                              rangeKind):
            raise ArgumentError("%s for %s must be %s integer - %r"
                                % (valueName, flag,
                                   cls._rangeKindToArticleMap[rangeKind],
                                   st))

        return int(st)

    #--------------------

    def _parseReal (self,
                    flag : String,
                    st : String,
                    valueName : String,
                    rangeKind : String = "") -> Real:
        """Converts <st> into a real named <valueName> for <flag> with
           optional <rangeKind>; raises an argument error on failure"""

        cls = self.__class__

        if not ValidityChecker.isNumberString(st, valueName, True,
                                              rangeKind):
            raise ArgumentError("%s for %s must be %s number - %r"
                                % (valueName, flag,
                                   cls._rangeKindToArticleMap[rangeKind],
                                   st))

        return float(st)

    #--------------------

    def _showChannelListMessage (self,
                                 channelSet : Object,
                                 messagePrefix : String):
        """Shows the (zero-based) channels in <channelSet> one-based on
           the console prefixed by <messagePrefix>; nothing is shown for
           an empty set"""

        if len(channelSet) > 0:
            channelString = ", ".join([ "%d" % (channel + 1)
                                        for channel in sorted(channelSet) ])
            self._showMessage("%s: %s" % (messagePrefix, channelString))

    #--------------------

    def _showMessage (self,
                      message : String):
        """Shows <message> as a summary line on the console"""

        Logging.trace("--: %s", message)
        OperatingSystem.showMessageOnConsole(message)

    #--------------------

    def _verboseLog (self,
                     message : String,
                     channel : Natural):
        """Shows <message> for zero-based <channel> on the console when
           verbose logging is active"""

        Logging.trace("--: channel %d - %s", channel, message)

        if self._configuration.verboseLoggingIsActive:
            OperatingSystem.showMessageOnConsole("Channel %d: %s"
                                                 % (channel + 1, message))

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    @classmethod
    def eventMatches (cls,
                      event : TimedEvent,
                      eventSelector : Object) -> Boolean:
        """Tells whether <event> carries a channel message selected by
           <eventSelector> (a controller number or a marker)"""

        message = event.channelMessage()

        if message is None:
            result = False
        elif eventSelector == pitchBendMarker:
            result = message.isPitchBend()
        elif eventSelector == programChangeMarker:
            result = message.isProgramChange()
        else:
            result = message.isControlChange(eventSelector)

        return result

    #--------------------

    @classmethod
    def makeControlChangeEvent (cls,
                                tick : Natural,
                                channel : Natural,
                                controllerNumber : Natural,
                                value : Integer) -> TimedEvent:
        """Returns a new control change event at <tick>"""

        message = ChannelMessage(MidiCommand.controlChange, channel,
                                 controllerNumber, value)
        return TimedEvent(tick, message)

    #--------------------

    def __init__ (self,
                  configuration : MidiToolsConfiguration):
        """Initializes adjuster for <configuration>"""

        self._configuration = configuration

    #--------------------

    def __repr__ (self) -> String:
        return "%s()" % self.__class__.__name__

    #--------------------

    def parseParameters (self,
                         flag : String,
                         argumentList : StringList) -> Object:
        """Converts the command line parameters in <argumentList>
           following <flag> into a parameter object; raises an argument
           error when they are malformed"""

        raise NotImplementedError

    #--------------------

    def apply (self,
               parameters : Object,
               sequence : Object):
        """Changes <sequence> in place according to <parameters>"""

        raise NotImplementedError
