# valueadjuster -- adds a constant amount to the values of controller
#                  or pitch bend events
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

from dataclasses import dataclass

from basemodules.simpleassertion import Assertion
from basemodules.simplelogging import Logging
from basemodules.simpletypes import Integer, Object, String, StringList
from basemodules.ttbase import adaptToRange, iif, isInRange

from .midiadjuster import MidiAdjuster, pitchBendMarker
from .midisequence import ChannelMessage, MidiSequence, dataByteMaximum, \
                          pitchBendMaximum
from .miditoolserrors import ArgumentError, ValueDomainError

#====================

@dataclass(frozen=True)
class ValueAdjustmentParameters:
    """The events to be adjusted (a controller number or the pitch bend
       marker), the signed amount added and the one-based channel
       restriction (None for all channels)"""

    eventSelector : Object
    amount        : Integer
    channel       : Integer = None

#====================

class ValueAdjuster (MidiAdjuster):
    """Adds a signed amount to all selected events, optionally only on
       a single channel.  Results outside of the value domain are
       handled according to the configured overflow policy.
       Usage: -a|-s <event|pitch-bend> <amount> [channel]"""

    _subtractionFlag = "-s"

    #--------------------
    # LOCAL FEATURES
    #--------------------

    def _adaptedValue (self,
                       value : Integer,
                       message : ChannelMessage,
                       tick : Integer) -> Integer:
        """Returns <value> for <message> at <tick> adapted to the
           message value domain according to the overflow policy"""

        policy = self._configuration.valueOverflowPolicy
        maximumValue = iif(message.isPitchBend(), pitchBendMaximum,
                           dataByteMaximum)

        Assertion.check(policy != "error"
                        or isInRange(value, 0, maximumValue),
                        ("adjusted value %d at tick %d is outside of"
                         + " 0..%d")
                        % (value, tick, maximumValue),
                        ValueDomainError)

        if policy == "none" or policy == "error":
            result = value
        else:
            result = adaptToRange(value, 0, maximumValue,
                                  isCyclic=(policy == "wrap"))

        return result

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    def parseParameters (self,
                         flag : String,
                         argumentList : StringList) \
                         -> ValueAdjustmentParameters:
        """Reads the event selector, the amount and the optional
           channel from <argumentList>; the amount is negated for the
           subtraction flag"""

        Logging.trace(">>: flag = %s, %r", flag, argumentList)

        cls = self.__class__
        self._checkParameterCount(flag, argumentList, 2, 3)
        eventSelector = self._parseEventSelector(flag, argumentList[0],
                                                 [pitchBendMarker])
        amount = self._parseInteger(flag, argumentList[1], "amount")
        amount = iif(flag == cls._subtractionFlag, -amount, amount)
        channel = None

        if len(argumentList) > 2:
            channel = self._parseInteger(flag, argumentList[2], "channel")

            if channel == 0 or channel > 16:
                raise ArgumentError("channel for %s must be in 1..16"
                                    " or negative - %r"
                                    % (flag, argumentList[2]))

            channel = iif(channel < 0, None, channel)

        result = ValueAdjustmentParameters(eventSelector, amount, channel)
        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def apply (self,
               parameters : ValueAdjustmentParameters,
               sequence : MidiSequence):
        """Adds the amount in <parameters> to all selected events in
           all tracks of <sequence>"""

        Logging.trace(">>: %r", parameters)

        eventSelector = parameters.eventSelector
        isPitchBend = (eventSelector == pitchBendMarker)
        eventKindName = iif(isPitchBend, "Pitch Bend event",
                            "Event %s -" % eventSelector)
        channelSet = set()

        for track in sequence.trackList():
            for event in track:
                if not self.eventMatches(event, eventSelector):
                    continue

                message = event.message

                if (parameters.channel is not None
                    and message.channel + 1 != parameters.channel):
                    continue

                oldValue = message.value()
                newValue = self._adaptedValue(oldValue + parameters.amount,
                                              message, event.tick)
                message.setValue(newValue)
                channelSet.add(message.channel)
                self._verboseLog("%s %d -> %d at tick %d"
                                 % (eventKindName, oldValue, newValue,
                                    event.tick),
                                 message.channel)

        eventKindName = iif(isPitchBend, "Pitch Bend events",
                            "Event %s" % eventSelector)
        self._showChannelListMessage(channelSet,
                                     "%s changed by %d on channels"
                                     % (eventKindName, parameters.amount))

        Logging.trace("<<")
