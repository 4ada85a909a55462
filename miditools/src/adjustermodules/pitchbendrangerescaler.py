# pitchbendrangerescaler -- rescales the pitch bends of all tracks to a
#                           canonical pitch bend range and fixes the
#                           range declarations
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

from dataclasses import dataclass
from fractions import Fraction

from basemodules.simpleassertion import Assertion
from basemodules.simplelogging import Logging
from basemodules.simpletypes import Natural, Object, Real, String, \
                                    StringList
from basemodules.ttbase import iif, isInRange

from .midiadjuster import MidiAdjuster
from .midisequence import MidiController, MidiSequence, MidiTrack, \
                          TrackChangeBuffer, pitchBendCenter, \
                          pitchBendMaximum
from .miditoolserrors import RangeArithmeticError

#====================

@dataclass(frozen=True)
class PitchBendRescaleParameters:
    """The pitch bend range assumed for tracks without a usable range
       declaration and the range all tracks are rescaled to"""

    defaultPitchBendRange : Real
    desiredPitchBendRange : Natural

#====================

class PitchBendRangeRescaler (MidiAdjuster):
    """Rescales all pitch bends such that they sound the same with the
       desired pitch bend range and replaces the registered parameter
       events declaring the range.  Usage: -p [defaultRange]"""

    # the controllers setting the pitch bend range via a registered
    # parameter
    _rangeDeclarationControllerList = \
        (MidiController.registeredParameterMsb,
         MidiController.registeredParameterLsb,
         MidiController.dataEntryMsb,
         MidiController.dataEntryLsb)

    #--------------------
    # LOCAL FEATURES
    #--------------------

    def _bendFactor (self,
                     track : MidiTrack,
                     parameters : PitchBendRescaleParameters,
                     messageList : StringList) -> Fraction:
        """Returns factor for rescaling the pitch bends in <track>
           depending on its first range declaration or None when the
           track already has the desired range; adds a console message
           to <messageList> when a declaration is found"""

        Logging.trace(">>: %r", track)

        desiredRange = parameters.desiredPitchBendRange
        defaultFactor = (Fraction(desiredRange)
                         / Fraction(parameters.defaultPitchBendRange))
        result = defaultFactor

        for event in track:
            if self.eventMatches(event, MidiController.dataEntryMsb):
                message = event.message
                declaredRange = message.data2

                if declaredRange == desiredRange:
                    result = None
                else:
                    if 0 < declaredRange <= desiredRange:
                        result = Fraction(desiredRange, declaredRange)

                    st = ("Channel %d: Adjusted pitch bend range from %d"
                          + " to %d which is a factor of %s")
                    messageList.append(st % (message.channel + 1,
                                             declaredRange, desiredRange,
                                             "%.4g" % round(float(result),
                                                            2)))

                break

        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def _replaceRangeDeclaration (self,
                                  track : MidiTrack,
                                  channel : Natural,
                                  desiredRange : Natural,
                                  messageList : StringList):
        """Deletes all range declaration events in <track> and inserts
           a declaration of <desiredRange> for <channel> at the start of
           the track"""

        Logging.trace(">>: channel = %d, range = %d", channel, desiredRange)

        cls = self.__class__
        changeBuffer = TrackChangeBuffer(track)

        for event in track:
            message = event.channelMessage()

            if (message is not None and message.isControlChange()
                and message.data1 in cls._rangeDeclarationControllerList):
                changeBuffer.scheduleDeletion(event)

        # the parameter selection must precede the value
        for controllerNumber in cls._rangeDeclarationControllerList:
            value = iif(controllerNumber == MidiController.dataEntryMsb,
                        desiredRange, 0)
            changeBuffer.scheduleInsertion(
                self.makeControlChangeEvent(0, channel, controllerNumber,
                                            value))

        changeBuffer.apply()
        messageList.append("Channel %d: Created new pitch bend range"
                           " with a value of %d"
                           % (channel + 1, desiredRange))

        Logging.trace("<<")

    #--------------------

    def _rescaleTrack (self,
                       track : MidiTrack,
                       factor : Fraction,
                       channelSet : Object) -> Natural:
        """Rescales all pitch bends in <track> by dividing their
           deviation from the center by <factor>; returns the channel
           of the first bend not ending up at the center (or None) and
           adds all such channels to <channelSet>"""

        Logging.trace(">>: factor = %s", factor)

        result = None

        for event in track:
            message = event.channelMessage()

            if message is None or not message.isPitchBend():
                continue

            value = message.value()
            newValue = int(Fraction(value - pitchBendCenter) / factor)
            newValue += pitchBendCenter
            Assertion.check(isInRange(newValue, 0, pitchBendMaximum),
                            ("rescaled pitch bend value %d at tick %d"
                             + " is out of range (factor %s)")
                            % (newValue, event.tick, factor),
                            RangeArithmeticError)
            message.setValue(newValue)

            if newValue != pitchBendCenter:
                self._verboseLog("Adjusting pitch bend value %d to be %d"
                                 % (value, newValue),
                                 message.channel)
                channelSet.add(message.channel)

                if result is None:
                    result = message.channel

        Logging.trace("<<: %r", result)
        return result

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    def parseParameters (self,
                         flag : String,
                         argumentList : StringList) \
                         -> PitchBendRescaleParameters:
        """Reads the optional default pitch bend range from
           <argumentList>"""

        Logging.trace(">>: %r", argumentList)

        configuration = self._configuration
        self._checkParameterCount(flag, argumentList, 0, 1)

        if len(argumentList) == 0:
            defaultRange = configuration.defaultPitchBendRange
        else:
            defaultRange = self._parseReal(flag, argumentList[0],
                                           "default pitch bend range",
                                           ">0")

        result = PitchBendRescaleParameters(
                     defaultRange, configuration.desiredPitchBendRange)
        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def apply (self,
               parameters : PitchBendRescaleParameters,
               sequence : MidiSequence):
        """Rescales the pitch bends in all tracks of <sequence> to the
           desired range"""

        Logging.trace(">>: %r", parameters)

        messageList = []
        channelSet = set()

        for track in sequence.trackList():
            factor = self._bendFactor(track, parameters, messageList)

            if factor is None or factor == 1:
                Logging.trace("--: track %r needs no rescaling", track)
                continue

            firstChannel = self._rescaleTrack(track, factor, channelSet)

            if firstChannel is not None:
                self._replaceRangeDeclaration(
                    track, firstChannel, parameters.desiredPitchBendRange,
                    messageList)

        for message in messageList:
            self._showMessage(message)

        if len(channelSet) == 0:
            self._showMessage("Did not find any pitch bends to adjust.")
        else:
            self._showChannelListMessage(channelSet, "Channels adjusted")

        Logging.trace("<<")
