# expressionadjuster -- converts expression controller events into
#                       volume controller events
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

from basemodules.simplelogging import Logging
from basemodules.simpletypes import Object, String, StringList

from .midiadjuster import MidiAdjuster
from .midisequence import MidiController, MidiSequence

#====================

class ExpressionAdjuster (MidiAdjuster):
    """Turns every expression event into a volume event with the same
       channel, tick and value.  Usage: -e"""

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    def parseParameters (self,
                         flag : String,
                         argumentList : StringList) -> Object:
        """Checks that there are no parameters in <argumentList>"""

        self._checkParameterCount(flag, argumentList, 0, 0)
        return None

    #--------------------

    def apply (self,
               parameters : Object,
               sequence : MidiSequence):
        """Converts the expression events in all tracks of <sequence>"""

        Logging.trace(">>")

        channelSet = set()

        for track in sequence.trackList():
            for event in track:
                if self.eventMatches(event, MidiController.expression):
                    message = event.message
                    message.data1 = MidiController.volume
                    channelSet.add(message.channel)
                    self._verboseLog("Changed expression of %d to volume"
                                     " at tick %d"
                                     % (message.data2, event.tick),
                                     message.channel)

        if len(channelSet) == 0:
            self._showMessage("Did not find any expression events.")
        else:
            self._showChannelListMessage(channelSet, "Channels adjusted")

        Logging.trace("<<")
