# midisequence -- the in-memory representation of a MIDI file as a
#                 sequence of tracks with timed events
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

from basemodules.simpleassertion import Assertion
from basemodules.simplelogging import Logging
from basemodules.simpletypes import Boolean, Integer, List, Natural, \
                                    Object, String, Tuple
from basemodules.ttbase import iif

#====================

# the pitch bend value meaning "no bend"
pitchBendCenter = 8192

# the largest 14 bit pitch bend value
pitchBendMaximum = 16383

# the largest value of a 7 bit data byte
dataByteMaximum = 127

#--------------------

def pitchBendValue (data1 : Natural, data2 : Natural) -> Integer:
    """Returns the 14 bit pitch bend value for least significant part
       <data1> and most significant part <data2>"""

    return data1 + data2 * 128

#--------------------

def splitPitchBendValue (value : Integer) -> Tuple:
    """Splits pitch bend <value> into the pair of data bytes (least
       significant part first)"""

    data2, data1 = divmod(value, 128)
    return (data1, data2)

#====================

class MidiCommand:
    """Enumeration of the channel message kinds (status byte without
       channel)"""

    noteOff         = 0x80
    noteOn          = 0x90
    polyPressure    = 0xA0
    controlChange   = 0xB0
    programChange   = 0xC0
    channelPressure = 0xD0
    pitchBend       = 0xE0

    _commandToNameMap = { noteOff: "Off", noteOn: "On",
                          polyPressure: "PolyPress", controlChange: "Par",
                          programChange: "PrCh", channelPressure: "ChanPress",
                          pitchBend: "PitchWhl" }

    #--------------------

    @classmethod
    def dataByteCount (cls,
                       command : Natural) -> Natural:
        """Returns the number of data bytes of a message with
           <command>"""

        return iif(command in (cls.programChange, cls.channelPressure),
                   1, 2)

    #--------------------

    @classmethod
    def isValid (cls,
                 command : Natural) -> Boolean:
        """Tells whether <command> is a channel message kind"""

        return command in cls._commandToNameMap

    #--------------------

    @classmethod
    def name (cls,
              command : Natural) -> String:
        """Returns short name of <command>"""

        return cls._commandToNameMap.get(command, "???")

#====================

class MidiController:
    """Enumeration of the controller numbers used by the adjusters"""

    modulation           = 1
    dataEntryMsb         = 6
    volume               = 7
    expression           = 11
    dataEntryLsb         = 38
    vibratoDepth         = 77
    reverbSend           = 91
    registeredParameterLsb = 100
    registeredParameterMsb = 101

#====================

class ChannelMessage:
    """A short channel voice message with a command, a channel (0-15)
       and up to two data bytes; messages with a single data byte have
       <data2> set to 0."""

    def __init__ (self,
                  command : Natural,
                  channel : Natural,
                  data1 : Integer,
                  data2 : Integer = 0):
        self.command = command
        self.channel = channel
        self.data1   = data1
        self.data2   = data2

    #--------------------

    def __repr__ (self) -> String:
        st = "ChannelMessage(%s, ch=%d, %d, %d)"
        return st % (MidiCommand.name(self.command), self.channel,
                     self.data1, self.data2)

    #--------------------

    def __eq__ (self, other : Object) -> Boolean:
        return (isinstance(other, ChannelMessage)
                and self.command == other.command
                and self.channel == other.channel
                and self.data1 == other.data1
                and (self.data2 == other.data2
                     or MidiCommand.dataByteCount(self.command) == 1))

    #--------------------

    def copy (self) -> Object:
        """Returns an independent copy of <self>"""

        return ChannelMessage(self.command, self.channel,
                              self.data1, self.data2)

    #--------------------

    def isControlChange (self,
                         controllerNumber : Integer = None) -> Boolean:
        """Tells whether <self> is a control change (for
           <controllerNumber> when given)"""

        return (self.command == MidiCommand.controlChange
                and (controllerNumber is None
                     or self.data1 == controllerNumber))

    #--------------------

    def isNoteOn (self) -> Boolean:
        """Tells whether <self> is a note on message"""

        return self.command == MidiCommand.noteOn

    #--------------------

    def isPitchBend (self) -> Boolean:
        """Tells whether <self> is a pitch bend message"""

        return self.command == MidiCommand.pitchBend

    #--------------------

    def isProgramChange (self) -> Boolean:
        """Tells whether <self> is a program change message"""

        return self.command == MidiCommand.programChange

    #--------------------

    def value (self) -> Integer:
        """Returns the effective value of <self>: the 14 bit value for
           a pitch bend, the second data byte otherwise"""

        return iif(self.isPitchBend(),
                   pitchBendValue(self.data1, self.data2), self.data2)

    #--------------------

    def setValue (self,
                  value : Integer):
        """Sets the effective value of <self> to <value> (splitting it
           up for a pitch bend)"""

        if self.isPitchBend():
            self.data1, self.data2 = splitPitchBendValue(value)
        else:
            self.data2 = value

#====================

class RawMessage:
    """A message not interpreted by the adjusters (meta or system
       exclusive event); <metaType> is None for a system exclusive
       message and <data> holds the payload bytes."""

    _trackEndMetaType = 0x2F

    def __init__ (self,
                  statusByte : Natural,
                  metaType : Natural,
                  data : bytes):
        self.statusByte = statusByte
        self.metaType   = metaType
        self.data       = bytes(data)

    #--------------------

    def __repr__ (self) -> String:
        return ("RawMessage(%02X, %r, %s)"
                % (self.statusByte, self.metaType, self.data.hex()))

    #--------------------

    def __eq__ (self, other : Object) -> Boolean:
        return (isinstance(other, RawMessage)
                and self.statusByte == other.statusByte
                and self.metaType == other.metaType
                and self.data == other.data)

    #--------------------

    @classmethod
    def makeTrackEnd (cls) -> Object:
        """Returns a new end of track meta message"""

        return RawMessage(0xFF, cls._trackEndMetaType, b"")

    #--------------------

    def isTrackEnd (self) -> Boolean:
        """Tells whether <self> is the end of track meta message"""

        return (self.statusByte == 0xFF
                and self.metaType == self._trackEndMetaType)

#====================

class TimedEvent:
    """A message at some absolute time (in ticks)"""

    def __init__ (self,
                  tick : Natural,
                  message : Object):
        self.tick    = tick
        self.message = message

    #--------------------

    def __repr__ (self) -> String:
        return "TimedEvent(%d, %r)" % (self.tick, self.message)

    #--------------------

    def channelMessage (self) -> ChannelMessage:
        """Returns message of <self> when it is a channel message,
           otherwise None"""

        return iif(isinstance(self.message, ChannelMessage),
                   self.message, None)

    #--------------------

    def isTrackEnd (self) -> Boolean:
        """Tells whether <self> carries the end of track meta
           message"""

        return (isinstance(self.message, RawMessage)
                and self.message.isTrackEnd())

#====================

class MidiTrack:
    """An ordered list of timed events with non-decreasing ticks; an
       end of track event (if any) is always kept as the last
       event."""

    def __init__ (self,
                  eventList : List = None):
        self._eventList = []

        for event in (eventList or []):
            self.add(event)

    #--------------------

    def __repr__ (self) -> String:
        return "MidiTrack(%d events)" % len(self._eventList)

    #--------------------

    def __getitem__ (self, index : Integer) -> TimedEvent:
        return self._eventList[index]

    #--------------------

    def __iter__ (self):
        return iter(self._eventList)

    #--------------------

    def __len__ (self) -> Natural:
        return len(self._eventList)

    #--------------------

    def add (self,
             event : TimedEvent):
        """Inserts <event> after all events with a tick less or equal
           to its tick, but before a final end of track event; the end
           of track event is moved when <event> is later"""

        Assertion.pre(event.tick >= 0, "negative tick in %r" % event)

        eventList = self._eventList
        position = len(eventList)

        while position > 0 and eventList[position - 1].tick > event.tick:
            position -= 1

        if (position == len(eventList) and position > 0
            and eventList[-1].isTrackEnd() and not event.isTrackEnd()):
            position -= 1
            eventList[-1].tick = max(eventList[-1].tick, event.tick)

        eventList.insert(position, event)

    #--------------------

    def removeAll (self,
                   eventList : List) -> Natural:
        """Removes all events in <eventList> (compared by identity)
           from <self> and returns the number of events removed"""

        eventIdentitySet = set(id(event) for event in eventList)
        originalLength = len(self._eventList)
        self._eventList = [ event for event in self._eventList
                            if id(event) not in eventIdentitySet ]
        return originalLength - len(self._eventList)

#====================

class MidiSequence:
    """A list of tracks together with the time division (ticks per
       quarter note) of a MIDI file"""

    def __init__ (self,
                  timeDivision : Natural,
                  trackList : List = None):
        self._timeDivision = timeDivision
        self._trackList = list(trackList or [])

    #--------------------

    def __repr__ (self) -> String:
        return ("MidiSequence(division = %d, %d tracks)"
                % (self._timeDivision, len(self._trackList)))

    #--------------------

    def addTrack (self,
                  track : MidiTrack):
        """Appends <track> to <self>"""

        self._trackList.append(track)

    #--------------------

    def timeDivision (self) -> Natural:
        """Returns the time division of <self>"""

        return self._timeDivision

    #--------------------

    def trackList (self) -> List:
        """Returns the tracks of <self>"""

        return self._trackList

#====================

class TrackChangeBuffer:
    """Collects insertions and deletions for a single track while the
       track is scanned; the changes are only applied to the track
       after the scan is complete."""

    def __init__ (self,
                  track : MidiTrack):
        self._track = track
        self._insertionList = []
        self._deletionList = []

    #--------------------

    def __repr__ (self) -> String:
        return ("TrackChangeBuffer(+%d, -%d)"
                % (len(self._insertionList), len(self._deletionList)))

    #--------------------

    def applyDeletions (self) -> Natural:
        """Removes all scheduled deletions from the track and returns
           the number of events removed"""

        result = self._track.removeAll(self._deletionList)
        Assertion.post(result == len(self._deletionList),
                       "some events scheduled for deletion are not in"
                       " the track")
        Logging.trace("--: deleted %d events", result)
        self._deletionList = []
        return result

    #--------------------

    def applyInsertions (self) -> Natural:
        """Adds all scheduled insertions to the track in scheduling
           order and returns their number"""

        result = len(self._insertionList)

        for event in self._insertionList:
            self._track.add(event)

        Logging.trace("--: inserted %d events", result)
        self._insertionList = []
        return result

    #--------------------

    def apply (self):
        """Applies all deletions and then all insertions"""

        self.applyDeletions()
        self.applyInsertions()

    #--------------------

    def discardDeletions (self):
        """Forgets all scheduled deletions"""

        self._deletionList = []

    #--------------------

    def scheduleDeletion (self,
                          event : TimedEvent):
        """Marks <event> for deletion from the track"""

        self._deletionList.append(event)

    #--------------------

    def scheduleInsertion (self,
                           event : TimedEvent):
        """Marks <event> for insertion into the track"""

        self._insertionList.append(event)
