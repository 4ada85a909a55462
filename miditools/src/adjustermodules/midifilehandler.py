# midifilehandler -- converts the bytes of a standard midi file into a
#                    midi sequence and writes a midi sequence back into
#                    bytes
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

from basemodules.simpleassertion import Assertion
from basemodules.simplelogging import Logging
from basemodules.simpletypes import IntegerList, Natural, String, Tuple
from basemodules.ttbase import intListToHex, isInRange

from .midisequence import ChannelMessage, MidiCommand, MidiSequence, \
                          MidiTrack, RawMessage, TimedEvent, \
                          dataByteMaximum
from .miditoolserrors import CodecError, EncodeError, ParseError

#====================

class MidiFileHandler:
    """This module provides two pairs of functions:
       - to decode the bytes of a midi file into a midi sequence and
         to encode a midi sequence into bytes and
       - to read a midi file into a midi sequence and to write a midi
         sequence to a midi file.

       Channel messages become channel messages in the sequence,
       meta and system exclusive events are kept as raw messages and
       written back unchanged."""

    #--------------------
    # LOCAL FEATURES
    #--------------------

    _fileHead  = "MThd"
    _trackHead = "MTrk"
    _headerLength = 6

    _metaEventByte       = 0xFF
    _sysExStartByte      = 0xF0
    _sysExContinueByte   = 0xF7

    #--------------------
    #--------------------

    def _appendToByteList (self,
                           intList : IntegerList):
        """Appends integer list <intList> to internal byte list and
           traces operation"""

        Logging.trace("--: %d -> %s",
                      len(self._byteList), intListToHex(intList))
        self._byteList.extend(intList)

    #--------------------

    def _checkAvailable (self,
                         count : Natural):
        """Checks that <count> bytes can still be read at the current
           position"""

        Assertion.check(self._position + count <= len(self._byteList),
                        ("bad MIDI format: unexpected end of data"
                         + " at position %d") % self._position,
                        ParseError)

    #--------------------

    def _readChannelMessage (self,
                             statusByte : Natural) -> ChannelMessage:
        """Reads the data bytes of a channel message with <statusByte>
           at <self._position> and returns the message"""

        command = statusByte & 0xF0
        channel = statusByte & 0x0F
        dataByteList = [ self._readIntBytes(1)
                         for _ in range(MidiCommand.dataByteCount(command)) ]

        for dataByte in dataByteList:
            Assertion.check(dataByte <= dataByteMaximum,
                            ("bad MIDI format: data byte %02X"
                             + " at position %d")
                            % (dataByte, self._position - 1),
                            ParseError)

        dataByteList.append(0)
        return ChannelMessage(command, channel,
                              dataByteList[0], dataByteList[1])

    #--------------------

    def _readIntBytes (self,
                       count : Natural) -> Natural:
        """Reads <count> bytes from <self._byteList> at
           <self._position> and returns them as an integer"""

        self._checkAvailable(count)
        newPosition = self._position + count
        partList = self._byteList[self._position:newPosition]
        self._position = newPosition

        result = 0

        for i in partList:
            result = result * 256 + i

        return result

    #--------------------

    def _readMidiEvent (self,
                        currentTime : Natural) -> TimedEvent:
        """Reads event in midi stream <self._byteList> at
           <self._position> with a delta relative to <currentTime> and
           returns it"""

        Logging.trace(">>: %d", self._position)

        cls = self.__class__
        deltaTime = self._readVariableBytes()
        currentTime += deltaTime

        self._checkAvailable(1)
        eventByte = self._byteList[self._position]

        if eventByte < 0x80:
            # running status: the previous status byte is reused
            Assertion.check(self._runningStatus is not None,
                            ("bad MIDI format: data byte %02X without"
                             + " running status at position %d")
                            % (eventByte, self._position),
                            ParseError)
            message = self._readChannelMessage(self._runningStatus)
        else:
            Assertion.check(eventByte < 0xF0
                            or eventByte in (cls._metaEventByte,
                                             cls._sysExStartByte,
                                             cls._sysExContinueByte),
                            ("bad MIDI format: unexpected status"
                             + " byte %02X at position %d")
                            % (eventByte, self._position),
                            ParseError)
            self._position += 1

            if eventByte < 0xF0:
                self._runningStatus = eventByte
                message = self._readChannelMessage(eventByte)
            elif eventByte == cls._metaEventByte:
                self._runningStatus = None
                metaType = self._readIntBytes(1)
                length = self._readVariableBytes()
                message = RawMessage(eventByte, metaType,
                                     self._readRawBytes(length))
            else:
                self._runningStatus = None
                length = self._readVariableBytes()
                message = RawMessage(eventByte, None,
                                     self._readRawBytes(length))

        result = TimedEvent(currentTime, message)
        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def _readMidiHeader (self) -> Tuple:
        """Reads header in midi stream <self._byteList> at
           <self._position>; returns format variant, number of tracks
           and time division"""

        Logging.trace(">>: %d", self._position)

        cls = self.__class__

        header       = self._readStringBytes(4)
        Assertion.check(header == cls._fileHead,
                        "midi header chunk expected", ParseError)

        length       = self._readIntBytes(4)
        Assertion.check(length == cls._headerLength,
                        "midi header must have length 6", ParseError)

        fileFormat   = self._readIntBytes(2)
        trackCount   = self._readIntBytes(2)
        timeDivision = self._readIntBytes(2)
        Assertion.check(fileFormat <= 2, "midi format must be 0, 1, or 2",
                        ParseError)

        result = (fileFormat, trackCount, timeDivision)
        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def _readMidiTrack (self) -> MidiTrack:
        """Reads track in midi stream <self._byteList> at
           <self._position> and returns it"""

        Logging.trace(">>: %d", self._position)

        cls = self.__class__

        header = self._readStringBytes(4)
        Assertion.check(header == cls._trackHead,
                        "track header chunk expected", ParseError)
        length = self._readIntBytes(4)
        self._checkAvailable(length)
        chunkEndPosition = self._position + length

        eventList = []
        currentTime = 0
        self._runningStatus = None
        isTrackEnd = False

        while not isTrackEnd and self._position < chunkEndPosition:
            event = self._readMidiEvent(currentTime)
            currentTime = event.tick
            eventList.append(event)
            isTrackEnd = event.isTrackEnd()

        Assertion.check(self._position <= chunkEndPosition,
                        "track data exceeds its chunk length", ParseError)

        # skip any padding after the end of track event
        self._position = chunkEndPosition
        result = MidiTrack()

        for event in eventList:
            result.add(event)

        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def _readRawBytes (self,
                       count : Natural) -> bytes:
        """Reads <count> bytes from <self._byteList> at
           <self._position> and returns them unchanged"""

        self._checkAvailable(count)
        newPosition = self._position + count
        result = bytes(self._byteList[self._position:newPosition])
        self._position = newPosition
        return result

    #--------------------

    def _readStringBytes (self,
                          count : Natural) -> String:
        """Reads <count> bytes from <self._byteList> at
           <self._position> and returns them as a string"""

        result = self._readRawBytes(count).decode("latin-1")
        Logging.trace("--: %r", result)
        return result

    #--------------------

    def _readVariableBytes (self) -> Natural:
        """Reads bytes from <self._byteList> at <self._position> and
           returns them as an integer until top bit is not set"""

        isDone = False
        result = 0
        byteCount = 0

        while not isDone:
            self._checkAvailable(1)
            Assertion.check(byteCount < 4,
                            ("bad MIDI format: variable length quantity"
                             + " too long at position %d") % self._position,
                            ParseError)
            part = self._byteList[self._position]
            self._position += 1
            byteCount += 1
            isDone = (part < 128)
            part = part & 127
            result = result * 128 + part

        return result

    #--------------------

    def _writeChannelMessage (self,
                              message : ChannelMessage):
        """Writes channel <message> with an explicit status byte and
           appends it to <self._byteList>"""

        command = message.command
        Assertion.check(MidiCommand.isValid(command),
                        "unknown channel message command %r" % command,
                        EncodeError)
        Assertion.check(isInRange(message.channel, 0, 15),
                        "channel %r out of range in %r"
                        % (message.channel, message),
                        EncodeError)

        dataByteList = [message.data1, message.data2]
        dataByteList = dataByteList[:MidiCommand.dataByteCount(command)]

        for dataByte in dataByteList:
            Assertion.check(isInRange(dataByte, 0, dataByteMaximum),
                            "data byte %r out of range in %r"
                            % (dataByte, message),
                            EncodeError)

        self._appendToByteList([command | message.channel] + dataByteList)

    #--------------------

    def _writeIntBytes (self,
                        value : Natural,
                        count : Natural):
        """Writes integer <value> as <count> bytes and appends to
           <self._byteList>"""

        partList = []

        for _ in range(count):
            value, currentByte = divmod(value, 256)
            partList.insert(0, currentByte)

        self._appendToByteList(partList)

    #--------------------

    def _writeMidiEvent (self,
                         event : TimedEvent,
                         currentTime : Natural):
        """Converts <event> to midi stream with a delta relative to
           <currentTime> and appends it to <self._byteList>"""

        Logging.trace(">>: %r", event)

        cls = self.__class__
        Assertion.check(isinstance(event.tick, int) and event.tick >= 0,
                        "negative or non integer tick in %r" % event,
                        EncodeError)
        Assertion.check(event.tick >= currentTime,
                        "absolute time in track must be ascending: %r"
                        % event,
                        EncodeError)

        self._writeVariableBytes(event.tick - currentTime)
        message = event.message

        if isinstance(message, ChannelMessage):
            self._writeChannelMessage(message)
        else:
            Assertion.check(isinstance(message, RawMessage),
                            "unknown message %r" % message, EncodeError)
            self._appendToByteList([message.statusByte])

            if message.statusByte == cls._metaEventByte:
                self._appendToByteList([message.metaType])

            self._writeVariableBytes(len(message.data))
            self._appendToByteList(list(message.data))

        Logging.trace("<<")

    #--------------------

    def _writeMidiHeader (self,
                          formatVariant : Natural,
                          trackCount : Natural,
                          timeDivision : Natural):
        """Writes midi header for <formatVariant>, <trackCount> and
           <timeDivision> and appends it to <self._byteList>"""

        Logging.trace(">>: format = %r, trackCount = %d,"
                      + " division = %r",
                      formatVariant, trackCount, timeDivision)

        cls = self.__class__
        Assertion.check(formatVariant in (0, 1, 2),
                        "midi format must be 0, 1, or 2", EncodeError)
        Assertion.check(isInRange(timeDivision, 1, 0xFFFF),
                        "bad time division %r" % timeDivision,
                        EncodeError)

        self._writeStringBytes(cls._fileHead)
        self._writeIntBytes(cls._headerLength, 4)
        self._writeIntBytes(formatVariant, 2)
        self._writeIntBytes(trackCount, 2)
        self._writeIntBytes(timeDivision, 2)

        Logging.trace("<<")

    #--------------------

    def _writeMidiTrack (self,
                         track : MidiTrack):
        """Converts <track> to midi stream and appends to
           <self._byteList>"""

        Logging.trace(">>: %r", track)

        cls = self.__class__
        self._writeStringBytes(cls._trackHead)

        # keep current position for later length insertion
        chunkLengthPosition = len(self._byteList)

        currentTime = 0

        for event in track:
            self._writeMidiEvent(event, currentTime)
            currentTime = event.tick

        # insert length indication
        Logging.trace("--: breaking up at %d", chunkLengthPosition)
        trackData      = self._byteList[chunkLengthPosition:]
        self._byteList = self._byteList[:chunkLengthPosition]
        self._writeIntBytes(len(trackData), 4)
        self._byteList += trackData

        Logging.trace("<<")

    #--------------------

    def _writeStringBytes (self,
                           st : String):
        """Writes <st> as bytes and appends to <self._byteList>"""

        self._appendToByteList(list(st.encode("latin-1")))

    #--------------------

    def _writeVariableBytes (self,
                             value : Natural):
        """Writes integer <value> as bytes and appends to
           <self._byteList> using a variable number of bytes"""

        Assertion.check(value < 0x10000000,
                        "value %d too large for a variable length quantity"
                        % value, EncodeError)

        isFirst = True
        isDone = False
        partList = []

        while not isDone:
            value, partialValue = divmod(value, 128)
            partialValue += 0 if isFirst else 128
            partList.insert(0, partialValue)
            isFirst = False
            isDone = (value == 0)

        self._appendToByteList(partList)

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    def __init__ (self):
        """Initializes file handler object"""

        self._position      = None
        self._byteList      = None
        self._runningStatus = None

    #--------------------

    def decode (self,
                byteList : bytes) -> Tuple:
        """Converts midi stream <byteList> into a midi sequence and
           returns it together with the format variant of the file"""

        Logging.trace(">>: %d bytes", len(byteList))

        self._byteList = bytearray(byteList)
        self._position = 0

        formatVariant, trackCount, timeDivision = self._readMidiHeader()
        sequence = MidiSequence(timeDivision)

        for _ in range(trackCount):
            sequence.addTrack(self._readMidiTrack())

        result = (sequence, formatVariant)
        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def encode (self,
                sequence : MidiSequence,
                formatVariant : Natural) -> bytes:
        """Converts <sequence> into a midi stream with <formatVariant>
           and returns it"""

        Logging.trace(">>: %r, format = %r", sequence, formatVariant)

        self._byteList = bytearray()
        trackList = sequence.trackList()
        self._writeMidiHeader(formatVariant, len(trackList),
                              sequence.timeDivision())

        for track in trackList:
            self._writeMidiTrack(track)

        result = bytes(self._byteList)
        Logging.trace("<<: %d bytes", len(result))
        return result

    #--------------------

    def readFile (self,
                  fileName : String) -> Tuple:
        """Reads a midi file and returns the midi sequence and its
           format variant"""

        Logging.trace(">>: %r", fileName)

        try:
            with open(fileName, "rb") as midiFile:
                byteList = midiFile.read()
        except OSError as exception:
            raise CodecError("cannot read %s: %s"
                             % (fileName, exception.strerror)) \
                  from exception

        result = self.decode(byteList)

        Logging.trace("<<")
        return result

    #--------------------

    def writeFile (self,
                   fileName : String,
                   sequence : MidiSequence,
                   formatVariant : Natural):
        """Writes a midi file from <sequence> with <formatVariant>"""

        Logging.trace(">>: %r", fileName)

        byteList = self.encode(sequence, formatVariant)

        try:
            with open(fileName, "wb") as midiFile:
                midiFile.write(byteList)
        except OSError as exception:
            raise CodecError("cannot write %s: %s"
                             % (fileName, exception.strerror)) \
                  from exception

        Logging.trace("<<")
