# miditoolserrors -- the exceptions raised by the MIDI tools
#
# author: MidiTools contributors, 2024

#====================

class MidiToolsError (Exception):
    """Base class of all errors detected by the MIDI tools."""

    pass

#--------------------

class ArgumentError (MidiToolsError):
    """Malformed transformation flag, missing or non-numeric
       parameter."""

    pass

#--------------------

class CodecError (MidiToolsError):
    """A MIDI file cannot be read or written."""

    pass

#--------------------

class ParseError (CodecError):
    """The bytes of a MIDI file do not form a valid standard MIDI
       file."""

    pass

#--------------------

class EncodeError (CodecError):
    """A sequence contains data that cannot be represented in a
       standard MIDI file (e.g. data bytes outside of 0..127)."""

    pass

#--------------------

class RangeArithmeticError (MidiToolsError):
    """A computed pitch bend value lies outside of the 14 bit
       domain."""

    pass

#--------------------

class ValueDomainError (MidiToolsError):
    """An adjusted event value lies outside of its domain and the
       overflow policy asks for rejection."""

    pass
