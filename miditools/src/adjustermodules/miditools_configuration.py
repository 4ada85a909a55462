# miditools_configuration -- the settings threaded into all MIDI
#                            adjusters, optionally read from a
#                            configuration file
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

import dataclasses
from dataclasses import dataclass

from basemodules.configurationfile import ConfigurationFile
from basemodules.simplelogging import Logging
from basemodules.simpletypes import Boolean, Natural, Object, Real, \
                                    String
from basemodules.ttbase import isInRange
from basemodules.validitychecker import ValidityChecker

from .miditoolserrors import ArgumentError

#====================

# the ways of handling adjusted values outside of their domain
valueOverflowPolicyList = ("none", "clamp", "wrap", "error")

#====================

@dataclass(frozen=True)
class MidiToolsConfiguration:
    """Represents the settings of a run of the MIDI tools: the verbosity
       of the console output and the default parameters of all
       adjusters."""

    verboseLoggingIsActive : Boolean = False
    defaultPitchBendRange  : Real    = 2.0
    desiredPitchBendRange  : Natural = 12
    vibratoRange           : Real    = 5.0
    reverbRange            : Real    = 26.0
    cleanUpTolerance       : Natural = 10
    cleanUpTickGap         : Natural = 240
    notePitchBendRange     : Real    = 12.0
    valueOverflowPolicy    : String  = "none"
    outputFileSuffix       : String  = "out"

    #--------------------
    # LOCAL FEATURES
    #--------------------

    @classmethod
    def _adaptedFileValue (cls,
                           key : String,
                           value : Object,
                           fieldType : Object) -> Object:
        """Returns configuration file <value> for <key> converted to
           <fieldType>; raises an argument error when this is not
           possible"""

        Logging.trace(">>: %s = %r", key, value)

        if fieldType is Real and isinstance(value, (int, float)) \
           and not isinstance(value, bool):
            result = float(value)
        elif fieldType is Natural and isinstance(value, int) \
             and not isinstance(value, bool):
            result = value
        elif fieldType is Boolean and isinstance(value, bool):
            result = value
        elif fieldType is String:
            result = str(value)
        else:
            raise ArgumentError("bad value for %s in configuration file: %r"
                                % (key, value))

        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def __post_init__ (self):
        """Checks that all settings lie in their domains"""

        Logging.trace(">>: %r", self)

        checkList = (
            (self.defaultPitchBendRange > 0,
             "defaultPitchBendRange must be positive"),
            (isInRange(self.desiredPitchBendRange, 1, 127),
             "desiredPitchBendRange must be in 1..127"),
            (isInRange(self.vibratoRange, 0, 127),
             "vibratoRange must be in 0..127"),
            (isInRange(self.reverbRange, 0, 127),
             "reverbRange must be in 0..127"),
            (self.cleanUpTolerance >= 0,
             "cleanUpTolerance must be non-negative"),
            (self.cleanUpTickGap > 0,
             "cleanUpTickGap must be positive"),
            (self.notePitchBendRange > 0,
             "notePitchBendRange must be positive"),
            (self.outputFileSuffix > "",
             "outputFileSuffix must not be empty"))

        for condition, message in checkList:
            if not ValidityChecker.isValid(condition, message):
                raise ArgumentError(message)

        if not ValidityChecker.isOneOf(self.valueOverflowPolicy,
                                       "valueOverflowPolicy",
                                       valueOverflowPolicyList):
            raise ArgumentError("valueOverflowPolicy must be one of %s"
                                % ", ".join(valueOverflowPolicyList))

        Logging.trace("<<")

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    @classmethod
    def fromFile (cls,
                  fileName : String) -> Object:
        """Returns a configuration with the defaults overridden by the
           settings in configuration file <fileName>; unknown keys are
           ignored"""

        Logging.trace(">>: %r", fileName)

        if not ValidityChecker.isReadableFile(fileName,
                                              "configuration file"):
            raise ArgumentError("cannot read configuration file %r"
                                % fileName)

        try:
            configurationFile = ConfigurationFile(fileName)
        except UnicodeDecodeError as exception:
            raise ArgumentError("configuration file %r is not UTF-8 - %s"
                                % (fileName, exception))

        fieldNameToTypeMap = { field.name : field.type
                               for field in dataclasses.fields(cls) }
        keyToValueMap = {}

        for key in sorted(configurationFile.keySet()):
            if key not in fieldNameToTypeMap:
                Logging.trace("--: unknown key %r ignored", key)
            else:
                value = configurationFile.value(key)
                keyToValueMap[key] = \
                    cls._adaptedFileValue(key, value,
                                          fieldNameToTypeMap[key])

        result = cls(**keyToValueMap)
        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def withOverrides (self,
                       **keyToValueMap) -> Object:
        """Returns a copy of <self> where all non-None entries of
           <keyToValueMap> replace the current settings"""

        Logging.trace(">>: %r", keyToValueMap)

        effectiveMap = { key : value
                         for key, value in keyToValueMap.items()
                         if value is not None }
        result = dataclasses.replace(self, **effectiveMap)

        Logging.trace("<<: %r", result)
        return result
