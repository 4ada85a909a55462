# -*- coding: utf-8 -*-
# configurationfile - provides reading from a configuration file containing
#                     comments and assignment to variables
#
# author: MidiTools contributors, 2024

#====================

import io
import re

from basemodules.simplelogging import Logging
from basemodules.simpletypes import Object, String, StringList, \
                                    StringSet
from basemodules.ttbase import iif, missingValue

#====================

class ConfigurationFile:
    """Provides services for reading a configuration file with key -
       value assignments.  The parsing process calculates a map from
       name to value where the values may be booleans, integers,
       reals or strings."""

    _trueBooleanValueNames = ["TRUE", "YES"]
    _validBooleanValueNames = _trueBooleanValueNames + ["FALSE", "NO"]
    _commentMarker = "--"
    _continuationMarker = "\\"
    _doubleQuoteCharacter = '"'
    _realRegExp = re.compile(r"^[+\-]?[0-9]+\.[0-9]*$")
    _integerRegExp = re.compile(r"^[+\-]?[0-9]+$")
    _hexIntegerRegExp = re.compile(r"^0[xX][0-9A-Fa-f]+$")
    _keyValueRegExp = re.compile(r"^(\w+)\s*=\s*(.*)$")

    #--------------------
    # LOCAL FEATURES
    #--------------------

    @classmethod
    def _adaptConfigurationValue (cls, value : String) -> Object:
        """Takes string <value> and constructs either a boolean, a numeric
           value or a sanitized string."""

        Logging.trace(">>: %r", value)
        uppercasedValue = value.upper()

        if uppercasedValue in cls._validBooleanValueNames:
            result = (uppercasedValue in cls._trueBooleanValueNames)
        elif cls._integerRegExp.match(value):
            result = int(value)
        elif cls._hexIntegerRegExp.match(value):
            result = int(value, 16)
        elif cls._realRegExp.match(value):
            result = float(value)
        else:
            result = value

        Logging.trace("<<: %r", result)
        return result

    #--------------------

    @classmethod
    def _stripComment (cls, st : String) -> String:
        """Removes a trailing comment from <st> unless the comment
           marker occurs within a quoted string."""

        isInString = False

        for i, ch in enumerate(st):
            if ch == cls._doubleQuoteCharacter:
                isInString = not isInString
            elif not isInString and st.startswith(cls._commentMarker, i):
                return st[:i].rstrip()

        return st

    #--------------------

    @classmethod
    def _unquotedString (cls, st : String) -> String:
        """Removes enclosing double quotes from <st> (if any) and
           resolves escaped quotes."""

        quote = cls._doubleQuoteCharacter

        if len(st) >= 2 and st.startswith(quote) and st.endswith(quote):
            st = st[1:-1].replace("\\" + quote, quote)

        return st

    #--------------------

    @classmethod
    def _mergeContinuationLines (cls,
                                 lineList : StringList) -> StringList:
        """Returns logical lines for physical lines in <lineList>; a
           line ending with the continuation marker is combined with
           its successor"""

        Logging.trace(">>")

        result = []
        cumulatedLine = ""

        for currentLine in lineList:
            currentLine = currentLine.strip()

            if currentLine.endswith(cls._continuationMarker):
                cumulatedLine += currentLine[:-1].rstrip() + " "
            else:
                result.append(cumulatedLine + currentLine)
                cumulatedLine = ""

        if cumulatedLine > "":
            result.append(cumulatedLine.rstrip())

        Logging.trace("<<: %d lines", len(result))
        return result

    #--------------------

    def _parseConfiguration (self, lineList : StringList):
        """Parses configuration file data given by <lineList> and updates
           key to value map."""

        Logging.trace(">>")

        cls = self.__class__

        for i, currentLine in enumerate(cls._mergeContinuationLines(lineList)):
            currentLine = cls._stripComment(currentLine)

            if currentLine == "":
                # empty line or comment line => skip it
                continue

            match = cls._keyValueRegExp.search(currentLine)

            if not match:
                Logging.traceError("bad line %d without key-value-pair",
                                   i + 1)
            else:
                key = match.group(1)
                value = match.group(2).strip()
                isQuoted = value.startswith(cls._doubleQuoteCharacter)
                value = iif(isQuoted, cls._unquotedString(value),
                            cls._adaptConfigurationValue(value))
                self._keyToValueMap[key] = value
                Logging.trace("--: %r -> %r", key, value)

        Logging.trace("<<: %r", self._keyToValueMap)

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    def __init__ (self, fileName : String):
        """Parses configuration file given by <fileName> and sets
           internal key to value map."""

        Logging.trace(">>: %r", fileName)

        self._keyToValueMap = {}

        with io.open(fileName, "rt", encoding="utf-8") as configurationFile:
            lineList = configurationFile.read().splitlines()

        self._parseConfiguration(lineList)

        Logging.trace("<<")

    #--------------------

    def keySet (self) -> StringSet:
        """Returns set of all keys in configuration file"""

        return set(self._keyToValueMap.keys())

    #--------------------

    def value (self,
               key : String,
               defaultValue : Object = missingValue) -> Object:
        """Returns value for <key> in configuration file; if
           <defaultValue> is missing, an error message is logged when
           there is no associated value, otherwise <defaultValue> is
           returned for a missing entry"""

        Logging.trace(">>: key = %s, defaultValue = %r",
                      key, defaultValue)

        isMandatory = (defaultValue == missingValue)
        result = None

        if key in self._keyToValueMap:
            result = self._keyToValueMap[key]
        elif isMandatory:
            Logging.traceError("cannot find value for %s", key)
        else:
            result = defaultValue

        Logging.trace("<<: %r", result)
        return result
