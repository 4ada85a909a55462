# validitychecker - allows checking of validity of values (typically
#                   of input parameters from the command line)
#
# author: MidiTools contributors, 2024

#====================

import re

from basemodules.operatingsystem import OperatingSystem
from basemodules.simplelogging import Logging
from basemodules.simpletypes import Boolean, Object, String, StringList
from basemodules.ttbase import iif, iif2

#====================

class ValidityChecker:
    """Provides checking of validity of values (typically command line
       parameters).  Each check logs a failure and returns whether the
       value is okay; it is up to the caller to decide whether a
       failure is fatal."""

    #--------------------
    # LOCAL FEATURES
    #--------------------

    _rangeKindToTemplateMap = {
        ""     : "%s",
        ">0"   : "a positive %s",
        ">=0"  : "a non-negative %s"
    }

    _integerRegExp = re.compile(r"^[+\-]?[0-9]+$")
    _realRegExp    = re.compile(r"^[+\-]?[0-9]+(\.[0-9]*)?$")

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    @classmethod
    def isNumberString (cls,
                        value : String,
                        valueName : String,
                        realIsAllowed : Boolean,
                        rangeKind : String = "") -> Boolean:
        """Checks whether string <value> with name <valueName> is
           representation of a correct number. <realIsAllowed> tells
           whether non-integer values are okay, <rangeKind> gives an
           boundary condition about the range."""

        Logging.trace(">>: %s = %r, realIsOk = %r, rangeKind = %r",
                      valueName, value, realIsAllowed, rangeKind)

        value = str(value)
        isOkay = (cls._integerRegExp.match(value) is not None)

        if rangeKind not in cls._rangeKindToTemplateMap:
            rangeKind = ""

        if realIsAllowed and not isOkay:
            isOkay = (cls._realRegExp.match(value) is not None)

        if isOkay:
            isOkay = iif2(rangeKind == ">0",  (float(value) > 0),
                          rangeKind == ">=0", (float(value) >= 0),
                          True)

        typeDesignation = (cls._rangeKindToTemplateMap[rangeKind]
                           % iif(realIsAllowed, "real", "integer"))
        errorTemplate = "%s must be " + typeDesignation + " - %r"
        cls.isValid(isOkay, errorTemplate % (valueName, value))

        Logging.trace("<<: %r", isOkay)
        return isOkay

    #--------------------

    @classmethod
    def isOneOf (cls,
                 value : Object,
                 valueName : String,
                 allowedValueList : StringList) -> Boolean:
        """Checks whether <value> named <valueName> occurs in
           <allowedValueList>."""

        Logging.trace(">>: %s = %r, allowed = %r",
                      valueName, value, allowedValueList)

        isOkay = value in allowedValueList
        cls.isValid(isOkay,
                    "%s must be one of %s - %r"
                    % (valueName, "/".join(allowedValueList), value))

        Logging.trace("<<: %r", isOkay)
        return isOkay

    #--------------------

    @classmethod
    def isReadableFile (cls,
                        value : String,
                        valueName : String) -> Boolean:
        """Checks whether <value> named <valueName> is a readable
           file."""

        Logging.trace(">>: %s = %r", valueName, value)

        isOkay = OperatingSystem.hasFile(value)
        cls.isValid(isOkay, "%s is not a readable file - %r"
                            % (valueName, value))

        Logging.trace("<<: %r", isOkay)
        return isOkay

    #--------------------

    @classmethod
    def isWritableFile (cls,
                        value : String,
                        valueName : String) -> Boolean:
        """Checks whether <value> named <valueName> is a writable
           file."""

        Logging.trace(">>: %s = %r", valueName, value)

        isOkay = OperatingSystem.isWritableFile(value)
        cls.isValid(isOkay, "%s is not a writable file - %r"
                            % (valueName, value))

        Logging.trace("<<: %r", isOkay)
        return isOkay

    #--------------------

    @classmethod
    def isValid (cls,
                 condition : Boolean,
                 message : String) -> Boolean:
        """Checks whether <condition> holds, otherwise logs
           <message>; returns <condition>."""

        Logging.trace("--: checking condition (%r),"
                      + " otherwise failure is %r",
                      condition, message)

        if not condition:
            Logging.traceError("%s", message)

        return condition
