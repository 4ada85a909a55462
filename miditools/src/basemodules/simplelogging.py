# -*- coding: utf-8 -*-
# simplelogging - provides primitive trace logging with logging levels
#                 into a file (or stderr)
#
# author: MidiTools contributors, 2024

#====================

import atexit
import io
import sys
import time

from basemodules.simpletypes import Boolean, Natural, String
from basemodules.ttbase import adaptToRange, iif

#====================

class Logging_Level:
    """Defines the levels of logging"""

    # no logging
    noLogging           = 0
    # only logging of errors and assertion failures
    error               = 1
    # logging of errors and abbreviated exit-entry traces
    standardAbbreviated = 2
    # logging of errors and full exit-entry traces
    standard            = 3
    # full logging (including internal traces)
    verbose             = 4

#====================

class Logging:
    """Provides some primitive logging with entry-exit traces."""

    _referenceLevel             = Logging_Level.noLogging
    _fileName                   = ""
    _file                       = None
    _fileIsKeptOpen             = True
    _isEnabled                  = True
    _timeIsLogged               = False
    _timeFractionalDigitCount   = 0
    _atExitIsRegistered         = False

    # buffer logs data before log file is opened, otherwise a
    # write-through will be done
    _buffer = []

    # the list of function names to be ignored when traversing
    # run-time stack for relevant function names
    _ignoredFunctionNameList = \
        ("check", "_internalCheck", "post", "pre",
         "trace", "traceError", "_traceWithLevel")

    #-- TRACE PREFIXES --
    _tracePrefixLength = 2
    _innerTracePrefix = "--"
    _entryExitPrefixList = (">>", "<<")
    _standardPrefixList = _entryExitPrefixList + (_innerTracePrefix,)

    #--------------------
    # LOCAL FEATURES
    #--------------------

    @classmethod
    def _callingFunctionName (cls) -> String:
        """Returns function name of calling function prefixed by the
           class name when called from a method; the logging functions
           themselves are skipped"""

        callerDepth = 1

        while True:
            currentFrame = sys._getframe(callerDepth)
            functionName = currentFrame.f_code.co_name

            if functionName not in cls._ignoredFunctionNameList:
                break

            callerDepth += 1

        localVariableMap = currentFrame.f_locals

        if "self" in localVariableMap:
            className = localVariableMap["self"].__class__.__name__
        elif "cls" in localVariableMap:
            className = getattr(localVariableMap["cls"], "__name__", "")
        else:
            className = ""

        return className + iif(className > "", ".", "") + functionName

    #--------------------

    @classmethod
    def _closeFileConditionally (cls):
        if cls._file is not None and cls._file is not sys.stderr:
            cls._file.close()

        cls._file = None

    #--------------------

    @classmethod
    def _currentTimeOfDay (cls) -> String:
        """Returns current time of day as string with the configured
           number of fractional digits"""

        currentTimestamp = time.time()
        result = time.strftime("%H%M%S", time.localtime(currentTimestamp))
        digitCount = cls._timeFractionalDigitCount

        if digitCount > 0:
            fractionalPart = currentTimestamp - int(currentTimestamp)
            result += ".%0*d" % (digitCount,
                                 int(fractionalPart * 10 ** digitCount))

        return result

    #--------------------

    @classmethod
    def _openFile (cls,
                   isNew : Boolean):
        """Creates or reopens logging file depending on value of
           <isNew>"""

        if cls._fileName == "":
            cls._file = None
        elif cls._fileName.lower() == "stderr":
            cls._file = sys.stderr
        else:
            mode = iif(isNew, "wt", "at")
            cls._file = io.open(cls._fileName, mode,
                                encoding="utf-8", errors="replace")

    #--------------------

    @classmethod
    def _traceWithLevel (cls,
                         level : Natural,
                         template : String,
                         *argumentList):
        """Writes <argumentList> formatted by <template> together with
           function name to log file."""

        if not cls._isEnabled or level > cls._referenceLevel:
            return

        prefixLength = cls._tracePrefixLength

        if template[0:prefixLength] not in cls._standardPrefixList:
            template = (cls._innerTracePrefix
                        + iif(len(template) > 0, ":", "")
                        + template)

        timeString = iif(cls._timeIsLogged,
                         " (" + cls._currentTimeOfDay() + ")", "")
        st = (template[0:prefixLength] + cls._callingFunctionName()
              + timeString)
        template = template[prefixLength:]

        try:
            st += template % argumentList
        except (TypeError, ValueError):
            st += template + " ###CONVERSION ERROR###"

        st = st.replace("\n", "#")
        isEntryExitTrace = st[0:prefixLength] in cls._entryExitPrefixList

        if (cls._referenceLevel == Logging_Level.standardAbbreviated
            and isEntryExitTrace):
            # strip off the entry-exit data after the colon
            st = st.split(":", 1)[0]

        cls._writeLine(st)

    #--------------------

    @classmethod
    def _writeLine (cls,
                    st : String):
        """Writes single line <st> to the logging file or into the
           buffer when there is no file yet"""

        st += "\n"

        if cls._fileName == "":
            cls._buffer.append(st)
        else:
            if cls._file is None:
                cls._openFile(False)

            cls._file.write(st)

            if not cls._fileIsKeptOpen:
                cls._closeFileConditionally()

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    @classmethod
    def initialize (cls):
        """Starts logging"""

        cls._referenceLevel = Logging_Level.noLogging
        cls._fileName       = ""
        cls._isEnabled      = True
        cls._buffer.clear()
        cls._writeLine("START LOGGING -*- coding:utf-8 -*-")

        if not cls._atExitIsRegistered:
            atexit.register(cls._closeFileConditionally)
            cls._atExitIsRegistered = True

    #--------------------

    @classmethod
    def finalize (cls):
        """Ends logging."""

        cls._writeLine("END LOGGING")
        cls._closeFileConditionally()

    #--------------------

    @classmethod
    def setEnabled (cls,
                    isEnabled : Boolean):
        """Sets logging to active or inactive"""

        cls._isEnabled = isEnabled

    #--------------------

    @classmethod
    def setLevel (cls,
                  loggingLevel : Natural):
        """Sets logging reference level to <loggingLevel>"""

        cls._referenceLevel = loggingLevel

    #--------------------

    @classmethod
    def setFileName (cls,
                     fileName : String,
                     isKeptOpen : Boolean = True):
        """Sets file name for logging to <fileName> and writes all
           buffered lines to it; if <isKeptOpen> is set, the logging
           file is not closed after each log entry"""

        if cls._fileName == fileName:
            cls._writeLine("logging file %s already open => skip"
                           % fileName)
        else:
            cls._closeFileConditionally()
            cls._fileName       = fileName
            cls._fileIsKeptOpen = isKeptOpen

            try:
                cls._openFile(True)
            except OSError:
                # keep buffering
                cls._fileName = ""
                raise

            if cls._file is not None:
                cls._file.writelines(cls._buffer)
                cls._buffer.clear()

                if not isKeptOpen:
                    cls._closeFileConditionally()

    #--------------------

    @classmethod
    def setTracingWithTime (cls,
                            timeIsLogged : Boolean,
                            fractionalDigitCount : Natural = 0):
        """Sets logging of time when tracing to active or inactive;
           <fractionalDigitCount> gives the number of fractional
           digits for the time logged"""

        cls._timeIsLogged             = timeIsLogged
        cls._timeFractionalDigitCount = adaptToRange(fractionalDigitCount,
                                                     0, 3)

    #--------------------

    @classmethod
    def trace (cls,
               template : String,
               *argumentList):
        """Writes <argumentList> formatted by <template> together with
           function name to log file."""

        templatePrefix = template[0:cls._tracePrefixLength]
        isEntryExitTrace = templatePrefix in cls._entryExitPrefixList
        logLevel = iif(isEntryExitTrace,
                       Logging_Level.standardAbbreviated,
                       Logging_Level.verbose)
        cls._traceWithLevel(logLevel, template, *argumentList)

    #--------------------

    @classmethod
    def traceError (cls,
                    template : String,
                    *argumentList):
        """Writes <argumentList> formatted by <template> together with
           function name to log file as an error entry."""

        cls._traceWithLevel(Logging_Level.error,
                            "--: ERROR - " + template,
                            *argumentList)
