# operatingsystem -- provides simple facilities for access of operating
#                    system services
#
# author: MidiTools contributors, 2024

#====================

import os
import os.path
import sys

from basemodules.simplelogging import Logging
from basemodules.simpletypes import Boolean, String, Tuple
from basemodules.ttbase import iif

#====================

class OperatingSystem:
    """Encapsulates access to operating system functions."""

    #--------------------
    # EXPORTED METHODS
    #--------------------

    @classmethod
    def dirname (cls,
                 filePath : String) -> String:
        """Returns directory of <filePath> (or the empty string when
           there is no directory part)."""

        standardSeparator = "/"
        filePartList = filePath.replace("\\", standardSeparator) \
                               .split(standardSeparator)
        return standardSeparator.join(filePartList[:-1])

    #--------------------

    @classmethod
    def hasDirectory (cls,
                      directoryName : String) -> Boolean:
        """Tells whether <directoryName> signifies a directory."""

        return os.path.isdir(iif(directoryName == "", ".", directoryName))

    #--------------------

    @classmethod
    def hasFile (cls,
                 fileName : String) -> Boolean:
        """Tells whether <fileName> signifies a file."""

        return isinstance(fileName, str) and os.path.isfile(fileName)

    #--------------------

    @classmethod
    def isWritableFile (cls,
                        fileName : String) -> Boolean:
        """Returns whether file named <fileName> can be written: either
           it exists and is writable or its directory is writable"""

        Logging.trace(">>: %r", fileName)

        directoryName = iif(cls.dirname(fileName) == "", ".",
                            cls.dirname(fileName))

        if cls.hasFile(fileName):
            isOkay = os.access(fileName, os.W_OK)
        else:
            isOkay = (cls.hasDirectory(directoryName)
                      and os.access(directoryName, os.W_OK))

        Logging.trace("<<: %r", isOkay)
        return isOkay

    #--------------------

    @classmethod
    def showMessageOnConsole (cls,
                              message : String,
                              newlineIsAppended : Boolean = True):
        """Shows <message> on console (stderr) for giving a trace information
           to user; <newlineIsAppended> tells whether a newline is added at
           the end of the message"""

        Logging.trace("--: %r", message)

        st = message + iif(newlineIsAppended, "\n", "")
        sys.stderr.write(st)
        sys.stderr.flush()

    #--------------------

    @classmethod
    def splitExtension (cls,
                        fileName : String) -> Tuple:
        """Splits <fileName> into the part before the last dot in the
           final path component and the extension (without the dot);
           the extension is empty when there is none"""

        shortFileName = fileName.replace("\\", "/").split("/")[-1]
        dotPosition = shortFileName.rfind(".")

        if dotPosition <= 0:
            result = (fileName, "")
        else:
            extensionLength = len(shortFileName) - dotPosition
            result = (fileName[:-extensionLength],
                      shortFileName[dotPosition + 1:])

        return result
