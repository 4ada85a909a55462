# miditools -- script that reads a midi file, applies a list of
#              transformations to its controller and pitch bend events
#              and writes the result to a new midi file
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

import argparse
import sys

from basemodules.operatingsystem import OperatingSystem
from basemodules.simplelogging import Logging, Logging_Level
from basemodules.simpletypes import Natural, Object, String, StringList
from basemodules.ttbase import iif
from basemodules.validitychecker import ValidityChecker

from .midifilehandler import MidiFileHandler
from .miditools_configuration import MidiToolsConfiguration, \
                                     valueOverflowPolicyList
from .miditoolserrors import ArgumentError, MidiToolsError
from .transformationdispatcher import TransformationDispatcher

#====================

# file name used for disabling logging
lowerCasedNullLoggingFileName = "none"

#====================
# TYPE DEFINITIONS
#====================

class _TransformationAction (argparse.Action):
    """Collects each transformation flag together with its parameters
       in command line order"""

    def __call__ (self, parser, namespace, values, option_string=None):
        transformationList = list(getattr(namespace, self.dest) or [])
        transformationList.append((option_string, list(values)))
        setattr(namespace, self.dest, transformationList)

#====================

class _CommandLineOptions:
    """This module handles command line options and checks them."""

    #--------------------

    @classmethod
    def _makeParser (cls) -> argparse.ArgumentParser:
        """Returns the parser for the command line"""

        programDescription = ("Applies transformations to the controller"
                              + " and pitch bend events of a midi file"
                              + " in the order given on the command line"
                              + " and writes the result to"
                              + " <midiFile>-<suffix>.<extension>")
        epilogLineList = ["transformations:"]

        for flag, parameterDescription, purpose \
            in TransformationDispatcher.flagDescriptionList():
            st = "%s %s" % (flag, parameterDescription)
            epilogLineList.append("  %-44s %s" % (st.strip(), purpose))

        p = argparse.ArgumentParser(
                prog="midiTools",
                description=programDescription,
                epilog="\n".join(epilogLineList),
                formatter_class=argparse.RawDescriptionHelpFormatter,
                allow_abbrev=False)

        p.add_argument("midiFilePath",
                       help="name of midi file to be transformed")
        p.add_argument("--verbose", action="store_true",
                       help="tells to show every changed event")
        p.add_argument("--config", dest="configurationFilePath",
                       help="name of configuration file with defaults")
        p.add_argument("--logging", dest="loggingFilePath",
                       help=("name of trace logging file (or 'stderr';"
                             + " 'none' disables logging)"))
        p.add_argument("--overflow", dest="valueOverflowPolicy",
                       choices=valueOverflowPolicyList,
                       help="handling of adjusted values out of range")

        for flag in TransformationDispatcher.flagList():
            p.add_argument(flag, nargs="*", action=_TransformationAction,
                           dest="transformationList", default=None,
                           metavar="PARAMETER", help=argparse.SUPPRESS)

        return p

    #--------------------

    @classmethod
    def checkArguments (cls,
                        argumentList : Object):
        """Checks whether command line options given in <argumentList>
           are okay; raises an argument error otherwise"""

        Logging.trace(">>")

        midiFilePath = argumentList.midiFilePath

        if not ValidityChecker.isReadableFile(midiFilePath, "midiFilePath"):
            raise ArgumentError("cannot read midi file %r" % midiFilePath)

        if argumentList.transformationList is None:
            raise ArgumentError("at least one transformation is required")

        Logging.trace("<<")

    #--------------------

    @classmethod
    def read (cls,
              argumentList : StringList = None) -> Object:
        """Reads commandline options from <argumentList> (or the
           process arguments) and returns them together with the usage
           text"""

        Logging.trace(">>")

        p = cls._makeParser()
        result = (p.parse_args(argumentList), p.format_usage())

        Logging.trace("<<: %r", result)
        return result

#--------------------
#--------------------

def outputFileName (midiFileName : String,
                    fileSuffix : String) -> String:
    """Returns name of output file derived from <midiFileName> by
       appending <fileSuffix> to its name before the extension"""

    stem, extension = OperatingSystem.splitExtension(midiFileName)
    result = "%s-%s%s" % (stem, fileSuffix,
                          iif(extension == "", "", "." + extension))
    return result

#--------------------

def initializeLogging (loggingFilePath : String):
    """Sets up trace logging into <loggingFilePath>; logging is
       disabled when no path is given"""

    if loggingFilePath is None \
       or loggingFilePath.lower() == lowerCasedNullLoggingFileName:
        Logging.setEnabled(False)
    else:
        try:
            Logging.setFileName(loggingFilePath, False)
        except OSError as exception:
            Logging.setEnabled(False)
            raise ArgumentError("cannot write logging file %r - %s"
                                % (loggingFilePath, exception))

#--------------------

def process (argumentList : Object):
    """Runs the transformations given in <argumentList> on the midi
       file and writes the output file"""

    Logging.trace(">>")

    _CommandLineOptions.checkArguments(argumentList)

    if argumentList.configurationFilePath is None:
        configuration = MidiToolsConfiguration()
    else:
        configuration = \
            MidiToolsConfiguration.fromFile(
                argumentList.configurationFilePath)

    configuration = configuration.withOverrides(
        verboseLoggingIsActive=iif(argumentList.verbose, True, None),
        valueOverflowPolicy=argumentList.valueOverflowPolicy)

    dispatcher = TransformationDispatcher(configuration)
    transformationList = dispatcher.parse(argumentList.transformationList)

    midiFilePath = argumentList.midiFilePath
    targetFilePath = outputFileName(midiFilePath,
                                    configuration.outputFileSuffix)

    if not ValidityChecker.isWritableFile(targetFilePath, "output file"):
        raise ArgumentError("cannot write output file %r" % targetFilePath)

    midiFileHandler = MidiFileHandler()
    sequence, formatVariant = midiFileHandler.readFile(midiFilePath)
    dispatcher.apply(transformationList, sequence)
    midiFileHandler.writeFile(targetFilePath, sequence, formatVariant)
    OperatingSystem.showMessageOnConsole("Wrote %s" % targetFilePath)

    Logging.trace("<<")

#--------------------

def main (argumentList : StringList = None) -> Natural:
    """Main program for the MIDI tools; returns the process exit
       code"""

    Logging.initialize()
    Logging.setLevel(Logging_Level.verbose)
    Logging.setTracingWithTime(True, 2)
    Logging.trace(">>")

    argumentList, usage = _CommandLineOptions.read(argumentList)

    try:
        initializeLogging(argumentList.loggingFilePath)
        process(argumentList)
        result = 0
    except ArgumentError as exception:
        OperatingSystem.showMessageOnConsole("ERROR: %s" % exception)
        OperatingSystem.showMessageOnConsole(usage, False)
        result = 2
    except MidiToolsError as exception:
        OperatingSystem.showMessageOnConsole("ERROR: %s" % exception)
        result = 1

    Logging.trace("<<: %d", result)
    Logging.finalize()
    return result

#--------------------

if __name__ == "__main__":
    sys.exit(main())
