# transformationdispatcher -- maps the transformation flags onto their
#                             adjusters and applies them in command
#                             line order
#
# author: MidiTools contributors, 2024

#====================
# IMPORTS
#====================

from basemodules.simplelogging import Logging
from basemodules.simpletypes import Boolean, List, String, StringList

from .cleanupadjuster import CleanUpAdjuster
from .eventmover import EventMover
from .eventreplacer import ReverbAdjuster, VibratoAdjuster
from .expressionadjuster import ExpressionAdjuster
from .midisequence import MidiSequence
from .miditools_configuration import MidiToolsConfiguration
from .miditoolserrors import ArgumentError
from .notepitchadjuster import NotePitchAdjuster
from .pitchbendrangerescaler import PitchBendRangeRescaler
from .valueadjuster import ValueAdjuster

#====================

class TransformationDispatcher:
    """Converts a list of transformation flags with their parameters
       into a list of parametrized adjusters and applies them one after
       the other to a midi sequence.  All parameters are checked before
       the first adjuster is applied."""

    # the adjuster class for each transformation flag together with the
    # parameter description used in the usage text
    _flagToAdjusterDataMap = {
        "-p" : (PitchBendRangeRescaler, "[defaultRange]",
                "rescale pitch bends to the desired range"),
        "-v" : (VibratoAdjuster,        "[range]",
                "derive vibrato depth from modulation"),
        "-r" : (ReverbAdjuster,         "[range]",
                "rescale reverb send into a smaller range"),
        "-c" : (CleanUpAdjuster,        "<event|pitch-bend> [tolerance]"
                                        " [tickGap]",
                "remove near-duplicate events"),
        "-a" : (ValueAdjuster,          "<event|pitch-bend> <amount>"
                                        " [channel]",
                "add amount to event values"),
        "-s" : (ValueAdjuster,          "<event|pitch-bend> <amount>"
                                        " [channel]",
                "subtract amount from event values"),
        "-m" : (EventMover,             "<event|pitch-bend|program-change>"
                                        "...",
                "move first events to the start"),
        "-e" : (ExpressionAdjuster,     "",
                "convert expression into volume events"),
        "-n" : (NotePitchAdjuster,      "<channel> <baseNote> [range]",
                "add pitch bends from a base note to each note")
    }

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    @classmethod
    def flagDescriptionList (cls) -> List:
        """Returns list of triples of flag, parameter description and
           purpose for all transformation flags"""

        return [ (flag, parameterDescription, purpose)
                 for flag, (_, parameterDescription, purpose)
                 in cls._flagToAdjusterDataMap.items() ]

    #--------------------

    @classmethod
    def flagList (cls) -> StringList:
        """Returns list of all transformation flags"""

        return list(cls._flagToAdjusterDataMap.keys())

    #--------------------

    @classmethod
    def isTransformationFlag (cls,
                              st : String) -> Boolean:
        """Tells whether <st> is a transformation flag"""

        return st in cls._flagToAdjusterDataMap

    #--------------------

    def __init__ (self,
                  configuration : MidiToolsConfiguration):
        """Initializes dispatcher for <configuration>"""

        self._configuration = configuration

    #--------------------

    def parse (self,
               flagAndArgumentsList : List) -> List:
        """Converts list of pairs of flag and argument list
           <flagAndArgumentsList> into a list of triples of flag,
           adjuster and adjuster parameters; raises an argument error
           for an unknown flag or bad parameters"""

        Logging.trace(">>: %r", flagAndArgumentsList)

        cls = self.__class__
        result = []

        for flag, argumentList in flagAndArgumentsList:
            if not cls.isTransformationFlag(flag):
                raise ArgumentError("unrecognized transformation [%s]"
                                    % flag)

            adjusterClass = cls._flagToAdjusterDataMap[flag][0]
            adjuster = adjusterClass(self._configuration)
            parameters = adjuster.parseParameters(flag, list(argumentList))
            result.append((flag, adjuster, parameters))

        if len(result) == 0:
            raise ArgumentError("at least one transformation is required")

        Logging.trace("<<: %r", result)
        return result

    #--------------------

    def apply (self,
               transformationList : List,
               sequence : MidiSequence):
        """Applies all transformations in <transformationList> to
           <sequence> strictly in list order"""

        Logging.trace(">>")

        for flag, adjuster, parameters in transformationList:
            Logging.trace("--: applying %s with %r", flag, parameters)
            adjuster.apply(parameters, sequence)

        Logging.trace("<<")

    #--------------------

    def run (self,
             flagAndArgumentsList : List,
             sequence : MidiSequence):
        """Parses <flagAndArgumentsList> completely and then applies
           the transformations to <sequence> in order"""

        self.apply(self.parse(flagAndArgumentsList), sequence)
