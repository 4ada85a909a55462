# simpleassertion - provides simple assertion checking that raises a
#                   caller-defined exception on failure
#
# author: MidiTools contributors, 2024

#====================

from basemodules.simplelogging import Logging
from basemodules.simpletypes import Boolean, Callable, String

#====================

class Assertion:
    """Provides some primitive assertion handling of
       pre-/postconditions and checking conditions."""

    isActive = True

    #--------------------
    # LOCAL FEATURES
    #--------------------

    @classmethod
    def _internalCheck (cls,
                        condition : Boolean,
                        checkKind : String,
                        errorMessage : String,
                        errorClass : Callable):
        """Checks whether <condition> holds, otherwise logs and raises
           <errorClass> with <errorMessage> containing <checkKind>."""

        if cls.isActive and not condition:
            Logging.traceError("%s FAILED - %s", checkKind, errorMessage)
            raise errorClass(errorMessage)

    #--------------------
    # EXPORTED FEATURES
    #--------------------

    @classmethod
    def check (cls,
               condition : Boolean,
               errorMessage : String,
               errorClass : Callable = AssertionError):
        """Checks <condition> and raises <errorClass> with
           <errorMessage> on failure."""

        cls._internalCheck(condition, "CHECK", errorMessage, errorClass)

    #--------------------

    @classmethod
    def post (cls,
              condition : Boolean,
              errorMessage : String,
              errorClass : Callable = AssertionError):
        """Checks postcondition <condition> and raises <errorClass>
           with <errorMessage> on failure."""

        cls._internalCheck(condition, "POSTCONDITION", errorMessage,
                           errorClass)

    #--------------------

    @classmethod
    def pre (cls,
             condition : Boolean,
             errorMessage : String,
             errorClass : Callable = AssertionError):
        """Checks precondition <condition> and raises <errorClass>
           with <errorMessage> on failure."""

        cls._internalCheck(condition, "PRECONDITION", errorMessage,
                           errorClass)
