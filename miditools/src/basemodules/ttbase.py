# ttbase - provides several elementary functions like conditional
#          expressions and range adaptation
#
# author: MidiTools contributors, 2024

#====================

from basemodules.simpletypes import Boolean, IntegerList, Object, String

#====================

missingValue = "@!XYZZY"

#====================

def iif (condition : Boolean, trueValue : Object,
         falseValue : Object) -> Object:
    """Emulates conditional expressions with full value evaluation."""

    if condition:
        result = trueValue
    else:
        result = falseValue

    return result

#--------------------

def iif2 (condition1 : Boolean, trueValue1 : Object,
          condition2 : Boolean, trueValue2 : Object,
          falseValue2 : Object) -> Object:
    """Emulates a sequence of conditional expressions with full
       condition and value evaluation."""

    return iif(condition1, trueValue1,
               iif(condition2, trueValue2, falseValue2))

#--------------------

def isInRange (x : Object,
               lowBound : Object,
               highBound : Object) -> Boolean:
    """Tells whether x lies in the range from <lowBound> to
       <highBound>."""

    return (lowBound <= x <= highBound)

#--------------------

def adaptToRange (x : Object,
                  lowBound : Object,
                  highBound : Object,
                  isCyclic : Boolean = False) -> Object:
    """Adapts integer <x> to range [<lowBound>, <highBound>] either by
       clipping at the bounds or (when <isCyclic> is set) by wrapping
       around periodically"""

    if isInRange(x, lowBound, highBound):
        result = x
    elif not isCyclic:
        result = iif(x < lowBound, lowBound, highBound)
    else:
        intervalLength = highBound - lowBound + 1
        result = lowBound + (x - lowBound) % intervalLength

    return result

#--------------------

def intListToHex (currentList : IntegerList) -> String:
    """Returns hex representation of integer <currentList>"""

    return "".join(map(lambda x: ("%02X" % x), currentList))
