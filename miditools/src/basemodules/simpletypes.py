# simpletypes - provides the internal type names like String, Real, ...
#               used in the annotations of all modules
#
# author: MidiTools contributors, 2024

#====================

import typing

#====================

# primitive types
Boolean  = bool
Integer  = int
Natural  = int
Object   = typing.Any
Real     = float
String   = str

# list types
List        = typing.Sequence
IntegerList = List[Integer]
StringList  = List[String]
Tuple       = typing.Tuple

# set types
Set         = typing.Set
StringSet   = Set[String]

# function types
Callable = typing.Callable
