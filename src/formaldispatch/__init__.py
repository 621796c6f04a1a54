"""Multiple Dispatch over Formal Classes

 Generic functions select a method by the classes of one or more of their
 arguments.  Every method signature is scored against the argument classes
 by inheritance distance in the class graph; the lowest total wins.  'ANY'
 matches anything, even an omitted argument, but scores worse than any real
 class, and 'MISSING' matches only an argument that wasn't passed at all.
 Equal best scores are reported with 'AmbiguousDispatchWarning', and
 resolved by picking the signature whose class names sort first.

 A method whose first parameter is named 'next_method' receives a callable
 that runs the next less specific applicable method, so methods can build
 on their parent classes' behavior.
"""

import logging

from formaldispatch.interfaces import *
from formaldispatch.strategy import ANY, MISSING
from formaldispatch.functions import GenericRegistry, GenericFunction
from formaldispatch.functions import defgeneric, DEFAULT_MAX_DEPTH
from formaldispatch.initialize import INITIALIZE

logging.getLogger(__name__).addHandler(logging.NullHandler())
