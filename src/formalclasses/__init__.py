"""Formal Classes: classes with typed slots and an explicit class graph"""

import logging

from formalclasses.interfaces import *
from formalclasses.primitives import UNREACHABLE, assignable, classOf
from formalclasses.registry import ClassDef, ClassRegistry
from formalclasses.instances import Instance, construct, getSlot, setSlot
from formalclasses.instances import classesOf, instanceOf, validObject
from formalclasses.foreign import registerForeignClass, registerPythonClass
from formalclasses.display import describe

logging.getLogger(__name__).addHandler(logging.NullHandler())
