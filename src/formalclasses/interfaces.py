"""Interfaces and exceptions used by the formal class package"""

from zope.interface import Interface, Attribute

__all__ = [
    'IClassDef', 'IClassRegistry', 'IInstance', 'IConstructionHook',
    'IRenderer', 'FormalClassError', 'UnknownParentError',
    'UnknownClassError', 'VirtualInstantiationError', 'SlotTypeError',
    'UnknownSlotError', 'IncompleteInstanceError', 'InvalidObjectError',
    'ReservedClassNameError',
]


class FormalClassError(Exception):
    """Base class for errors raised by formal classes and generic functions"""


class UnknownParentError(FormalClassError, LookupError):
    """A parent named in a class declaration has not been declared"""


class UnknownClassError(FormalClassError, LookupError):
    """No class of the given name is known to the registry"""


class VirtualInstantiationError(FormalClassError, TypeError):
    """Virtual classes can't be instantiated directly"""


class SlotTypeError(FormalClassError, TypeError):
    """Value is not assignable to the slot's declared type"""


class UnknownSlotError(FormalClassError, AttributeError):
    """Slot isn't declared by the instance's class or its ancestors"""


class IncompleteInstanceError(FormalClassError):
    """Construction finished without populating every slot"""


class InvalidObjectError(FormalClassError, ValueError):
    """A class validity check rejected an instance"""


class ReservedClassNameError(FormalClassError, ValueError):
    """Name is a built-in type, a dispatch marker, or otherwise taken"""


class IClassDef(Interface):

    """Definition of a formal class"""

    name = Attribute("""Unique class name""")

    slots = Attribute(
        """Ordered mapping from slot name to declared type name"""
    )

    parents = Attribute("""Tuple of parent class names, in declared order""")

    isVirtual = Attribute("""True if the class can't be instantiated""")

    prototype = Attribute("""Mapping from slot name to default value""")

    validity = Attribute(
        """Callable returning true/None if valid, else message(s); or None"""
    )


class IClassRegistry(Interface):

    """Table of formal class definitions, and the class graph over them"""

    lock = Attribute("""Re-entrant lock serializing registry mutations""")

    constructionHook = Attribute(
        """'IConstructionHook' used by 'construct()', or None"""
    )

    def declareClass(name, slots, parents=(), isVirtual=False,
        prototype=None, validity=None):
        """Store (or replace) the definition of class 'name'

        Raise 'UnknownParentError' if any parent hasn't been declared."""

    def declareClassUnion(name, members):
        """Declare virtual class 'name' as a parent of each of 'members'"""

    def getClass(name):
        """Return the 'IClassDef' for 'name', or raise 'UnknownClassError'"""

    def existsClass(name):
        """Return true if 'name' is a known class"""

    def parentsOf(name):
        """Return the direct parent names of 'name', including unions"""

    def ancestorsOf(name):
        """Return 'name' and all its ancestors, nearest first"""

    def distance(fromClass, toClass):
        """Return shortest inheritance distance, or 'UNREACHABLE'"""

    def isSubclassOf(a, b):
        """Return true if 'a' is 'b' or inherits from it"""

    def setRenderer(className, render):
        """Register 'render(instance)->text' for instances of 'className'"""

    def reset():
        """Forget all declarations except the built-in types"""


class IInstance(Interface):

    """An object whose state is a set of typed slots"""

    className = Attribute("""Name of the instance's class""")

    registry = Attribute("""The 'IClassRegistry' the class is declared in""")


class IConstructionHook(Interface):

    """Replaces the default slot fill during 'construct()'"""

    def __call__(instance, values):
        """Populate all slots of 'instance' and return it

        'values' is the dictionary of keyword values passed to
        'construct()'.  The returned object is the constructed instance
        (returning 'None' means 'instance' itself)."""


class IRenderer(Interface):

    """Presentation collaborator for a class"""

    def __call__(instance):
        """Return text describing 'instance'"""
