"""Instances of formal classes

An instance is just a class name plus a dictionary of slot values.  It
holds on to its class by *name*: every slot access looks the class up in
the registry again, so redeclaring a class affects existing instances the
next time they're used.  (That can make a previously valid object fail
with 'UnknownSlotError' or 'SlotTypeError'.  Redeclaration doesn't check
or migrate old instances.)
"""

import copy
import logging

from zope.interface import implementer

from formalclasses.interfaces import *
from formalclasses.primitives import assignable, zeroValue, classOf
from formalclasses import graph

__all__ = [
    'Instance', 'construct', 'initializeSlots', 'getSlot', 'setSlot',
    'classesOf', 'instanceOf', 'classOf', 'slotTypes', 'validObject',
    'isComplete',
]

log = logging.getLogger(__name__)


@implementer(IInstance)
class Instance(object):

    """Object whose state is a set of typed slots

    Slots can be read and written as attributes ('ob.x', 'ob.x = 1'), which
    is the same as calling 'getSlot()' and 'setSlot()'.  Slots named
    'registry' or 'className' are only reachable through those functions.
    """

    __slots__ = 'registry', 'className', '_values'

    def __init__(self,registry,className,values=()):
        object.__setattr__(self, 'registry', registry)
        object.__setattr__(self, 'className', className)
        object.__setattr__(self, '_values', dict(values))

    def __getattr__(self,name):
        if name in Instance.__slots__ or name.startswith('__'):
            raise AttributeError(name)
        return getSlot(self,name)

    def __setattr__(self,name,value):
        if name in Instance.__slots__:
            object.__setattr__(self,name,value)
        else:
            setSlot(self,name,value)

    def __copy__(self):
        return Instance(self.registry, self.className, self._values)

    def __deepcopy__(self,memo):
        # share the registry, copy the state
        return Instance(
            self.registry, self.className, copy.deepcopy(self._values,memo)
        )

    def __repr__(self):
        return "<%s instance at 0x%x>" % (self.className, id(self))


def slotTypes(registry,className):
    """Return ordered mapping of all slots of 'className' to declared types

    The class's own slots come first, then those of its ancestors, nearest
    first.  A slot declared more than once keeps the nearest declaration.
    """
    registry.getClass(className)
    types = {}
    for klass in graph.ancestorsOf(registry,className):
        if registry.existsClass(klass):
            for slot,typ in registry.getClass(klass).slots.items():
                types.setdefault(slot,typ)
    return types


def _prototypeDefault(registry,className,slot):
    for klass in graph.ancestorsOf(registry,className):
        if registry.existsClass(klass):
            prototype = registry.getClass(klass).prototype
            if slot in prototype:
                return True, copy.deepcopy(prototype[slot])
    return False, None


def construct(registry,className,/,**values):
    """Create an instance of 'className', with slots set from 'values'"""

    cdef = registry.getClass(className)
    if cdef.isVirtual or cdef.kind!='formal':
        raise VirtualInstantiationError(className)

    instance = Instance(registry,className)
    hook = registry.constructionHook

    if hook is None:
        initializeSlots(instance,values)
    else:
        result = hook(instance,values)
        if result is not None:
            if not IInstance.providedBy(result):
                raise TypeError(
                    "Construction hook returned a non-instance", result
                )
            instance = result

    missing = [
        slot for slot in slotTypes(registry,instance.className)
            if slot not in instance._values
    ]
    if missing:
        raise IncompleteInstanceError(instance.className, missing)

    validObject(instance)
    return instance


def initializeSlots(instance,values):
    """Default slot fill: supplied value, else prototype, else zero value

    Slots that an earlier construction step already set are left alone
    unless 'values' supplies them.
    """
    registry = instance.registry
    types = slotTypes(registry,instance.className)

    for slot in values:
        if slot not in types:
            raise UnknownSlotError(slot, instance.className)

    state = instance._values
    for slot,typ in types.items():
        if slot in values:
            value = values[slot]
            if not assignable(typ,value,registry):
                raise SlotTypeError(slot, typ, value)
            state[slot] = value
        elif slot not in state:
            found, value = _prototypeDefault(registry,instance.className,slot)
            if not found:
                value = zeroValue(typ)
            state[slot] = value

    return instance


def isComplete(instance):
    types = slotTypes(instance.registry,instance.className)
    for slot in types:
        if slot not in instance._values:
            return False
    return True


def getSlot(instance,name):
    """Return value of slot 'name', checked against the current class"""

    types = slotTypes(instance.registry,instance.className)

    try:
        typ = types[name]
    except KeyError:
        raise UnknownSlotError(name, instance.className)

    try:
        value = instance._values[name]
    except KeyError:
        raise UnknownSlotError(name, instance.className, "not initialized")

    if not assignable(typ,value,instance.registry):
        raise SlotTypeError(name, typ, value)

    return value


def setSlot(instance,name,value):
    types = slotTypes(instance.registry,instance.className)
    try:
        typ = types[name]
    except KeyError:
        raise UnknownSlotError(name, instance.className)

    if not assignable(typ,value,instance.registry):
        raise SlotTypeError(name, typ, value)

    instance._values[name] = value


def classesOf(instance):
    return graph.ancestorsOf(instance.registry,instance.className)


def instanceOf(instance,className):
    return graph.isSubclassOf(instance.registry,instance.className,className)


def validObject(instance):
    """Check slot types, then run validity checks from the root class down

    Raise 'SlotTypeError' for a slot whose value doesn't fit its declared
    type, or 'InvalidObjectError' for the first failing validity check.
    """
    registry = instance.registry

    for slot in slotTypes(registry,instance.className):
        getSlot(instance,slot)

    for klass in reversed(graph.ancestorsOf(registry,instance.className)):
        if not registry.existsClass(klass):
            continue
        validity = registry.getClass(klass).validity
        if validity is None:
            continue

        result = validity(instance)
        if result is None or result is True:
            continue
        if result is False:
            result = ["invalid %s object" % klass]
        elif isinstance(result,str):
            result = [result]
        log.debug("%s failed validity check for %s", instance, klass)
        raise InvalidObjectError(instance.className, list(result))

    return True
