"""Class definitions and the class registry"""

import logging
from threading import RLock

from zope.interface import implementer

from formalclasses.interfaces import *
from formalclasses.primitives import BUILTIN_TYPES, MARKER_NAMES, ANY_TYPE
from formalclasses.primitives import assignable
from formalclasses import graph, instances

__all__ = ['ClassDef', 'ClassRegistry']

log = logging.getLogger(__name__)

FORMAL, BUILTIN, FOREIGN, UNION = 'formal', 'builtin', 'foreign', 'union'


@implementer(IClassDef)
class ClassDef(object):

    """Definition of a formal class

    'kind' tells how the class came to be: declared with 'declareClass()'
    ("formal"), one of the built-in types ("builtin"), registered from
    outside ("foreign"), or declared with 'declareClassUnion()' ("union").
    """

    __slots__ = (
        'name','slots','parents','isVirtual','prototype','validity','kind'
    )

    def __init__(self, name, slots=(), parents=(), isVirtual=False,
        prototype=None, validity=None, kind=FORMAL
    ):
        self.name = name
        self.slots = dict(slots)
        self.parents = tuple(parents)
        self.isVirtual = bool(isVirtual)
        self.prototype = dict(prototype or {})
        self.validity = validity
        self.kind = kind

    def __repr__(self):
        return "ClassDef(%r, slots=%r, parents=%r%s)" % (
            self.name, self.slots, self.parents,
            self.isVirtual and ', isVirtual=True' or ''
        )


@implementer(IClassRegistry)
class ClassRegistry(object):

    """Table of formal class definitions

    Every declaration goes through 'lock', so a registry may be shared
    between threads.  Lookups made while dispatching take the same lock.
    """

    constructionHook = None

    def __init__(self, builtins=True):
        self.lock = RLock()
        self.builtins = builtins
        self.reset()

    def reset(self):
        with self.lock:
            self._classes = {}
            self._unions = {}           # member name -> [union names]
            self._renderers = {}
            self._pythonClasses = {}    # Python type -> foreign class name
            if self.builtins:
                for name,(parents,virtual,zero) in BUILTIN_TYPES.items():
                    self._classes[name] = ClassDef(
                        name, (), parents, virtual, kind=BUILTIN
                    )

    def __len__(self):
        return len(self._classes)

    def __contains__(self,name):
        return name in self._classes

    def __iter__(self):
        return iter(list(self._classes))

    # Declarations

    def declareClass(self, name, slots=(), parents=(), isVirtual=False,
        prototype=None, validity=None
    ):
        parents = tuple(parents)
        slots = dict(slots)
        with self.lock:
            old = self._classes.get(name)
            self._checkName(name, old, FORMAL)

            for parent in parents:
                if parent==name or parent not in self._classes:
                    raise UnknownParentError(parent, name)

            for slot,typ in slots.items():
                if typ!=ANY_TYPE and typ!=name and typ not in self._classes:
                    raise UnknownClassError(typ, "declared type of slot", slot)

            cdef = ClassDef(name, slots, parents, isVirtual, prototype,
                validity)
            self._classes[name] = cdef
            try:
                self._checkPrototype(cdef)
            except Exception:
                self._restore(name, old)
                raise
            if old is not None and old.kind==UNION:
                self._forgetUnion(name)

        if old is None:
            log.debug("declared class %s%r", name, parents)
        else:
            log.debug("replaced class %s%r", name, parents)
        return cdef

    def declareClassUnion(self,name,members):
        members = tuple(members)
        with self.lock:
            old = self._classes.get(name)
            self._checkName(name, old, UNION)
            for member in members:
                if member==name or member not in self._classes:
                    raise UnknownClassError(member, "member of union", name)

            self._forgetUnion(name)
            cdef = self._classes[name] = ClassDef(
                name, isVirtual=True, kind=UNION
            )
            for member in members:
                self._unions.setdefault(member,[]).append(name)

        log.debug("declared class union %s of %r", name, members)
        return cdef

    def addForeignClass(self,name):
        """Register 'name' as a slotless, parentless foreign class"""
        with self.lock:
            old = self._classes.get(name)
            if old is not None and old.kind==FOREIGN:
                return old
            self._checkName(name, old, FOREIGN)
            cdef = self._classes[name] = ClassDef(name, kind=FOREIGN)
        log.debug("registered foreign class %s", name)
        return cdef

    def removeClass(self,name):
        with self.lock:
            cdef = self.getClass(name)
            if cdef.kind==BUILTIN:
                raise ReservedClassNameError(name)
            del self._classes[name]
            self._forgetUnion(name)
            self._unions.pop(name, None)
            self._renderers.pop(name, None)
            for typ,foreign in list(self._pythonClasses.items()):
                if foreign==name:
                    del self._pythonClasses[typ]
        log.debug("removed class %s", name)

    def _checkName(self,name,old,kind):
        if not name or not isinstance(name,str):
            raise ReservedClassNameError(name)
        if name in MARKER_NAMES:
            raise ReservedClassNameError(name)
        if old is None:
            return
        if old.kind==BUILTIN or old.kind==FOREIGN and kind!=FOREIGN:
            raise ReservedClassNameError(name, old.kind)
        if kind==FOREIGN and old.kind!=FOREIGN:
            raise ReservedClassNameError(name, old.kind)

    def _checkPrototype(self,cdef):
        declared = instances.slotTypes(self, cdef.name)
        for slot,value in cdef.prototype.items():
            if slot not in declared:
                raise UnknownSlotError(slot, cdef.name)
            if not assignable(declared[slot],value,self):
                raise SlotTypeError(slot, declared[slot], value)

    def _restore(self,name,old):
        if old is None:
            del self._classes[name]
        else:
            self._classes[name] = old

    def _forgetUnion(self,name):
        for member,unions in self._unions.items():
            if name in unions:
                unions.remove(name)

    # Lookups

    def getClass(self,name):
        try:
            return self._classes[name]
        except KeyError:
            raise UnknownClassError(name)

    def existsClass(self,name):
        return name in self._classes

    def isVirtualClass(self,name):
        return self.getClass(name).isVirtual

    def parentsOf(self,name):
        cdef = self._classes.get(name)
        if cdef is None:
            return ()
        unions = self._unions.get(name)
        if unions:
            return cdef.parents + tuple(unions)
        return cdef.parents

    def ancestorsOf(self,name):
        return graph.ancestorsOf(self,name)

    def distance(self,fromClass,toClass):
        return graph.distance(self,fromClass,toClass)

    def isSubclassOf(self,a,b):
        return graph.isSubclassOf(self,a,b)

    def pythonClassName(self,typ):
        """Return foreign class name registered for 'typ' (or its bases)"""
        if not self._pythonClasses:
            return None
        for base in typ.__mro__:
            name = self._pythonClasses.get(base)
            if name is not None:
                return name
        return None

    def addPythonClass(self,typ,name):
        with self.lock:
            old = self._pythonClasses.get(typ)
            if old is not None and old!=name:
                raise ReservedClassNameError(typ, old)
            self.addForeignClass(name)
            self._pythonClasses[typ] = name

    # Presentation

    def setRenderer(self,className,render):
        with self.lock:
            self.getClass(className)
            self._renderers[className] = render

    def getRenderer(self,className):
        return self._renderers.get(className)

    # Instances

    def construct(self,className,/,**values):
        return instances.construct(self,className,**values)
