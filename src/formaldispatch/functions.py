"""Generic function implementations"""

import inspect
import logging
import threading
import warnings

from zope.interface import implementer

from formalclasses.primitives import classOf
from formaldispatch.interfaces import *
from formaldispatch.strategy import MISSING, canonicalSignature
from formaldispatch.strategy import orderedCandidates, sortKey
from formaldispatch.combiners import callCandidate, takesNextMethod
from formaldispatch import initialize

__all__ = [
    'Generic', 'MethodEntry', 'GenericRegistry', 'GenericFunction',
    'defgeneric', 'DEFAULT_MAX_DEPTH',
]

log = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100

_absent = object()


@implementer(IGeneric)
class Generic(object):

    """Shape of a generic function: parameter names and dispatch arity"""

    __slots__ = 'name', 'formalParams', 'dispatchArity', 'doc'

    def __init__(self,name,formalParams,dispatchArity,doc=None):
        self.name = name
        self.formalParams = formalParams
        self.dispatchArity = dispatchArity
        self.doc = doc

    def __repr__(self):
        return "Generic(%r, %r, %d)" % (
            self.name, self.formalParams, self.dispatchArity
        )


@implementer(IMethodEntry)
class MethodEntry(object):

    """A method of a generic function, and the signature it was added for"""

    __slots__ = 'generic', 'signature', 'implementation', 'chained'

    def __init__(self,generic,signature,implementation):
        self.generic = generic
        self.signature = signature
        self.implementation = implementation
        self.chained = takesNextMethod(implementation)

    def sortKey(self):
        return sortKey(self.signature)

    def __repr__(self):
        return "MethodEntry(%r, %r)" % (self.generic, self.signature)


@implementer(IGenericRegistry)
class GenericRegistry(object):

    """Generic functions and their method tables, over a class registry

    Method tables share the class registry's lock: declarations are
    serialized, and dispatch holds the lock only while it scores methods,
    never while a method runs.

    Every registry has the built-in 'initialize' generic, and installs it
    as the class registry's construction hook.
    """

    def __init__(self,classes,maxDepth=DEFAULT_MAX_DEPTH):
        self.classes = classes
        self.lock = classes.lock
        self.maxDepth = maxDepth
        self._local = threading.local()
        self.reset()

    def reset(self):
        with self.lock:
            self._generics = {}
            self._methods = {}
            initialize.install(self)

    # Declarations

    def declareGeneric(self,name,formalParams,dispatchArity=None,doc=None):
        formalParams = tuple(formalParams)
        if dispatchArity is None:
            dispatchArity = len(formalParams)
        if not 0<=dispatchArity<=len(formalParams):
            raise SignatureArityError(
                "dispatch arity out of range", name, dispatchArity
            )

        with self.lock:
            old = self._generics.get(name)
            if old is not None:
                if old.dispatchArity!=dispatchArity:
                    raise DuplicateGenericError(
                        name, old.dispatchArity, dispatchArity
                    )
                if old.formalParams!=formalParams:
                    log.debug("renamed parameters of %s to %r",
                        name, formalParams)
                    old.formalParams = formalParams
                if doc is not None:
                    old.doc = doc
                return old

            generic = self._generics[name] = Generic(
                name, formalParams, dispatchArity, doc
            )
            self._methods[name] = {}

        log.debug("declared generic %s%r", name, formalParams)
        return generic

    def declareMethod(self,genericName,signature,implementation):
        if not callable(implementation):
            raise TypeError("Method implementation must be callable",
                implementation)

        with self.lock:
            generic = self.getGeneric(genericName)
            if isinstance(signature,(list,tuple)):
                length = len(signature)
            else:
                length = 1
            if length!=generic.dispatchArity:
                raise SignatureArityError(
                    genericName, generic.dispatchArity, signature
                )

            signature = canonicalSignature(self.classes,signature)
            table = self._methods[genericName]
            replaced = signature in table
            entry = table[signature] = MethodEntry(
                genericName, signature, implementation
            )

        if replaced:
            log.debug("replaced method %s%r", genericName, signature)
        else:
            log.debug("declared method %s%r", genericName, signature)
        return entry

    def removeMethod(self,genericName,signature):
        with self.lock:
            generic = self.getGeneric(genericName)
            signature = canonicalSignature(self.classes,signature)
            return self._methods[generic.name].pop(signature,None) is not None

    def removeGeneric(self,genericName):
        with self.lock:
            self.getGeneric(genericName)
            del self._generics[genericName]
            del self._methods[genericName]
            if genericName==initialize.INITIALIZE:
                initialize.install(self)

    # Lookups

    def getGeneric(self,name):
        try:
            return self._generics[name]
        except KeyError:
            raise UnknownGenericError(name)

    def isGeneric(self,name):
        return name in self._generics

    def getMethod(self,genericName,signature):
        with self.lock:
            self.getGeneric(genericName)
            signature = canonicalSignature(self.classes,signature)
            return self._methods[genericName].get(signature)

    def existsMethod(self,genericName,signature):
        return self.getMethod(genericName,signature) is not None

    def methodsOf(self,genericName):
        with self.lock:
            self.getGeneric(genericName)
            return list(self._methods[genericName].values())

    # Dispatch

    def dispatchClasses(self,genericName,args,kw):
        """Return tuple of classes (or 'MISSING') for the dispatch arguments"""
        generic = self.getGeneric(genericName)
        arity = generic.dispatchArity
        values = list(args[:arity])
        values.extend([_absent]*(arity-len(values)))

        for pos,param in enumerate(generic.formalParams[:arity]):
            if param in kw:
                if pos<len(args):
                    raise TypeError(
                        "%s() got multiple values for argument %r"
                        % (genericName, param)
                    )
                values[pos] = kw[param]

        return tuple([
            value is _absent and MISSING or classOf(value,self.classes)
                for value in values
        ])

    def candidatesFor(self,genericName,args,kw):
        """Return '(candidates,argClasses)' for a call, best first"""
        with self.lock:
            argClasses = self.dispatchClasses(genericName,args,kw)
            candidates = orderedCandidates(
                self.classes, self._methods[genericName].values(), argClasses
            )
        if not candidates:
            raise NoApplicableMethodError(genericName, argClasses)
        return candidates, argClasses

    def _warnIfAmbiguous(self,genericName,candidates,argClasses):
        best = candidates[0]
        tied = [c for c in candidates if c.total==best.total]
        if len(tied)>1:
            message = "ambiguous dispatch of %s%r: %s; using %r" % (
                genericName, argClasses,
                ', '.join([repr(c.entry.signature) for c in tied]),
                best.entry.signature
            )
            log.warning(message)
            warnings.warn(message, AmbiguousDispatchWarning, stacklevel=3)

    def selectMethod(self,genericName,/,*args,**kw):
        candidates, argClasses = self.candidatesFor(genericName,args,kw)
        self._warnIfAmbiguous(genericName,candidates,argClasses)
        return candidates[0].entry

    def invoke(self,genericName,/,*args,**kw):
        candidates, argClasses = self.candidatesFor(genericName,args,kw)
        self._warnIfAmbiguous(genericName,candidates,argClasses)
        log.debug("dispatching %s%r to %r",
            genericName, argClasses, candidates[0].entry.signature)
        return callCandidate(self,candidates,0,args,kw)

    def enterDispatch(self):
        depth = getattr(self._local,'depth',0)+1
        if depth>self.maxDepth:
            raise DispatchLoopError(
                "dispatch nested more than %d deep" % self.maxDepth
            )
        self._local.depth = depth

    def exitDispatch(self):
        self._local.depth -= 1


@implementer(IGenericFunction)
class GenericFunction(object):

    """Callable generic function, backed by a 'GenericRegistry'

    Usage::

        area = GenericFunction(generics, 'area', ('shape',))

        @area.when('Circle')
        def area(shape):
            return math.pi * shape.r ** 2

    'when()' returns the decorated function unchanged, so the name it's
    assigned to should normally differ from the generic's (or be the same
    as above, if the function itself isn't needed).
    """

    def __init__(self,generics,name,formalParams,dispatchArity=None,
        doc=None
    ):
        self.generics = generics
        self.generic = generics.declareGeneric(
            name, formalParams, dispatchArity, doc
        )
        self.__name__ = name
        self.__doc__ = doc

    def __call__(self,*args,**kw):
        return self.generics.invoke(self.__name__,*args,**kw)

    def addMethod(self,signature,implementation):
        return self.generics.declareMethod(
            self.__name__, signature, implementation
        )

    def when(self,*signature):
        """Add following function to this generic under 'signature'"""
        def decorate(func):
            self.addMethod(signature,func)
            return func
        return decorate

    def selectMethod(self,*args,**kw):
        return self.generics.selectMethod(self.__name__,*args,**kw)

    def __repr__(self):
        return "<generic function %s%r>" % (
            self.__name__, self.generic.formalParams
        )


def defgeneric(generics,dispatchArity=None):
    """Decorator: declare a generic shaped like the decorated function

    Only the function's name, parameter names, and docstring are used; its
    body is never called.  Variable and keyword-only parameters aren't
    formal parameters.
    """
    def decorate(func):
        params = [
            p.name for p in inspect.signature(func).parameters.values()
                if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
        ]
        return GenericFunction(
            generics, func.__name__, params, dispatchArity, func.__doc__
        )
    return decorate
