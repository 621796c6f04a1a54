"""Method combination: calling a chosen method and its next methods"""

import inspect
import logging

from zope.interface import implementer

from formaldispatch.interfaces import *
from formaldispatch.strategy import isLessSpecific

__all__ = ['NextMethod', 'takesNextMethod', 'callCandidate']

log = logging.getLogger(__name__)


def takesNextMethod(func):
    """Does 'func' want a next-method capability as its first argument?"""
    try:
        params = list(inspect.signature(func).parameters.values())
    except (TypeError, ValueError):
        return False    # not introspectable, therefore not chainable
    return bool(params) and params[0].name=='next_method' and \
        params[0].kind in (params[0].POSITIONAL_ONLY,
            params[0].POSITIONAL_OR_KEYWORD)


@implementer(INextMethod)
class NextMethod(object):

    """Capability to call the next most specific method of one dispatch

    The candidates were scored and ordered once, when the generic was
    invoked; a 'NextMethod' is just a cursor into that list.  The next
    method is the first later candidate that is no more specific than the
    current one at any position, and less specific in at least one.
    """

    __slots__ = 'generics', 'candidates', 'position', 'args', 'kw'

    def __init__(self,generics,candidates,position,args,kw):
        self.generics = generics
        self.candidates = candidates
        self.position = position
        self.args = args
        self.kw = kw

    def _successors(self):
        current = self.candidates[self.position]
        for index in range(self.position+1, len(self.candidates)):
            if isLessSpecific(self.candidates[index],current):
                yield index

    @property
    def remaining(self):
        return len(list(self._successors()))

    def __bool__(self):
        for index in self._successors():
            return True
        return False

    def __call__(self,*args,**kw):
        for index in self._successors():
            break
        else:
            entry = self.candidates[self.position].entry
            raise NoNextMethodError(entry.generic, entry.signature)

        if not args and not kw:
            args, kw = self.args, self.kw

        entry = self.candidates[index].entry
        log.debug("next method of %s is %r", entry.generic, entry.signature)
        return callCandidate(self.generics,self.candidates,index,args,kw)

    def __repr__(self):
        entry = self.candidates[self.position].entry
        return "<next method after %s%r>" % (entry.generic, entry.signature)


def callCandidate(generics,candidates,index,args,kw):
    """Call method 'candidates[index]' with 'args' and 'kw'"""

    entry = candidates[index].entry
    generics.enterDispatch()
    try:
        if entry.chained:
            next_method = NextMethod(generics,candidates,index,args,kw)
            return entry.implementation(next_method,*args,**kw)
        return entry.implementation(*args,**kw)
    finally:
        generics.exitDispatch()
