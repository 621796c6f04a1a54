"""Signature scoring and method ordering

    ANY, MISSING -- signature markers: match anything, even an omitted
        argument (scored worse than any real class), or match only an
        argument that wasn't supplied

    canonicalSignature -- check and normalize a signature to class names
        and markers

    scoreSignature -- per-position class distances between a signature and
        the classes of a call's arguments

    orderedCandidates -- applicable methods, most specific first

    isLessSpecific -- may one candidate serve as the next method of another?
"""

from formalclasses.interfaces import IClassDef
from formalclasses.primitives import UNREACHABLE
from formaldispatch.interfaces import UnknownSignatureClassError

__all__ = [
    'ANY', 'MISSING', 'canonicalSignature', 'scoreSignature',
    'orderedCandidates', 'isLessSpecific', 'anyScore', 'sortKey',
    'Candidate',
]


class _Marker(object):

    """Signature entry that isn't a class"""

    __slots__ = 'name', 'key'

    def __init__(self,name,key):
        self.name = name
        self.key = key      # name used when sorting signatures

    def __repr__(self):
        return self.name

    def __reduce__(self):
        return self.name


ANY = _Marker('ANY', 'ANY')
MISSING = _Marker('MISSING', 'missing')

_aliases = {'ANY': ANY, 'missing': MISSING, 'MISSING': MISSING}


def canonicalElement(registry,item):
    """Return class name or marker for signature element 'item'"""

    if item is ANY or item is MISSING:
        return item

    if isinstance(item,str):
        if item in _aliases:
            return _aliases[item]
        if registry.existsClass(item):
            return item
        raise UnknownSignatureClassError(item)

    if IClassDef.providedBy(item):
        if registry.existsClass(item.name):
            return item.name
        raise UnknownSignatureClassError(item.name)

    if isinstance(item,type):
        name = registry.pythonClassName(item)
        if name is not None:
            return name

    raise UnknownSignatureClassError(item)


def canonicalSignature(registry,signature):
    if isinstance(signature,(str,_Marker)) or IClassDef.providedBy(signature):
        signature = (signature,)
    return tuple([canonicalElement(registry,item) for item in signature])


def sortKey(signature):
    return tuple([
        isinstance(item,_Marker) and item.key or item for item in signature
    ])


def anyScore(registry):
    """Score for an 'ANY' position: worse than any real class distance"""
    return len(registry)+1


def scoreSignature(registry,signature,argClasses,anyDistance=None):
    """Return tuple of per-position scores, or None if not applicable"""

    if anyDistance is None:
        anyDistance = anyScore(registry)

    scores = []
    for sigClass,argClass in zip(signature,argClasses):
        if sigClass is MISSING:
            if argClass is not MISSING:
                return None
            scores.append(0)
        elif sigClass is ANY:
            scores.append(anyDistance)
        elif argClass is MISSING:
            return None
        else:
            d = registry.distance(argClass,sigClass)
            if d==UNREACHABLE:
                return None
            scores.append(d)

    return tuple(scores)


class Candidate(object):

    """An applicable method entry, with its scores for one call"""

    __slots__ = 'entry', 'scores', 'total', 'key'

    def __init__(self,entry,scores):
        self.entry = entry
        self.scores = scores
        self.total = sum(scores)
        self.key = sortKey(entry.signature)

    def __repr__(self):
        return "Candidate(%r, %r)" % (self.entry.signature, self.scores)


def orderedCandidates(registry,entries,argClasses):
    """Return applicable 'Candidate' list, best total score first

    Equal totals are ordered by signature names, so the order is the same
    for every call with the same registry contents.
    """
    anyDistance = anyScore(registry)
    candidates = []
    for entry in entries:
        scores = scoreSignature(
            registry, entry.signature, argClasses, anyDistance
        )
        if scores is not None:
            candidates.append(Candidate(entry,scores))

    candidates.sort(key=lambda c: (c.total, c.key))
    return candidates


def isLessSpecific(candidate,current):
    """True if 'candidate' is nowhere more specific than 'current'

    ...and is less specific in at least one position.
    """
    strictly = False
    for mine,theirs in zip(candidate.scores,current.scores):
        if mine<theirs:
            return False
        if mine>theirs:
            strictly = True
    return strictly
