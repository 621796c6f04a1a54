"""Queries over the class inheritance graph

The graph isn't stored anywhere: it's read off the registry's current
definitions (declared parents plus class union memberships) on each query.
Class graphs are small, so every query is a plain breadth-first search.
"""

from collections import deque

from formalclasses.primitives import UNREACHABLE

__all__ = ['ancestorsOf', 'ancestorDistances', 'distance', 'isSubclassOf']


def ancestorDistances(registry,name):
    """Return list of '(ancestor,distance)' pairs for 'name', nearest first

    'name' itself comes first, at distance 0.  Each ancestor appears once,
    at its shortest distance; ancestors at the same distance are listed in
    the order their children declare them.
    """
    seen = {name: 0}
    found = [(name, 0)]
    queue = deque(found)
    parentsOf = registry.parentsOf

    while queue:
        klass, depth = queue.popleft()
        for parent in parentsOf(klass):
            if parent not in seen:
                seen[parent] = depth+1
                found.append((parent, depth+1))
                queue.append((parent, depth+1))

    return found


def ancestorsOf(registry,name):
    return [klass for klass,depth in ancestorDistances(registry,name)]


def distance(registry,fromClass,toClass):
    """Length of shortest parent path from 'fromClass' to 'toClass'"""

    if fromClass==toClass:
        return 0

    seen = set([fromClass])
    queue = deque([(fromClass, 0)])
    parentsOf = registry.parentsOf

    while queue:
        klass, depth = queue.popleft()
        for parent in parentsOf(klass):
            if parent==toClass:
                return depth+1
            if parent not in seen:
                seen.add(parent)
                queue.append((parent, depth+1))

    return UNREACHABLE


def isSubclassOf(registry,a,b):
    return distance(registry,a,b) != UNREACHABLE
