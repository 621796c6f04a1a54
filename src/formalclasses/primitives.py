"""Built-in primitive types, zero values, and slot assignability

    BUILTIN_TYPES -- mapping from built-in type name to its parents,
        virtuality, and zero-value factory

    UNREACHABLE -- distance between classes with no inheritance path

    classOf -- runtime class name of any Python value

    assignable -- can a value be stored in a slot of a declared type?

    zeroValue -- the value an unset slot of a declared type starts with
"""

import inspect

from formalclasses.interfaces import IInstance, UnknownClassError

__all__ = [
    'ANY_TYPE', 'BUILTIN_TYPES', 'MARKER_NAMES', 'UNREACHABLE', 'classOf',
    'assignable', 'zeroValue', 'isBuiltin', 'pythonTypeName',
]

UNREACHABLE = float('inf')

ANY_TYPE = 'ANY'

# Names that can appear in method signatures but never name a class
MARKER_NAMES = (ANY_TYPE, 'missing')

NaN = float('nan')


# name: (parents, isVirtual, zero-value factory)

BUILTIN_TYPES = {
    'vector':    ((),            True,  lambda: None),
    'numeric':   (('vector',),   False, lambda: NaN),
    'integer':   (('numeric',),  False, lambda: 0),
    'character': (('vector',),   False, lambda: ''),
    'logical':   (('vector',),   False, lambda: False),
    'list':      (('vector',),   False, list),
    'function':  ((),            False, lambda: None),
    'NULL':      ((),            False, lambda: None),
}


def isBuiltin(name):
    return name==ANY_TYPE or name in BUILTIN_TYPES


def _isInteger(ob):
    return isinstance(ob,int) and not isinstance(ob,bool)

def _isNumeric(ob):
    return _isInteger(ob) or isinstance(ob,float)

def _isCharacter(ob):
    return isinstance(ob,str)

def _isLogical(ob):
    return isinstance(ob,bool)


_scalarTests = {
    'numeric': _isNumeric,
    'integer': _isInteger,
    'character': _isCharacter,
    'logical': _isLogical,
}


def _scalarOrSequenceOf(test,ob):
    # No cardinality check: a sequence of compatible values is accepted
    # wherever a single value would be.
    if test(ob):
        return True
    if isinstance(ob,(list,tuple)):
        for item in ob:
            if not test(item):
                return False
        return True
    return False


def _builtinAccepts(name,ob):
    if name==ANY_TYPE:
        return True
    if name in _scalarTests:
        return _scalarOrSequenceOf(_scalarTests[name],ob)
    if name=='list':
        return isinstance(ob,(list,tuple))
    if name=='function':
        return ob is None or callable(ob)
    if name=='NULL':
        return ob is None
    if name=='vector':
        for member in ('numeric','character','logical','list'):
            if _builtinAccepts(member,ob):
                return True
    return False


def pythonTypeName(typ):
    """Name used for an unregistered Python type"""
    if typ.__module__=='builtins':
        return typ.__qualname__
    return '%s.%s' % (typ.__module__, typ.__qualname__)


def classOf(ob,registry=None):
    """Return the runtime class name of 'ob'

    Formal instances report their class name.  Instances of Python classes
    registered with 'registerPythonClass()' report the registered name of
    the nearest registered type in their MRO.  Plain values map to the
    built-in types; anything else gets its Python type name, which no
    formal class inherits from.
    """
    if IInstance.providedBy(ob):
        return ob.className

    if registry is not None:
        name = registry.pythonClassName(type(ob))
        if name is not None:
            return name

    if ob is None:
        return 'NULL'
    if isinstance(ob,bool):
        return 'logical'
    if isinstance(ob,int):
        return 'integer'
    if isinstance(ob,float):
        return 'numeric'
    if isinstance(ob,str):
        return 'character'
    if isinstance(ob,(list,tuple)):
        return 'list'
    if inspect.isroutine(ob):
        return 'function'
    return pythonTypeName(type(ob))


def assignable(declaredType,value,registry=None):
    """Can 'value' be stored in a slot declared as 'declaredType'?

    This is a pure predicate: it never modifies 'value' or the registry.
    Slots of a class type also accept 'None' as a null reference.
    """
    if declaredType==ANY_TYPE:
        return True

    if declaredType in BUILTIN_TYPES and _builtinAccepts(declaredType,value):
        return True

    if registry is None:
        return False

    if not isBuiltin(declaredType):
        if not registry.existsClass(declaredType):
            raise UnknownClassError(declaredType)
        if value is None:
            return True

    return registry.isSubclassOf(classOf(value,registry),declaredType)


def zeroValue(declaredType):
    """Return a fresh zero value for 'declaredType'

    'numeric' slots start out as NaN, the missing-number sentinel.  Class
    typed slots start out as 'None'.
    """
    try:
        return BUILTIN_TYPES[declaredType][2]()
    except KeyError:
        return None
