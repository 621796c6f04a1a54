"""Support for classes defined outside the formal class system

A foreign class is just a name: it has no slots, no parents, and can't be
constructed, but it can appear in method signatures and be dispatched on
like any other class.  'registerPythonClass()' goes one step further and
makes ordinary Python objects report the foreign name as their class.
"""

__all__ = ['registerForeignClass', 'registerPythonClass', 'isForeignClass']


def registerForeignClass(registry,name):
    """Make 'name' usable as a parentless, slotless class in 'registry'

    Registering the same foreign name again is harmless.  A name that's
    already used by a formal class, a union, or a built-in type raises
    'ReservedClassNameError'.
    """
    return registry.addForeignClass(name)


def registerPythonClass(registry,pyclass,name=None):
    """Dispatch instances of 'pyclass' (and its subclasses) as 'name'

    'name' defaults to the class' '__name__'.  Subclasses of 'pyclass' that
    aren't registered themselves are reported under the name of their
    nearest registered base, following the Python MRO.
    """
    if not isinstance(pyclass,type):
        raise TypeError("Not a Python class", pyclass)

    if name is None:
        name = pyclass.__name__

    registry.addPythonClass(pyclass,name)
    return registry.getClass(name)


def isForeignClass(registry,name):
    return registry.existsClass(name) and \
        registry.getClass(name).kind=='foreign'
