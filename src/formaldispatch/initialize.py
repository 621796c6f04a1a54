"""The built-in 'initialize' generic: cooperative instance construction

'construct()' hands every new (still empty) instance to 'initialize',
which dispatches on the instance's class.  A method for some class can
check or transform the keyword values, then delegate the rest of the work
to the next method, i.e. its parent class's method::

    def initPerson(next_method, obj, **values):
        values['name'] = values.get('name', '').strip()
        return next_method(obj, **values)

    generics.declareMethod('initialize', ('Person',), initPerson)

At the end of the chain is the default method (for 'ANY'), which fills
the slots from the values, prototypes, and zero values.  A method that
doesn't delegate must set every slot itself.
"""

from zope.interface import implementer

from formalclasses.interfaces import IConstructionHook
from formalclasses.instances import initializeSlots
from formaldispatch.strategy import ANY

__all__ = ['INITIALIZE', 'InitializeHook', 'defaultInitialize', 'install']

INITIALIZE = 'initialize'

# Not a valid keyword, so it can't collide with a slot name in 'values'
OBJECT_PARAM = '.Object'


def defaultInitialize(obj,/,**values):
    """Fill slots of 'obj' from 'values', prototypes, and zero values"""
    return initializeSlots(obj,values)


@implementer(IConstructionHook)
class InitializeHook(object):

    """Construction hook that invokes a registry's 'initialize' generic"""

    __slots__ = 'generics'

    def __init__(self,generics):
        self.generics = generics

    def __call__(self,instance,values):
        return self.generics.invoke(INITIALIZE,instance,**values)


def install(generics):
    """Declare 'initialize' in 'generics' and hook it into construction

    A class registry has only one construction hook, so the generic
    registry installed last is the one 'construct()' uses.
    """
    generics.declareGeneric(INITIALIZE, (OBJECT_PARAM,), 1,
        defaultInitialize.__doc__)
    generics.declareMethod(INITIALIZE, (ANY,), defaultInitialize)
    generics.classes.constructionHook = InitializeHook(generics)
