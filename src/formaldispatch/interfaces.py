from zope.interface import Interface, Attribute
from formalclasses.interfaces import FormalClassError

__all__ = [
    'IGeneric', 'IMethodEntry', 'IGenericRegistry', 'INextMethod',
    'IGenericFunction', 'DispatchError', 'DuplicateGenericError',
    'UnknownGenericError', 'SignatureArityError',
    'UnknownSignatureClassError', 'NoApplicableMethodError',
    'NoNextMethodError', 'DispatchLoopError', 'AmbiguousDispatchWarning',
]

class DispatchError(FormalClassError):
    """Base class for generic function errors"""


class DuplicateGenericError(DispatchError, ValueError):
    """Generic already declared with a different dispatch arity"""


class UnknownGenericError(DispatchError, LookupError):
    """No generic function of the given name has been declared"""


class SignatureArityError(DispatchError, TypeError):
    """Signature length doesn't match the generic's dispatch arity"""


class UnknownSignatureClassError(DispatchError, LookupError):
    """Signature names a class that isn't registered"""


class NoApplicableMethodError(DispatchError):
    """No applicable method has been defined for the given arguments"""


class NoNextMethodError(DispatchError):
    """'next_method()' called when no less specific method applies"""


class DispatchLoopError(DispatchError, RuntimeError):
    """Chained delegation went deeper than the dispatcher allows"""


class AmbiguousDispatchWarning(UserWarning):
    """More than one method is equally specific; one was picked by name"""


class IGeneric(Interface):

    """A generic function's declared shape"""

    name = Attribute("""Unique name of the generic""")

    formalParams = Attribute("""Tuple of formal parameter names""")

    dispatchArity = Attribute(
        """Number of leading parameters whose classes select the method"""
    )

    doc = Attribute("""Documentation string, or None""")


class IMethodEntry(Interface):

    """A method registered for a generic"""

    generic = Attribute("""Name of the owning generic""")

    signature = Attribute(
        """Tuple of class names and/or 'ANY'/'MISSING' markers"""
    )

    implementation = Attribute(
        """Callable; gets an 'INextMethod' first if its first parameter is
        named 'next_method'"""
    )

    def sortKey():
        """Tuple of names used to break ties between equal scores"""


class INextMethod(Interface):

    """Capability to call the next most specific applicable method"""

    remaining = Attribute(
        """Number of less specific candidates left after this method"""
    )

    def __call__(*args, **kw):
        """Call the next method; with no arguments, reuse the current ones

        Raise 'NoNextMethodError' if no less specific method applies."""

    def __bool__():
        """True if a next method exists"""


class IGenericRegistry(Interface):

    """Generic functions, their method tables, and the dispatcher"""

    classes = Attribute("""The 'IClassRegistry' signatures refer to""")

    maxDepth = Attribute("""Limit on nested dispatch and 'next_method()'""")

    def declareGeneric(name, formalParams, dispatchArity=None):
        """Declare generic 'name' and return its 'IGeneric'

        Raise 'DuplicateGenericError' if it exists with another arity."""

    def declareMethod(genericName, signature, implementation):
        """Register 'implementation' for 'signature'; return 'IMethodEntry'

        An entry already registered for the same signature is replaced."""

    def removeMethod(genericName, signature):
        """Remove the method for 'signature'; return true if there was one"""

    def getMethod(genericName, signature):
        """Return the 'IMethodEntry' for exactly 'signature', or None"""

    def selectMethod(genericName, *args, **kw):
        """Return the 'IMethodEntry' that 'invoke()' would call"""

    def invoke(genericName, *args, **kw):
        """Dispatch on the argument classes and call the chosen method"""


class IGenericFunction(Interface):

    """Callable front end for one generic of an 'IGenericRegistry'"""

    def __call__(*args, **kw):
        """Invoke the generic"""

    def addMethod(signature, implementation):
        """Register 'implementation' under 'signature'"""

    def when(*signature):
        """Decorator: register the following function under 'signature'"""
