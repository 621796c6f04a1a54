"""Textual rendering of instances

The core never renders anything itself; this is for callers that want text.
A renderer registered with 'registry.setRenderer()' for the instance's
class, or its nearest ancestor that has one, is preferred over the default.
"""

from formalclasses.interfaces import IInstance
from formalclasses.instances import classesOf, slotTypes

__all__ = ['describe', 'defaultRenderer', 'findRenderer']


def findRenderer(instance):
    registry = instance.registry
    for klass in classesOf(instance):
        render = registry.getRenderer(klass)
        if render is not None:
            return render
    return None


def describe(instance):
    """Return text describing 'instance'"""
    render = findRenderer(instance)
    if render is None:
        render = defaultRenderer
    return render(instance)


def defaultRenderer(instance,seen=None):
    """Render slots one by one; nested instances are rendered in place

    'seen' holds the ids of the instances being rendered further out, so an
    instance that refers back to one of them is shown as a reference.
    """
    if seen is None:
        seen = set()
    seen = seen | set([id(instance)])

    lines = ['An object of class "%s"' % instance.className]
    values = instance._values
    for slot in slotTypes(instance.registry,instance.className):
        lines.append('Slot "%s":' % slot)
        if slot not in values:
            lines.append('<not initialized>')
        elif IInstance.providedBy(values[slot]):
            lines.append(_describeNested(values[slot],seen))
        else:
            lines.append(repr(values[slot]))
        lines.append('')
    return '\n'.join(lines).rstrip('\n')


def _describeNested(instance,seen):
    if id(instance) in seen:
        return '<reference to enclosing "%s" object>' % instance.className
    render = findRenderer(instance)
    if render is None or render is defaultRenderer:
        return defaultRenderer(instance,seen)
    return render(instance)
