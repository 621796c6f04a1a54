"""Foreign classes, Python class registration, and rendering"""

from unittest import TestCase, TestSuite, defaultTestLoader

from formalclasses import *
from formalclasses.foreign import isForeignClass
from formalclasses.display import defaultRenderer
from formaldispatch import GenericRegistry, GenericFunction


class Connection(object):
    pass

class SecureConnection(Connection):
    pass

class Unrelated(object):
    pass


class ForeignTests(TestCase):

    def setUp(self):
        self.reg = ClassRegistry()
        self.generics = GenericRegistry(self.reg)

    def testRegisterForeign(self):
        cdef = registerForeignClass(self.reg, 'DataFrame')
        self.assertTrue(registerForeignClass(self.reg, 'DataFrame') is cdef)
        self.assertTrue(isForeignClass(self.reg, 'DataFrame'))
        self.assertEqual(cdef.slots, {})
        self.assertEqual(cdef.parents, ())
        self.assertRaises(VirtualInstantiationError,
            self.reg.construct, 'DataFrame')

    def testForeignNameConflicts(self):
        self.reg.declareClass('Person')
        self.assertRaises(ReservedClassNameError,
            registerForeignClass, self.reg, 'Person')
        self.assertRaises(ReservedClassNameError,
            registerForeignClass, self.reg, 'numeric')

        registerForeignClass(self.reg, 'DataFrame')
        self.assertRaises(ReservedClassNameError,
            self.reg.declareClass, 'DataFrame')
        self.assertRaises(ReservedClassNameError,
            self.reg.declareClassUnion, 'DataFrame', ['Person'])

    def testForeignParent(self):
        registerForeignClass(self.reg, 'DataFrame')
        self.reg.declareClass('Table', {'title':'character'}, ['DataFrame'])
        self.assertEqual(self.reg.distance('Table','DataFrame'), 1)

    def testPythonClass(self):
        cdef = registerPythonClass(self.reg, Connection)
        self.assertEqual(cdef.name, 'Connection')
        self.assertEqual(classOf(Connection(), self.reg), 'Connection')
        self.assertEqual(classOf(SecureConnection(), self.reg), 'Connection')
        self.assertEqual(classOf(Connection()), '%s.Connection' % __name__)

        registerPythonClass(self.reg, SecureConnection, 'Secure')
        self.assertEqual(classOf(SecureConnection(), self.reg), 'Secure')

        # same name again is fine, a different one isn't
        registerPythonClass(self.reg, Connection)
        self.assertRaises(ReservedClassNameError,
            registerPythonClass, self.reg, Connection, 'Other')
        self.assertRaises(TypeError,
            registerPythonClass, self.reg, Connection(), 'Instance')

    def testPythonClassSlots(self):
        registerPythonClass(self.reg, Connection)
        self.reg.declareClass('Session', {'conn':'Connection'})
        s = self.reg.construct('Session', conn=SecureConnection())
        self.assertTrue(isinstance(s.conn, SecureConnection))
        self.assertRaises(SlotTypeError,
            self.reg.construct, 'Session', conn=Unrelated())

    def testPythonClassDispatch(self):
        registerPythonClass(self.reg, Connection)
        registerPythonClass(self.reg, SecureConnection, 'Secure')

        send = GenericFunction(self.generics, 'send', ('conn', 'data'), 1)
        send.addMethod(('Connection',), lambda conn, data: 'plain ' + data)
        send.addMethod(('ANY',), lambda conn, data: 'any ' + data)
        send.addMethod((SecureConnection,),
            lambda next_method, conn, data: 'secure ' + next_method())

        self.assertEqual(send(Connection(), 'x'), 'plain x')
        # foreign classes have no parents: 'Secure' skips 'Connection'
        self.assertEqual(send(SecureConnection(), 'x'), 'secure any x')
        self.assertEqual(send(Unrelated(), 'x'), 'any x')

    def testRemoveForgetsPythonClass(self):
        registerPythonClass(self.reg, Connection)
        self.reg.removeClass('Connection')
        self.assertEqual(classOf(Connection(), self.reg),
            '%s.Connection' % __name__)


class DescribeTests(TestCase):

    def setUp(self):
        self.reg = reg = ClassRegistry()
        reg.declareClass('Point', {'x':'numeric', 'y':'numeric'})
        reg.declareClass('Labeled', {'label':'character'}, ['Point'])
        reg.declareClass('Segment', {'start':'Point'})

    def testDefaultRendering(self):
        p = self.reg.construct('Point', x=1, y=2.5)
        self.assertEqual(describe(p),
            'An object of class "Point"\n'
            'Slot "x":\n1\n\n'
            'Slot "y":\n2.5'
        )

    def testNestedRendering(self):
        s = self.reg.construct('Segment',
            start=self.reg.construct('Point', x=0, y=0))
        self.assertEqual(describe(s),
            'An object of class "Segment"\n'
            'Slot "start":\n'
            'An object of class "Point"\n'
            'Slot "x":\n0\n\n'
            'Slot "y":\n0'
        )

    def testCyclicReferences(self):
        self.reg.declareClass('Node', {'label':'character', 'next':'Node'})
        node = self.reg.construct('Node', label='a')
        node.next = node
        self.assertEqual(describe(node),
            'An object of class "Node"\n'
            'Slot "label":\n\'a\'\n\n'
            'Slot "next":\n<reference to enclosing "Node" object>'
        )

        other = self.reg.construct('Node', label='b', next=node)
        node.next = other
        text = describe(other)
        self.assertEqual(text.count('An object of class "Node"'), 2)
        self.assertTrue(
            text.endswith('<reference to enclosing "Node" object>')
        )

        # shared but acyclic references are rendered in full each time
        self.reg.declareClass('Pair', {'left':'Point', 'right':'Point'})
        p = self.reg.construct('Point', x=1, y=2)
        pair = self.reg.construct('Pair', left=p, right=p)
        self.assertEqual(describe(pair).count('An object of class "Point"'), 2)

    def testCustomRendererIsInherited(self):
        self.reg.setRenderer('Point', lambda p: '(%s, %s)' % (p.x, p.y))
        self.assertEqual(describe(self.reg.construct('Point', x=1, y=2)),
            '(1, 2)')
        self.assertEqual(
            describe(self.reg.construct('Labeled', x=3, y=4, label='a')),
            '(3, 4)'
        )
        self.reg.setRenderer('Labeled', defaultRenderer)
        self.assertTrue(
            describe(self.reg.construct('Labeled')).startswith(
                'An object of class "Labeled"')
        )
        self.assertRaises(UnknownClassError,
            self.reg.setRenderer, 'Nope', repr)


TestClasses = (
    ForeignTests, DescribeTests,
)

def test_suite():
    return TestSuite(
        [defaultTestLoader.loadTestsFromTestCase(t) for t in TestClasses]
    )
