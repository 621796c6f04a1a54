"""Tests for construction through the 'initialize' generic"""

from unittest import TestCase, TestSuite, defaultTestLoader

from formalclasses import *
from formaldispatch import *


class InitializeTests(TestCase):

    def setUp(self):
        self.classes = reg = ClassRegistry()
        reg.declareClass('Person', {'name':'character', 'age':'numeric'})
        reg.declareClass('Employee', {'salary':'numeric'}, ['Person'])
        self.generics = GenericRegistry(reg)
        self.log = []

    def testInstalledByDefault(self):
        self.assertTrue(self.generics.isGeneric(INITIALIZE))
        self.assertTrue(self.classes.constructionHook is not None)
        p = self.classes.construct('Person', name='Al')
        self.assertEqual(p.name, 'Al')
        self.assertEqual(
            self.generics.selectMethod(INITIALIZE, p).signature, (ANY,)
        )

    def testCooperativeChain(self):
        log = self.log

        def initPerson(next_method,obj,**values):
            log.append('Person')
            values['name'] = values.get('name', '').strip()
            return next_method(obj,**values)

        def initEmployee(next_method,obj,**values):
            log.append('Employee')
            values.setdefault('salary', 1000)
            return next_method(obj,**values)

        self.generics.declareMethod(INITIALIZE, ('Person',), initPerson)
        self.generics.declareMethod(INITIALIZE, ('Employee',), initEmployee)

        e = self.classes.construct('Employee', name='  Bea ', age=33)
        self.assertEqual(log, ['Employee', 'Person'])
        self.assertEqual(e.name, 'Bea')
        self.assertEqual(e.salary, 1000)
        self.assertEqual(e.age, 33)

        del log[:]
        p = self.classes.construct('Person', name=' Cal')
        self.assertEqual(log, ['Person'])
        self.assertEqual(p.name, 'Cal')

    def testHookSeesEmptyInstance(self):
        seen = []

        def initPerson(next_method,obj,**values):
            seen.append((obj.className, dict(obj._values), values))
            return next_method()

        self.generics.declareMethod(INITIALIZE, ('Person',), initPerson)
        self.classes.construct('Employee', age=3)
        self.assertEqual(seen, [('Employee', {}, {'age': 3})])

    def testHookSettingSlotsItself(self):
        def initPerson(obj,**values):
            obj.name = 'fixed'
            obj.age = 0

        self.generics.declareMethod(INITIALIZE, ('Person',), initPerson)
        p = self.classes.construct('Person', name='ignored')
        self.assertEqual(p.name, 'fixed')

        # ...but Employee's own slot is never filled
        self.assertRaises(IncompleteInstanceError,
            self.classes.construct, 'Employee')

    def testHookMustReturnInstance(self):
        self.generics.declareMethod(INITIALIZE, ('Person',),
            lambda next_method, obj, **values: 42)
        self.assertRaises(TypeError, self.classes.construct, 'Person')

    def testHookValidation(self):
        self.classes.declareClass('Adult', {}, ['Person'],
            validity=lambda ob: ob.age>=18 or "too young")

        def initAdult(next_method,obj,**values):
            values.setdefault('age', 18)
            return next_method(obj,**values)

        self.generics.declareMethod(INITIALIZE, ('Adult',), initAdult)
        self.assertEqual(self.classes.construct('Adult').age, 18)
        self.assertRaises(InvalidObjectError,
            self.classes.construct, 'Adult', age=12)

    def testAmbiguousDiamond(self):
        reg = self.classes
        reg.declareClass('Left', {'l':'numeric'}, ['Person'])
        reg.declareClass('Right', {'r':'numeric'}, ['Person'])
        reg.declareClass('Both', {}, ['Left', 'Right'])
        log = self.log

        def initLeft(next_method,obj,**values):
            log.append('Left')
            return next_method()

        def initRight(next_method,obj,**values):
            log.append('Right')
            return next_method()

        self.generics.declareMethod(INITIALIZE, ('Right',), initRight)
        self.generics.declareMethod(INITIALIZE, ('Left',), initLeft)

        with self.assertWarns(AmbiguousDispatchWarning):
            both = reg.construct('Both', l=1, r=2)

        # the equally specific method isn't a next method
        self.assertEqual(log, ['Left'])
        self.assertEqual((both.l, both.r), (1, 2))

    def testRemovedInitializeComesBack(self):
        self.generics.declareMethod(INITIALIZE, ('Person',),
            lambda obj, **values: None)
        self.generics.removeGeneric(INITIALIZE)
        self.assertTrue(self.generics.isGeneric(INITIALIZE))
        self.assertEqual(self.classes.construct('Person', name='D').name, 'D')

    def testLastRegistryOwnsTheHook(self):
        other = GenericRegistry(self.classes)
        self.generics.declareMethod(INITIALIZE, ('Person',),
            lambda obj, **values: self.fail("wrong registry"))
        self.assertEqual(self.classes.construct('Person', name='E').name, 'E')
        self.assertTrue(self.classes.constructionHook.generics is other)

    def testSlotsNamedLikeParameters(self):
        slots = {
            'obj':'ANY', 'registry':'ANY', 'className':'character',
            'genericName':'character', 'values':'ANY',
        }
        self.classes.declareClass('Box', slots)
        box = self.classes.construct('Box', obj=1, registry=2,
            className='Crate', genericName='g', values=[3])
        self.assertEqual(getSlot(box, 'obj'), 1)
        self.assertEqual(getSlot(box, 'registry'), 2)
        self.assertEqual(getSlot(box, 'className'), 'Crate')
        self.assertEqual(getSlot(box, 'genericName'), 'g')
        self.assertEqual(box.className, 'Box')
        self.assertTrue(box.registry is self.classes)

        def initBox(next_method,box,**values):
            values['obj'] = values['obj'] * 10
            return next_method(box,**values)

        self.generics.declareMethod(INITIALIZE, ('Box',), initBox)
        box = construct(self.classes, 'Box', obj=1, registry=None)
        self.assertEqual(getSlot(box, 'obj'), 10)

        self.classes.constructionHook = None
        box = self.classes.construct('Box', obj=4, className='Bin')
        self.assertEqual(getSlot(box, 'className'), 'Bin')

    def testWithoutHook(self):
        self.classes.constructionHook = None
        p = self.classes.construct('Person', name='F')
        self.assertEqual(p.name, 'F')


TestClasses = (
    InitializeTests,
)

def test_suite():
    return TestSuite(
        [defaultTestLoader.loadTestsFromTestCase(t) for t in TestClasses]
    )
