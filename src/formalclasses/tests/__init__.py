from unittest import TestSuite


def test_suite():

    from formalclasses.tests import test_classes, test_instances
    from formalclasses.tests import test_foreign, test_dispatch
    from formalclasses.tests import test_initialize

    tests = [
        test_classes.test_suite(),
        test_instances.test_suite(),
        test_foreign.test_suite(),
        test_dispatch.test_suite(),
        test_initialize.test_suite(),
    ]

    return TestSuite(
        tests
    )
