"""
Classifier behavioral tests (cardinality of field annotations).

Scope
- Scalars: one token; booleans and optional booleans: presence flags.
- Text-decodable annotations always take one token, even over bool.
- Containers: sequences and mappings of scalars take many tokens; anything else fails
  with a fault naming the container and the offending position.
- Channels, callables and plain classes are unsupported.

Conventions
- Test method names follow CamelCase per project convention.
"""
import collections
import collections.abc
import enum
import pathlib
import queue
import unittest
from typing import Annotated, Any, Callable, Literal, NewType, Optional
from unittest import TestCase

from argkind import (
    Cardinality,
    Classification,
    Decoder,
    FaultCode,
    UnsupportedTypeError,
    cardinality,
    classify,
    isflag,
)


class Color(enum.Enum):
    RED = "red"
    BLUE = "blue"


class Switch:
    """structurally a toggle, but decodes its own token."""

    def __init__(self, state):
        self.state = state

    @classmethod
    def __fromtext__(cls, text):
        return cls(text == "on")


class Point:
    """plain class without text decoding."""

    def __init__(self, x=0, y=0):
        self.x, self.y = x, y


Toggle = Annotated[bool, Decoder(lambda text: text == "on")]
Port = NewType("Port", int)
Verbose = NewType("Verbose", bool)


class TestCardinality(TestCase):
    """Behavioral tests for the Cardinality tag."""

    def testCardinalityStringForms(self):
        self.assertEqual(
            [str(member) for member in Cardinality],
            ["zero", "one", "multiple", "unsupported"],
        )

    def testCardinalityNargs(self):
        self.assertEqual(Cardinality.ZERO.nargs, 0)
        self.assertIsNone(Cardinality.ONE.nargs)
        self.assertEqual(Cardinality.MULTIPLE.nargs, "*")
        self.assertFalse(Cardinality.UNSUPPORTED.nargs)


class TestClassifyScalars(TestCase):
    """Scalars and presence flags."""

    def testScalarsTakeOneToken(self):
        for hint in (str, int, float, complex, bytes, pathlib.Path, Color, Port, Literal["a", "b"]):
            with self.subTest(hint=hint):
                self.assertEqual(classify(hint), (Cardinality.ONE, None))

    def testOptionalScalarTakesOneToken(self):
        self.assertEqual(classify(Optional[int]), (Cardinality.ONE, None))
        self.assertEqual(classify(str | None), (Cardinality.ONE, None))

    def testBooleanIsPresenceFlag(self):
        self.assertEqual(classify(bool), (Cardinality.ZERO, None))

    def testOptionalBooleanIsPresenceFlag(self):
        self.assertEqual(classify(bool | None), (Cardinality.ZERO, None))
        self.assertEqual(classify(Optional[bool]), (Cardinality.ZERO, None))

    def testBooleanNewTypeIsPresenceFlag(self):
        self.assertEqual(classify(Verbose), (Cardinality.ZERO, None))

    def testDecodableBooleanTakesOneToken(self):
        self.assertEqual(classify(Toggle), (Cardinality.ONE, None))
        self.assertEqual(classify(Optional[Toggle]), (Cardinality.ONE, None))

    def testFromTextHookTakesOneToken(self):
        self.assertEqual(classify(Switch), (Cardinality.ONE, None))
        self.assertEqual(classify(Switch | None), (Cardinality.ONE, None))

    def testResultIsClassification(self):
        result = classify(int)
        self.assertIsInstance(result, Classification)
        self.assertIs(result.cardinality, Cardinality.ONE)
        self.assertIsNone(result.fault)

    def testClassificationKeepsFaultPairing(self):
        with self.assertRaises(ValueError):
            Classification(Cardinality.UNSUPPORTED, None)
        with self.assertRaises(ValueError):
            Classification(Cardinality.ONE, UnsupportedTypeError("cannot parse into object"))
        with self.assertRaises(TypeError):
            Classification(Cardinality.UNSUPPORTED)
        with self.assertRaises(TypeError):
            Classification(Cardinality.UNSUPPORTED, "cannot parse into object")
        fault = UnsupportedTypeError("cannot parse into object")
        self.assertIs(Classification(Cardinality.UNSUPPORTED, fault).fault, fault)


class TestIsFlag(TestCase):
    """Presence-flag detection."""

    def testPlainAndOptionalBooleans(self):
        self.assertTrue(isflag(bool))
        self.assertTrue(isflag(bool | None))

    def testDecodableNeverFlag(self):
        self.assertFalse(isflag(Toggle))
        self.assertFalse(isflag(Toggle | None))
        self.assertFalse(isflag(Switch))

    def testNonBooleansAreNotFlags(self):
        for hint in (int, str, list[bool], Optional[int], Literal[True]):
            with self.subTest(hint=hint):
                self.assertFalse(isflag(hint))


class TestClassifyContainers(TestCase):
    """Sequences and mappings."""

    def testSequencesOfScalarsTakeManyTokens(self):
        for hint in (
                list[int],
                list[bool],
                set[str],
                frozenset[Color],
                tuple[float, ...],
                collections.deque[pathlib.Path],
                collections.abc.Sequence[str],
                list[Switch],
                list[int | None],
        ):
            with self.subTest(hint=hint):
                self.assertEqual(classify(hint), (Cardinality.MULTIPLE, None))

    def testOptionalSequenceTakesManyTokens(self):
        self.assertEqual(classify(list[int] | None), (Cardinality.MULTIPLE, None))

    def testMappingsOfScalarsTakeManyTokens(self):
        for hint in (dict[str, int], collections.abc.Mapping[str, bool], dict[Color, pathlib.Path]):
            with self.subTest(hint=hint):
                self.assertEqual(classify(hint), (Cardinality.MULTIPLE, None))

    def testOptionalMappingTakesManyTokens(self):
        self.assertEqual(classify(Optional[dict[str, int]]), (Cardinality.MULTIPLE, None))

    def testSequenceOfUnsupportedElement(self):
        result, fault = classify(list[queue.Queue])
        self.assertIs(result, Cardinality.UNSUPPORTED)
        self.assertIsInstance(fault, UnsupportedTypeError)
        self.assertEqual(fault.options["position"], "element")
        self.assertIs(fault.options["code"], FaultCode.UNSUPPORTED_ELEMENT)
        self.assertIn("list[queue.Queue]", str(fault))
        self.assertIn("queue.Queue not supported", str(fault))

    def testNestedSequenceUnsupported(self):
        result, fault = classify(list[list[int]])
        self.assertIs(result, Cardinality.UNSUPPORTED)
        self.assertIsNotNone(fault)

    def testUnparameterisedSequenceUnsupported(self):
        result, fault = classify(list)
        self.assertIs(result, Cardinality.UNSUPPORTED)
        self.assertIn("Any", str(fault))

    def testMappingValueFailureNamesValue(self):
        result, fault = classify(dict[str, queue.Queue[int]])
        self.assertIs(result, Cardinality.UNSUPPORTED)
        self.assertEqual(fault.options["position"], "value")
        self.assertIs(fault.options["code"], FaultCode.UNSUPPORTED_VALUE)
        self.assertIn("value type queue.Queue[int]", str(fault))
        self.assertIn("dict[str, queue.Queue[int]]", str(fault))

    def testMappingKeyFailureNamesKey(self):
        result, fault = classify(dict[Point, int])
        self.assertIs(result, Cardinality.UNSUPPORTED)
        self.assertEqual(fault.options["position"], "key")
        self.assertIs(fault.options["code"], FaultCode.UNSUPPORTED_KEY)
        self.assertIn("key type", str(fault))
        self.assertIn("Point", str(fault))

    def testFixedShapeTupleUnsupported(self):
        result, fault = classify(tuple[int, str])
        self.assertIs(result, Cardinality.UNSUPPORTED)
        self.assertIsNotNone(fault)


class TestClassifyUnsupported(TestCase):
    """Channels, callables, plain classes and other shapes."""

    def testUnsupportedShapes(self):
        for hint in (queue.Queue[int], Callable[[], None], Point, Any, int | str, object):
            with self.subTest(hint=hint):
                result, fault = classify(hint)
                self.assertIs(result, Cardinality.UNSUPPORTED)
                self.assertIsInstance(fault, UnsupportedTypeError)
                self.assertIs(fault.options["code"], FaultCode.UNSUPPORTED_TYPE)
                self.assertTrue(str(fault).startswith("cannot parse into"))

    def testFaultPresentExactlyWhenUnsupported(self):
        for hint in (int, bool, list[int], dict[str, int], Point, list[Point], dict[str, Point]):
            with self.subTest(hint=hint):
                result, fault = classify(hint)
                self.assertEqual(result is Cardinality.UNSUPPORTED, fault is not None)

    def testClassifyIsDeterministic(self):
        self.assertEqual(classify(list[int]), classify(list[int]))
        self.assertEqual(str(classify(Point).fault), str(classify(Point).fault))


class TestCardinalityRaisingForm(TestCase):
    """The raising form of the classifier."""

    def testReturnsBareCardinality(self):
        self.assertIs(cardinality(list[int]), Cardinality.MULTIPLE)
        self.assertIs(cardinality(bool | None), Cardinality.ZERO)

    def testRaisesUnsupportedTypeError(self):
        with self.assertRaises(UnsupportedTypeError) as context:
            cardinality(dict[str, queue.Queue[int]])
        self.assertIn("value type", str(context.exception))


class TestEndToEnd(TestCase):
    """The canonical classification scenario."""

    def testScenario(self):
        self.assertEqual(classify(list[int]), (Cardinality.MULTIPLE, None))
        self.assertEqual(classify(dict[str, int]), (Cardinality.MULTIPLE, None))
        result, fault = classify(dict[str, queue.Queue[int]])
        self.assertIs(result, Cardinality.UNSUPPORTED)
        self.assertIn("value type", str(fault))
        self.assertEqual(classify(bool | None), (Cardinality.ZERO, None))
        self.assertEqual(classify(Toggle), (Cardinality.ONE, None))


if __name__ == "__main__":
    unittest.main()
