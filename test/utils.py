"""
Tests for the internal utilities.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, representation,
  copy/pickle identity and finality.
- coalesce(): only Unset is replaced.
- mirror(): read-only properties with defensive container copies.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from argkind.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def setUp(self) -> None:
        self.unset: UnsetType = UnsetType()

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(self.unset, UnsetType())
        self.assertIs(Unset, self.unset)

    def testRepr(self) -> None:
        self.assertEqual(repr(self.unset), "Unset")

    def testFalsely(self) -> None:
        self.assertFalse(bool(self.unset))

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values (None/False).
        """
        self.assertNotEqual(self.unset, None)
        self.assertNotEqual(self.unset, False)  # noqa: E712

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(self.unset), self.unset)
        self.assertIs(copy.deepcopy(self.unset), self.unset)

    def testPickleRoundTrip(self) -> None:
        restored: UnsetType = pickle.loads(pickle.dumps(self.unset))
        self.assertIs(restored, self.unset)

    def testUnionAnnotations(self) -> None:
        self.assertEqual(str | Unset, str | UnsetType)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testUnsetReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyPreserved(self) -> None:
        for value in (None, 0, "", []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class MirrorTest(TestCase):

    class Holder:
        items = mirror("items")
        label = mirror("label")

        def __init__(self):
            self._items = [1, [2, 3]]
            self._label = "holder"

    def testReadOnly(self) -> None:
        holder = self.Holder()
        with self.assertRaises(AttributeError):
            holder.label = "other"

    def testContainersAreCopied(self) -> None:
        holder = self.Holder()
        holder.items[1].append(4)
        self.assertEqual(holder.items, [1, [2, 3]])

    def testScalarsPassThrough(self) -> None:
        self.assertEqual(self.Holder().label, "holder")

    def testNameMustBeString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == '__main__':
    unittest.main()
