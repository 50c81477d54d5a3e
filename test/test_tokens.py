"""
Tokens module behavioral tests (variants, defaults, implicits, parsing, clones).

Scope
- token() picks the variant matching the kind or annotation.
- Capability queries (container/boolean/default/implicit).
- Eager validation of default and implicit values.
- parse(text) overwrite vs append semantics; parse() implicit fallback.
- Clone independence and idempotence across identical tokens.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
import warnings
from unittest import TestCase

from argot.faults import (
    ArgBadTypeException,
    ArgNotPresentException,
    ArgNotSatisfiedException,
    EmptyValueWarning,
)
from argot.kinds import Sequence, Optional, Scalar, int8, int32, int64, boolean, character
from argot.tokens import (
    Token,
    IntegralToken,
    BooleanToken,
    CharacterToken,
    ScalarToken,
    OptionalToken,
    SequenceToken,
    token,
)


class TestVariants(TestCase):
    """token() dispatch and construction rules."""

    def testDispatch(self):
        self.assertIsInstance(token(int32), IntegralToken)
        self.assertIsInstance(token(boolean), BooleanToken)
        self.assertIsInstance(token(character), CharacterToken)
        self.assertIsInstance(token(Scalar(float)), ScalarToken)
        self.assertIsInstance(token(Optional(int8)), OptionalToken)
        self.assertIsInstance(token(Sequence(int8)), SequenceToken)

    def testDispatchFromAnnotations(self):
        self.assertIsInstance(token(bool), BooleanToken)
        self.assertIsInstance(token(int), IntegralToken)
        self.assertEqual(token(int).kind, int64)
        self.assertIsInstance(token(list[int]), SequenceToken)
        self.assertIsInstance(token(float | None), OptionalToken)
        self.assertIsInstance(token(str), ScalarToken)

    def testCapabilities(self):
        self.assertTrue(token(bool).is_boolean())
        self.assertFalse(token(bool).is_container())
        self.assertTrue(token(list[int]).is_container())
        self.assertFalse(token(list[bool]).is_boolean())
        self.assertFalse(token(int8).is_boolean())

    def testAbstractBase(self):
        with self.assertRaises(TypeError):
            Token(int8)

    def testVariantRejectsForeignKind(self):
        with self.assertRaises(TypeError):
            IntegralToken(boolean)

    def testName(self):
        self.assertEqual(token(int8, name="threads").name, "threads")
        self.assertEqual(token(int8).name, "integral")
        with self.assertRaises(ValueError):
            token(int8, name="  ")
        with self.assertRaises(TypeError):
            token(int8, name=3)

    def testRepr(self):
        self.assertTrue(repr(token(int8, name="level")).startswith("IntegralToken(kind=integral("))


class TestDefaultsAndImplicits(TestCase):
    """Default and implicit configuration."""

    def testNothingConfigured(self):
        sink = token(int32)
        self.assertFalse(sink.has_default_value())
        self.assertFalse(sink.has_implicit_cast())
        self.assertEqual(sink.get_default_value(), "")
        self.assertEqual(sink.get_implicit_value(), "")

    def testChaining(self):
        sink = token(int32)
        self.assertIs(sink.default_value("4").implicit_value("1"), sink)
        self.assertTrue(sink.has_default_value())
        self.assertTrue(sink.has_implicit_cast())
        self.assertEqual(sink.get_default_value(), "4")
        self.assertEqual(sink.get_implicit_value(), "1")

    def testMalformedDefaultRejectedEagerly(self):
        sink = token(int8)
        with self.assertRaises(ArgBadTypeException):
            sink.default_value("300")
        self.assertFalse(sink.has_default_value())

    def testMalformedImplicitRejectedEagerly(self):
        sink = token(bool)
        with self.assertRaises(ArgBadTypeException):
            sink.implicit_value("yes")
        self.assertFalse(sink.has_implicit_cast())

    def testDefaultDoesNotParse(self):
        sink = token(int32).default_value("4")
        self.assertIsNone(sink.value)
        self.assertEqual(sink.count, 0)

    def testParseDefault(self):
        sink = token(int32).default_value("4")
        sink.parse_default()
        self.assertEqual(sink.value, 4)
        self.assertEqual(sink.count, 0)

    def testParseDefaultMissing(self):
        with self.assertRaises(ArgNotPresentException) as context:
            token(int32, name="threads").parse_default()
        self.assertEqual(context.exception.what, "threads")


class TestParse(TestCase):
    """Payload parsing into the sink."""

    def testScalarOverwrites(self):
        sink = token(int32)
        sink.parse("1")
        sink.parse("0x2")
        self.assertEqual(sink.value, 2)
        self.assertEqual(sink.count, 2)

    def testSequenceAppends(self):
        sink = token(list[int])
        sink.parse("1,2")
        sink.parse("3")
        self.assertEqual(sink.value, [1, 2, 3])
        self.assertEqual(sink.count, 2)

    def testSequenceStartsEmpty(self):
        self.assertEqual(token(list[int]).value, [])

    def testSequenceValueIsACopy(self):
        sink = token(list[int])
        sink.parse("1")
        value = sink.value
        value.append(9)
        self.assertEqual(sink.value, [1])

    def testSequenceEmptyPayloadWarns(self):
        sink = token(list[int], name="ports")
        with self.assertWarns(EmptyValueWarning):
            sink.parse("")
        self.assertEqual(sink.value, [])

    def testSequenceFailureKeepsEarlierFields(self):
        sink = token(list[int])
        sink.parse("1")
        with self.assertRaises(ArgBadTypeException):
            sink.parse("2,,3")
        self.assertEqual(sink.value, [1])

    def testImplicit(self):
        sink = token(bool).implicit_value("true")
        sink.parse()
        self.assertIs(sink.value, True)
        self.assertEqual(sink.count, 1)

    def testImplicitMissing(self):
        sink = token(int32, name="threads")
        with self.assertRaises(ArgNotSatisfiedException) as context:
            sink.parse()
        self.assertEqual(context.exception.what, "threads")
        self.assertEqual(sink.count, 0)

    def testEmptyImplicitForSequence(self):
        sink = token(list[int]).implicit_value("")
        self.assertTrue(sink.has_implicit_cast())
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", EmptyValueWarning)
            sink.parse()
        self.assertEqual(sink.value, [])

    def testBadPayloadKeepsPreviousValue(self):
        sink = token(int8)
        sink.parse("5")
        with self.assertRaises(ArgBadTypeException):
            sink.parse("x")
        self.assertEqual(sink.value, 5)
        self.assertEqual(sink.count, 1)

    def testOptional(self):
        sink = token(int | None)
        self.assertIsNone(sink.value)
        sink.parse("0")
        self.assertEqual(sink.value, 0)

    def testCharacter(self):
        sink = token(character)
        sink.parse("z")
        self.assertEqual(sink.value, "z")

    def testIdempotence(self):
        first = token(list[int]).default_value("0")
        second = token(list[int]).default_value("0")
        first.parse("1,0x2,-3")
        second.parse("1,0x2,-3")
        self.assertEqual(first.value, second.value)


class TestClone(TestCase):
    """Clones share configuration, never parsed state."""

    def testCloneKeepsConfiguration(self):
        original = token(int32, name="threads").default_value("4").implicit_value("1")
        clone = original.clone()
        self.assertIsNot(clone, original)
        self.assertIs(type(clone), IntegralToken)
        self.assertEqual(clone.kind, original.kind)
        self.assertEqual(clone.name, "threads")
        self.assertEqual(clone.get_default_value(), "4")
        self.assertEqual(clone.get_implicit_value(), "1")

    def testCloneHasFreshState(self):
        original = token(int32)
        original.parse("7")
        clone = original.clone()
        self.assertIsNone(clone.value)
        self.assertEqual(clone.count, 0)

    def testCloneIndependence(self):
        original = token(list[int])
        original.parse("1")
        clone = original.clone()
        clone.parse("2,3")
        self.assertEqual(original.value, [1])
        self.assertEqual(clone.value, [2, 3])

    def testCloneMatchesFreshToken(self):
        fresh = token(bool).implicit_value("t")
        clone = token(bool).implicit_value("t")
        clone.parse("false")
        clone = clone.clone()
        self.assertEqual(clone.value, fresh.value)
        self.assertEqual(clone.count, fresh.count)
        self.assertEqual(clone.has_implicit_cast(), fresh.has_implicit_cast())


if __name__ == '__main__':
    unittest.main()
