# -*- coding: utf-8 -*-
"""Tests for `wcparse`."""
import unittest
import pytest
from unittest import mock
import pathpattern._wcparse as _wcparse

POSIX = _wcparse.Platform('/', True, True, False)
POSIX_NOCASE = _wcparse.Platform('/', False, True, False)
WIN = _wcparse.Platform('\\', False, False, True)


class TestPlatform(unittest.TestCase):
    """Test resolution of flags to path conventions."""

    def test_forced(self):
        """Test forced conventions."""

        self.assertEqual(_wcparse.get_platform(_wcparse.FORCEUNIX), POSIX)
        self.assertEqual(_wcparse.get_platform(_wcparse.FORCEWIN), WIN)

    def test_case_override(self):
        """Test that case flags only override case sensitivity."""

        self.assertEqual(
            _wcparse.get_platform(_wcparse.FORCEWIN | _wcparse.CASE),
            _wcparse.Platform('\\', True, False, True)
        )
        self.assertEqual(_wcparse.get_platform(_wcparse.FORCEUNIX | _wcparse.IGNORECASE), POSIX_NOCASE)

    @mock.patch('pathpattern.util.is_case_sensitive')
    @mock.patch('pathpattern.util.platform')
    def test_host_default(self, mock_platform, mock_case):
        """Test that the host conventions are used by default."""

        mock_platform.return_value = 'windows'
        mock_case.return_value = False
        self.assertEqual(_wcparse.get_platform(0), WIN)

        mock_platform.return_value = 'linux'
        mock_case.return_value = True
        self.assertEqual(_wcparse.get_platform(0), POSIX)

        # Enabling both cancels out
        self.assertEqual(_wcparse.get_platform(_wcparse.FORCEWIN | _wcparse.FORCEUNIX), POSIX)

    @mock.patch('pathpattern.util.is_case_sensitive')
    @mock.patch('pathpattern.util.platform')
    def test_osx_default(self, mock_platform, mock_case):
        """Test macOS uses POSIX conventions."""

        mock_platform.return_value = 'osx'
        mock_case.return_value = True
        self.assertEqual(_wcparse.get_platform(0), POSIX)


class TestTranslate(unittest.TestCase):
    """Test translation of segments to regular expressions."""

    def test_star(self):
        """Test stars."""

        self.assertEqual(_wcparse.WcParse('a*', POSIX).parse(), r'^(?s:(?=.)a.*?)$')
        self.assertEqual(_wcparse.WcParse('a***', POSIX).parse(), r'^(?s:(?=.)a.*?)$')
        self.assertEqual(_wcparse.WcParse('*.py', POSIX).parse(), r'^(?s:(?=.)(?!\.{1,2}$).*?\.py)$')

    def test_question(self):
        """Test question marks."""

        self.assertEqual(_wcparse.WcParse('a?', POSIX).parse(), r'^(?s:(?=.)a.)$')
        self.assertEqual(_wcparse.WcParse('?', POSIX).parse(), r'^(?s:(?=.)(?!\.{1,2}$).)$')

    def test_sequence(self):
        """Test character sets."""

        self.assertEqual(_wcparse.WcParse('a[b-d]', POSIX).parse(), r'^(?s:(?=.)a[b-d])$')
        self.assertEqual(_wcparse.WcParse('a[!b]', POSIX).parse(), r'^(?s:(?=.)a[^b])$')
        self.assertEqual(_wcparse.WcParse('a[^b]', POSIX).parse(), r'^(?s:(?=.)a[^b])$')
        self.assertEqual(_wcparse.WcParse('a[&]*', POSIX).parse(), r'^(?s:(?=.)a[\&].*?)$')

    def test_unclosed_sequence(self):
        """Test that an unclosed set is literal."""

        self.assertEqual(_wcparse.WcParse('a[*', POSIX).parse(), r'^(?s:(?=.)a\[.*?)$')

    def test_escapes(self):
        """Test escapes."""

        self.assertEqual(_wcparse.WcParse('\\**', POSIX).parse(), r'^(?s:(?=.)\*.*?)$')
        self.assertEqual(_wcparse.WcParse('a*\\', POSIX).parse(), r'^(?s:(?=.)a.*?\\)$')

    def test_case(self):
        """Test case insensitive translation."""

        self.assertEqual(_wcparse.WcParse('A*', WIN).parse(), r'^(?si:(?=.)A.*?)$')


class TestSegmentMatch:
    """
    Test matching of single magic segments.

    Each case entry is an array of 3 parameters.

    * Segment pattern
    * Name
    * Expected result
    """

    cases = [
        ['*', 'abc', True],
        ['*', '.hidden', True],
        ['*', '.', False],
        ['*', '..', False],
        ['*', '', False],
        ['.*', '.hidden', True],
        ['a*c', 'abbbc', True],
        ['a*c', 'abbb', False],
        ['a*', 'a\nb', True],
        ['a?c', 'abc', True],
        ['a?c', 'ac', False],
        ['[abc]x', 'bx', True],
        ['[abc]x', 'dx', False],
        ['[!abc]x', 'dx', True],
        ['[!abc]x', 'ax', False],
        ['[a-c]x', 'bx', True],
        ['[a-c-e]x', '-x', True],
        ['[]a]*', ']b', True],
        ['[-a]*', '-b', True],
        ['[z-a]', 'z', False],
        ['[z-a]', 'a', False],
        ['[!z-a]', 'q', True],
        ['[[:digit:]]*', '5x', True],
        ['[[:digit:]]*', 'x5', False],
        ['[![:alpha:]]*', '5x', True],
        ['[[:upper:][:digit:]]*', 'A', True],
        ['[[:upper:][:digit:]]*', 'a', False],
        ['[\\]]*', ']a', True],
        ['a\\*b*', 'a*bc', True],
        ['a\\*b*', 'axbc', False],
        ['a[*', 'a[b', True],
    ]

    @pytest.mark.parametrize("case", cases)
    def test_cases(self, case):
        """Test case."""

        pattern = _wcparse._compile_segment(case[0], POSIX)
        assert (pattern.fullmatch(case[1]) is not None) == case[2]


class TestGlobMatcher(unittest.TestCase):
    """Test matching of compiled patterns."""

    def test_literal_segments(self):
        """Test that segments without magic are compared as text."""

        m = _wcparse.compile('/a/[b]/c', POSIX)
        self.assertTrue(m.match('/a/b/c'))
        self.assertFalse(m.match('/a/[b]/c'))
        self.assertFalse(m.match('/A/b/c'))
        self.assertTrue(_wcparse.compile('/A/b', POSIX_NOCASE).match('/a/B'))

    def test_full_match(self):
        """Test full matches."""

        m = _wcparse.compile('/a/*/c', POSIX)
        self.assertTrue(m.match('/a/b/c'))
        self.assertTrue(m.match('//a//b/c'))
        self.assertTrue(m.match('/a/b/c/'))
        self.assertFalse(m.match('/a/b/d'))
        self.assertFalse(m.match('/a/c'))
        self.assertFalse(m.match('/a/./c'))
        self.assertFalse(m.match('/a/b/c/d'))
        self.assertFalse(_wcparse.compile('/a/*', POSIX).match('/a/'))
        self.assertFalse(_wcparse.compile('/a*', POSIX).match('/ab/c'))

    def test_partial_match(self):
        """Test prefix matches."""

        m = _wcparse.compile('/a/*/c', POSIX)
        self.assertTrue(m.match_partial('/a'))
        self.assertTrue(m.match_partial('/a/b'))
        self.assertTrue(m.match_partial('/a/b/c'))
        self.assertFalse(m.match_partial('/x'))
        self.assertFalse(m.match_partial('/a/b/x'))

    def test_partial_match_pattern_consumed(self):
        """Test that a path below a matched pattern is still a viable prefix."""

        m = _wcparse.compile('/a/b', POSIX)
        self.assertTrue(m.match_partial('/a/b/c'))
        self.assertTrue(m.match_partial('/a/b/c/d'))
        self.assertFalse(m.match_partial('/a/c/d'))
        self.assertFalse(m.match('/a/b/c'))

    def test_globstar(self):
        """Test `globstar`."""

        m = _wcparse.compile('/a/**/z', POSIX)
        self.assertTrue(m.match('/a/z'))
        self.assertTrue(m.match('/a/b/c/z'))
        self.assertTrue(m.match('/a/.b/z'))
        self.assertFalse(m.match('/a/b/c'))
        self.assertFalse(m.match('/a/../z'))
        self.assertFalse(m.match('/b/z'))
        self.assertTrue(m.match_partial('/a/b/c'))
        self.assertFalse(m.match_partial('/b'))

    def test_trailing_globstar(self):
        """Test a `globstar` at the end of the pattern."""

        m = _wcparse.compile('/a/**', POSIX)
        self.assertTrue(m.match('/a/b'))
        self.assertTrue(m.match('/a/b/c/d'))
        self.assertTrue(m.match('/a/'))
        self.assertFalse(m.match('/a'))
        self.assertFalse(m.match('/a/b/../c'))
        self.assertTrue(m.match_partial('/a'))

    def test_globstar_collapse(self):
        """Test that consecutive `globstars` are stored once."""

        self.assertEqual(len(_wcparse.compile('/a/**/**/b', POSIX)), 4)
        self.assertEqual(_wcparse.compile('/a/**/**/b', POSIX), _wcparse.compile('/a/**/b', POSIX))

    def test_windows(self):
        """Test Windows paths."""

        m = _wcparse.compile('C:/Users/*.TXT', WIN)
        self.assertTrue(m.match('c:\\users\\A.txt'))
        self.assertTrue(m.match('C:/Users/a.TXT'))
        self.assertFalse(m.match('C:\\Users\\a\\b.txt'))
        self.assertTrue(m.match_partial('c:\\USERS'))

    def test_hash(self):
        """Test hashing of compiled patterns."""

        m1 = _wcparse.compile('/a/*', POSIX)
        m2 = _wcparse.GlobMatcher(m1._parts, POSIX)
        m3 = _wcparse.compile('/a/*', POSIX_NOCASE)
        m4 = _wcparse.compile('/a/b', POSIX)

        self.assertTrue(m1 == m2)
        self.assertTrue(m1 != m3)
        self.assertTrue(m1 != m4)

        self.assertTrue(m1 in {m2})
        self.assertEqual(hash(m1), hash(m2))

    def test_immutable(self):
        """Test that compiled patterns can't be changed."""

        m = _wcparse.compile('/a/*', POSIX)
        with self.assertRaises(AttributeError):
            m._parts = ()
