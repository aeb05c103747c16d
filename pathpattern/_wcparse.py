"""
Path pattern parsing.

A rooted pattern is split into path segments and each segment is compiled
once: `**` becomes a `globstar`, segments without magic are compared as
text, and everything else is translated to a regular expression. Matching
walks the path segments against the pattern segments, which is what allows
prefix (partial) matches to be evaluated without a separate compiler.

Licensed under MIT
Copyright (c) 2018 - 2020 Isaac Muse <isaacmuse@gmail.com>

Permission is hereby granted, free of charge, to any person obtaining a copy of this software and associated
documentation files (the "Software"), to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of the Software,
and to permit persons to whom the Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all copies or substantial portions
of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED
TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL
THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF
CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
IN THE SOFTWARE.
"""
import re
import functools
from collections import namedtuple
from . import util
from . import _literal

UNICODE_RANGE = '\u0000-\U0010ffff'

RE_POSIX = re.compile(r':(alnum|alpha|ascii|blank|cntrl|digit|graph|lower|print|punct|space|upper|word|xdigit):\]')
RE_SPLIT = re.compile(r'/+')
RE_WIN_SPLIT = re.compile(r'[\\/]+')

SET_OPERATORS = frozenset(('&', '~', '|'))
SPECIAL_DIRS = frozenset(('.', '..'))

POSIX_CLASSES = {
    'alnum': r'a-zA-Z0-9',
    'alpha': r'a-zA-Z',
    'ascii': r'\x00-\x7f',
    'blank': r' \t',
    'cntrl': r'\x00-\x1f\x7f',
    'digit': r'0-9',
    'graph': r'\x21-\x7e',
    'lower': r'a-z',
    'print': r'\x20-\x7e',
    'punct': r'!-/:-@\[-`{-~',
    'space': r' \t\r\n\v\f',
    'upper': r'A-Z',
    'word': r'a-zA-Z0-9_',
    'xdigit': r'A-Fa-f0-9'
}

CASE = 0x0001
IGNORECASE = 0x0002
FORCEWIN = 0x10000
FORCEUNIX = 0x20000

FLAG_MASK = (
    CASE |
    IGNORECASE |
    FORCEWIN |
    FORCEUNIX
)
CASE_FLAGS = IGNORECASE | CASE

# Pieces to construct a segment pattern

# Question Mark
_QMARK = r'.'
# Star
_STAR = r'.*?'
# A segment that starts with magic must not match `.` or `..`
_NO_DIR = r'(?!\.{1,2}$)'
# Magic segments must consume at least one character
_NEED_CHAR = r'(?=.)'


class Platform(namedtuple('Platform', ['sep', 'case_sensitive', 'escapes', 'drives'])):
    """
    Path conventions.

    * `sep`: the canonical path separator.
    * `case_sensitive`: whether names are compared with case.
    * `escapes`: whether a backslash escapes the next character.
    * `drives`: whether drive letters and UNC roots exist (Windows).
    """


class WcSegment(namedtuple('WcSegment', ['pattern', 'is_magic', 'is_globstar'])):
    """Compiled path segment."""


GLOBSTAR = WcSegment('**', True, True)


def _flag_transform(flags):
    """Clean up flags."""

    # Enabling both cancels out
    if flags & FORCEUNIX and flags & FORCEWIN:
        flags ^= FORCEWIN | FORCEUNIX

    return flags & FLAG_MASK


def is_unix_style(flags):
    """Check if we should use Unix style."""

    return (util.platform() != "windows" or bool(flags & FORCEUNIX)) and not flags & FORCEWIN


def is_case_sensitive(flags):
    """Is case sensitive."""

    if bool(flags & FORCEWIN):
        case_sensitive = False
    elif bool(flags & FORCEUNIX):
        case_sensitive = True
    else:
        case_sensitive = util.is_case_sensitive()
    return case_sensitive


def get_case(flags):
    """Parse flags for case sensitivity settings."""

    if not bool(flags & CASE_FLAGS):
        case_sensitive = is_case_sensitive(flags)
    elif flags & CASE:
        case_sensitive = True
    else:
        case_sensitive = False
    return case_sensitive


def get_platform(flags):
    """Resolve flags to the path conventions in use."""

    flags = _flag_transform(flags)
    unix = is_unix_style(flags)
    return Platform(
        sep='/' if unix else '\\',
        case_sensitive=get_case(flags),
        escapes=unix,
        drives=not unix
    )


def split_path(path, platform):
    """Split a path into names on runs of separators."""

    return (RE_WIN_SPLIT if platform.drives else RE_SPLIT).split(path)


class WcParse(object):
    """Parse a single path segment into a regular expression."""

    def __init__(self, segment, platform):
        """Initialize."""

        self.segment = segment
        self.escapes = platform.escapes
        self.case_sensitive = platform.case_sensitive
        self.after_start = True

    def _restrict_start(self):
        """Don't let a leading wildcard match the special directories."""

        value = _NO_DIR if self.after_start else ''
        self.after_start = False
        return value

    def _sequence_range_check(self, result, last):
        """
        If range backwards, remove it.

        A bad range will cause the regular expression to fail,
        so we need to remove it, but return that we removed it
        so the caller can know the sequence wasn't empty.
        """

        removed = False
        first = result[-2]
        v1 = ord(first[1:2] if len(first) > 1 else first)
        v2 = ord(last[1:2] if len(last) > 1 else last)
        if v2 < v1:
            result.pop()
            result.pop()
            removed = True
        else:
            result.append(last)
        return removed

    def _handle_posix(self, i, result, end_range):
        """Handle posix classes."""

        last_posix = False
        m = i.match(RE_POSIX)
        if m:
            last_posix = True
            # Cannot do range with posix class
            # so escape last `-` if we think this
            # is the end of a range.
            if end_range and i.index - 1 >= end_range:
                result[-1] = '\\' + result[-1]
            result.append(POSIX_CLASSES[m.group(1)])
        return last_posix

    def _sequence(self, i):
        """Handle character group."""

        result = ['[']
        end_range = 0
        escape_hyphen = -1
        removed = False
        last_posix = False

        c = next(i)
        if c in ('!', '^'):
            # Handle negate char
            result.append('^')
            c = next(i)
        if c == '[':
            last_posix = self._handle_posix(i, result, 0)
            if not last_posix:
                result.append(re.escape(c))
            c = next(i)
        elif c in ('-', ']'):
            result.append(re.escape(c))
            c = next(i)

        while c != ']':
            if c == '-':
                if last_posix:
                    result.append('\\' + c)
                    last_posix = False
                elif i.index - 1 > escape_hyphen:
                    # Found a range delimiter.
                    # Mark the next two characters as needing to be escaped if hyphens.
                    # The next character would be the end char range (s-e),
                    # and the one after that would be the potential start char range
                    # of a new range (s-es-e), so neither can be legitimate range delimiters.
                    result.append(c)
                    escape_hyphen = i.index + 1
                    end_range = i.index
                elif end_range and i.index - 1 >= end_range:
                    if self._sequence_range_check(result, '\\' + c):
                        removed = True
                    end_range = 0
                else:
                    result.append('\\' + c)
                c = next(i)
                continue
            last_posix = False

            if c == '[':
                last_posix = self._handle_posix(i, result, end_range)
                if last_posix:
                    c = next(i)
                    continue

            if c == '\\' and self.escapes:
                # Escaped character, a trailing backslash leaves the set open
                value = re.escape(next(i))
            elif c in SET_OPERATORS:
                # Escape &, |, and ~ to avoid &&, ||, and ~~
                value = '\\' + c
            else:
                value = re.escape(c)

            if end_range and i.index - 1 >= end_range:
                if self._sequence_range_check(result, value):
                    removed = True
                end_range = 0
            else:
                result.append(value)

            c = next(i)

        result.append(']')
        # Bad range removed.
        if removed:
            value = "".join(result)
            if value == '[]':
                # We specified some ranges, but they are all
                # out of reach.  Create an impossible sequence to match.
                result = ['[^%s]' % UNICODE_RANGE]
            elif value == '[^]':
                # We specified some range, but they are all
                # out of reach. Since this is exclusive
                # that means we can match *anything*.
                result = ['[%s]' % UNICODE_RANGE]
            else:
                result = [value]

        return self._restrict_start() + ''.join(result)

    def _handle_star(self, i, current):
        """Handle star, consecutive stars are the same as one."""

        current.append(self._restrict_start() + _STAR)
        try:
            c = next(i)
            while c == '*':
                c = next(i)
            i.rewind(1)
        except StopIteration:
            pass

    def parse(self):
        """Parse the segment."""

        current = [_NEED_CHAR]
        i = util.StringIter(self.segment)
        for c in i:
            if c == '*':
                self._handle_star(i, current)
            elif c == '?':
                current.append(self._restrict_start() + _QMARK)
            elif c == '\\' and self.escapes:
                try:
                    current.append(re.escape(next(i)))
                except StopIteration:
                    current.append(re.escape(c))
                self.after_start = False
            elif c == '[':
                index = i.index
                try:
                    current.append(self._sequence(i))
                except StopIteration:
                    i.rewind(i.index - index)
                    current.append(re.escape(c))
                    self.after_start = False
            else:
                current.append(re.escape(c))
                self.after_start = False

        case_flag = 'i' if not self.case_sensitive else ''
        return r'^(?s{}:{})$'.format(case_flag, ''.join(current))


@functools.lru_cache(maxsize=256, typed=True)
def _compile_segment(segment, platform):
    """Compile a magic segment to regex."""

    return re.compile(WcParse(segment, platform).parse())


def _store(segment, parts, platform):
    """Compile a segment and add it to the parts."""

    if segment == '**':
        # Consecutive `globstars` are the same as one
        if not parts or not parts[-1].is_globstar:
            parts.append(GLOBSTAR)
        return

    literal = _literal.get_literal(segment, platform.escapes)
    if literal is not None:
        text = literal.text if platform.case_sensitive else literal.text.lower()
        parts.append(WcSegment(text, False, False))
    else:
        parts.append(WcSegment(_compile_segment(segment, platform), True, False))


@functools.lru_cache(maxsize=256, typed=True)
def compile(pattern, platform):  # noqa A001
    """
    Compile a rooted pattern.

    The pattern must use `/` as separator.
    """

    parts = []
    for segment in RE_SPLIT.split(pattern):
        _store(segment, parts, platform)
    return GlobMatcher(tuple(parts), platform)


class GlobMatcher(util.Immutable):
    """Compiled path pattern."""

    __slots__ = ("_parts", "_platform", "_hash")

    def __init__(self, parts, platform):
        """Initialization."""

        super(GlobMatcher, self).__init__(
            _parts=parts,
            _platform=platform,
            _hash=hash((type(self), parts, platform))
        )

    def __hash__(self):
        """Hash."""

        return self._hash

    def __len__(self):
        """Length."""

        return len(self._parts)

    def __eq__(self, other):
        """Equal."""

        return (
            isinstance(other, GlobMatcher) and
            self._parts == other._parts and
            self._platform == other._platform
        )

    def __ne__(self, other):
        """Not equal."""

        return not self.__eq__(other)

    def _match_name(self, part, name):
        """Match a single name against a pattern segment."""

        if part.is_magic:
            return part.pattern.fullmatch(name) is not None
        return (name if self._platform.case_sensitive else name.lower()) == part.pattern

    def _match_parts(self, names, parts, partial):
        """
        Match the path names against the pattern segments.

        In `partial` mode the path only needs to be a viable ancestor of a
        matching path: running out of names is a success, and so is running
        out of pattern segments after all of them matched.
        """

        fi = 0
        pi = 0
        fl = len(names)
        pl = len(parts)

        while fi < fl and pi < pl:
            part = parts[pi]
            if part.is_globstar:
                pr = pi + 1
                if pr == pl:
                    # A trailing `globstar` swallows the rest, but not `.` or `..`.
                    return not any(name in SPECIAL_DIRS for name in names[fi:])

                # Try to match the rest of the pattern from every position.
                fr = fi
                while fr < fl:
                    if self._match_parts(names[fr:], parts[pr:], partial):
                        return True
                    if names[fr] in SPECIAL_DIRS:
                        break
                    fr += 1

                # The whole path was swallowed, more may follow below it.
                return partial and fr == fl

            if not self._match_name(part, names[fi]):
                return False
            fi += 1
            pi += 1

        if fi == fl and pi == pl:
            return True
        elif fi == fl:
            # Ran out of path.
            return partial
        # Ran out of pattern, only a trailing separator may remain in a full match.
        return partial or (fi == fl - 1 and names[fi] == '')

    def match(self, path):
        """Match the full path."""

        return self._match_parts(split_path(path, self._platform), self._parts, False)

    def match_partial(self, path):
        """Match the path as a prefix of a potential match."""

        return self._match_parts(split_path(path, self._platform), self._parts, True)
