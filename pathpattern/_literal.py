"""
Literal segment extraction.

A pattern segment is literal when it can be reduced to plain text: it has
no unescaped `*` or `?`, and every character set in it names exactly one
character (`[b]` is just `b`). The longest run of literal segments at the
start of a rooted pattern is the directory a walker can start from.
"""
import re
from collections import namedtuple
from . import util
from . import _pathutil

RE_MAGIC_ESCAPE = re.compile(r'[\[?*]')


class Literal(namedtuple('Literal', ['text'])):
    """Text of a segment that holds no magic."""


class _NotLiteral(Exception):
    """The segment cannot be reduced to text."""


def _sequence(i, escapes):
    """
    Reduce a character set to its single character.

    Raises `StopIteration` if the set is never closed and `_NotLiteral`
    if it matches anything but one character.
    """

    chars = []
    c = next(i)
    while c != ']':
        if c == '\\' and escapes:
            c = next(i)
        chars.append(c)
        c = next(i)

    value = ''.join(chars)
    if len(value) != 1 or value == '!':
        raise _NotLiteral
    return value


def get_literal(segment, escapes=True):
    """
    Attempt to reduce a pattern segment to literal text.

    Returns a `Literal` or `None` when the segment contains magic.
    `escapes` controls whether a backslash escapes the next character,
    which is not the case where backslash is the path separator.
    """

    result = []
    i = util.StringIter(segment)
    for c in i:
        if c == '\\' and escapes:
            try:
                result.append(next(i))
            except StopIteration:
                # Dangling backslash is taken as is
                result.append(c)
        elif c in ('*', '?'):
            return None
        elif c == '[':
            index = i.index
            try:
                result.append(_sequence(i, escapes))
            except StopIteration:
                # Unclosed, so `[` is an ordinary character
                i.rewind(i.index - index)
                result.append(c)
            except _NotLiteral:
                return None
        else:
            result.append(c)

    return Literal(''.join(result))


def get_literals(pattern, platform, stop_when_empty=False):
    """
    Reduce every segment of a pattern to literal text.

    Non-literal segments are given as an empty string. When `stop_when_empty`
    is set, only the segments before the first non-literal one are returned.
    """

    literals = []
    for segment in _pathutil.split_segments(pattern, platform):
        literal = get_literal(segment, platform.escapes)
        text = literal.text if literal is not None else ''
        if stop_when_empty and not text:
            break
        literals.append(text)
    return literals


def escape(path, platform):
    """
    Escape glob magic in a path.

    Brackets are used instead of backslashes as backslash is not an escape
    character on Windows: `?` -> `[?]`, `*` -> `[*]` and `[` -> `[[]`.
    """

    if platform.escapes:
        path = path.replace('\\', '\\\\')
    return RE_MAGIC_ESCAPE.sub(r'[\g<0>]', path)
