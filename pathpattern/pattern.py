"""
Rooted path patterns.

A `Pattern` roots a glob pattern against a base directory, works out the
literal directory a walker should start from, and answers whether a path
matches or could lead to a match.

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
import enum
import logging
import os
from . import _literal
from . import _pathutil
from . import _wcparse
from . import util

__all__ = (
    "CASE", "IGNORECASE", "FORCEWIN", "FORCEUNIX",
    "C", "I", "W", "U",
    "MatchKind", "Pattern", "PatternError", "EmptyPatternError", "DriveRelativeRootError",
    "RelativePathingError", "RootGlobError",
    "compile", "match", "partial_match", "escape"
)

C = CASE = _wcparse.CASE
I = IGNORECASE = _wcparse.IGNORECASE
W = FORCEWIN = _wcparse.FORCEWIN
U = FORCEUNIX = _wcparse.FORCEUNIX

logger = logging.getLogger(__name__)


class MatchKind(enum.IntFlag):
    """What kind of file system entry a match applies to."""

    NONE = 0
    DIRECTORY = 1
    FILE = 2
    ALL = DIRECTORY | FILE

    # Aliases
    DIRECTORY_ONLY = DIRECTORY
    FULL = ALL


class PatternError(ValueError):
    """Pattern can't be used."""


class EmptyPatternError(PatternError):
    """Pattern is empty."""


class DriveRelativeRootError(PatternError):
    """Pattern is rooted at a bare drive (`C:`)."""


class RelativePathingError(PatternError):
    """Pattern uses `.` or `..` to move around."""


class RootGlobError(PatternError):
    """Pattern has magic in its root."""


def _validate(pattern, platform):
    """Reject patterns that can't be rooted sensibly."""

    if not pattern:
        raise EmptyPatternError('pattern cannot be empty')

    literals = _literal.get_literals(pattern, platform)

    # Don't allow `C:` and `C:foo`
    if platform.drives and _pathutil.RE_WIN_DRIVE_ONLY.match(literals[0]):
        raise DriveRelativeRootError(
            "The pattern '{}' uses an unsupported root-directory prefix. "
            "When a drive letter is specified, use absolute path syntax.".format(pattern)
        )

    for index, literal in enumerate(literals):
        if literal == '..' or (literal == '.' and index):
            raise RelativePathingError(
                "Invalid pattern '{}'. Relative pathing '.' and '..' is not allowed.".format(pattern)
            )

    if not literals[0] and _pathutil.has_root(pattern, platform):
        raise RootGlobError("Invalid pattern '{}'. Root segment must not contain globs".format(pattern))


def _fixup_pattern(pattern, platform, root_dir):
    """Validate, normalize separators, and root the pattern."""

    _validate(pattern, platform)

    pattern = _pathutil.normalize_separators(pattern, platform)

    # Replace a leading `.` segment with the root directory
    if pattern == '.' or pattern.startswith('.' + platform.sep):
        pattern = _literal.escape(root_dir, platform) + pattern[1:]
        pattern = _pathutil.normalize_separators(pattern, platform)

    if not _pathutil.has_root(pattern, platform):
        pattern = _pathutil.ensure_rooted(_literal.escape(root_dir, platform), pattern, platform)

    return pattern


class Pattern(util.Immutable):
    """
    Compiled, rooted path pattern.

    Leading `!` characters toggle `negate`. Relative patterns are rooted
    at `root_dir`, or the current working directory when not given. A
    trailing separator restricts matches to directories.

    `search_path` is the longest literal directory prefix of the pattern,
    every path the pattern can match lives below it.
    """

    __slots__ = (
        "pattern", "flags", "negate", "search_path", "trailing_slash",
        "_platform", "_root", "_matcher", "_hash"
    )

    def __init__(self, pattern, *, flags=0, root_dir=None):
        """Initialize."""

        pattern = os.fspath(pattern) if pattern else ''
        platform = _wcparse.get_platform(flags)

        if root_dir is None:
            root_dir = os.getcwd()
        root_dir = os.fspath(root_dir)
        if not _pathutil.has_absolute_root(root_dir, platform):
            raise ValueError("The root directory '{}' must be an absolute path".format(root_dir))

        negate = False
        while pattern.startswith('!'):
            negate = not negate
            pattern = pattern[1:]

        pattern = _fixup_pattern(pattern, platform, root_dir)

        trailing_slash = _pathutil.normalize_separators(pattern, platform).endswith(platform.sep)
        pattern = _pathutil.safe_trim_trailing_separator(pattern, platform)

        search_segments = _literal.get_literals(pattern, platform, stop_when_empty=True)
        search_path = _pathutil.join_segments(search_segments, platform)

        # The root literal is only needed to partially match a root path.
        root = search_segments[0] if platform.case_sensitive else search_segments[0].lower()

        matcher = _wcparse.compile(pattern.replace('\\', '/') if platform.drives else pattern, platform)

        logger.debug("Compiled pattern '%s' with search path '%s'", pattern, search_path)

        super(Pattern, self).__init__(
            pattern=pattern,
            flags=flags,
            negate=negate,
            search_path=search_path,
            trailing_slash=trailing_slash,
            _platform=platform,
            _root=root,
            _matcher=matcher,
            _hash=hash((type(self), pattern, platform, negate, trailing_slash))
        )

    def __hash__(self):
        """Hash."""

        return self._hash

    def __eq__(self, other):
        """Equal."""

        return (
            isinstance(other, Pattern) and
            self.pattern == other.pattern and
            self._platform == other._platform and
            self.negate == other.negate and
            self.trailing_slash == other.trailing_slash
        )

    def __ne__(self, other):
        """Not equal."""

        return not self.__eq__(other)

    def __repr__(self):
        """Representation."""

        return "{}({!r}, negate={!r}, trailing_slash={!r})".format(
            type(self).__name__, self.pattern, self.negate, self.trailing_slash
        )

    def match(self, path):
        """
        Match the pattern against the path.

        `MatchKind.DIRECTORY` means the match only counts if the path is a
        directory, which is for the caller to check.
        """

        if self._matcher.match(os.fspath(path)):
            return MatchKind.DIRECTORY if self.trailing_slash else MatchKind.ALL
        return MatchKind.NONE

    def partial_match(self, path):
        """Check whether the pattern may match the path or its descendants."""

        path = os.fspath(path)

        # Prefix matching can't deal with a bare root, so compare it to the root literal.
        root = _pathutil.safe_trim_trailing_separator(path, self._platform)
        if _pathutil.dirname(path, self._platform) == root:
            if not self._platform.case_sensitive:
                root = root.lower()
            return bool(self._root) and root == self._root

        return self._matcher.match_partial(path)


def compile(pattern, *, flags=0, root_dir=None):  # noqa A001
    """Compile a pattern."""

    return Pattern(pattern, flags=flags, root_dir=root_dir)


def match(path, pattern, *, flags=0, root_dir=None):
    """Match a path against a pattern."""

    return Pattern(pattern, flags=flags, root_dir=root_dir).match(path)


def partial_match(path, pattern, *, flags=0, root_dir=None):
    """Check whether the pattern may match the path or its descendants."""

    return Pattern(pattern, flags=flags, root_dir=root_dir).partial_match(path)


def escape(path, *, flags=0):
    """Escape glob magic in a path so it matches literally."""

    return _literal.escape(os.fspath(path), _wcparse.get_platform(flags))
