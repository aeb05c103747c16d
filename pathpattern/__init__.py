"""
Path Pattern.

Compile glob patterns into rooted path matchers for directory walkers.

Licensed under MIT
Copyright (c) 2018 Isaac Muse <isaacmuse@gmail.com>

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
from .__meta__ import __version_info__, __version__  # noqa: F401
from .pattern import (  # noqa: F401
    CASE, IGNORECASE, FORCEWIN, FORCEUNIX, C, I, W, U,
    MatchKind, Pattern, PatternError, EmptyPatternError, DriveRelativeRootError,
    RelativePathingError, RootGlobError,
    compile, match, partial_match, escape
)

__all__ = (
    "CASE", "IGNORECASE", "FORCEWIN", "FORCEUNIX",
    "C", "I", "W", "U",
    "MatchKind", "Pattern", "PatternError", "EmptyPatternError", "DriveRelativeRootError",
    "RelativePathingError", "RootGlobError",
    "compile", "match", "partial_match", "escape"
)
