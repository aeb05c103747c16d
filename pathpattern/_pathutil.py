"""
Path helpers.

All helpers take the platform profile (see `_wcparse.Platform`) so that
Windows conventions can be applied on any host and the other way around.
Windows profiles accept both `\\` and `/` as separators and understand drive
(`C:\\`) and UNC (`\\\\server\\share`) roots.
"""
import ntpath
import posixpath
import re

RE_WIN_DRIVE_ONLY = re.compile(r'^[a-z]:$', re.I)
RE_WIN_DRIVE_START = re.compile(r'^[a-z]:', re.I)
RE_WIN_DRIVE_ROOT = re.compile(r'^[a-z]:\\$', re.I)
RE_WIN_ABSOLUTE = re.compile(r'^(?:\\\\|[a-z]:\\)', re.I)
RE_WIN_UNC_START = re.compile(r'^\\\\+[^\\]')
RE_WIN_UNC_ROOT = re.compile(r'^\\\\[^\\]+(?:\\[^\\]+)?$')
RE_WIN_UNC_ROOT_TRAIL = re.compile(r'^\\\\[^\\]+\\[^\\]+\\$')
RE_WIN_SEP_RUN = re.compile(r'\\\\+')
RE_SEP_RUN = re.compile(r'//+')


def _pathmod(platform):
    """Get the path module that follows the platform conventions."""

    return ntpath if platform.drives else posixpath


def normalize_separators(path, platform):
    """
    Normalize path separators.

    On Windows, `/` becomes `\\` and runs of separators collapse to one,
    except for the leading pair of a UNC path.
    """

    path = path or ''
    if platform.drives:
        path = path.replace('/', '\\')
        is_unc = RE_WIN_UNC_START.match(path) is not None
        return ('\\' if is_unc else '') + RE_WIN_SEP_RUN.sub(r'\\', path)
    return RE_SEP_RUN.sub('/', path)


def safe_trim_trailing_separator(path, platform):
    """Remove a trailing separator unless the path is a bare root."""

    if not path:
        return ''

    path = normalize_separators(path, platform)
    if not path.endswith(platform.sep) or path == platform.sep:
        return path

    if platform.drives and RE_WIN_DRIVE_ROOT.match(path):
        return path

    return path[:-1]


def dirname(path, platform):
    """
    Get the parent directory.

    The parent of a root is the root itself. UNC roots (`\\\\server\\share`)
    are treated as a single unit.
    """

    path = safe_trim_trailing_separator(path, platform)
    if platform.drives and RE_WIN_UNC_ROOT.match(path):
        return path

    result = _pathmod(platform).dirname(path)
    if platform.drives and RE_WIN_UNC_ROOT_TRAIL.match(result):
        result = safe_trim_trailing_separator(result, platform)
    return result


def basename(path, platform):
    """Get the final path component."""

    return _pathmod(platform).basename(path)


def has_root(path, platform):
    """
    Check if the path is rooted.

    On Windows, drive relative (`C:foo`) and current drive (`\\foo`) paths
    count as rooted.
    """

    path = normalize_separators(path, platform)
    if platform.drives:
        return path.startswith('\\') or RE_WIN_DRIVE_START.match(path) is not None
    return path.startswith('/')


def has_absolute_root(path, platform):
    """Check if the path is absolute: fully qualified on Windows."""

    path = normalize_separators(path, platform)
    if platform.drives:
        return RE_WIN_ABSOLUTE.match(path) is not None
    return path.startswith('/')


def ensure_rooted(root, path, platform):
    """Join `path` to `root` unless it is already rooted."""

    if not path:
        return root

    if has_root(path, platform):
        return path

    if platform.drives and RE_WIN_DRIVE_ONLY.match(root):
        return root + path

    if not root.endswith(('/', '\\') if platform.drives else '/'):
        root += platform.sep

    return root + path


def split_segments(path, platform):
    """
    Split a path into segments.

    A rooted path keeps its root as the first segment:
    `/a/b` -> `['/', 'a', 'b']`, `C:\\a` -> `['C:\\', 'a']`.
    """

    path = safe_trim_trailing_separator(path, platform)
    if not has_root(path, platform):
        return path.split(platform.sep)

    segments = []
    remaining = path
    parent = dirname(remaining, platform)
    while parent != remaining:
        segments.insert(0, basename(remaining, platform))
        remaining = parent
        parent = dirname(remaining, platform)

    # What is left is the root
    segments.insert(0, remaining)
    return segments


def join_segments(segments, platform):
    """Join segments created by `split_segments` back into a path."""

    if not segments:
        raise ValueError('At least one path segment is required')

    result = segments[0]
    skip_sep = result.endswith(platform.sep) or bool(platform.drives and RE_WIN_DRIVE_ONLY.match(result))
    for segment in segments[1:]:
        if skip_sep:
            skip_sep = False
        else:
            result += platform.sep
        result += segment
    return result
