"""Meta related things."""
from collections import namedtuple

RELEASE_TYPES = ("alpha", "beta", "candidate", "final")


class Version(namedtuple("Version", ["major", "minor", "micro", "release", "pre"])):
    """
    Get the version (PEP 440).

    A biased approach to the PEP 440 semantic version.

    Provides a tuple structure which is sorted for comparisons `v1 > v2` etc.
      (major, minor, micro, release type, pre-release build)
    Version is compatible with the standard `sys.version_info` used by Python,
    but a pre-release build number is only used with non-final releases.
    """

    def __new__(cls, major, minor, micro, release="final", pre=0):
        """Validate version info."""

        for value in (major, minor, micro, pre):
            if not (isinstance(value, int) and value >= 0):
                raise ValueError("All version parts except 'release' should be integers.")

        if release not in RELEASE_TYPES:
            raise ValueError("'{}' is not a valid release type.".format(release))

        if release == "final" and pre:
            raise ValueError("A final release cannot have a pre-release build number.")
        elif release != "final" and not pre:
            raise ValueError("Pre-releases must have a pre-release build number.")

        return super(Version, cls).__new__(cls, major, minor, micro, release, pre)

    def _get_canonical(self):
        """Get the canonical output string."""

        # Assemble major, minor, micro version and append `pre` if needed.
        if self.micro == 0:
            ver = "{}.{}".format(self.major, self.minor)
        else:
            ver = "{}.{}.{}".format(self.major, self.minor, self.micro)
        if self.release != "final":
            ver += "{}{}".format({"alpha": "a", "beta": "b", "candidate": "rc"}[self.release], self.pre)
        return ver


__version_info__ = Version(1, 0, 0, "final")
__version__ = __version_info__._get_canonical()
