class VcsError(Exception):
    """Base exception for all vcs errors."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


class ListRemoteError(VcsError):
    """Raised when listing the references of a remote repository fails."""


class UnknownProviderError(VcsError):
    """Raised when no hosting provider can be determined for a URL."""


class SettingsError(VcsError):
    """Raised when the settings file or a setting value is invalid."""


class ConstraintError(VcsError):
    """Raised when a constraint cannot be used for resolution."""


class UnsupportedConstraintError(ConstraintError):
    """Raised for constraints using the ``||`` or ``&&`` combinators."""


class InvalidConstraintError(ConstraintError):
    """Raised when a constraint does not parse as a version range."""


class ResolutionError(VcsError):
    """Raised when no single version can be selected for a set of criteria."""


class NoCriteriaError(ResolutionError):
    """Raised when resolution is attempted without any criteria."""


class ConflictingCriteriaError(ResolutionError):
    """Raised when criteria pin different branches or different pre-release tracks."""


class ConflictingBranchError(ConflictingCriteriaError):
    """Raised when two criteria of one resolution pin different branches."""


class ConflictingPrereleaseError(ConflictingCriteriaError):
    """Raised when two criteria of one resolution ask for different pre-release tracks."""


class UnableToSatisfyError(ResolutionError):
    """Raised when no discovered version satisfies every criterion."""

    def __init__(self, message: str = "", uri: str = "", criteria: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.uri = uri
        self.criteria = criteria


class ConstraintInvariantError(RuntimeError):
    """Raised when a constraint already proven parseable no longer parses after widening.

    Signals a bug in the library rather than bad input; not a ``VcsError``.
    """
