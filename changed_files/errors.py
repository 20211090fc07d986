from __future__ import annotations


class ChangedFilesError(RuntimeError):
    pass


class ConfigurationError(ChangedFilesError):
    pass


class UnsupportedEventError(ChangedFilesError):
    pass


class UpstreamAPIError(ChangedFilesError):
    pass


class GitError(ChangedFilesError):
    pass


class ParentBranchNotFoundError(GitError):
    pass


class DataShapeError(ChangedFilesError):
    pass
