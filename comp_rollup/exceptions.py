"""
Custom exception classes for comp_rollup.

The calculation engines never raise; these cover the plumbing around them
(configuration, file I/O, roster bookkeeping and project storage).
"""


class CompRollupError(Exception):
    """Base exception for all comp_rollup errors."""

    pass


class ConfigLoadError(CompRollupError):
    """Raised when a budget configuration file cannot be loaded or validated."""

    pass


class DataReadError(CompRollupError):
    """Raised when a roster file cannot be read."""

    pass


class DataWriteError(CompRollupError):
    """Raised when an export cannot be written."""

    pass


class RosterError(CompRollupError):
    """Base exception for roster bookkeeping errors."""

    pass


class EmployeeNotFoundError(RosterError):
    """Raised when an employee id is not on the roster."""

    pass


class DuplicateEmployeeError(RosterError):
    """Raised when an employee id is already on the roster."""

    pass


class ProjectStoreError(CompRollupError):
    """Base exception for project storage errors."""

    pass


class MissingProjectFieldsError(ProjectStoreError):
    """Raised when a project name or access key is missing."""

    pass


class ProjectNotFoundError(ProjectStoreError):
    """Raised when no project matches the name and access key."""

    pass
