"""
Error handling policies for dutreelib.

Per-node I/O failures (permission denied, entries removed mid-scan,
unreadable metadata) are never fatal for a scan. The probe hands every
such failure to an ErrorPolicy, which decides how to report it and what
default the traversal continues with.
"""

import errno
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, TextIO, Union


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors
    that occur during filesystem operations.
    """

    @abstractmethod
    def handle(self, error: Exception, method_name: str,
               path: Union[str, Path], name: Optional[str] = None) -> Any:
        """
        Handle an error that occurred during a filesystem operation.

        Args:
            error: The exception that was raised
            method_name: Name of the probe method that failed (e.g., 'list_dir')
            path: The path being processed when the error occurred
            name: Display name of the path, if already known

        Returns:
            A sensible default value that allows traversal to continue,
            or re-raises the exception to stop traversal.
        """
        pass


# Error kinds by exception class, checked in order
_KIND_BY_CLASS = (
    (PermissionError, "PermissionDenied"),
    (FileNotFoundError, "NotFound"),
    (FileExistsError, "AlreadyExists"),
    (NotADirectoryError, "NotADirectory"),
    (IsADirectoryError, "IsADirectory"),
    (InterruptedError, "Interrupted"),
    (TimeoutError, "TimedOut"),
    (BrokenPipeError, "BrokenPipe"),
)

_KIND_BY_ERRNO = {
    errno.ELOOP: "FilesystemLoop",
    errno.ENAMETOOLONG: "InvalidFilename",
    errno.ENOTEMPTY: "DirectoryNotEmpty",
    errno.EROFS: "ReadOnlyFilesystem",
    errno.ENOSPC: "StorageFull",
    errno.EBUSY: "ResourceBusy",
    errno.ENOMEM: "OutOfMemory",
    errno.EINVAL: "InvalidInput",
}


def describe_error(error: Exception) -> str:
    """Return the kind shown for an error, e.g. 'PermissionDenied'.

    OS errors are named by what went wrong rather than by exception class;
    unknown OS errors are 'Other'. Anything else shows its class name.
    """
    for cls, kind in _KIND_BY_CLASS:
        if isinstance(error, cls):
            return kind
    if isinstance(error, OSError):
        return _KIND_BY_ERRNO.get(error.errno, "Other")
    return type(error).__name__


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error, stopping the scan.

    Useful in tests and tools that need a complete result or none.
    """

    def handle(self, error: Exception, method_name: str,
               path: Union[str, Path], name: Optional[str] = None) -> Any:
        """Re-raise the error immediately."""
        raise error


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that collects all errors without printing anything.

    Useful for collecting all errors and presenting them at the end.
    """

    def __init__(self):
        self.errors = []
        self.skipped_paths = []

    def handle(self, error: Exception, method_name: str,
               path: Union[str, Path], name: Optional[str] = None) -> Any:
        """Record the error and return the default for the method."""
        self._record(error, method_name, path, name)
        return None

    def _record(self, error: Exception, method_name: str,
                path: Union[str, Path], name: Optional[str]) -> None:
        self.errors.append({
            'path': path,
            'name': name if name is not None else Path(path).name,
            'method': method_name,
            'error': error,
            'error_type': describe_error(error),
            'error_message': str(error),
        })
        if method_name == 'list_dir':
            self.skipped_paths.append(path)

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'permission_errors': sum(1 for e in self.errors
                                     if isinstance(e['error'], PermissionError)),
            'not_found_errors': sum(1 for e in self.errors
                                    if isinstance(e['error'], FileNotFoundError)),
            'skipped_paths': len(self.skipped_paths),
            'errors': self.errors,
        }


class ReportErrorsPolicy(CollectErrorsPolicy):
    """
    Policy that reports errors on stderr and continues the scan.

    This is the default policy. Each failure produces one line of the form
    ``Couldn't read <name> (<error-kind>)``.
    """

    def __init__(self, stream: Optional[TextIO] = None, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            stream: Where to write reports (default: sys.stderr at call time)
            verbose: If False, behave like CollectErrorsPolicy
        """
        super().__init__()
        self.stream = stream
        self.verbose = verbose

    def handle(self, error: Exception, method_name: str,
               path: Union[str, Path], name: Optional[str] = None) -> Any:
        self._record(error, method_name, path, name)

        if self.verbose:
            shown = self.errors[-1]['name']
            print(f"Couldn't read {shown} ({describe_error(error)})",
                  file=self.stream or sys.stderr)

        return None


def resolve_policy(policy: Optional[ErrorPolicy]) -> ErrorPolicy:
    """Return ``policy`` or a fresh ReportErrorsPolicy."""
    return policy if policy is not None else ReportErrorsPolicy()
