"""
Tests for error handling policies.
"""

import errno
import io
from pathlib import Path

import pytest

from dutreelib.error_policies import (
    CollectErrorsPolicy,
    FailFastPolicy,
    ReportErrorsPolicy,
    describe_error,
    resolve_policy,
)


class TestErrorPolicies:
    """Test individual error policy behaviors."""

    def test_fail_fast_policy(self):
        """FailFastPolicy should re-raise any error."""
        policy = FailFastPolicy()

        with pytest.raises(PermissionError):
            policy.handle(PermissionError("Access denied"), "list_dir", Path("/test"))

    def test_collect_errors_policy(self):
        """CollectErrorsPolicy should record silently and return None."""
        policy = CollectErrorsPolicy()

        result = policy.handle(PermissionError("Access denied"), "list_dir",
                               Path("/test/locked"))
        assert result is None
        assert policy.skipped_paths == [Path("/test/locked")]
        assert policy.errors[0]['name'] == "locked"

        stats = policy.get_statistics()
        assert stats['total_errors'] == 1
        assert stats['permission_errors'] == 1
        assert stats['not_found_errors'] == 0

    def test_report_errors_policy_message(self):
        """ReportErrorsPolicy prints one line per failure."""
        stream = io.StringIO()
        policy = ReportErrorsPolicy(stream=stream)

        policy.handle(FileNotFoundError(2, "No such file"), "stat",
                      Path("/gone/file.txt"), name="file.txt")

        assert stream.getvalue() == "Couldn't read file.txt (NotFound)\n"
        assert policy.get_statistics()['not_found_errors'] == 1
        assert policy.skipped_paths == []

    def test_report_errors_policy_defaults_to_stderr(self, capsys):
        policy = ReportErrorsPolicy()
        policy.handle(PermissionError("denied"), "list_dir", "/root/secret")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Couldn't read secret (PermissionDenied)\n"

    def test_quiet_report_policy(self):
        stream = io.StringIO()
        policy = ReportErrorsPolicy(stream=stream, verbose=False)
        policy.handle(OSError("boom"), "stat", "/x")
        assert stream.getvalue() == ""
        assert len(policy.errors) == 1


def test_describe_error():
    assert describe_error(PermissionError()) == "PermissionDenied"
    assert describe_error(FileNotFoundError(errno.ENOENT, "gone")) == "NotFound"
    assert describe_error(NotADirectoryError()) == "NotADirectory"


def test_describe_error_by_errno():
    # OSError picks the matching subclass for errnos that have one
    assert describe_error(OSError(errno.EACCES, "denied")) == "PermissionDenied"
    assert describe_error(OSError(errno.ELOOP, "loop")) == "FilesystemLoop"
    assert describe_error(OSError(errno.ENAMETOOLONG, "long")) == "InvalidFilename"
    assert describe_error(OSError()) == "Other"


def test_describe_non_os_error():
    assert describe_error(ValueError("bad")) == "ValueError"


def test_resolve_policy():
    policy = CollectErrorsPolicy()
    assert resolve_policy(policy) is policy
    assert isinstance(resolve_policy(None), ReportErrorsPolicy)
