"""releasegit - git facade for release automation.

Synchronizes shallow CI checkouts, reads commit ranges and tag release
notes, and publishes tags and notes back to the remote.
"""

__version__ = "0.1.0"

from releasegit.config import ReleaseGitConfig
from releasegit.exceptions import ConfigurationError, GitError, ReleaseGitError
from releasegit.git import CommitRecord, ExecOptions, ProbeResult, ReleaseGit

__all__ = [
    "__version__",
    "ReleaseGit",
    "ReleaseGitConfig",
    "ReleaseGitError",
    "GitError",
    "ConfigurationError",
    "CommitRecord",
    "ExecOptions",
    "ProbeResult",
]
