"""Process environment lookups."""

from __future__ import annotations

import os
import tempfile
import uuid

# Checked in order before falling back to the platform user database
HOME_ENV_VARS = ("HOME", "USERPROFILE")


class SystemEnvironment:
    """Production environment implementation.

    Satisfies the Environment protocol structurally.
    """

    def __init__(self, temp_root: str | None = None) -> None:
        """Initialize environment lookups.

        Args:
            temp_root: Override for the temporary directory root.
                Defaults to the system temporary directory.
        """
        self.temp_root = temp_root

    def home_directory(self) -> str | None:
        """Get the current user's home directory.

        Checks HOME, then USERPROFILE, then the password database.

        Returns:
            Home directory path, or None if it cannot be determined.
        """
        for var in HOME_ENV_VARS:
            value = os.environ.get(var)
            if value:
                return value
        try:
            import pwd
        except ImportError:
            return None
        try:
            return pwd.getpwuid(os.getuid()).pw_dir or None
        except KeyError:
            return None

    def system_temp_directory(self) -> str:
        """Get the root directory for temporary files."""
        return self.temp_root or tempfile.gettempdir()

    def random_unique_token(self) -> str:
        """Generate a random hex token."""
        return uuid.uuid4().hex
