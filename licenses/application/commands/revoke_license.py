"""
RevokeLicenseCommand.

Command to permanently revoke a license.
"""
from dataclasses import dataclass


@dataclass
class RevokeLicenseCommand:
    """Command to revoke a license."""

    key: str
