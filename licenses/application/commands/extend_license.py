"""
ExtendLicenseCommand.

Command to move a license's expiration date forward.
"""
from dataclasses import dataclass
from datetime import datetime


@dataclass
class ExtendLicenseCommand:
    """Command to extend a license to a later expiration date."""

    key: str
    expiration_date: datetime
