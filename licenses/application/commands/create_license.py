"""
CreateLicenseCommand.

Command to issue a new license.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass
class CreateLicenseCommand:
    """Command to issue a license with an optional expiration and payload."""

    expiration_date: Optional[datetime] = None
    extra_data: Any = None
