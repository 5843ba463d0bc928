"""
GetLicenseQuery.

Query to read a license and its derived status.
"""
from dataclasses import dataclass


@dataclass
class GetLicenseQuery:
    """Query to get a license by key."""

    key: str
