"""
Static driver fixture.

Served by the mock API, used in mock mode, and the fallback whenever a remote
source cannot be reached.
"""
from __future__ import annotations

from driver_roster.domain.models import DriverRecord

MOCK_DRIVERS: tuple[DriverRecord, ...] = (
    DriverRecord(id=1, name="Alemu Bekele", status="Active", location="Addis Ababa", hire_date="2024-01-15"),
    DriverRecord(id=2, name="Yerosen Birhanu", status="Inactive", location="Bahir Dar", hire_date="2023-08-30"),
    DriverRecord(id=3, name="Hareg kassaye", status="Active", location="Dire Dawa", hire_date="2025-11-10"),
    DriverRecord(id=4, name="Sebli Abebe", status="Inactive", location="Adama", hire_date="2024-07-01"),
    DriverRecord(id=5, name="Chaltu Negasa", status="Active", location="Ambo", hire_date="2023-02-15"),
    DriverRecord(id=6, name="Sisay Bekele", status="Inactive", location="Nekemte", hire_date="2024-06-25"),
    DriverRecord(id=7, name="Motuma Kumsa", status="Active", location="Harar", hire_date="2025-09-03"),
    DriverRecord(id=8, name="Nanati Begna", status="Active", location="Harar", hire_date="2023-03-26"),
    DriverRecord(id=9, name="Geleta Bekele", status="Inactive", location="Addis Ababa", hire_date="2022-11-10"),
)

__all__ = ["MOCK_DRIVERS"]
