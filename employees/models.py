"""
employees/models.py -- Domain dataclass for the employee record store.

Pure data container with zero logic. Employees have no relationship to the
users in auth/ -- the two entity sets merely share one database.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Employee:
    """One row of the employees table.

    id is None before the record is written to the database. PUT replaces
    every other field at once; there are no partial updates.
    """

    name: str
    position: str
    department: str
    salary: float
    id: Optional[int] = None
