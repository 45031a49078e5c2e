"""
employees/store.py -- SQLAlchemy-backed persistence layer for employee records.

Uses SQLAlchemy Core (not ORM) so the dataclass in employees/models.py
remains the authoritative domain representation. Swapping SQLite for MySQL
is a connection string change, not a rewrite.

Pattern: Repository + Data Mapper. EmployeeStore is the repository;
_row_to_employee is the mapper. Route handlers never touch SQL directly.

Write semantics:
  update_employee() and delete_employee() report whether a row matched, but
  the HTTP layer answers with a confirmation either way. Concurrent writes to
  the same row are not coordinated -- last write wins.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = EmployeeStore(engine)
    employee_id = store.create_employee(Employee("Ana", "Engineer", "R&D", 5000))
    store.get_employee(employee_id)
    store.update_employee(employee_id, Employee("Ana", "Lead", "R&D", 6500))
    store.delete_employee(employee_id)
"""

import logging
from typing import Optional

from sqlalchemy import Column, Double, Integer, MetaData, String, Table
from sqlalchemy.engine import Engine

from employees.models import Employee

logger = logging.getLogger("employeeapi.employees")

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_employees = Table(
    "employees",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("position", String(255), nullable=False),
    Column("department", String(255), nullable=False),
    # DOUBLE on MySQL; plain FLOAT there is single precision.
    Column("salary", Double, nullable=False),
)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class EmployeeStore:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        metadata.create_all(self.engine)

    def create_employee(self, employee: Employee) -> int:
        """Insert a new employee and return its assigned id."""
        with self.engine.connect() as conn:
            result = conn.execute(
                _employees.insert().values(
                    name=employee.name,
                    position=employee.position,
                    department=employee.department,
                    salary=employee.salary,
                )
            )
            conn.commit()
            employee_id = result.inserted_primary_key[0]
        logger.info("Employee %d created", employee_id)
        return employee_id

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        with self.engine.connect() as conn:
            row = conn.execute(_employees.select().where(_employees.c.id == employee_id)).fetchone()
        return _row_to_employee(row) if row is not None else None

    def list_employees(self) -> list[Employee]:
        """Return all employees ordered by id."""
        with self.engine.connect() as conn:
            rows = conn.execute(_employees.select().order_by(_employees.c.id)).fetchall()
        return [_row_to_employee(r) for r in rows]

    def update_employee(self, employee_id: int, employee: Employee) -> bool:
        """Replace every field of the row. Returns True if a row matched."""
        with self.engine.connect() as conn:
            result = conn.execute(
                _employees.update()
                .where(_employees.c.id == employee_id)
                .values(
                    name=employee.name,
                    position=employee.position,
                    department=employee.department,
                    salary=employee.salary,
                )
            )
            conn.commit()
        return result.rowcount > 0

    def delete_employee(self, employee_id: int) -> bool:
        """Delete the row. Returns True if deleted, False if not found."""
        with self.engine.connect() as conn:
            result = conn.execute(_employees.delete().where(_employees.c.id == employee_id))
            conn.commit()
        return result.rowcount > 0


def _row_to_employee(row) -> Employee:
    return Employee(
        id=row.id,
        name=row.name,
        position=row.position,
        department=row.department,
        salary=row.salary,
    )
