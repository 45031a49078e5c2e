"""
api/routes/employees.py -- Employee CRUD routes.

Routes:
  GET    /employees        -- list all employees
  GET    /employees/{id}   -- one employee; 404 if absent
  POST   /employees        -- create; 201 with the stored record
  PUT    /employees/{id}   -- full replace; confirmation + id
  DELETE /employees/{id}   -- delete; confirmation + id

PUT and DELETE do not check that the id existed: they answer the same
confirmation whether or not a row matched. Clients that need to know should
GET first.

Handlers are plain `def` functions; FastAPI runs them in its thread pool so
a slow store call blocks only its own request.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from api.models import EmployeeBody, EmployeeResponse, EmployeeWriteResponse
from auth.dependencies import require_token
from core.errors import NotFound
from employees.store import EmployeeStore

# All employee routes require a token.
# Router-level dependency applies to every route registered on this router,
# so individual handlers don't each need to repeat Depends(require_token).
router = APIRouter(dependencies=[Depends(require_token)])


# Row ids are BIGINT-sized at most; anything outside answers 400, not a
# driver overflow.
EmployeeId = Annotated[int, Path(ge=1, le=2**63 - 1)]


def _store(request: Request) -> EmployeeStore:
    return request.app.state.employee_store


@router.get("/employees", response_model=list[EmployeeResponse])
def list_employees(request: Request) -> list[EmployeeResponse]:
    return [EmployeeResponse.from_domain(e) for e in _store(request).list_employees()]


@router.get("/employees/{employee_id}", response_model=EmployeeResponse)
def get_employee(request: Request, employee_id: EmployeeId) -> EmployeeResponse:
    employee = _store(request).get_employee(employee_id)
    if employee is None:
        raise NotFound("Employee not found.")
    return EmployeeResponse.from_domain(employee)


@router.post("/employees", response_model=EmployeeResponse, status_code=201)
def create_employee(request: Request, body: EmployeeBody) -> EmployeeResponse:
    """Insert a new employee and return the row as stored."""
    store = _store(request)
    employee_id = store.create_employee(body.to_domain())
    created = store.get_employee(employee_id)
    return EmployeeResponse.from_domain(created)


@router.put("/employees/{employee_id}", response_model=EmployeeWriteResponse)
def update_employee(request: Request, employee_id: EmployeeId, body: EmployeeBody) -> EmployeeWriteResponse:
    _store(request).update_employee(employee_id, body.to_domain())
    return EmployeeWriteResponse(message="Employee updated", id=employee_id)


@router.delete("/employees/{employee_id}", response_model=EmployeeWriteResponse)
def delete_employee(request: Request, employee_id: EmployeeId) -> EmployeeWriteResponse:
    _store(request).delete_employee(employee_id)
    return EmployeeWriteResponse(message="Employee deleted", id=employee_id)
