"""
Pydantic schemas for request/response validation.
"""

from app.schemas.base import MessageResponse, PaginatedResponse
from app.schemas.auth import Token, LoginRequest, RegisterRequest, UserResponse
from app.schemas.company import CompanyCreate, CompanyUpdate, CompanyResponse
from app.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from app.schemas.quotation import (
    QuotationCreate,
    QuotationUpdate,
    QuotationResponse,
    QuotationItemCreate,
    QuotationItemResponse,
)
from app.schemas.order import OrderCreate, OrderUpdate, OrderResponse
from app.schemas.exhibition import ExhibitionCreate, ExhibitionUpdate, ExhibitionResponse
from app.schemas.employee import EmployeeCreate, EmployeeUpdate, EmployeeResponse
from app.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from app.schemas.note import NoteCreate, NoteUpdate, NoteResponse, DocumentResponse
from app.schemas.dashboard import DashboardStats

__all__ = [
    "MessageResponse",
    "PaginatedResponse",
    # Auth
    "Token",
    "LoginRequest",
    "RegisterRequest",
    "UserResponse",
    # Companies
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    # Products
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    # Quotations
    "QuotationCreate",
    "QuotationUpdate",
    "QuotationResponse",
    "QuotationItemCreate",
    "QuotationItemResponse",
    # Orders
    "OrderCreate",
    "OrderUpdate",
    "OrderResponse",
    # Exhibitions
    "ExhibitionCreate",
    "ExhibitionUpdate",
    "ExhibitionResponse",
    # Employees
    "EmployeeCreate",
    "EmployeeUpdate",
    "EmployeeResponse",
    # Tasks
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    # Notes
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "DocumentResponse",
    # Dashboard
    "DashboardStats",
]
