"""
Database models module.
All SQLAlchemy models are exported from here for easy imports.
"""

from app.models.user import User
from app.models.company import Company, CompanyType
from app.models.product import (
    Product,
    ProductCategory,
    ProductProperty,
    ProductSubItem,
    ProductMatrix,
    MatrixValue,
)
from app.models.quotation import (
    Quotation,
    QuotationItem,
    QuotationSettings,
    QuotationResponsibility,
    QuotationStatus,
    ResponsibilityType,
)
from app.models.order import Order, OrderItem, OrderStatus
from app.models.exhibition import (
    Exhibition,
    ExhibitionCost,
    ExhibitionFollowup,
    ExhibitionType,
    ExhibitionStatus,
    FollowupStatus,
)
from app.models.employee import Employee, EmployeeRole, EmployeeHierarchy, EmployeeRoleType
from app.models.task import Task, TaskStatus, TaskPriority
from app.models.note import Note, Document
from app.models.settings import (
    CompanyInfo,
    BankInfo,
    PaymentMethod,
    DeliveryMethod,
    Currency,
    Country,
    CompanyTypeOption,
    QuotationStatusOption,
    DictionaryEntry,
    CompanySetting,
)


__all__ = [
    "User",
    "Company",
    "CompanyType",
    "Product",
    "ProductCategory",
    "ProductProperty",
    "ProductSubItem",
    "ProductMatrix",
    "MatrixValue",
    "Quotation",
    "QuotationItem",
    "QuotationSettings",
    "QuotationResponsibility",
    "QuotationStatus",
    "ResponsibilityType",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Exhibition",
    "ExhibitionCost",
    "ExhibitionFollowup",
    "ExhibitionType",
    "ExhibitionStatus",
    "FollowupStatus",
    "Employee",
    "EmployeeRole",
    "EmployeeHierarchy",
    "EmployeeRoleType",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "Note",
    "Document",
    "CompanyInfo",
    "BankInfo",
    "PaymentMethod",
    "DeliveryMethod",
    "Currency",
    "Country",
    "CompanyTypeOption",
    "QuotationStatusOption",
    "DictionaryEntry",
    "CompanySetting",
]
