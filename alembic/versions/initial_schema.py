"""initial CRM schema

Revision ID: crm_initial_001
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'crm_initial_001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Enum columns store member names
language = sa.Enum('TR', 'EN', 'PL', 'FR', 'RU', 'DE', 'AR', name='language')
company_type = sa.Enum('CUSTOMER', 'PARTNER', 'SUPPLIER', name='companytype')
quotation_status = sa.Enum(
    'DRAFT', 'SENT', 'ACCEPTED', 'REJECTED', 'EXPIRED', name='quotationstatus'
)
responsibility_type = sa.Enum('CUSTOMER', 'SUPPLIER', name='responsibilitytype')
order_status = sa.Enum(
    'PENDING', 'CONFIRMED', 'SHIPPED', 'DELIVERED', 'CANCELLED', name='orderstatus'
)
exhibition_type = sa.Enum(
    'TRADE_SHOW', 'EXHIBITION', 'CONFERENCE', 'SEMINAR', name='exhibitiontype'
)
exhibition_status = sa.Enum(
    'PLANNED', 'ACTIVE', 'COMPLETED', 'CANCELLED', name='exhibitionstatus'
)
followup_status = sa.Enum('PENDING', 'CONTACTED', 'COMPLETED', name='followupstatus')
employee_role_type = sa.Enum(
    'EMPLOYEE', 'SPECIALIST', 'MANAGER', 'DIRECTOR', name='employeeroletype'
)
task_status = sa.Enum('TODO', 'IN_PROGRESS', 'REVIEW', 'DONE', name='taskstatus')
task_priority = sa.Enum('LOW', 'MEDIUM', 'HIGH', 'URGENT', name='taskpriority')

ENUMS = [
    language, company_type, quotation_status, responsibility_type, order_status,
    exhibition_type, exhibition_status, followup_status, employee_role_type,
    task_status, task_priority,
]

# Creation order; downgrade drops in reverse
TABLES = [
    'users', 'companies', 'product_categories', 'products', 'product_properties',
    'product_sub_items', 'product_matrices', 'matrix_values', 'company_info',
    'bank_info', 'payment_methods', 'delivery_methods', 'currencies', 'countries',
    'company_types', 'quotation_statuses', 'dictionary', 'company_settings',
    'quotations', 'quotation_items', 'quotation_settings', 'quotation_responsibilities',
    'orders', 'order_items', 'exhibitions', 'exhibition_costs', 'exhibition_followups',
    'employees', 'employee_roles', 'employee_hierarchy', 'tasks', 'notes', 'documents',
]


def base_columns() -> list:
    return [
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def creator_column() -> sa.Column:
    return sa.Column(
        'created_by', sa.Integer(),
        sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True,
    )


def create_table(name: str, *columns, creator: bool = False) -> None:
    extra = [creator_column()] if creator else []
    op.create_table(name, *base_columns(), *extra, *columns, sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f(f'ix_{name}_created_at'), name, ['created_at'])
    if creator:
        op.create_index(op.f(f'ix_{name}_created_by'), name, ['created_by'])


def upgrade() -> None:
    create_table(
        'users',
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('role', sa.String(50), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    create_table(
        'companies',
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', company_type, nullable=False),
        sa.Column('contact_person', sa.String(255), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('country', sa.String(100), nullable=True),
        sa.Column('tax_number', sa.String(100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        creator=True,
    )
    op.create_index(op.f('ix_companies_name'), 'companies', ['name'])

    # Catalog
    create_table(
        'product_categories',
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
    )
    create_table(
        'products',
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('brand', sa.String(100), nullable=True),
        sa.Column('model', sa.String(100), nullable=True),
        sa.Column(
            'category_id', sa.Integer(),
            sa.ForeignKey('product_categories.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column('unit_price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('currency', sa.String(10), nullable=False),
        sa.Column('unit', sa.String(50), nullable=True),
        sa.Column('stock_quantity', sa.Integer(), nullable=True),
        sa.Column('hs_code', sa.String(50), nullable=True),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('warranty_period', sa.String(100), nullable=True),
        sa.Column('technical_specs', sa.JSON(), nullable=True),
        sa.Column('ignore_sub_item_pricing', sa.Boolean(), nullable=False),
        creator=True,
    )
    op.create_index(op.f('ix_products_name'), 'products', ['name'])
    op.create_index(op.f('ix_products_category_id'), 'products', ['category_id'])

    create_table(
        'product_properties',
        sa.Column(
            'product_id', sa.Integer(),
            sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('property_name', sa.String(255), nullable=False),
        sa.Column('property_value', sa.Text(), nullable=False),
        sa.Column('language', language, nullable=False),
        sa.Column('show_in_quotation', sa.Boolean(), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
        sa.Column('conditional_display', sa.String(255), nullable=True),
    )
    op.create_index(op.f('ix_product_properties_product_id'), 'product_properties', ['product_id'])

    create_table(
        'product_sub_items',
        sa.Column(
            'parent_product_id', sa.Integer(),
            sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'sub_product_id', sa.Integer(),
            sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('quantity', sa.Numeric(precision=10, scale=2), nullable=False),
    )
    op.create_index(
        op.f('ix_product_sub_items_parent_product_id'), 'product_sub_items', ['parent_product_id']
    )

    create_table(
        'product_matrices',
        sa.Column(
            'product_id', sa.Integer(),
            sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('parameter_count', sa.Integer(), nullable=False),
        *[sa.Column(f'parameter_{n}_name', sa.String(100), nullable=True) for n in range(1, 5)],
    )
    op.create_index(op.f('ix_product_matrices_product_id'), 'product_matrices', ['product_id'])

    create_table(
        'matrix_values',
        sa.Column(
            'matrix_id', sa.Integer(),
            sa.ForeignKey('product_matrices.id', ondelete='CASCADE'), nullable=False,
        ),
        *[sa.Column(f'param_{n}_value', sa.String(100), nullable=True) for n in range(1, 5)],
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=False),
    )
    op.create_index(op.f('ix_matrix_values_matrix_id'), 'matrix_values', ['matrix_id'])

    # Settings lookups
    create_table(
        'company_info',
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('tax_number', sa.String(100), nullable=True),
        sa.Column('trade_registry_number', sa.String(100), nullable=True),
        sa.Column('website', sa.String(255), nullable=True),
        sa.Column('logo_url', sa.String(500), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        creator=True,
    )
    create_table(
        'bank_info',
        sa.Column('bank_name', sa.String(255), nullable=False),
        sa.Column('account_number', sa.String(100), nullable=False),
        sa.Column('account_holder', sa.String(255), nullable=True),
        sa.Column('branch_name', sa.String(255), nullable=True),
        sa.Column('iban', sa.String(50), nullable=True),
        sa.Column('swift_code', sa.String(20), nullable=True),
        sa.Column('currency', sa.String(10), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        creator=True,
    )
    for name in ('payment_methods', 'delivery_methods'):
        create_table(
            name,
            sa.Column('name', sa.String(255), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('language', language, nullable=False),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            creator=True,
        )
    create_table(
        'currencies',
        sa.Column('code', sa.String(10), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('symbol', sa.String(10), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.UniqueConstraint('code'),
    )
    create_table(
        'countries',
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('code', sa.String(10), nullable=True),
        sa.Column('phone_code', sa.String(10), nullable=True),
    )
    create_table(
        'company_types',
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
    )
    create_table(
        'quotation_statuses',
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color', sa.String(20), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
    )
    create_table(
        'dictionary',
        sa.Column('key_name', sa.String(255), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('language', language, nullable=False),
        sa.Column('category', sa.String(100), nullable=True),
        sa.UniqueConstraint('key_name', 'language', name='uq_dictionary_key_language'),
    )
    op.create_index(op.f('ix_dictionary_key_name'), 'dictionary', ['key_name'])
    create_table(
        'company_settings',
        sa.Column('setting_type', sa.String(100), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('value', sa.JSON(), nullable=True),
        sa.Column('language', language, nullable=False),
        creator=True,
    )
    op.create_index(op.f('ix_company_settings_setting_type'), 'company_settings', ['setting_type'])

    # Quotations
    create_table(
        'quotations',
        sa.Column(
            'company_id', sa.Integer(),
            sa.ForeignKey('companies.id', ondelete='RESTRICT'), nullable=False,
        ),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('quotation_number', sa.String(50), nullable=False),
        sa.Column('status', quotation_status, nullable=False),
        sa.Column('currency', sa.String(10), nullable=False),
        sa.Column('language', language, nullable=False),
        sa.Column('quotation_date', sa.Date(), nullable=False),
        sa.Column('valid_until', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('total_amount', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('revision_number', sa.Integer(), nullable=False),
        sa.Column(
            'parent_quotation_id', sa.Integer(),
            sa.ForeignKey('quotations.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column(
            'prepared_by', sa.Integer(),
            sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column(
            'reviewed_by', sa.Integer(),
            sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True,
        ),
        creator=True,
    )
    op.create_index(op.f('ix_quotations_company_id'), 'quotations', ['company_id'])
    op.create_index(
        op.f('ix_quotations_quotation_number'), 'quotations', ['quotation_number'], unique=True
    )
    op.create_index(op.f('ix_quotations_status'), 'quotations', ['status'])

    create_table(
        'quotation_items',
        sa.Column(
            'quotation_id', sa.Integer(),
            sa.ForeignKey('quotations.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'product_id', sa.Integer(),
            sa.ForeignKey('products.id', ondelete='RESTRICT'), nullable=False,
        ),
        sa.Column('quantity', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('unit_price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('discount_percentage', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('total_price', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('is_sub_item', sa.Boolean(), nullable=False),
        sa.Column(
            'parent_item_id', sa.Integer(),
            sa.ForeignKey('quotation_items.id', ondelete='CASCADE'), nullable=True,
        ),
        sa.Column(
            'selected_matrix_id', sa.Integer(),
            sa.ForeignKey('product_matrices.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column('custom_properties', sa.JSON(), nullable=True),
    )
    op.create_index(op.f('ix_quotation_items_quotation_id'), 'quotation_items', ['quotation_id'])

    create_table(
        'quotation_settings',
        sa.Column(
            'quotation_id', sa.Integer(),
            sa.ForeignKey('quotations.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'company_info_id', sa.Integer(),
            sa.ForeignKey('company_info.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column(
            'bank_info_id', sa.Integer(),
            sa.ForeignKey('bank_info.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column(
            'payment_method_id', sa.Integer(),
            sa.ForeignKey('payment_methods.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column(
            'delivery_method_id', sa.Integer(),
            sa.ForeignKey('delivery_methods.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.UniqueConstraint('quotation_id'),
    )
    create_table(
        'quotation_responsibilities',
        sa.Column(
            'quotation_id', sa.Integer(),
            sa.ForeignKey('quotations.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('responsibility_type', responsibility_type, nullable=False),
        sa.Column('responsible_party', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('language', language, nullable=False),
    )
    op.create_index(
        op.f('ix_quotation_responsibilities_quotation_id'),
        'quotation_responsibilities',
        ['quotation_id'],
    )

    # Orders
    create_table(
        'orders',
        sa.Column(
            'company_id', sa.Integer(),
            sa.ForeignKey('companies.id', ondelete='RESTRICT'), nullable=False,
        ),
        sa.Column(
            'quotation_id', sa.Integer(),
            sa.ForeignKey('quotations.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('order_number', sa.String(50), nullable=False),
        sa.Column('status', order_status, nullable=False),
        sa.Column('currency', sa.String(10), nullable=False),
        sa.Column('delivery_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('total_amount', sa.Numeric(precision=14, scale=2), nullable=False),
        creator=True,
    )
    op.create_index(op.f('ix_orders_company_id'), 'orders', ['company_id'])
    op.create_index(op.f('ix_orders_quotation_id'), 'orders', ['quotation_id'])
    op.create_index(op.f('ix_orders_order_number'), 'orders', ['order_number'], unique=True)
    op.create_index(op.f('ix_orders_status'), 'orders', ['status'])

    create_table(
        'order_items',
        sa.Column(
            'order_id', sa.Integer(),
            sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'product_id', sa.Integer(),
            sa.ForeignKey('products.id', ondelete='RESTRICT'), nullable=False,
        ),
        sa.Column('quantity', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('unit_price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('total_price', sa.Numeric(precision=14, scale=2), nullable=False),
    )
    op.create_index(op.f('ix_order_items_order_id'), 'order_items', ['order_id'])

    # Exhibitions
    create_table(
        'exhibitions',
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', exhibition_type, nullable=False),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('status', exhibition_status, nullable=False),
        sa.Column('target_cost', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('actual_cost', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('cost_currency', sa.String(10), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        creator=True,
    )
    op.create_index(op.f('ix_exhibitions_name'), 'exhibitions', ['name'])

    create_table(
        'exhibition_costs',
        sa.Column(
            'exhibition_id', sa.Integer(),
            sa.ForeignKey('exhibitions.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('description', sa.String(255), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('currency', sa.String(10), nullable=False),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('cost_date', sa.Date(), nullable=True),
        creator=True,
    )
    op.create_index(op.f('ix_exhibition_costs_exhibition_id'), 'exhibition_costs', ['exhibition_id'])

    create_table(
        'exhibition_followups',
        sa.Column(
            'exhibition_id', sa.Integer(),
            sa.ForeignKey('exhibitions.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'company_id', sa.Integer(),
            sa.ForeignKey('companies.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column('contact_person', sa.String(255), nullable=True),
        sa.Column('follow_up_date', sa.Date(), nullable=True),
        sa.Column('status', followup_status, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        creator=True,
    )
    op.create_index(
        op.f('ix_exhibition_followups_exhibition_id'), 'exhibition_followups', ['exhibition_id']
    )

    # Employees
    create_table(
        'employees',
        sa.Column(
            'user_id', sa.Integer(),
            sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('employee_number', sa.String(50), nullable=True),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('position', sa.String(100), nullable=True),
        sa.Column('hire_date', sa.Date(), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.UniqueConstraint('user_id'),
        creator=True,
    )
    op.create_index(op.f('ix_employees_is_active'), 'employees', ['is_active'])

    create_table(
        'employee_roles',
        sa.Column(
            'employee_id', sa.Integer(),
            sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('role', employee_role_type, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column(
            'assigned_by', sa.Integer(),
            sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column('assigned_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(op.f('ix_employee_roles_employee_id'), 'employee_roles', ['employee_id'])

    create_table(
        'employee_hierarchy',
        sa.Column(
            'employee_id', sa.Integer(),
            sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'manager_id', sa.Integer(),
            sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.UniqueConstraint('employee_id'),
        creator=True,
    )
    op.create_index(op.f('ix_employee_hierarchy_manager_id'), 'employee_hierarchy', ['manager_id'])

    # Tasks, notes and documents
    create_table(
        'tasks',
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('priority', task_priority, nullable=False),
        sa.Column('status', task_status, nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column(
            'assigned_to', sa.Integer(),
            sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True,
        ),
        creator=True,
    )
    op.create_index(op.f('ix_tasks_status'), 'tasks', ['status'])
    op.create_index(op.f('ix_tasks_assigned_to'), 'tasks', ['assigned_to'])

    create_table(
        'notes',
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('is_favorite', sa.Boolean(), nullable=False),
        creator=True,
    )
    op.create_index(op.f('ix_notes_category'), 'notes', ['category'])

    create_table(
        'documents',
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('file_name', sa.String(255), nullable=True),
        sa.Column('file_size', sa.Integer(), nullable=True),
        sa.Column('file_type', sa.String(100), nullable=True),
        sa.Column('file_url', sa.String(500), nullable=True),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('is_favorite', sa.Boolean(), nullable=False),
        creator=True,
    )
    op.create_index(op.f('ix_documents_category'), 'documents', ['category'])


def downgrade() -> None:
    # Indexes go with their tables
    for name in reversed(TABLES):
        op.drop_table(name)

    bind = op.get_bind()
    for enum in ENUMS:
        enum.drop(bind, checkfirst=True)
