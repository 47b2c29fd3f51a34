"""
Product catalog endpoints.
Products, categories, display properties, bundled sub-items and price
matrices.
"""

from fastapi import APIRouter, Query, status

from app.api.deps import DbSession, CurrentUser
from app.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    ProductCategoryCreate,
    ProductCategoryUpdate,
    ProductCategoryResponse,
    ProductPropertyCreate,
    ProductPropertyResponse,
    ProductSubItemCreate,
    ProductSubItemResponse,
    ProductMatrixCreate,
    ProductMatrixResponse,
    MatrixValueCreate,
    MatrixValueResponse,
    MatrixPriceResponse,
)
from app.schemas.base import MessageResponse
from app.services.product import ProductService


router = APIRouter()


# Categories come first so "/categories" is not read as a product id

@router.get("/categories", response_model=list[ProductCategoryResponse], summary="List categories")
async def list_categories(
    current_user: CurrentUser,
    db: DbSession,
) -> list[ProductCategoryResponse]:
    service = ProductService(db)
    categories = await service.list_categories()
    return [ProductCategoryResponse.model_validate(c) for c in categories]


@router.post(
    "/categories",
    response_model=ProductCategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
async def create_category(
    data: ProductCategoryCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ProductCategoryResponse:
    service = ProductService(db)
    category = await service.create_category(data)
    return ProductCategoryResponse.model_validate(category)


@router.patch(
    "/categories/{category_id}",
    response_model=ProductCategoryResponse,
    summary="Update a category",
)
async def update_category(
    category_id: int,
    data: ProductCategoryUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ProductCategoryResponse:
    service = ProductService(db)
    category = await service.get_category_or_404(category_id)
    category = await service.update_category(category, data)
    return ProductCategoryResponse.model_validate(category)


@router.delete(
    "/categories/{category_id}",
    response_model=MessageResponse,
    summary="Delete a category",
)
async def delete_category(
    category_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = ProductService(db)
    category = await service.get_category_or_404(category_id)
    await service.delete_category(category)
    return MessageResponse(message="Category deleted")


# Products

@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
async def create_product(
    data: ProductCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ProductResponse:
    """Create a new product."""
    service = ProductService(db)
    product = await service.create(current_user, data)
    return ProductResponse.model_validate(product)


@router.get(
    "",
    response_model=ProductListResponse,
    summary="List products",
    description="Paginated product list with search and category filter",
)
async def list_products(
    current_user: CurrentUser,
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    search: str | None = Query(None, description="Search by name, brand or model"),
    category_id: int | None = Query(None, description="Filter by category"),
) -> ProductListResponse:
    """List all products with pagination."""
    service = ProductService(db)
    skip = (page - 1) * per_page

    products, total = await service.list(
        skip=skip,
        limit=per_page,
        search=search,
        category_id=category_id,
    )

    return ProductListResponse.create(
        items=[ProductResponse.model_validate(p) for p in products],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/{product_id}", response_model=ProductResponse, summary="Get a product")
async def get_product(
    product_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> ProductResponse:
    service = ProductService(db)
    product = await service.get_or_404(product_id)
    return ProductResponse.model_validate(product)


@router.patch("/{product_id}", response_model=ProductResponse, summary="Update a product")
async def update_product(
    product_id: int,
    data: ProductUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ProductResponse:
    service = ProductService(db)
    product = await service.get_or_404(product_id)
    product = await service.update(product, data)
    return ProductResponse.model_validate(product)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    summary="Delete a product",
    description="Delete a product (refused while quotation or order items reference it)",
)
async def delete_product(
    product_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = ProductService(db)
    product = await service.get_or_404(product_id)
    await service.delete(product)
    return MessageResponse(message="Product deleted")


# Properties

@router.get(
    "/{product_id}/properties",
    response_model=list[ProductPropertyResponse],
    summary="List product properties",
)
async def list_properties(
    product_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> list[ProductPropertyResponse]:
    service = ProductService(db)
    product = await service.get_or_404(product_id)
    return [ProductPropertyResponse.model_validate(p) for p in await service.list_properties(product)]


@router.post(
    "/{product_id}/properties",
    response_model=ProductPropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a product property",
)
async def add_property(
    product_id: int,
    data: ProductPropertyCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ProductPropertyResponse:
    service = ProductService(db)
    product = await service.get_or_404(product_id)
    prop = await service.add_property(product, data)
    return ProductPropertyResponse.model_validate(prop)


@router.delete(
    "/{product_id}/properties/{property_id}",
    response_model=MessageResponse,
    summary="Remove a product property",
)
async def remove_property(
    product_id: int,
    property_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = ProductService(db)
    product = await service.get_or_404(product_id)
    await service.remove_property(product, property_id)
    return MessageResponse(message="Property removed")


# Sub-items

@router.get(
    "/{product_id}/sub-items",
    response_model=list[ProductSubItemResponse],
    summary="List sub-items",
)
async def list_sub_items(
    product_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> list[ProductSubItemResponse]:
    service = ProductService(db)
    await service.get_or_404(product_id)
    return [ProductSubItemResponse.model_validate(s) for s in await service.list_sub_items(product_id)]


@router.post(
    "/{product_id}/sub-items",
    response_model=ProductSubItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a sub-item",
)
async def add_sub_item(
    product_id: int,
    data: ProductSubItemCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ProductSubItemResponse:
    service = ProductService(db)
    product = await service.get_or_404(product_id)
    sub_item = await service.add_sub_item(product, data)
    return ProductSubItemResponse.model_validate(sub_item)


@router.delete(
    "/{product_id}/sub-items/{sub_item_id}",
    response_model=MessageResponse,
    summary="Remove a sub-item",
)
async def remove_sub_item(
    product_id: int,
    sub_item_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = ProductService(db)
    product = await service.get_or_404(product_id)
    await service.remove_sub_item(product, sub_item_id)
    return MessageResponse(message="Sub-item removed")


# Price matrices

@router.get(
    "/{product_id}/matrices",
    response_model=list[ProductMatrixResponse],
    summary="List price matrices",
)
async def list_matrices(
    product_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> list[ProductMatrixResponse]:
    service = ProductService(db)
    product = await service.get_or_404(product_id)
    return [ProductMatrixResponse.model_validate(m) for m in await service.list_matrices(product)]


@router.post(
    "/{product_id}/matrices",
    response_model=ProductMatrixResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a price matrix",
)
async def add_matrix(
    product_id: int,
    data: ProductMatrixCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ProductMatrixResponse:
    service = ProductService(db)
    product = await service.get_or_404(product_id)
    matrix = await service.add_matrix(product, data)
    return ProductMatrixResponse.model_validate(matrix)


@router.delete(
    "/{product_id}/matrices/{matrix_id}",
    response_model=MessageResponse,
    summary="Remove a price matrix",
)
async def remove_matrix(
    product_id: int,
    matrix_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = ProductService(db)
    matrix = await service.get_matrix_or_404(product_id, matrix_id)
    await service.remove_matrix(matrix)
    return MessageResponse(message="Price matrix removed")


@router.get(
    "/{product_id}/matrices/{matrix_id}/values",
    response_model=list[MatrixValueResponse],
    summary="List matrix values",
)
async def list_matrix_values(
    product_id: int,
    matrix_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> list[MatrixValueResponse]:
    service = ProductService(db)
    matrix = await service.get_matrix_or_404(product_id, matrix_id)
    return [MatrixValueResponse.model_validate(v) for v in await service.list_matrix_values(matrix)]


@router.post(
    "/{product_id}/matrices/{matrix_id}/values",
    response_model=MatrixValueResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Price a parameter combination",
)
async def add_matrix_value(
    product_id: int,
    matrix_id: int,
    data: MatrixValueCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> MatrixValueResponse:
    service = ProductService(db)
    matrix = await service.get_matrix_or_404(product_id, matrix_id)
    value = await service.add_matrix_value(matrix, data)
    return MatrixValueResponse.model_validate(value)


@router.delete(
    "/{product_id}/matrices/{matrix_id}/values/{value_id}",
    response_model=MessageResponse,
    summary="Remove a matrix value",
)
async def remove_matrix_value(
    product_id: int,
    matrix_id: int,
    value_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    service = ProductService(db)
    matrix = await service.get_matrix_or_404(product_id, matrix_id)
    await service.remove_matrix_value(matrix, value_id)
    return MessageResponse(message="Matrix value removed")


@router.get(
    "/{product_id}/matrices/{matrix_id}/price",
    response_model=MatrixPriceResponse,
    summary="Look up a matrix price",
    description="Price for an exact parameter combination",
)
async def lookup_matrix_price(
    product_id: int,
    matrix_id: int,
    current_user: CurrentUser,
    db: DbSession,
    param_1: str | None = Query(None),
    param_2: str | None = Query(None),
    param_3: str | None = Query(None),
    param_4: str | None = Query(None),
) -> MatrixPriceResponse:
    service = ProductService(db)
    matrix = await service.get_matrix_or_404(product_id, matrix_id)
    parameters = [param_1, param_2, param_3, param_4][:matrix.parameter_count]
    price = await service.lookup_price(matrix, parameters)
    return MatrixPriceResponse(matrix_id=matrix.id, parameters=parameters, price=price)
