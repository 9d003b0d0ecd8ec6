"""FastAPI endpoints for products, carts and orders."""

from fastapi import APIRouter, Depends, Query

from orderflow.api.deps import current_user, florist_user
from orderflow.api.schemas import (
    AddCartItemRequest,
    ApiResponse,
    CreateOrderRequest,
    CreateProductRequest,
    ProductIdResponse,
    RestockProductRequest,
    SetProductActiveRequest,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from orderflow.cart.service import CartService
from orderflow.cart.views import CartView
from orderflow.catalogue.product.views import ProductPage, ProductView
from orderflow.catalogue.service import CatalogueService
from orderflow.identity.user import User
from orderflow.order.service import OrderService
from orderflow.order.views import OrderView

product_router = APIRouter(prefix="/api/products", tags=["products"])
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@product_router.get("", response_model=ApiResponse[ProductPage])
async def list_products(
    page: int = Query(0),
    size: int = Query(10),
    sort_by: str = Query("name", alias="sortBy"),
    sort_dir: str = Query("asc", alias="sortDir"),
) -> ApiResponse[ProductPage]:
    result = CatalogueService().list_active_products(page, size, sort_by, sort_dir)
    return ApiResponse[ProductPage](result=result)


@product_router.get("/category/{category_id}", response_model=ApiResponse[list[ProductView]])
async def list_products_by_category(category_id: str) -> ApiResponse[list[ProductView]]:
    return ApiResponse[list[ProductView]](result=CatalogueService().list_by_category(category_id))


@product_router.get("/{product_id}", response_model=ApiResponse[ProductView])
async def get_product(product_id: str) -> ApiResponse[ProductView]:
    return ApiResponse[ProductView](result=CatalogueService().get_product(product_id))


@product_router.post("", status_code=201, response_model=ApiResponse[ProductIdResponse])
async def create_product(
    body: CreateProductRequest,
    user: User = Depends(florist_user),
) -> ApiResponse[ProductIdResponse]:
    product_id = CatalogueService().add_product(
        name=body.name,
        description=body.description,
        price=body.price,
        stock_quantity=body.stock_quantity,
        category_id=body.category_id,
        is_active=body.is_active,
    )
    return ApiResponse[ProductIdResponse](result=ProductIdResponse(product_id=product_id))


@product_router.put("/{product_id}", response_model=ApiResponse[ProductView])
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    user: User = Depends(florist_user),
) -> ApiResponse[ProductView]:
    service = CatalogueService()
    service.update_product(
        product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category_id=body.category_id,
    )
    return ApiResponse[ProductView](result=service.get_product(product_id))


@product_router.put("/{product_id}/active", response_model=ApiResponse[ProductView])
async def set_product_active(
    product_id: str,
    body: SetProductActiveRequest,
    user: User = Depends(florist_user),
) -> ApiResponse[ProductView]:
    service = CatalogueService()
    service.set_product_active(product_id, body.is_active)
    return ApiResponse[ProductView](result=service.get_product(product_id))


@product_router.post("/{product_id}/restock", response_model=ApiResponse[ProductView])
async def restock_product(
    product_id: str,
    body: RestockProductRequest,
    user: User = Depends(florist_user),
) -> ApiResponse[ProductView]:
    service = CatalogueService()
    service.restock_product(product_id, body.quantity)
    return ApiResponse[ProductView](result=service.get_product(product_id))


@product_router.delete("/{product_id}", response_model=ApiResponse[None])
async def delete_product(product_id: str, user: User = Depends(florist_user)) -> ApiResponse[None]:
    CatalogueService().delete_product(product_id)
    return ApiResponse[None](message="Product deleted")


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("", response_model=ApiResponse[CartView])
async def get_cart(user: User = Depends(current_user)) -> ApiResponse[CartView]:
    return ApiResponse[CartView](result=CartService().get_or_create_cart(user))


@cart_router.post("/items", response_model=ApiResponse[CartView])
async def add_cart_item(body: AddCartItemRequest, user: User = Depends(current_user)) -> ApiResponse[CartView]:
    cart = CartService().add_item(user, body.product_id, body.quantity)
    return ApiResponse[CartView](message="Item added to cart", result=cart)


@cart_router.put("/items/{item_id}", response_model=ApiResponse[CartView])
async def update_cart_item(
    item_id: str,
    body: UpdateCartItemRequest,
    user: User = Depends(current_user),
) -> ApiResponse[CartView]:
    cart = CartService().update_item_quantity(user, item_id, body.quantity)
    return ApiResponse[CartView](message="Cart item updated", result=cart)


@cart_router.delete("/items/{item_id}", response_model=ApiResponse[CartView])
async def remove_cart_item(item_id: str, user: User = Depends(current_user)) -> ApiResponse[CartView]:
    cart = CartService().remove_item(user, item_id)
    return ApiResponse[CartView](message="Item removed from cart", result=cart)


@cart_router.delete("", response_model=ApiResponse[CartView])
async def clear_cart(user: User = Depends(current_user)) -> ApiResponse[CartView]:
    return ApiResponse[CartView](message="Cart cleared", result=CartService().clear_cart(user))


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=ApiResponse[OrderView])
async def create_order(body: CreateOrderRequest, user: User = Depends(current_user)) -> ApiResponse[OrderView]:
    order = OrderService().create_order(
        user,
        payment_method=body.payment_method,
        shipping_address=body.shipping_address,
        notes=body.notes,
    )
    return ApiResponse[OrderView](message="Order created", result=order)


@order_router.get("", response_model=ApiResponse[list[OrderView]])
async def list_orders(user: User = Depends(current_user)) -> ApiResponse[list[OrderView]]:
    return ApiResponse[list[OrderView]](result=OrderService().list_user_orders(user))


@order_router.get("/{order_id}", response_model=ApiResponse[OrderView])
async def get_order(order_id: str, user: User = Depends(current_user)) -> ApiResponse[OrderView]:
    return ApiResponse[OrderView](result=OrderService().get_order(user, order_id))


@order_router.post("/{order_id}/confirm-cod", response_model=ApiResponse[OrderView])
async def confirm_cod_order(order_id: str, user: User = Depends(current_user)) -> ApiResponse[OrderView]:
    order = OrderService().confirm_cod_order(user, order_id)
    return ApiResponse[OrderView](message="Order confirmed", result=order)


@order_router.put("/{order_id}/status", response_model=ApiResponse[OrderView])
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    user: User = Depends(florist_user),
) -> ApiResponse[OrderView]:
    order = OrderService().update_order_status(user, order_id, body.status)
    return ApiResponse[OrderView](message="Order status updated", result=order)
