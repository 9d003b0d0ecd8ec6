"""Cart commands and handler.

Each command loads the caller's cart, applies one change and persists it in
a single unit of work. Product state (availability, price, stock) is read
through the catalogue cache.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from orderflow.cart.cart import Cart
from orderflow.catalogue.catalog_cache import CatalogCache
from orderflow.domain import orderflow
from orderflow.errors import CartItemNotFound, ProductUnavailable


@orderflow.command(part_of="Cart")
class CreateCart:
    user_id = Identifier(required=True)


@orderflow.command(part_of="Cart")
class AddItemToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@orderflow.command(part_of="Cart")
class UpdateCartItemQuantity:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)


@orderflow.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@orderflow.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


def _load_or_create(repo, user_id) -> Cart:
    return repo.get_for_user(user_id) or Cart.create(user_id=user_id)


@orderflow.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_for_user(command.user_id)
        if cart is None:
            cart = Cart.create(user_id=command.user_id)
            repo.add(cart)
        return str(cart.id)

    @handle(AddItemToCart)
    def add_item(self, command):
        product = CatalogCache().get_product(command.product_id)
        if not product.is_active:
            raise ProductUnavailable(f"Product '{product.name}' is not available", product_id=product.id)

        repo = current_domain.repository_for(Cart)
        cart = _load_or_create(repo, command.user_id)
        cart.add_item(
            product_id=product.id,
            product_name=product.name,
            quantity=command.quantity,
            unit_price=product.price,
            available_stock=product.stock_quantity,
        )
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartItemQuantity)
    def update_item_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_for_user(command.user_id)
        if cart is None:
            raise CartItemNotFound(item_id=str(command.item_id))

        item = cart.find_item(command.item_id)
        product = CatalogCache().get_product(item.product_id)
        cart.update_item_quantity(
            item_id=command.item_id,
            quantity=command.quantity,
            available_stock=product.stock_quantity,
        )
        repo.add(cart)
        return str(cart.id)

    @handle(RemoveCartItem)
    def remove_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_for_user(command.user_id)
        if cart is None:
            raise CartItemNotFound(item_id=str(command.item_id))

        cart.remove_item(command.item_id)
        repo.add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _load_or_create(repo, command.user_id)
        cart.clear()
        repo.add(cart)
        return str(cart.id)
