"""Catalogue administration: commands and handler.

These are the write paths of the catalogue store. Callers are expected to go
through ``CatalogueService`` so that the cache is evicted once the unit of
work has committed.
"""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from orderflow.catalogue.product.product import Product
from orderflow.domain import orderflow


@orderflow.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock_quantity = Integer(default=0, min_value=0)
    category_id = Identifier()
    is_active = Boolean(default=True)


@orderflow.command(part_of="Product")
class UpdateProductDetails:
    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price = Float(min_value=0.0)
    category_id = Identifier()


@orderflow.command(part_of="Product")
class SetProductActive:
    product_id = Identifier(required=True)
    is_active = Boolean(required=True)


@orderflow.command(part_of="Product")
class RestockProduct:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@orderflow.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


@orderflow.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            stock_quantity=command.stock_quantity or 0,
            category_id=command.category_id,
            is_active=command.is_active if command.is_active is not None else True,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category_id=command.category_id,
        )
        repo.add(product)

    @handle(SetProductActive)
    def set_product_active(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        if command.is_active:
            product.activate()
        else:
            product.deactivate()
        repo.add(product)

    @handle(RestockProduct)
    def restock_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.restock(command.quantity)
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo.remove(product)
