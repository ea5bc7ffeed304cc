"""Store-owner product management — commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.errors import NotFound


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255)
    description = Text()
    sku = String(max_length=50)
    price_cents = Integer(required=True, min_value=0)
    inventory = Integer(required=True, min_value=0)
    is_active = Boolean(default=True)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    sku = String(max_length=50)
    price_cents = Integer(required=True, min_value=0)
    inventory = Integer(required=True, min_value=0)
    is_active = Boolean(default=True)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


def _load(repo, product_id):
    try:
        return repo.get(product_id)
    except ObjectNotFoundError:
        raise NotFound("Product not found") from None


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            sku=command.sku,
            price_cents=command.price_cents,
            inventory=command.inventory,
            is_active=command.is_active,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_created", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _load(repo, command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            sku=command.sku,
            price_cents=command.price_cents,
            inventory=command.inventory,
            is_active=command.is_active,
        )
        repo.add(product)
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        # Order items keep their own name/price snapshot, so history survives this
        repo = current_domain.repository_for(Product)
        product = _load(repo, command.product_id)
        repo.remove(product)
        logger.info("product_deleted", product_id=str(command.product_id))
