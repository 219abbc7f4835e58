"""Product management: commands and handlers."""

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from academy.cascade import cascade_item_deletion
from academy.catalogue.product.product import Product, ProductType
from academy.domain import academy
from academy.shared.reviewable import ReviewableKind, ReviewableRef

logger = structlog.get_logger(__name__)


@academy.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    subject_name: String(required=True, max_length=255)
    subject_code: String(required=True, max_length=50)
    product_type: String(required=True, choices=ProductType)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    sale_enabled: Boolean(default=False)
    sale_price: Float(min_value=0.0)
    image_url: String(max_length=500)
    pdf_link: String(max_length=500)


@academy.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.0)
    sale_enabled: Boolean()
    sale_price: Float(min_value=0.0)
    image_url: String(max_length=500)
    pdf_link: String(max_length=500)


@academy.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@academy.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            subject_name=command.subject_name,
            subject_code=command.subject_code,
            product_type=command.product_type,
            description=command.description,
            price=command.price,
            sale_enabled=bool(command.sale_enabled),
            sale_price=command.sale_price,
            image_url=command.image_url,
            pdf_link=command.pdf_link,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        changes = {
            name: getattr(command, name)
            for name in ("name", "description", "price", "sale_enabled", "sale_price", "image_url", "pdf_link")
            if getattr(command, name) is not None
        }
        product.update_details(**changes)
        repo.add(product)
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        cascade_item_deletion(ReviewableRef(ReviewableKind.PRODUCT, str(product.id)))
        repo._dao.delete(product)
        logger.info("Product deleted", product_id=str(product.id))
