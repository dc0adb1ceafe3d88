"""
Django ORM implementation of CartRepository.
"""
import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction

from ...domain.adjustments import Adjustment, AdjustmentLedger, AdjustmentOwner, AdjustmentType, OwnerKind
from ...domain.catalog import CatalogGateway
from ...domain.entities import Cart, CartItem, CheckoutTotals
from ...domain.repositories import CartRepository
from ...domain.value_objects import CartState, CouponValidationResult, ShippingDestination
from ..models.cart_model import AdjustmentModel, CartCouponModel, CartItemModel, CartModel

logger = logging.getLogger(__name__)


class DjangoCartRepository(CartRepository):
    """
    Django ORM based cart repository implementation.

    Products, coupons, shipment methods and cards are stored by reference
    and looked up in the catalog when a cart is loaded. The adjustment rows
    of a cart are rewritten on every save.
    """

    def __init__(self, catalog: CatalogGateway):
        self.catalog = catalog

    def save(self, cart: Cart) -> Cart:
        """Save a cart aggregate and return it."""
        with transaction.atomic():
            model, _ = CartModel.objects.update_or_create(
                id=cart.id,
                defaults={
                    'user_id': cart.user_id,
                    'state': cart.state.value,
                    'shipment_method_id': cart.shipment_method.id if cart.shipment_method else None,
                    'country': cart.destination.country or '',
                    'postal_code': cart.destination.postal_code or '',
                    'card_number': cart.card.number if cart.card else '',
                    'frozen_totals': self._totals_to_json(cart.frozen_totals),
                },
            )

            item_ids = [item.id for item in cart.items]
            CartItemModel.objects.filter(cart=model).exclude(id__in=item_ids).delete()
            for position, item in enumerate(cart.items):
                CartItemModel.objects.update_or_create(
                    id=item.id,
                    defaults={
                        'cart': model,
                        'product_id': item.product_id,
                        'quantity': item.quantity,
                        'price_vat': item.price_vat,
                        'attributes': item.attributes,
                        'position': position,
                    },
                )

            AdjustmentModel.objects.filter(cart=model).delete()
            AdjustmentModel.objects.bulk_create([
                AdjustmentModel(
                    cart=model,
                    owner_kind=adjustment.owner.kind.value,
                    owner_id=adjustment.owner.id,
                    type=adjustment.type.value,
                    title=adjustment.title,
                    amount=adjustment.amount,
                    data=dict(adjustment.data),
                    position=position,
                )
                for position, adjustment in enumerate(cart.ledger)
            ])

            self._save_coupon(model, cart)
        return cart

    def find_by_id(self, cart_id: UUID) -> Optional[Cart]:
        """Find a cart by ID."""
        try:
            model = CartModel.objects.get(id=cart_id)
            return self._to_entity(model)
        except CartModel.DoesNotExist:
            return None

    def find_by_user_id(self, user_id: UUID) -> Optional[Cart]:
        """Find the most recent active cart of a user."""
        model = (
            CartModel.objects
            .filter(user_id=user_id, state__in=[s.value for s in CartState.active_states()])
            .order_by('-updated_at')
            .first()
        )
        return self._to_entity(model) if model else None

    def delete(self, cart_id: UUID) -> bool:
        """Delete a cart with its items and adjustments."""
        deleted, _ = CartModel.objects.filter(id=cart_id).delete()
        return deleted > 0

    def _save_coupon(self, model: CartModel, cart: Cart) -> None:
        if cart.coupon is None:
            CartCouponModel.objects.filter(cart=model).delete()
            return
        validation = cart.coupon_validation
        CartCouponModel.objects.update_or_create(
            cart=model,
            defaults={
                'coupon_id': cart.coupon.id,
                'code': cart.coupon.code,
                'validation_passed': validation.passed if validation else None,
                'validation_rule': (validation.rule or '') if validation else '',
                'validation_message': validation.message if validation else '',
            },
        )

    def _to_entity(self, model: CartModel) -> Cart:
        """Convert ORM model to domain entity."""
        items = []
        for item_model in model.items.all():
            product = self.catalog.get_product(item_model.product_id)
            if product is None:
                logger.warning(
                    "Dropping line %s of cart %s: product %s no longer in catalog",
                    item_model.id, model.id, item_model.product_id,
                )
                continue
            items.append(CartItem(
                id=item_model.id,
                product=product,
                quantity=item_model.quantity,
                price_vat=item_model.price_vat,
                attributes=dict(item_model.attributes or {}),
                created_at=item_model.created_at,
                updated_at=item_model.updated_at,
            ))

        ledger = AdjustmentLedger(
            Adjustment(
                type=AdjustmentType(row.type),
                amount=row.amount,
                owner=AdjustmentOwner(kind=OwnerKind(row.owner_kind), id=row.owner_id),
                data=dict(row.data or {}),
                title=row.title,
            )
            for row in model.adjustments.all()
        )

        cart = Cart(
            id=model.id,
            user_id=model.user_id,
            items=items,
            state=CartState(model.state),
            ledger=ledger,
            shipment_method=(
                self.catalog.get_shipment_method(model.shipment_method_id)
                if model.shipment_method_id else None
            ),
            destination=ShippingDestination(
                country=model.country or None,
                postal_code=model.postal_code or None,
            ),
            card=self.catalog.get_card(model.card_number) if model.card_number else None,
            frozen_totals=self._totals_from_json(model.frozen_totals),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
        self._load_coupon(model, cart)
        return cart

    def _load_coupon(self, model: CartModel, cart: Cart) -> None:
        try:
            coupon_model = model.coupon
        except CartCouponModel.DoesNotExist:
            return
        coupon = self.catalog.get_coupon_by_code(coupon_model.code)
        if coupon is None:
            logger.warning("Coupon %s attached to cart %s no longer exists", coupon_model.code, model.id)
            return
        cart.coupon = coupon
        if coupon_model.validation_passed is None:
            return
        if coupon_model.validation_passed:
            cart.coupon_validation = CouponValidationResult.success(coupon.code)
            cart.active_coupon = coupon
        else:
            cart.coupon_validation = CouponValidationResult.failure(
                coupon.code,
                coupon_model.validation_rule,
                coupon_model.validation_message,
            )

    @staticmethod
    def _totals_to_json(totals: Optional[CheckoutTotals]):
        if totals is None:
            return None
        return {name: str(value) for name, value in vars(totals).items()}

    @staticmethod
    def _totals_from_json(data) -> Optional[CheckoutTotals]:
        if not data:
            return None
        return CheckoutTotals(**{name: Decimal(value) for name, value in data.items()})
