"""
Cart API v1 views.
"""
from uuid import UUID

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from ....application.cart_manager import CartManager
from ....application.dtos.cart_dto import CartDTO
from ....domain.entities import Cart
from ....domain.exceptions import CartNotFoundError
from ....domain.services import CartRecalculator
from ....infrastructure.catalog import get_catalog
from ....infrastructure.geocoding import HttpParishLocator
from ....infrastructure.repositories import DjangoCartRepository
from ....infrastructure.settings_provider import CartSettingsProvider
from ...serializers.cart_serializer import (
    CardSerializer,
    CartCreateSerializer,
    CartItemCreateSerializer,
    CartItemUpdateSerializer,
    CartSerializer,
    CheckoutSerializer,
    CouponApplySerializer,
    ShippingSerializer,
)


def build_manager(cart_id: UUID = None) -> CartManager:
    """Cart manager wired to the ORM, the catalog and the current settings."""
    catalog = get_catalog()
    settings = CartSettingsProvider().get_settings()
    repository = DjangoCartRepository(catalog)
    recalculator = CartRecalculator(
        settings,
        postal_codes=catalog.postal_codes,
        parish_locator=HttpParishLocator(),
    )
    cart = None
    if cart_id is not None:
        cart = repository.find_by_id(cart_id)
        if cart is None:
            raise CartNotFoundError(str(cart_id))
    return CartManager(repository, catalog, settings, recalculator, cart=cart)


def cart_response(cart: Cart, warnings=(), status_code=status.HTTP_200_OK) -> Response:
    serializer = CartSerializer(CartDTO.from_entity(cart, warnings))
    return Response(serializer.data, status=status_code)


@extend_schema(tags=['Cart'])
class CartCreateView(APIView):
    """Cart create endpoint."""
    permission_classes = [AllowAny]

    @extend_schema(
        request=CartCreateSerializer,
        responses={201: CartSerializer},
        summary="Create a cart",
    )
    def post(self, request):
        serializer = CartCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        manager = build_manager()
        cart = manager.create(user_id=serializer.validated_data.get('user_id'))
        return cart_response(cart, status_code=status.HTTP_201_CREATED)


@extend_schema(tags=['Cart'])
class CartDetailView(APIView):
    """Cart detail endpoint."""
    permission_classes = [AllowAny]

    @extend_schema(
        responses={200: CartSerializer},
        summary="Get cart",
    )
    def get(self, request, cart_id: UUID):
        manager = build_manager(cart_id)
        return cart_response(manager.cart)

    @extend_schema(
        responses={200: CartSerializer},
        summary="Clear cart",
    )
    def delete(self, request, cart_id: UUID):
        manager = build_manager(cart_id)
        manager.clear()
        return cart_response(manager.cart)


@extend_schema(tags=['Cart'])
class CartItemListView(APIView):
    """Cart items endpoint."""
    permission_classes = [AllowAny]

    @extend_schema(
        request=CartItemCreateSerializer,
        responses={200: CartSerializer},
        summary="Add item to cart",
    )
    def post(self, request, cart_id: UUID):
        serializer = CartItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        manager = build_manager(cart_id)
        result = manager.add_item(data['product_id'], data['quantity'], data.get('attributes'))
        return cart_response(manager.cart, result.warnings)


@extend_schema(tags=['Cart'])
class CartItemDetailView(APIView):
    """Cart item endpoint."""
    permission_classes = [AllowAny]

    @extend_schema(
        request=CartItemUpdateSerializer,
        responses={200: CartSerializer},
        summary="Update cart item quantity",
    )
    def patch(self, request, cart_id: UUID, item_id: UUID):
        serializer = CartItemUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        manager = build_manager(cart_id)
        result = manager.set_item_quantity(item_id, serializer.validated_data['quantity'])
        return cart_response(manager.cart, result.warnings)

    @extend_schema(
        responses={200: CartSerializer},
        summary="Remove item from cart",
    )
    def delete(self, request, cart_id: UUID, item_id: UUID):
        manager = build_manager(cart_id)
        manager.remove_item(item_id)
        return cart_response(manager.cart)


@extend_schema(tags=['Cart'])
class CartCouponView(APIView):
    """Cart coupon endpoint."""
    permission_classes = [AllowAny]

    @extend_schema(
        request=CouponApplySerializer,
        responses={200: CartSerializer},
        summary="Attach a coupon to the cart",
    )
    def post(self, request, cart_id: UUID):
        serializer = CouponApplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        manager = build_manager(cart_id)
        manager.apply_coupon(serializer.validated_data['code'])
        return cart_response(manager.cart)

    @extend_schema(
        responses={200: CartSerializer},
        summary="Remove the cart's coupon",
    )
    def delete(self, request, cart_id: UUID):
        manager = build_manager(cart_id)
        manager.remove_coupon()
        return cart_response(manager.cart)


@extend_schema(tags=['Cart'])
class CartShippingView(APIView):
    """Cart shipping endpoint."""
    permission_classes = [AllowAny]

    @extend_schema(
        request=ShippingSerializer,
        responses={200: CartSerializer},
        summary="Set shipment method and destination",
    )
    def put(self, request, cart_id: UUID):
        serializer = ShippingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        manager = build_manager(cart_id)
        manager.set_shipping(
            data['shipment_method_id'],
            country=data.get('country') or None,
            postal_code=data.get('postal_code') or None,
        )
        return cart_response(manager.cart)


@extend_schema(tags=['Cart'])
class CartCardView(APIView):
    """Cart loyalty card endpoint."""
    permission_classes = [AllowAny]

    @extend_schema(
        request=CardSerializer,
        responses={200: CartSerializer},
        summary="Attach a loyalty card",
    )
    def put(self, request, cart_id: UUID):
        serializer = CardSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        manager = build_manager(cart_id)
        manager.set_card(serializer.validated_data['number'])
        return cart_response(manager.cart)

    @extend_schema(
        responses={200: CartSerializer},
        summary="Detach the loyalty card",
    )
    def delete(self, request, cart_id: UUID):
        manager = build_manager(cart_id)
        manager.set_card(None)
        return cart_response(manager.cart)


@extend_schema(tags=['Cart'])
class CartCheckoutView(APIView):
    """Cart lifecycle endpoint."""
    permission_classes = [AllowAny]

    @extend_schema(
        request=CheckoutSerializer,
        responses={200: CartSerializer},
        summary="Move the cart through checkout",
    )
    def post(self, request, cart_id: UUID):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        manager = build_manager(cart_id)
        action = serializer.validated_data['action']
        if action == 'checkout':
            cart = manager.begin_checkout()
        elif action == 'complete':
            cart = manager.complete()
        else:
            cart = manager.abandon()
        return cart_response(cart)
