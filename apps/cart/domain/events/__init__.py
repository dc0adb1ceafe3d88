# Domain events
from .cart_recalculated import CartRecalculated
from .cart_state_changed import CartStateChanged
from .coupon_rejected import CouponRejected

__all__ = ['CartRecalculated', 'CartStateChanged', 'CouponRejected']
