"""
Coupon validation result value object.
"""
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class CouponValidationResult:
    """Outcome of the coupon rule chain: pass, or the first rule that failed."""
    coupon_code: str
    passed: bool
    rule: Optional[str] = None
    message: str = ''

    @classmethod
    def success(cls, coupon_code: str) -> 'CouponValidationResult':
        return cls(coupon_code=coupon_code, passed=True)

    @classmethod
    def failure(cls, coupon_code: str, rule: str, message: str) -> 'CouponValidationResult':
        return cls(coupon_code=coupon_code, passed=False, rule=rule, message=message)

    def fails(self) -> bool:
        return not self.passed

    def errors(self) -> List[str]:
        return [] if self.passed else [self.message]
