"""
Discount resolution.

Groups cart items by the campaign that applies to their product and decides
which campaign entries are applyable for the current cart contents.
"""
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List
from uuid import UUID

from ..catalog import DiscountCampaign, DiscountTag
from ..entities.cart_item import CartItem
from ..value_objects.money import sum_money

logger = logging.getLogger(__name__)


@dataclass
class DiscountEntry:
    """A campaign and the cart items it covers."""
    campaign: DiscountCampaign
    items: List[CartItem] = field(default_factory=list)

    @property
    def tag(self):
        return self.campaign.discount_tag

    @property
    def quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def value(self) -> Decimal:
        """Undiscounted value of the covered lines."""
        return sum_money(item.price_vat * item.quantity for item in self.items)

    def product_ids(self) -> set:
        return {item.product_id for item in self.items}

    def is_applyable(self) -> bool:
        """Eligibility of the entry for its campaign's tag."""
        tag = self.tag
        campaign = self.campaign
        if tag is DiscountTag.CHEAPEST_FREE:
            if self.quantity < campaign.purchase_number:
                return False
            if campaign.minimum_value is not None and self.value < campaign.minimum_value:
                return False
            return True
        if tag is DiscountTag.FREE_GIFT_PRODUCT:
            return self.quantity >= campaign.purchase_number
        if tag is DiscountTag.SCALABLE_PERCENTAGE_TIERED:
            return self.quantity >= campaign.minimum_purchase
        return True

    def sorted_for_application(self) -> 'DiscountEntry':
        """Copy of the entry with items in the order its tag consumes them."""
        if self.tag in (DiscountTag.CHEAPEST_FREE, DiscountTag.SCALABLE_PERCENTAGE_TIERED):
            # sorted() is stable, so equal prices keep insertion order
            return DiscountEntry(
                campaign=self.campaign,
                items=sorted(self.items, key=lambda item: item.price_vat),
            )
        return DiscountEntry(campaign=self.campaign, items=list(self.items))


@dataclass
class DiscountResolution:
    """Outcome of one resolution pass, keyed by campaign id in first-seen order."""
    discounts: Dict[UUID, DiscountEntry] = field(default_factory=OrderedDict)
    applyable: Dict[UUID, DiscountEntry] = field(default_factory=OrderedDict)
    conflicting: Dict[UUID, DiscountCampaign] = field(default_factory=OrderedDict)

    def applyable_entries(self) -> List[DiscountEntry]:
        return list(self.applyable.values())


class DiscountResolver:
    """Builds the discount map for a set of cart items."""

    def resolve(self, items: Iterable[CartItem]) -> DiscountResolution:
        items = list(items)
        resolution = DiscountResolution()
        resolution.discounts = self.group(items)

        for campaign_id, entry in resolution.discounts.items():
            if entry.is_applyable():
                resolution.applyable[campaign_id] = entry.sorted_for_application()
            else:
                logger.debug("Campaign %s not applyable for current cart", entry.campaign.name)

        resolution.conflicting = self.find_conflicts(items, resolution.applyable)
        return resolution

    def group(self, items: Iterable[CartItem]) -> Dict[UUID, DiscountEntry]:
        """Only the first valid campaign of a product counts."""
        discounts: Dict[UUID, DiscountEntry] = OrderedDict()
        for item in items:
            campaigns = item.product.valid_discount_tree
            if not campaigns:
                continue
            campaign = campaigns[0]
            entry = discounts.get(campaign.id)
            if entry is None:
                entry = discounts[campaign.id] = DiscountEntry(campaign=campaign)
            entry.items.append(item)
        return discounts

    def campaigns_by_product(self, items: Iterable[CartItem]) -> Dict[UUID, List[UUID]]:
        """Every valid campaign of each product in the cart, not only the first."""
        lookup: Dict[UUID, List[UUID]] = OrderedDict()
        for item in items:
            campaign_ids = lookup.setdefault(item.product_id, [])
            for campaign in item.product.valid_discount_tree:
                if campaign.id not in campaign_ids:
                    campaign_ids.append(campaign.id)
        return lookup

    def find_conflicts(
        self,
        items: Iterable[CartItem],
        applyable: Dict[UUID, DiscountEntry],
    ) -> Dict[UUID, DiscountCampaign]:
        """
        Applyable campaigns that list a product also listed by another
        applyable campaign. Diagnostic only; application stays first-match.
        """
        overlapping = set()
        for campaign_ids in self.campaigns_by_product(items).values():
            competing = [campaign_id for campaign_id in campaign_ids if campaign_id in applyable]
            if len(competing) > 1:
                overlapping.update(competing)
        return OrderedDict(
            (campaign_id, entry.campaign)
            for campaign_id, entry in applyable.items()
            if campaign_id in overlapping
        )
