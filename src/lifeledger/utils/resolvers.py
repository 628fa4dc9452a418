"""Utilities for resolving domain, activity and shop item names to IDs."""

from typing import Sequence, Union

from lifeledger.domain.entities import Activity, Domain, ShopItem


def _resolve(records: Sequence[Union[Activity, Domain, ShopItem]], value: Union[str, int], kind: str) -> int:
    # Integers and numeric strings are treated as IDs
    try:
        record_id = int(value)
    except (ValueError, TypeError):
        record_id = None

    if record_id is not None:
        for record in records:
            if record.id == record_id:
                return record_id
        raise ValueError(f"{kind} ID {record_id} not found")

    wanted = str(value).strip().casefold()
    for record in records:
        if record.name.casefold() == wanted:
            return record.id

    raise ValueError(f"{kind} '{value}' not found")


def resolve_domain(domains: Sequence[Domain], domain: Union[str, int]) -> int:
    """Resolve domain name or ID to domain ID.

    Names are matched case-insensitively.

    Args:
        domains: Candidate domains
        domain: Domain name (str) or ID (int or string representation of int)

    Returns:
        Domain ID

    Raises:
        ValueError: If the domain is not found
    """
    return _resolve(domains, domain, "Domain")


def resolve_shop_item(items: Sequence[ShopItem], item: Union[str, int]) -> int:
    """Resolve shop item name or ID to item ID.

    Raises:
        ValueError: If the item is not found
    """
    return _resolve(items, item, "Shop item")


def resolve_activity(activities: Sequence[Activity], activity: Union[str, int]) -> int:
    """Resolve activity name or ID to activity ID.

    Raises:
        ValueError: If the activity is not found
    """
    return _resolve(activities, activity, "Activity")
