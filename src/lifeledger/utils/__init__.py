"""Utility functions for lifeledger."""

from lifeledger.utils.date_parser import parse_date, parse_datetime
from lifeledger.utils.duration_parser import parse_duration
from lifeledger.utils.resolvers import resolve_activity, resolve_domain, resolve_shop_item

__all__ = ["parse_date", "parse_datetime", "parse_duration", "resolve_activity", "resolve_domain", "resolve_shop_item"]
