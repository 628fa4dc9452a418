"""Domain layer for lifeledger application."""

_SERVICES = {
    "LedgerService": "lifeledger.domain.ledger",
    "SessionAccountant": "lifeledger.domain.session",
    "SessionTimer": "lifeledger.domain.timer",
    "ShopRedemptionManager": "lifeledger.domain.shop",
    "BonusService": "lifeledger.domain.bonus",
    "ConfigImporter": "lifeledger.domain.config_import",
    "BackupService": "lifeledger.domain.backup",
    "CatalogService": "lifeledger.domain.catalog",
    "ProgressService": "lifeledger.domain.progress",
    "ConsistencyService": "lifeledger.domain.consistency",
}

__all__ = list(_SERVICES)


# Services are loaded lazily so that importing entities never pulls in the
# database layer
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
