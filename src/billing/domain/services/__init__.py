from .entitlement_rules import EntitlementRules

__all__ = ["EntitlementRules"]
