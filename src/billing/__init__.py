"""
Billing Context
Subscription state model parsed from billing backend payloads
"""
