"""
Shared Layer - Cross-Cutting Concerns
Domain contracts, configuration, logging and small utilities
"""
