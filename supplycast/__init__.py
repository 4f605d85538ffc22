"""
SupplyCast - demand forecasting and replenishment advice for inventory
"""

__version__ = "1.0.0"
