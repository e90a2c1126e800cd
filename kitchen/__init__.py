"""
Kitchen Companion - fridge, recipes and shopping list in one place.
"""

__version__ = "0.1.0"
