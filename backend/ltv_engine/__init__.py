"""
LTV & 回本估算引擎
"""

__version__ = "1.0.0"
