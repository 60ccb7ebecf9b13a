"""Transport layer for the balance board."""

from .connection import L2CAPPort, Port

__all__ = ["L2CAPPort", "Port"]
