# Models package init
"""
Business Manager Backend — ORM Models
=====================================

Importing this package registers every table on `Base.metadata`
(used by Alembic autogenerate and `create_all_tables()`).
"""

from bizmanager.models.catalog import Product
from bizmanager.models.client import Client
from bizmanager.models.editing import EditingProject
from bizmanager.models.order import Order, OrderProduct, OrderTransporter, OrderWorker
from bizmanager.models.payment import Payment
from bizmanager.models.salary import Salary
from bizmanager.models.transportation import Transportation
from bizmanager.models.user import Shop, User

__all__ = [
    "Client",
    "EditingProject",
    "Order",
    "OrderProduct",
    "OrderTransporter",
    "OrderWorker",
    "Payment",
    "Product",
    "Salary",
    "Shop",
    "Transportation",
    "User",
]
