from .base import Base
from .tenant import Tenant, TenantStatus
from .user import User
from .catalog.category import Category
from .catalog.product import Product
from .customer.customer import Customer
from .customer.order import Order, OrderItem, OrderStatus, OrderType, PaymentMethod
