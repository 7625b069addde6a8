from .customer import Customer
from .order import Order, OrderItem, OrderStatus, OrderType, PaymentMethod
