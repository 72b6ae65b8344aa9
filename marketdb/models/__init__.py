# Importa todos los modelos para que los relationship() por nombre se resuelvan.
from .user import Role, User, UserRole  # noqa: F401
from .permission import Permission, RolePermission  # noqa: F401
from .producer import Contact, EntrepreneurStatistics, ProducerProfile, SellerRating  # noqa: F401
from .product import Category, Lot, Product, ProductImage, ProductLot, ProductReview  # noqa: F401
from .cart import Cart, CartItem  # noqa: F401
from .order import Order, OrderItem  # noqa: F401
from .metrics import ProductMetric, SellerMetric  # noqa: F401
from .report import ExportReport  # noqa: F401
from .badge import Badge, UserBadge  # noqa: F401
