# Models package
from app.models.settings import SettingRecord, SETTINGS_KEYS
from app.models.customer import Customer
from app.models.category import Category
from app.models.discount import Discount
from app.models.product import Product, ProductStatus
from app.models.order import Order, OrderProduct
