import os
import sys
from datetime import date, timedelta

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

# Database models and setup
from database import SessionLocal, init_db
from models.product import Product
from models.parties import Distributor, Customer, Courier
from models.users import User, UserLevel
from models.sale import Sale, SaleItem
from utils.hashing import get_password_hash

# Configuration
ADMIN_USERNAME = os.getenv("SEED_ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin123")

PRODUCTS = [
    # name, category, brand, buy_price, sell_price, stock, unit
    ("Beras Premium 5kg", "Sembako", "Rojolele", 62000, 70000, 40, "sak"),
    ("Gula Pasir 1kg", "Sembako", "Gulaku", 14000, 16500, 120, "pcs"),
    ("Minyak Goreng 2L", "Sembako", "Bimoli", 31000, 36000, 60, "botol"),
    ("Teh Celup 25s", "Minuman", "Sariwangi", 6500, 8000, 80, "box"),
    ("Kopi Bubuk 200g", "Minuman", "Kapal Api", 12500, 15000, 50, "pcs"),
    ("Sabun Mandi", "Kebersihan", "Lifebuoy", 3200, 4500, 200, "pcs"),
    ("Mi Instan Goreng", "Makanan", "Indomie", 2600, 3500, 500, "pcs"),
    ("Air Mineral 600ml", "Minuman", "Aqua", 2500, 4000, 0, "botol"),
]
# End Configuration


def seed():
    """Fills an empty database with demo catalog, parties and one sale."""
    init_db()
    session = SessionLocal()
    try:
        if session.query(Product).first():
            print("Database already contains products, nothing to seed.")
            return

        admin = User(
            username=ADMIN_USERNAME,
            password_hash=get_password_hash(ADMIN_PASSWORD),
            full_name="Administrator",
            level=UserLevel.ADMIN,
        )
        cashier = User(
            username="kasir1",
            password_hash=get_password_hash("kasir123"),
            full_name="Kasir Satu",
            level=UserLevel.CASHIER,
        )
        session.add_all([admin, cashier])

        products = [
            Product(name=n, category=c, brand=b, buy_price=bp, sell_price=sp, stock_quantity=st, unit=u)
            for n, c, b, bp, sp, st, u in PRODUCTS
        ]
        session.add_all(products)

        session.add_all([
            Distributor(name="PT Sumber Makmur", address="Jl. Industri 12, Bekasi", phone="021-555-0101"),
            Distributor(name="CV Sinar Jaya", address="Jl. Pasar Baru 4, Bandung", phone="022-555-0199"),
        ])
        customers = [
            Customer(name="Budi Santoso", address="Jl. Melati 3, Jakarta", phone="0812-0000-0001"),
            Customer(name="Siti Aminah", address="Jl. Kenanga 8, Depok", phone="0812-0000-0002"),
        ]
        session.add_all(customers)
        courier = Courier(name="Andi Kurir", phone="0813-0000-0003")
        session.add(courier)
        session.flush()

        # One historical over-the-counter sale
        sale = Sale(
            customer_id=customers[0].id, user_id=cashier.id, courier_id=courier.id,
            sale_date=date.today() - timedelta(days=1),
            total=2 * products[1].sell_price + products[4].sell_price,
        )
        session.add(sale)
        session.flush()
        session.add_all([
            SaleItem(sale_id=sale.id, product_id=products[1].id, quantity=2, price=products[1].sell_price),
            SaleItem(sale_id=sale.id, product_id=products[4].id, quantity=1, price=products[4].sell_price),
        ])

        session.commit()
        print(f"Seeded {len(products)} products, {len(customers)} customers and user '{ADMIN_USERNAME}'.")
    except Exception as e:
        session.rollback()
        print(f"Seeding failed: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    seed()
