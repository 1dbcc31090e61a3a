# seed_products.py
from decimal import Decimal

from sqlmodel import Session

from shopwave.database import create_db_and_tables, engine
from shopwave.models.product import Product
from shopwave.repositories.product_repo import ProductRepository

SAMPLE_PRODUCTS = [
    ("Wireless Noise-Cancelling Headphones", "Over-ear headphones with 30h battery life.", "249.99"),
    ("Mechanical Keyboard", "Hot-swappable switches, aluminium frame, RGB backlight.", "129.00"),
    ("4K Monitor 27\"", "IPS panel, 60Hz, USB-C with 65W power delivery.", "379.50"),
    ("Smartwatch Pro", "Heart-rate, GPS and two days of battery.", "199.00"),
    ("Portable SSD 1TB", "USB 3.2 Gen 2, up to 1050MB/s.", "109.99"),
    ("Bluetooth Speaker", "Waterproof speaker with 360 degree sound.", "79.90"),
    ("Ergonomic Mouse", "Vertical design, silent clicks.", "49.00"),
    ("USB-C Hub", "7-in-1 hub with HDMI, SD and Ethernet.", "39.99"),
    ("Webcam 1080p", "Autofocus webcam with dual microphones.", "59.00"),
    ("Laptop Stand", "Adjustable aluminium stand.", "34.50"),
    ("Wireless Charger", "15W Qi charging pad.", "24.99"),
    ("Gaming Headset", "7.1 surround sound and detachable mic.", "89.00"),
    ("E-Reader", "6.8\" glare-free display, warm light.", "139.99"),
]


def main():
    create_db_and_tables()
    repo = ProductRepository()

    with Session(engine) as session:
        if repo.count(session) > 0:
            print("Catalog already has products, nothing to do.")
            return

        for name, description, price in SAMPLE_PRODUCTS:
            seed = name.lower().replace(" ", "-").replace('"', "")
            repo.create(
                session,
                Product(
                    name=name,
                    description=description,
                    price=Decimal(price),
                    image_url=f"https://picsum.photos/seed/{seed}/600/600",
                ),
            )

    print(f"Seeded {len(SAMPLE_PRODUCTS)} products.")


if __name__ == "__main__":
    main()
