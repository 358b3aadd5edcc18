"""
Seed the product catalog with the demo data set.

Usage:
    python -m demoshop.seed
"""
import asyncio
import base64
import logging
from typing import List

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from demoshop.core.config import settings
from demoshop.models.product import ProductCategory
from demoshop.utils.helpers import get_current_timestamp

logger = logging.getLogger(__name__)

CATEGORY_COLORS = {
    ProductCategory.ELECTRONICS: "#0066ff",
    ProductCategory.CLOTHING: "#ff4444",
    ProductCategory.BOOKS: "#44aa44",
    ProductCategory.COFFEE: "#8B4513",
}


def create_svg(text: str, bg_color: str) -> str:
    """Render a labelled placeholder image as an SVG data URI."""
    svg = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="300" height="200">'
        f'<rect width="300" height="200" fill="{bg_color}"/>'
        f'<text x="50%" y="50%" font-family="Arial" font-size="20" fill="white" '
        f'text-anchor="middle" dominant-baseline="middle">{text}</text></svg>'
    )
    return f"data:image/svg+xml;base64,{base64.b64encode(svg.encode('utf-8')).decode('ascii')}"


# (name, price, description, image label) per category
CATALOG = {
    ProductCategory.ELECTRONICS: [
        ("Wireless Headphones", 79.99, "Premium wireless headphones with noise cancellation", "🎧 Headphones"),
        ("Smart Watch", 249.99, "Feature-rich smartwatch with fitness tracking", "⌚ Smart Watch"),
        ("Bluetooth Speaker", 49.99, "Portable Bluetooth speaker with amazing sound", "🔊 Speaker"),
        ("USB-C Hub", 39.99, "Multi-port USB-C hub for all your devices", "🔌 USB Hub"),
        ("Wireless Mouse", 29.99, "Ergonomic wireless mouse with precision tracking", "🖱️ Mouse"),
        ("Phone Case", 19.99, "Protective phone case with sleek design", "📱 Phone Case"),
    ],
    ProductCategory.CLOTHING: [
        ("Cotton T-Shirt", 24.99, "Comfortable 100% cotton t-shirt", "👕 T-Shirt"),
        ("Denim Jeans", 59.99, "Classic fit denim jeans", "👖 Jeans"),
        ("Hoodie", 44.99, "Warm and cozy pullover hoodie", "🧥 Hoodie"),
        ("Running Shoes", 89.99, "Lightweight running shoes with great support", "👟 Shoes"),
        ("Baseball Cap", 19.99, "Adjustable baseball cap with embroidered logo", "🧢 Cap"),
        ("Winter Jacket", 129.99, "Insulated winter jacket for cold weather", "🧥 Jacket"),
    ],
    ProductCategory.BOOKS: [
        ("JavaScript Guide", 34.99, "Complete guide to modern JavaScript", "📘 JS Book"),
        ("React Mastery", 39.99, "Master React with this comprehensive book", "📗 React Book"),
        ("Node.js Cookbook", 29.99, "Practical recipes for Node.js development", "📕 Node Book"),
        ("Clean Code", 44.99, "A handbook of agile software craftsmanship", "📙 Clean Code"),
        ("Design Patterns", 49.99, "Elements of reusable object-oriented software", "📚 Patterns"),
        ("Database Systems", 54.99, "Introduction to database management systems", "📖 Database"),
    ],
    ProductCategory.COFFEE: [
        ("Espresso Blend", 14.99, "Rich and bold espresso coffee beans", "☕ Espresso"),
        ("Colombian Coffee", 12.99, "Smooth Colombian arabica coffee", "☕ Colombian"),
        ("French Roast", 13.99, "Dark roasted French coffee beans", "☕ French"),
        ("Decaf Blend", 11.99, "Decaffeinated coffee without compromise", "☕ Decaf"),
        ("Vanilla Latte", 4.99, "Creamy vanilla flavored latte", "☕ Latte"),
        ("Cappuccino", 4.49, "Classic cappuccino with foam", "☕ Cappuccino"),
    ],
}


def build_seed_products() -> List[dict]:
    """Product documents for the demo catalog."""
    now = get_current_timestamp()
    return [
        {
            "name": name,
            "category": category.value,
            "price": price,
            "description": description,
            "image": create_svg(label, CATEGORY_COLORS[category]),
            "inStock": True,
            "createdAt": now,
            "updatedAt": now
        }
        for category, entries in CATALOG.items()
        for name, price, description, label in entries
    ]


async def seed_products(db: AsyncIOMotorDatabase) -> int:
    """Replace the products collection with the demo catalog."""
    await db.products.delete_many({})
    logger.info("Cleared existing products")

    products = build_seed_products()
    result = await db.products.insert_many(products)
    logger.info(f"Seeded database with {len(result.inserted_ids)} products across {len(CATALOG)} categories")
    return len(result.inserted_ids)


async def main():
    client = AsyncIOMotorClient(settings.MONGODB_URI)
    try:
        await seed_products(client[settings.MONGODB_DB_NAME])
    finally:
        client.close()
        logger.info("Database connection closed")


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    asyncio.run(main())
