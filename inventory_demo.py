#!/usr/bin/env python
"""Seed a running inventory server with sample products."""
import logging

import requests

from inventory_app.config import configure_logging
from inventory_sdk.client import InventoryClient
from inventory_sdk.config import load_client_config

logger = logging.getLogger("inventory_demo")

SAMPLE_PRODUCTS = [
    ("Laptop Pro 14", "LP-14", "TechSource", "Electronics", 12, 1499.0, "laptop"),
    ("Pocket Phone X", "PPX-01", "TechSource", "Electronics", 30, 799.0, "smartphone"),
    ("Smart TV 55", "TV-55", "Vision Co", "Electronics", 7, 649.99, "tv"),
    ("Oak Desk", "DESK_OAK", "Woodworks", "Furniture", 4, 320.0, "home"),
    ("Reading Chair", "CHAIR-R", "Woodworks", "Furniture", 9, 210.5, "home"),
    ("Linen Shirt", "SH-LIN-M", "Threadline", "Clothing", 40, 39.9, "shirt"),
    ("Rain Jacket", "JK-RAIN", "Threadline", "Clothing", 15, 89.0, "shirt"),
    ("Python Cookbook", "BK-PYCB", "Paper Trail", "Books", 22, 45.0, "book"),
    ("Garden Atlas", "BK-ATLAS", "Paper Trail", "Books", 5, 29.99, "book"),
    ("Wooden Train Set", "TOY-TRAIN", "Playtime", "Toys", 18, 54.0, "cart"),
    ("Puzzle 1000", "TOY-PZ1000", "Playtime", "Toys", 25, 19.5, "package"),
    ("Face Serum", "BT-SERUM", "Glow Lab", "Beauty", 60, 24.0, "palette"),
    ("Adjustable Dumbbells", "SP-DB-24", "IronFit", "Sports", 6, 299.0, "dumbbell"),
    ("Yoga Mat", "SP-YOGA", "IronFit", "Sports", 35, 32.0, "dumbbell"),
    ("Ceramic Vase", "HD-VASE", "Nest & Co", "Home Decor", 14, 48.0, "home"),
    ("Wall Clock", "HD-CLOCK", "Nest & Co", "Home Decor", 11, 36.0, "home"),
    ("Espresso Machine", "HA-ESP", "Kitchenly", "Home Appliances", 8, 389.0, "package"),
    ("Air Purifier", "HA-AIR", "Kitchenly", "Home Appliances", 10, 229.0, "package"),
    ("Gift Card", "GC-50", "Inventory", "Others", 100, 50.0, "cart"),
]


def main():
    config = load_client_config()
    configure_logging(config.log_level)
    c = InventoryClient(base_url=config.base_url, timeout=config.timeout)

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    logger.info("Resetting store at %s", config.base_url)
    try:
        c.reset()
    except requests.HTTPError as e:
        logger.warning("Reset unavailable (%s); adding to existing catalog", e)

    # -----------------------------
    # Create products
    # -----------------------------
    for name, sku, supplier, category, qty, price, icon in SAMPLE_PRODUCTS:
        try:
            created = c.create_product({
                "name": name,
                "sku": sku,
                "supplier": supplier,
                "category": category,
                "quantityInStock": qty,
                "price": price,
                "icon": icon,
            })
        except requests.HTTPError as e:
            logger.error("Could not create %s: %s", name, e.response.text)
            continue
        logger.info("Created %s (%s)", created["name"], created["id"])

    # -----------------------------
    # Query back
    # -----------------------------
    books_and_toys = c.list_products(categories=["Books", "Toys"])
    logger.info("Books and toys: %s", ", ".join(p["name"] for p in books_and_toys))
    logger.info("Catalog now holds %d products", len(c.list_products()))


if __name__ == "__main__":
    main()
