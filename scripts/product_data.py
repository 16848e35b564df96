# Generate a synthetic PC-hardware catalog CSV for the search API demo.
# Run: python scripts/product_data.py [output.csv] [count]
import random
import sys
import uuid

import pandas as pd

# Define categories with realistic brand mappings
categories = {
    "Graphics Cards": {
        "types": ["RTX 4060", "RTX 4070", "RTX 4080", "RX 7800 XT", "RX 7900 XTX"],
        "brands": ["ASUS", "MSI", "Gigabyte", "Zotac", "Sapphire"],
        "lines": ["ROG Strix", "TUF Gaming", "Ventus", "Eagle", "Trinity", "Pulse"],
    },
    "Processors": {
        "types": ["Ryzen 5 7600X", "Ryzen 7 7800X3D", "Ryzen 9 7950X", "Core i5-14600K", "Core i7-14700K"],
        "brands": ["AMD", "Intel"],
        "lines": ["Boxed", "Tray"],
    },
    "Memory": {
        "types": ["16GB DDR5", "32GB DDR5", "64GB DDR5", "16GB DDR4", "32GB DDR4"],
        "brands": ["Corsair", "Kingston", "G.Skill", "TeamGroup"],
        "lines": ["Vengeance", "Fury Beast", "Trident Z5", "T-Force Delta"],
    },
    "Storage": {
        "types": ["1TB NVMe SSD", "2TB NVMe SSD", "4TB NVMe SSD", "2TB HDD"],
        "brands": ["Samsung", "Western Digital", "Crucial", "Seagate"],
        "lines": ["990 Pro", "Black SN850X", "P5 Plus", "Barracuda"],
    },
    "Laptops": {
        "types": ["Gaming Laptop", "Ultrabook", "Creator Laptop"],
        "brands": ["ASUS", "MSI", "Lenovo", "Acer"],
        "lines": ["ROG Zephyrus", "Katana", "Legion", "Predator Helios"],
    },
}

# Specifications column filled per category
category_spec = {
    "Graphics Cards": "gpu",
    "Processors": "cpu",
    "Memory": "ram",
    "Storage": "storage",
}

laptop_specs = {
    "cpu": ["Intel Core i7-13620H", "AMD Ryzen 7 7840HS", "Intel Core i9-13900HX"],
    "gpu": ["RTX 4050", "RTX 4060", "RTX 4070"],
    "ram": ["16GB DDR5", "32GB DDR5"],
    "storage": ["512GB NVMe SSD", "1TB NVMe SSD"],
}

tag_pool = ["gaming", "rgb", "budget", "workstation", "quiet", "overclock", "compact", "wireless"]

# Varied description templates
description_templates = [
    "{brand} {line} {product_type} built for high refresh rate gaming.",
    "Reliable {product_type} from {brand}, part of the {line} series.",
    "The {brand} {line} {product_type} balances performance and thermals.",
    "Upgrade your build with the {line} {product_type} by {brand}.",
    "{product_type} by {brand} with a {line} design, ideal for creators.",
]


def generate_products(count: int = 100) -> pd.DataFrame:
    products = []
    used_combinations = set()
    max_unique = sum(
        len(c["types"]) * len(c["brands"]) * len(c["lines"]) for c in categories.values()
    )
    count = min(count, max_unique)

    while len(products) < count:
        category = random.choice(list(categories.keys()))
        product_type = random.choice(categories[category]["types"])
        brand = random.choice(categories[category]["brands"])
        line = random.choice(categories[category]["lines"])

        # Ensure uniqueness
        combo = (category, product_type, brand, line)
        if combo in used_combinations:
            continue
        used_combinations.add(combo)

        specs = {"cpu": None, "gpu": None, "ram": None, "storage": None}
        if category == "Laptops":
            specs = {key: random.choice(values) for key, values in laptop_specs.items()}
        else:
            specs[category_spec[category]] = product_type

        template = random.choice(description_templates)
        products.append({
            "id": str(uuid.uuid4()),
            "title": f"{brand} {line} {product_type}",
            "description": template.format(brand=brand, line=line, product_type=product_type),
            "brand": brand,
            "category_name": category,
            "tags": ",".join(random.sample(tag_pool, k=2)),
            "price": round(random.uniform(49, 3499), 2),
            **specs,
        })

    return pd.DataFrame(products)


if __name__ == "__main__":
    output = sys.argv[1] if len(sys.argv) > 1 else "pc_parts_catalog.csv"
    count = int(sys.argv[2]) if len(sys.argv) > 2 else 100

    df = generate_products(count)
    df.to_csv(output, index=False)

    print(f"✅ Dataset generated: {output} ({len(df)} products)")
