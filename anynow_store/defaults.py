# anynow_store/defaults.py
"""
Seed data for an empty store, the storefront's offline fallback catalog,
and factories for the admin panel's sample records.
"""
import copy
import random
import time

from django.utils import timezone

PAN_CORNER = "pan-corner"
LIQUOR_CORNER = "liquor-corner"

# slug -> (storage key, default unit)
CORNERS = {
    PAN_CORNER: ("pan_products", "pack"),
    LIQUOR_CORNER: ("liquor_products", "bottle"),
}


def _product(pid, name, category, price, unit, image, description, discount=0, quantity=None):
    item = {
        "id": pid,
        "name": name,
        "category": category,
        "price": price,
        "image": f"https://images.unsplash.com/{image}?w=300",
        "inStock": True,
        "unit": unit,
        "description": description,
        "discount": discount,
    }
    if quantity is not None:
        item["quantity"] = quantity
    return item


DEFAULT_CATEGORIES = [
    {"id": 1, "name": "Fruits & Vegetables", "slug": "fruits-vegetables"},
    {"id": 2, "name": "Dairy & Bakery", "slug": "dairy-bakery"},
    {"id": 3, "name": "Snacks & Beverages", "slug": "snacks-beverages"},
    {"id": 4, "name": "Household Items", "slug": "household"},
    {"id": 5, "name": "Personal Care", "slug": "personal-care"},
    {"id": 6, "name": "Instant Food", "slug": "instant-food"},
]

DEFAULT_PRODUCTS = [
    _product(1, "Fresh Apples", "fruits-vegetables", 120, "kg", "photo-1560806887-1e4cd0b6cbd6",
             "Crispy and sweet red apples, perfect for snacking", discount=10, quantity=100),
    _product(2, "Organic Tomatoes", "fruits-vegetables", 80, "kg", "photo-1546470427-e92b2c9c09d6",
             "Fresh organic tomatoes, rich in flavor", quantity=50),
    _product(3, "Fresh Spinach", "fruits-vegetables", 40, "bunch", "photo-1574386312658-830c5b77d4c5",
             "Nutritious fresh spinach leaves", discount=5, quantity=75),
    _product(4, "Fresh Milk", "dairy-bakery", 60, "liter", "photo-1550583724-b2692b85b150",
             "Pure and fresh cow milk", quantity=30),
    _product(5, "White Bread", "dairy-bakery", 45, "loaf", "photo-1509440159596-0249088772ff",
             "Soft and fresh white bread", quantity=25),
]

# Legacy order shape: `items` is a count and `total`/`date` replace
# `totalAmount`/`orderDate`.
DEFAULT_ORDERS = [
    {"id": 1, "customerName": "John Doe", "items": 5, "total": 450, "status": "delivered", "date": "2024-01-15"},
    {"id": 2, "customerName": "Jane Smith", "items": 3, "total": 320, "status": "pending", "date": "2024-01-16"},
]

_FALLBACK_PRODUCTS = DEFAULT_PRODUCTS[:5] + [
    _product(6, "Greek Yogurt", "dairy-bakery", 90, "500g", "photo-1488477181946-6428a0291777",
             "Creamy and healthy Greek yogurt", discount=15),
    _product(7, "Potato Chips", "snacks-beverages", 50, "pack", "photo-1571091718767-18b5b1457add",
             "Crispy and flavorful potato chips"),
    _product(8, "Orange Juice", "snacks-beverages", 120, "liter", "photo-1600271886742-f049cd451bba",
             "Fresh and tangy orange juice", discount=10),
    _product(9, "Dish Soap", "household", 85, "bottle", "photo-1585386959984-a4155224a1ad",
             "Effective dish cleaning liquid"),
    _product(10, "Paper Towels", "household", 150, "roll", "photo-1586023492125-27b2c045efd7",
             "Absorbent paper towels for kitchen", discount=5),
    _product(11, "Hand Soap", "personal-care", 75, "bottle", "photo-1585386959984-a4155224a1ad",
             "Gentle hand soap with moisturizer"),
    _product(12, "Shampoo", "personal-care", 200, "bottle", "photo-1526947425969-112a8a8c0b67",
             "Nourishing shampoo for all hair types", discount=20),
    _product(13, "Instant Noodles", "instant-food", 35, "pack", "photo-1617093727343-374698b1b08d",
             "Quick and delicious instant noodles"),
    _product(14, "Ready to Eat Rice", "instant-food", 80, "pack", "photo-1536304993881-ff1e9d3a9c3c",
             "Convenient ready-to-eat rice meal", discount=10),
]

DELIVERY_CITIES = [
    {"name": "Mumbai", "area": "400001"},
    {"name": "Delhi", "area": "110001"},
    {"name": "Bangalore", "area": "560001"},
    {"name": "Chennai", "area": "600001"},
    {"name": "Kolkata", "area": "700001"},
    {"name": "Hyderabad", "area": "500001"},
    {"name": "Pune", "area": "411001"},
    {"name": "Ahmedabad", "area": "380001"},
    {"name": "Jaipur", "area": "302001"},
    {"name": "Lucknow", "area": "226001"},
    {"name": "Kanpur", "area": "208001"},
    {"name": "Nagpur", "area": "440001"},
    {"name": "Indore", "area": "452001"},
    {"name": "Thane", "area": "400601"},
    {"name": "Bhopal", "area": "462001"},
    {"name": "Visakhapatnam", "area": "530001"},
    {"name": "Patna", "area": "800001"},
    {"name": "Vadodara", "area": "390001"},
    {"name": "Agra", "area": "282001"},
    {"name": "Nashik", "area": "422001"},
]

# Coordinates for the nearest-city lookup
CITY_COORDINATES = [
    {"name": "Mumbai", "lat": 19.0760, "lon": 72.8777},
    {"name": "Delhi", "lat": 28.6139, "lon": 77.2090},
    {"name": "Bangalore", "lat": 12.9716, "lon": 77.5946},
    {"name": "Chennai", "lat": 13.0827, "lon": 80.2707},
    {"name": "Kolkata", "lat": 22.5726, "lon": 88.3639},
    {"name": "Hyderabad", "lat": 17.3850, "lon": 78.4867},
    {"name": "Pune", "lat": 18.5204, "lon": 73.8567},
    {"name": "Ahmedabad", "lat": 23.0225, "lon": 72.5714},
]

DEFAULT_LOCATION = {"city": "Mumbai", "area": "400001"}


def default_products():
    return copy.deepcopy(DEFAULT_PRODUCTS)


def default_categories():
    return copy.deepcopy(DEFAULT_CATEGORIES)


def default_orders():
    return copy.deepcopy(DEFAULT_ORDERS)


def fallback_website_data():
    """Grouped catalog the storefront shows when the store cannot be read."""
    grouped = {c["slug"]: [] for c in DEFAULT_CATEGORIES}
    for p in _FALLBACK_PRODUCTS:
        item = {k: v for k, v in p.items() if k != "quantity"}
        grouped.setdefault(p["category"], []).append(copy.deepcopy(item))
    return {
        "products": grouped,
        "categories": [{"name": c["name"], "slug": c["slug"]} for c in DEFAULT_CATEGORIES],
    }


# --------------------------
# Sample records for the admin panel
# --------------------------

def _stamp():
    return timezone.now().isoformat()


def _epoch_id():
    return int(time.time() * 1000)


def sample_order(rng=random):
    customers = [
        ("Rahul Sharma", "rahul.sharma@example.com", "+91 98765 43210", "Andheri West, Mumbai"),
        ("Priya Patel", "priya.patel@example.com", "+91 91234 56789", "Koramangala, Bangalore"),
        ("Amit Kumar", "amit.kumar@example.com", "+91 99887 76655", "Connaught Place, Delhi"),
    ]
    name, email, phone, address = rng.choice(customers)
    picks = rng.sample(DEFAULT_PRODUCTS, k=rng.randint(1, 3))
    items = [
        {
            "id": p["id"],
            "name": p["name"],
            "price": p["price"],
            "quantity": rng.randint(1, 3),
            "image": p["image"],
        }
        for p in picks
    ]
    subtotal = sum(i["price"] * i["quantity"] for i in items)
    delivery_fee = 40
    now = _stamp()
    return {
        "id": _epoch_id(),
        "customerName": name,
        "customerEmail": email,
        "customerPhone": phone,
        "deliveryLocation": address,
        "orderDate": now,
        "totalAmount": subtotal + delivery_fee,
        "status": "New",
        "items": items,
        "subtotal": subtotal,
        "deliveryFee": delivery_fee,
        "updatedAt": now,
    }


def sample_user(rng=random):
    first = rng.choice(["Arjun", "Sneha", "Vikram", "Ananya", "Rohan", "Kavya"])
    last = rng.choice(["Mehta", "Iyer", "Reddy", "Singh", "Nair", "Gupta"])
    now = _stamp()
    return {
        "id": _epoch_id(),
        "name": f"{first} {last}",
        "email": f"{first.lower()}.{last.lower()}{rng.randint(1, 999)}@example.com",
        "phone": f"+91 9{rng.randint(100000000, 999999999)}",
        "signupDate": now,
        "isBlocked": False,
        "totalOrders": rng.randint(0, 10),
        "lastLogin": now,
        "updatedAt": now,
    }


def sample_testimonial(rng=random):
    reviews = [
        ("Neha Joshi", "Fresh Apples", 5, "Super fresh apples, delivered in 15 minutes!"),
        ("Karan Malhotra", "Fresh Milk", 4, "Milk was cold and fresh. Will order again."),
        ("Divya Rao", "White Bread", 3, "Bread was good but delivery was a bit late."),
    ]
    name, product, rating, text = rng.choice(reviews)
    now = _stamp()
    return {
        "id": _epoch_id(),
        "customerName": name,
        "customerEmail": f"{name.split()[0].lower()}@example.com",
        "customerPhone": f"+91 9{rng.randint(100000000, 999999999)}",
        "productName": product,
        "rating": rating,
        "testimonial": text,
        "orderDate": now,
        "isApproved": False,
        "createdAt": now,
        "updatedAt": now,
    }
