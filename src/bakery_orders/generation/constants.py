"""
Fixed reference values for demo data generation.

Name pools, product vocabulary, demo identities and the message texts
written into reconstructed order histories.
"""

from ..models import Role

FILLINGS = ["Strawberry", "Chocolate", "Blueberry", "Raspberry", "Vanilla"]

PRODUCT_TYPES = [
    "Cake",
    "Pastry",
    "Tart",
    "Muffin",
    "Biscuit",
    "Bread",
    "Bagel",
    "Bun",
    "Brownie",
    "Cookie",
    "Cracker",
    "Cheese Cake",
]

FIRST_NAMES = [
    "Ori", "Amanda", "Octavia", "Laurel", "Lael", "Delilah", "Jason", "Skyler",
    "Arsenio", "Haley", "Lionel", "Sylvia", "Jessica", "Lester", "Ferdinand",
    "Elaine", "Griffin", "Kerry", "Dominique",
]

# "Macias" appears twice, which doubles its weight
LAST_NAMES = [
    "Carter", "Castro", "Rich", "Irwin", "Moore", "Hendricks", "Huber", "Patton",
    "Wilkinson", "Thornton", "Nunez", "Macias", "Gallegos", "Blevins", "Mejia",
    "Pickett", "Whitney", "Farmer", "Henry", "Chen", "Macias", "Rowland", "Pierce",
    "Cortez", "Noble", "Howard", "Nixon", "Mcbride", "Leblanc", "Russell", "Carver",
    "Benton", "Maldonado", "Lyons",
]

PICKUP_LOCATIONS = ["Store", "Bakery"]

# Plaintext password is the e-mail local part
DEMO_USERS = {
    "baker": {
        "email": "baker@vaadin.com",
        "first_name": "Heidi",
        "last_name": "Carter",
        "role": Role.BAKER,
        "locked": False,
    },
    "barista": {
        "email": "barista@vaadin.com",
        "first_name": "Malin",
        "last_name": "Castro",
        "role": Role.BARISTA,
        "locked": True,
    },
    "admin": {
        "email": "admin@vaadin.com",
        "first_name": "Göran",
        "last_name": "Rich",
        "role": Role.ADMIN,
        "locked": True,
    },
}

DELETABLE_USERS = [
    {
        "email": "peter@vaadin.com",
        "first_name": "Peter",
        "last_name": "Bush",
        "role": Role.BARISTA,
        "locked": False,
    },
    {
        "email": "mary@vaadin.com",
        "first_name": "Mary",
        "last_name": "Ocon",
        "role": Role.BAKER,
        "locked": True,
    },
]

# Due time slots: 8 + 4 * k for k in {0, 1, 2}
DUE_HOURS = [8, 12, 16]
PINNED_DUE_HOUR = 8

ITEM_COMMENTS = ["Lactose free", "Gluten free"]
VIP_DETAILS = "Very important customer"
PHONE_PREFIX = "+1-555-"

MSG_CANCELLED = "Order cancelled"
MSG_CONFIRMED = "Order confirmed"
MSG_PROBLEM = "Can't make it. Did not get any ingredients this morning"
MSG_READY = "Order ready for pickup"
MSG_DELIVERED = "Order delivered"
