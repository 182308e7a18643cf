"""Demo catalog inserted by `fastfood seed`."""

OPTIONS = [
    # Drinks
    ("Coca-Cola", "drinkOptions", 0.0),
    ("Coca-Cola Zero", "drinkOptions", 0.0),
    ("Fanta", "drinkOptions", 0.0),
    ("Sprite", "drinkOptions", 0.0),
    ("Orangina", "drinkOptions", 0.0),
    ("Ice Tea", "drinkOptions", 0.0),
    ("Eau Plate", "drinkOptions", 0.0),
    # Sauces
    ("Ketchup", "sauceOptions", 0.0),
    ("Mayonnaise", "sauceOptions", 0.0),
    ("Algérienne", "sauceOptions", 0.5),
    ("Blanche", "sauceOptions", 0.5),
    ("Samouraï", "sauceOptions", 0.5),
    ("Harissa", "sauceOptions", 0.5),
    ("BBQ", "sauceOptions", 0.5),
    ("Poivre", "sauceOptions", 0.5),
    # Tacos fillings
    ("Poulet", "mainFillings", 0.0),
    ("Viande Hachée", "mainFillings", 0.0),
    ("Merguez", "mainFillings", 0.0),
    ("Cordon Bleu", "mainFillings", 0.0),
    ("Kebab", "mainFillings", 0.0),
]

CATEGORIES = [
    {"name": "Menus", "type": "menus", "font_color": "#FF5733"},
    {"name": "Tacos", "type": "tacos", "font_color": "#C70039"},
    {"name": "Pizzas", "type": "pizzas", "font_color": "#900C3F"},
    {"name": "Burgers", "type": "burgers", "font_color": "#FFC300"},
    {"name": "Accompagnements", "type": "sides", "font_color": "#33FF57"},
    {"name": "Desserts", "type": "desserts", "font_color": "#33D4FF"},
    {"name": "Boissons", "type": "boissons", "font_color": "#3357FF"},
]

_PLACEHOLDER = "https://via.placeholder.com/300x200.png/{color}/FFFFFF?text={text}"


def _image(color: str, text: str) -> str:
    return _PLACEHOLDER.format(color=color, text=text.replace(" ", "+"))


MENU_ITEMS = [
    {
        "name": "Menu Classic Burger",
        "description": "Le Classic Burger, frites, boisson 33cl.",
        "price": 9.90,
        "category": "menus",
        "image_url": _image("FF5733", "Menu Classic"),
        "option_types": ["drinkOptions", "sauceOptions"],
    },
    {
        "name": "Menu Tacos Poulet",
        "description": "Tacos Poulet, frites, boisson 33cl.",
        "price": 10.50,
        "category": "menus",
        "image_url": _image("FF5733", "Menu Tacos"),
        "option_types": ["drinkOptions", "sauceOptions"],
    },
    {
        "name": "Menu Enfant",
        "description": "Nuggets x4, frites, Capri-Sun, compote.",
        "price": 6.50,
        "category": "menus",
        "image_url": _image("FF5733", "Menu Enfant"),
    },
    {
        "name": "Tacos Poulet",
        "description": "Poulet mariné, sauce fromagère maison, frites.",
        "price": 7.50,
        "category": "tacos",
        "image_url": _image("C70039", "Tacos Poulet"),
        "option_types": ["sauceOptions"],
        "removable_ingredients": ["Oignons", "Salade", "Tomates"],
    },
    {
        "name": "Tacos Mix (2 viandes)",
        "description": "Deux viandes au choix, sauce fromagère maison, frites.",
        "price": 9.00,
        "category": "tacos",
        "image_url": _image("C70039", "Tacos Mix"),
        "option_types": ["mainFillings", "sauceOptions"],
    },
    {
        "name": "Margarita",
        "description": "Sauce tomate, mozzarella, basilic frais.",
        "price": 8.00,
        "category": "pizzas",
        "image_url": _image("900C3F", "Margarita"),
    },
    {
        "name": "Reine",
        "description": "Sauce tomate, mozzarella, jambon, champignons frais.",
        "price": 9.50,
        "category": "pizzas",
        "image_url": _image("900C3F", "Reine"),
    },
    {
        "name": "4 Fromages",
        "description": "Crème fraîche, mozzarella, chèvre, emmental, bleu.",
        "price": 11.00,
        "category": "pizzas",
        "image_url": _image("900C3F", "4 Fromages"),
    },
    {
        "name": "Le Classic Burger",
        "description": "Steak de boeuf 120g, cheddar, salade, tomate, oignons, sauce burger maison.",
        "price": 7.00,
        "category": "burgers",
        "image_url": _image("FFC300", "Classic Burger"),
        "removable_ingredients": ["Oignons", "Cornichons"],
    },
    {
        "name": "Le Double Bacon",
        "description": "Deux steaks de boeuf 120g, double cheddar, bacon grillé, sauce BBQ.",
        "price": 9.50,
        "category": "burgers",
        "image_url": _image("FFC300", "Double Bacon"),
        "removable_ingredients": ["Oignons"],
    },
    {
        "name": "Frites",
        "description": "Portion de frites croustillantes.",
        "price": 2.50,
        "category": "sides",
        "image_url": _image("33FF57", "Frites"),
    },
    {
        "name": "Nuggets",
        "description": "Bouchées de poulet panées.",
        "price": 4.50,
        "category": "sides",
        "image_url": _image("33FF57", "Nuggets"),
        "option_types": ["sauceOptions"],
    },
    {
        "name": "Tiramisu",
        "description": "Dessert italien classique au café.",
        "price": 3.50,
        "category": "desserts",
        "image_url": _image("33D4FF", "Tiramisu"),
    },
    {
        "name": "Fondant au Chocolat",
        "description": "Fondant au chocolat au coeur coulant.",
        "price": 4.00,
        "category": "desserts",
        "image_url": _image("33D4FF", "Fondant"),
    },
    {
        "name": "Coca-Cola",
        "description": "33cl",
        "price": 1.50,
        "category": "boissons",
        "image_url": _image("3357FF", "Coca-Cola"),
    },
    {
        "name": "Eau Plate",
        "description": "50cl",
        "price": 1.00,
        "category": "boissons",
        "image_url": _image("3357FF", "Eau"),
    },
]
