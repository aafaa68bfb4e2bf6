"""Demo recipe library and pantry used by the /demo routes."""
from datetime import date, timedelta

from dinner_planner.models import IngredientEntry, PantryItem, Recipe


DEMO_RECIPES = [
    Recipe(id="spaghetti-bolognese", name="Spaghetti Bolognese", description="Classic Italian pasta",
           prep_time=45, tags=["pasta", "italian"],
           instructions="1. Brown beef.\n2. Add tomato sauce.\n3. Simmer 30 min.\n4. Serve over pasta.",
           ingredients=[
               IngredientEntry(name="ground beef", quantity="1 lb"),
               IngredientEntry(name="spaghetti", quantity="12 oz"),
               IngredientEntry(name="tomato sauce", quantity="24 oz"),
               IngredientEntry(name="onion", quantity="1"),
               IngredientEntry(name="garlic", quantity="3 cloves"),
               IngredientEntry(name="olive oil", quantity="2 tbsp"),
           ]),
    Recipe(id="chicken-stir-fry", name="Chicken Stir Fry", description="Quick weeknight dinner",
           prep_time=25, tags=["chicken", "quick", "asian"],
           instructions="1. Slice chicken.\n2. Stir fry with vegetables.\n3. Add sauce.\n4. Serve with rice.",
           ingredients=["chicken breast", "broccoli", "soy sauce", "rice", "vegetable oil"]),
    Recipe(id="black-bean-tacos", name="Black Bean Tacos", description="Easy meatless tacos",
           prep_time=20, tags=["vegetarian", "mexican", "quick"],
           ingredients=[
               IngredientEntry(name="black beans", quantity="1 can"),
               IngredientEntry(name="tortillas", quantity="8"),
               IngredientEntry(name="avocado", quantity="1"),
               IngredientEntry(name="salsa", quantity="1 cup"),
               IngredientEntry(name="cilantro", quantity="1 bunch", optional=True),
           ]),
    Recipe(id="greek-salad", name="Greek Salad", description="Light Mediterranean salad",
           prep_time=10, tags=["salad", "vegetarian"],
           ingredients=["cucumber", "tomatoes", "feta cheese", "kalamata olives", "olive oil"]),
    Recipe(id="salmon-rice-bowl", name="Salmon Rice Bowl", description="Seared salmon over rice",
           prep_time=30, tags=["fish"],
           ingredients=["salmon fillet", "rice", "cucumber", "soy sauce", "sesame seeds"]),
    Recipe(id="buttered-noodles", name="Buttered Noodles", description="Pantry-only comfort food",
           tags=["quick"],
           ingredients=["egg noodles", "butter", "salt", "black pepper"]),
    Recipe(id="sheet-pan-sausage", name="Sheet Pan Sausage and Peppers", description="One-pan dinner",
           prep_time=40,
           ingredients=["italian sausage", "bell peppers", "onion", "potatoes", "olive oil"]),
]


def demo_pantry(today: date = None) -> list[PantryItem]:
    """A small pantry; a couple of items expire within the next few days."""
    if today is None:
        today = date.today()
    return [
        PantryItem(id="p1", name="Chicken breasts", quantity="2", unit="lb", category="meat",
                   expiration_date=today + timedelta(days=2)),
        PantryItem(id="p2", name="Broccoli", quantity="1", unit="head", category="produce",
                   expiration_date=today + timedelta(days=5)),
        PantryItem(id="p3", name="Jasmine rice", quantity="5", unit="lb", category="pantry"),
        PantryItem(id="p4", name="Soy sauce", quantity="1", unit="bottle", category="pantry"),
        PantryItem(id="p5", name="Tomatoes", quantity="4", category="produce",
                   expiration_date=today + timedelta(days=1)),
        PantryItem(id="p6", name="Cucumber", quantity="1", category="produce"),
        PantryItem(id="p7", name="Onions", quantity="3", category="produce"),
        PantryItem(id="p8", name="Garlic", quantity="1", unit="head", category="produce"),
        PantryItem(id="p9", name="Egg noodles", quantity="1", unit="bag", category="pantry"),
        PantryItem(id="p10", name="Spaghetti", quantity="1", unit="box", category="pantry",
                   expiration_date=today - timedelta(days=10)),
    ]
