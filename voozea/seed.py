# seed.py
from voozea.models import db, User, Business, Category
from voozea.models.category import TYPE_BUSINESS, TYPE_PRODUCT

BEER_ATTRIBUTES = {
    "abv": {"type": "number", "label": "ABV (%)", "min": 0, "max": 100, "step": 0.1},
    "style": {"type": "select", "label": "Style", "options": ["IPA", "Lager", "Stout", "Sour"]},
    "notes": {"type": "text", "label": "Tasting notes", "optional": True},
}


def _user(email, username, password, display_name, is_admin=False):
    user = User.query.filter_by(email=email).first()
    if not user:
        user = User(
            email=email,
            username=username,
            display_name=display_name,
            is_admin=is_admin,
            onboarding_completed=True
        )
        user.set_password(password)
        db.session.add(user)
    return user


def _category(slug, name, type, **kwargs):
    category = Category.query.filter_by(slug=slug).first()
    if not category:
        category = Category(slug=slug, name=name, type=type, **kwargs)
        db.session.add(category)
        db.session.flush()
    return category


def seed():
    """Create demo data. Safe to run more than once."""
    print("🌱 Seeding Voozea database...")

    # ========== USERS ==========
    _user("admin@example.com", "admin", "admin123", "Voozea Admin", is_admin=True)
    _user("alice@example.com", "alice", "alice123", "Alice")
    _user("bob@example.com", "bob", "bob1234", "Bob")
    db.session.commit()
    print("✅ Users seeded")

    # ========== CATEGORIES ==========
    drinks = _category("drinks", "Drinks", TYPE_PRODUCT)
    beer = _category("beer", "Beer", TYPE_PRODUCT, parent_id=drinks.id, attribute_schema=BEER_ATTRIBUTES)
    food_and_drink = _category("food-and-drink", "Food & Drink", TYPE_BUSINESS)
    brewery = _category(
        "brewery",
        "Brewery",
        TYPE_BUSINESS,
        parent_id=food_and_drink.id,
        default_product_category_id=beer.id
    )
    db.session.commit()
    print("✅ Categories seeded")

    # ========== BUSINESSES ==========
    if not Business.query.filter_by(slug="hoppy-days-brewing").first():
        db.session.add(Business(
            name="Hoppy Days Brewing",
            slug="hoppy-days-brewing",
            category_id=brewery.id,
            city="Portland",
            country="US",
            description="Small batch ales, unclaimed until the brewers show up."
        ))
        db.session.commit()
    print("✅ Business seeded")

    print("🌱 Voozea seeding complete!")
    print("Test accounts:")
    print("  🔧 Admin: admin@example.com / admin123")
    print("  🙂 User:  alice@example.com / alice123")
    print("  🙂 User:  bob@example.com / bob1234")


if __name__ == "__main__":
    from voozea import create_app

    with create_app().app_context():
        seed()
