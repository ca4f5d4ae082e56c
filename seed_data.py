"""Seed script to populate database with sample data."""

from datetime import datetime, timedelta
from bakeshop import create_app
from bakeshop.extensions import db
from bakeshop.models import User, BakeryItem, GlobalSale, SignatureItem
from bakeshop.services.banners import insert_banner

ITEMS = [
    {'name': 'Chocolate Truffle Cake', 'price': 1200, 'category': 'cakes',
     'description': 'Rich chocolate sponge layered with dark truffle ganache',
     'image_url': 'https://images.unsplash.com/photo-1578985545062-69928b1d9587'},
    {'name': 'Red Velvet Cake', 'price': 1350, 'category': 'cakes',
     'description': 'Classic red velvet with cream cheese frosting',
     'image_url': 'https://images.unsplash.com/photo-1586788680434-30d324b2d46f',
     'sale_percentage': 15},
    {'name': 'Butter Croissant', 'price': 120, 'category': 'pastries',
     'description': 'Buttery, flaky French croissant',
     'image_url': 'https://images.unsplash.com/photo-1555507036-ab1f4038808a'},
    {'name': 'Sourdough Loaf', 'price': 350, 'category': 'breads',
     'description': 'Classic tangy sourdough with a crispy crust',
     'image_url': 'https://images.unsplash.com/photo-1585478259715-876acc5be8eb'},
    {'name': 'Chocolate Chip Cookies', 'price': 250, 'category': 'cookies',
     'description': 'A box of six chewy cookies loaded with chocolate chips',
     'image_url': 'https://images.unsplash.com/photo-1499636136210-6f4ee915583e'},
]

BANNERS = [
    ('image', 'https://images.unsplash.com/photo-1509440159596-0249088772ff'),
    ('image', 'https://images.unsplash.com/photo-1517433670267-08bbd4be890f'),
]


def seed_database():
    """Seed the database with sample data."""
    app = create_app()

    with app.app_context():
        # Create tables
        db.create_all()

        # Check if already seeded
        if User.query.filter_by(email='admin@bakeshop.local').first():
            print('Database already seeded!')
            return

        print('Seeding database...')

        # Create Admin
        admin = User(email='admin@bakeshop.local', name='Admin User', role='admin')
        admin.set_password('admin123')
        db.session.add(admin)

        for data in ITEMS:
            data = dict(data)
            sale_percentage = data.pop('sale_percentage', None)
            item = BakeryItem(**data)
            item.set_sale(sale_percentage is not None, sale_percentage)
            db.session.add(item)

        db.session.add(GlobalSale(
            name='Weekend Special',
            description='Fresh savings on everything that is not already discounted',
            discount_percentage=10,
            start_date=datetime.utcnow(),
            end_date=datetime.utcnow() + timedelta(days=3),
            is_active=False
        ))

        for order, (title, category) in enumerate([('Wedding Cakes', 'cakes'),
                                                   ('Morning Pastries', 'pastries')]):
            db.session.add(SignatureItem(
                title=title,
                category=category,
                display_order=order,
                image_url=ITEMS[order * 2]['image_url']
            ))

        db.session.commit()

        for banner_type, url in BANNERS:
            insert_banner(banner_type, url)

        print('Database seeded successfully!')
        print('\nTest Accounts:')
        print('  Admin: admin@bakeshop.local / admin123')


if __name__ == '__main__':
    seed_database()
