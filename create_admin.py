#!/usr/bin/env python3
"""
Script to create (or promote) an admin user for the Bakeshop admin panel.
Run from the project root with the same environment as the app.
"""

from getpass import getpass
from bakeshop import create_app
from bakeshop.extensions import db
from bakeshop.models import User


def create_admin_user(email, password, name):
    """
    Create an admin user, or promote an existing account to admin.

    Args:
        email: Admin email address
        password: Admin password (will be hashed)
        name: Admin full name
    """
    user = User.query.filter_by(email=email).first()
    if user:
        print(f"User with email {email} already exists (role: {user.role}).")
        update = input("Do you want to update this user to admin role? (yes/no): ").lower()
        if update == 'yes':
            user.role = 'admin'
            db.session.commit()
            print(f"User {email} updated to admin role!")
        return

    user = User(email=email, name=name, role='admin')
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    print("Admin user created successfully!")
    print(f"   Email: {email}")
    print(f"   Name: {name}")
    print("\nYou can now log in with these credentials at /login")


def main():
    print("=" * 60)
    print("Bakeshop - Admin User Creation")
    print("=" * 60)
    print()

    email = input("Email: ").strip().lower()
    password = getpass("Password: ").strip()
    name = input("Full Name: ").strip()

    if not email or not password or not name:
        print("Email, password and name are all required.")
        return

    app = create_app()
    with app.app_context():
        db.create_all()
        create_admin_user(email, password, name)


if __name__ == '__main__':
    main()
