"""
Management command to seed the database with demo data.

Usage:
    python manage.py seed_data [--clear] [--seed 42]

This creates:
- 1 admin (admin@example.com / Admin@123)
- 5 normal users (user1..5@example.com / User@123)
- 3 store owners, each owning one store (owner1..3@example.com / Owner@123)
- 3 stores without an owner
- One rating from every normal user for every store

Everything goes through the service layer, so owners get their role from
store ownership exactly as they would through the API.
"""

import random

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, UserRole
from apps.accounts.services import create_user
from apps.stores.models import Store
from apps.stores.services import create_store
from apps.ratings.models import Rating
from apps.ratings.services import submit_rating

NORMAL_USER_COUNT = 5
OWNED_STORE_COUNT = 3
UNOWNED_STORE_COUNT = 3


class Command(BaseCommand):
    help = 'Seed demo users, stores and ratings'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete existing users, stores and ratings first',
        )
        parser.add_argument(
            '--seed',
            type=int,
            default=None,
            help='Random seed for reproducible rating values',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        rng = random.Random(options['seed'])

        self.stdout.write('Seeding data...')

        users = self.create_users()
        stores = self.create_stores(users['owners'])
        self.create_ratings(users['normal'], stores, rng)

        self.stdout.write(self.style.SUCCESS('Seed completed successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / Admin@123')
        self.stdout.write('  user1@example.com / User@123')
        self.stdout.write('  owner1@example.com / Owner@123')

    def clear_data(self):
        Rating.objects.all().delete()
        Store.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        admin = create_user(
            name='System Administrator Account',
            email='admin@example.com',
            password='Admin@123',
            address='123 Admin Street, Admin City, Admin Country',
            role=UserRole.ADMIN,
        )

        normal = [
            create_user(
                name=f'Normal User Account {i}',
                email=f'user{i}@example.com',
                password='User@123',
                address=f'{i}23 User Street, User City, User Country',
            )
            for i in range(1, NORMAL_USER_COUNT + 1)
        ]

        # Created as plain users; owning a store is what makes them owners
        owners = [
            create_user(
                name=f'Store Owner Account {i}',
                email=f'owner{i}@example.com',
                password='Owner@123',
                address=f'{i}23 Owner Street, Owner City, Owner Country',
            )
            for i in range(1, OWNED_STORE_COUNT + 1)
        ]

        return {'admin': admin, 'normal': normal, 'owners': owners}

    def create_stores(self, owners):
        self.stdout.write('  Creating stores...')

        stores = []
        for i, owner in enumerate(owners, start=1):
            stores.append(create_store(
                name=f'Amazing Neighbourhood Store {i}',
                email=f'store{i}@example.com',
                address=f'{i}23 Store Street, Store City, Store Country',
                owner_id=owner.id,
            ))

        first_unowned = OWNED_STORE_COUNT + 1
        for i in range(first_unowned, first_unowned + UNOWNED_STORE_COUNT):
            stores.append(create_store(
                name=f'Amazing Neighbourhood Store {i}',
                email=f'store{i}@example.com',
                address=f'{i}23 Store Street, Store City, Store Country',
            ))

        return stores

    def create_ratings(self, users, stores, rng):
        self.stdout.write('  Creating ratings...')

        for user in users:
            for store in stores:
                submit_rating(user=user, store_id=store.id, value=rng.randint(1, 5))
