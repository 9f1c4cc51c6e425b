from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.accounts.dtos import RegisterDTO
from modules.accounts.repositories import AccountDjangoRepository
from modules.accounts.services import AccountService
from modules.cart.dtos import AddCartLineDTO
from modules.cart.repositories import CartDjangoRepository
from modules.cart.services import CartService
from modules.catalog.constants import UnitType
from modules.catalog.dtos import CreateFoodItemDTO
from modules.catalog.models import FoodItem
from modules.catalog.repositories import FoodItemDjangoRepository
from modules.catalog.services import CatalogService
from modules.orders.constants import PaymentMethod
from modules.orders.dtos import CheckoutDTO, ShippingDetailsDTO
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.services import OrderService

MEMBERS = [
    ("alice", "alice@example.com", "Alice Green", "5551234567"),
    ("bruno", "bruno@example.com", "Bruno Farmer", "5559876543"),
]

LISTINGS = [
    ("alice", "Organic Honey", "Hill Apiary", "12.50", UnitType.SIZE, None, "500g"),
    ("alice", "Sourdough Loaf", "Alice's Kitchen", "6.00", UnitType.UNIT, 8, ""),
    ("alice", "Free-range Eggs", "Hill Farm", "4.25", UnitType.SIZE, None, "dozen"),
    ("bruno", "Heirloom Tomatoes", "Bruno Farm", "3.75", UnitType.SIZE, None, "1kg"),
    ("bruno", "Goat Cheese", "Valley Dairy", "9.90", UnitType.UNIT, 12, ""),
    ("bruno", "Apple Cider", "Orchard Lane", "7.00", UnitType.UNIT, 20, ""),
]


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        accounts = AccountService(repository=AccountDjangoRepository())
        users = self._seed_users(accounts)
        items = self._seed_listings(users)
        orders_created = self._seed_order(users, items)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={len(users)}, "
                f"listings={len(items)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self, accounts: AccountService) -> dict:
        User = get_user_model()
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", "admin@example.com", "admin123")

        users = {}
        for username, email, name, phone in MEMBERS:
            user = User.objects.filter(username=username).first()
            if user is None:
                user = accounts.register(
                    RegisterDTO(
                        username=username,
                        password=f"{username}-pass-123",
                        email=email,
                        name=name,
                        phone=phone,
                    )
                )
            users[username] = user
        return users

    def _seed_listings(self, users: dict) -> list[FoodItem]:
        self.stdout.write("Creating listings...")
        catalog = CatalogService(repository=FoodItemDjangoRepository())
        items: list[FoodItem] = []
        expiry = timezone.now().date() + timedelta(days=14)
        for owner, title, producer, price, unit_type, quantity, size in LISTINGS:
            lister = users[owner]
            item = FoodItem.objects.filter(lister=lister, title=title).first()
            if item is None:
                item = catalog.create_listing(
                    lister,
                    CreateFoodItemDTO(
                        title=title,
                        producer=producer,
                        price=Decimal(price),
                        description=f"{title} from {producer}.",
                        origin="Local",
                        certifications=["organic"] if "Organic" in title else [],
                        expiry_date=expiry,
                        contact_method="message",
                        unit_type=unit_type,
                        quantity=quantity,
                        size_measurement=size,
                    ),
                )
            items.append(item)
        self.stdout.write(self.style.SUCCESS("Creating listings... Done!"))
        return items

    def _seed_order(self, users: dict, items: list[FoodItem]) -> int:
        buyer = users["alice"]
        if buyer.orders.exists():
            self.stdout.write(self.style.WARNING("Skipping order (already seeded)."))
            return 0

        self.stdout.write("Creating order...")
        cart_repo = CartDjangoRepository()
        cart = CartService(
            cart_repository=cart_repo, food_item_repository=FoodItemDjangoRepository()
        )
        for item in items:
            if item.lister_id != buyer.pk:
                cart.add_line(buyer.pk, AddCartLineDTO(item_id=item.id, quantity=2))

        orders = OrderService(
            order_repository=OrderDjangoRepository(), cart_repository=cart_repo
        )
        orders.checkout(
            CheckoutDTO(
                owner_id=buyer.pk,
                shipping=ShippingDetailsDTO(
                    full_name="Alice Green",
                    address="12 Orchard Road",
                    city="Springfield",
                    state="IL",
                    zip_code="62701",
                    phone="(555) 123-4567",
                ),
                payment_method=PaymentMethod.CASH_ON_DELIVERY,
                idempotency_key="seed-order-1",
            )
        )
        self.stdout.write(self.style.SUCCESS("Creating order... Done!"))
        return 1
