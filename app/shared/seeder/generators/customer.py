"""Customer book generator."""

from __future__ import annotations

import random
from typing import Any

from app.shared.seeder.generators.base import random_id

FIRST_NAMES = [
    "Adaeze",
    "Babatunde",
    "Chinedu",
    "Damilola",
    "Emeka",
    "Funmilayo",
    "Gbenga",
    "Halima",
    "Ifeoma",
    "Jumoke",
    "Kelechi",
    "Lola",
    "Musa",
    "Ngozi",
    "Obinna",
    "Folake",
    "Sade",
    "Tunde",
    "Uche",
    "Yetunde",
]

LAST_NAMES = [
    "Adeyemi",
    "Bello",
    "Chukwu",
    "Danjuma",
    "Eze",
    "Fashola",
    "Ibrahim",
    "Nwosu",
    "Okafor",
    "Okonkwo",
    "Olawale",
    "Onyeka",
    "Usman",
    "Yusuf",
]

AREAS = [
    "Yaba, Lagos",
    "Ikeja, Lagos",
    "Lekki, Lagos",
    "Surulere, Lagos",
    "Wuse, Abuja",
    "Garki, Abuja",
    "Bodija, Ibadan",
    "GRA, Port Harcourt",
    "Independence Layout, Enugu",
]

STREETS = ["Market Road", "Church Street", "Station Road", "Broad Street", "Allen Avenue"]

PHONE_PREFIXES = ["0803", "0806", "0813", "0703", "0805", "0807", "0809", "0812"]


class CustomerGenerator:
    """Generator for customers."""

    def __init__(self, rng: random.Random, count: int) -> None:
        """Initialize the customer generator.

        Args:
            rng: Random number generator for reproducibility.
            count: Number of customers to generate.
        """
        self.rng = rng
        self.count = count

    def generate(self) -> list[dict[str, Any]]:
        """Generate customer records.

        Some customers leave out email or phone, and about one in ten is
        inactive.

        Returns:
            List of customer dictionaries ready for database insertion.
        """
        customers: list[dict[str, Any]] = []

        for n in range(1, self.count + 1):
            first = self.rng.choice(FIRST_NAMES)
            last = self.rng.choice(LAST_NAMES)
            email = f"{first}.{last}{n}@example.com".lower() if self.rng.random() < 0.8 else None
            phone = (
                f"{self.rng.choice(PHONE_PREFIXES)} {self.rng.randint(100, 999)} "
                f"{self.rng.randint(1000, 9999)}"
                if self.rng.random() < 0.9
                else None
            )
            customers.append(
                {
                    "id": random_id(self.rng),
                    "name": f"{first} {last}",
                    "email": email,
                    "phone": phone,
                    "address": (
                        f"{self.rng.randint(1, 120)} {self.rng.choice(STREETS)}, "
                        f"{self.rng.choice(AREAS)}"
                    ),
                    "status": "inactive" if self.rng.random() < 0.1 else "active",
                    "total_purchases": 0,
                }
            )

        return customers
