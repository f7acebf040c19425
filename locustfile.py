import random
import uuid
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from locust import HttpUser, between, task

# Garden Studio from booking_engine.infrastructure.seed
UNIT_ID = 1
PRICE_PER_NIGHT = Decimal("50000")
CLEANING_FEE = Decimal("10000")
TAX_RATE = Decimal("0.075")


def quote(nights: int) -> dict:
    base = PRICE_PER_NIGHT * nights
    tax = ((base + CLEANING_FEE) * TAX_RATE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return {
        "base_amount": str(base),
        "cleaning_fee": str(CLEANING_FEE),
        "tax_amount": str(tax),
        "discount_amount": "0",
        "total_amount": str(base + CLEANING_FEE + tax),
    }


class APIUser(HttpUser):
    # Wait between 1 and 3 seconds between tasks
    wait_time = between(1, 3)

    @task
    def create_reservation(self):
        """
        Competes for random stays on a single unit: requests end in 201 or 409,
        never in two overlapping reservations. All simulated users share one
        source address, so 429 is expected once the create window fills up.
        """
        nights = random.randint(1, 5)
        check_in = date.today() + timedelta(days=random.randint(30, 400))
        payload = {
            "unit_id": UNIT_ID,
            "check_in": check_in.isoformat(),
            "check_out": (check_in + timedelta(days=nights)).isoformat(),
            "guest_count": 2,
            "guest": {
                "full_name": "Load Test Guest",
                "email": f"load-{uuid.uuid4().hex[:12]}@example.com",
            },
            "pricing": quote(nights),
            "payment_option": "reserve",
        }
        with self.client.post(
            "/api/v1/reservations",
            json=payload,
            name="/api/v1/reservations",
            catch_response=True,
        ) as response:
            if response.status_code in (201, 409, 429):
                response.success()
