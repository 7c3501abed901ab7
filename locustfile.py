import random
import uuid
from datetime import date, timedelta

from locust import HttpUser, between, task

VEHICLE_IDS = [f"vehicle-{n}" for n in range(1, 8)]
TARIFFS = ["BASIC", "DISCOUNTED", "EXCLUSIVE"]


class APIUser(HttpUser):
    # Wait between 1 and 3 seconds between tasks
    wait_time = between(1, 3)

    def on_start(self):
        """Each simulated user gets its own member identity."""
        self.headers = {
            "X-User-Id": f"load-{uuid.uuid4().hex[:8]}",
            "X-User-Role": "MEMBER",
            "Content-Type": "application/json",
        }

    def _random_window(self):
        start = date.today() + timedelta(days=random.randint(1, 120))
        return start, start + timedelta(days=random.randint(1, 7))

    @task(3)
    def create_reservation(self):
        """
        Contended creates over a small fleet.

        Overlapping windows are expected to be rejected with CONFLICT; those
        count as successful responses.
        """
        start, end = self._random_window()
        payload = {
            "vehicle_id": random.choice(VEHICLE_IDS),
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "start_time": "10:00",
            "end_time": "18:00",
            "pickup_location": "Berlin Central",
            "return_location": "Berlin Central",
            "tariff": random.choice(TARIFFS),
            "payment_method": "CREDIT_CARD",
        }
        headers = {**self.headers, "Idempotency-Key": str(uuid.uuid4())}
        with self.client.post(
            "/api/v1/reservations",
            json=payload,
            headers=headers,
            name="/api/v1/reservations",
            catch_response=True,
        ) as response:
            if response.status_code == 201:
                response.success()
            elif response.status_code == 400 and response.json().get("error") == "CONFLICT":
                response.success()
            else:
                response.failure(f"unexpected {response.status_code}: {response.text}")

    @task(2)
    def check_availability(self):
        start, end = self._random_window()
        self.client.get(
            "/api/v1/reservations/availability",
            params={"start_date": start.isoformat(), "end_date": end.isoformat()},
            name="/api/v1/reservations/availability",
        )

    @task(1)
    def list_own_reservations(self):
        self.client.get("/api/v1/reservations", headers=self.headers, name="/api/v1/reservations [list]")
