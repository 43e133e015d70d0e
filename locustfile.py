from locust import HttpUser, task, between, events
import random
import os
import requests


BOOTH_CLASSES = ["1-1", "1-2", "2-1", "2-2", "3-1", "3-2", "3-3"]


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    from dotenv import load_dotenv
    load_dotenv()

    base_url = os.getenv("LOCUST_HOST", environment.host)
    superadmin_class = os.getenv("SUPERADMIN_CLASS_NAME", "통합관리자")
    superadmin_pwd = os.getenv("SUPERADMIN_PASSWORD")

    print("Logging in as super admin...")
    response = requests.post(
        f"{base_url}/api/admin/booth-login",
        json={"className": superadmin_class, "password": superadmin_pwd},
    )
    if response.status_code != 200:
        raise RuntimeError(f"Failed to login as super admin: {response.status_code} {response.text}")
    token = response.json()["token"]

    print("Clearing booth usage...")
    response = requests.post(
        f"{base_url}/api/admin/booth-ops/reset",
        headers={"x-admin-token": token},
    )
    if response.status_code != 200:
        raise RuntimeError(f"Failed to reset usage: {response.status_code} {response.text}")


class BoothStation(HttpUser):
    """One booth tablet: logs in, looks students up and checks them in."""

    wait_time = between(1, 2)

    def on_start(self):
        self.class_name = random.choice(BOOTH_CLASSES)
        pin = os.getenv("BOOTH_PIN", "0000")
        response = self.client.post(
            "/api/admin/booth-login",
            json={"className": self.class_name, "password": pin},
            name="POST /api/admin/booth-login",
        )
        self.token = None
        self.booth_id = None
        self.students = []
        if response.status_code != 200:
            return
        data = response.json()
        self.token = data["token"]
        self.booth_id = data["boothId"]

        response = self.client.get(
            "/api/students",
            headers={"x-admin-token": self.token},
            name="GET /api/students",
        )
        if response.status_code == 200:
            self.students = response.json()

    @task(5)
    def check_in(self):
        if not self.token or not self.students:
            return

        student = random.choice(self.students)
        with self.client.post(
            f"/api/booths/{self.booth_id}/use",
            json={"studentId": student["id"]},
            headers={"x-admin-token": self.token},
            name="POST /api/booths/<booth_id>/use",
            catch_response=True
        ) as response:
            if response.status_code == 200:
                response.success()
            elif response.status_code == 400 and response.json().get("error") == "OVER_LIMIT":
                # Expected once a student has used the booth three times
                response.success()
            else:
                response.failure(f"Check-in failed  {response.text}")
                return

            entry = response.json().get("recentEntry")

        # Occasionally undo the check-in right away
        if entry and random.random() < 0.1:
            self.client.post(
                f"/api/booths/{self.booth_id}/use/{entry['id']}/void",
                json={"reason": "load test"},
                headers={"x-admin-token": self.token},
                name="POST /api/booths/<booth_id>/use/<usage_id>/void",
            )

    @task(2)
    def summary(self):
        if not self.token:
            return
        self.client.get(
            f"/api/booths/{self.booth_id}/usages/summary",
            headers={"x-admin-token": self.token},
            name="GET /api/booths/<booth_id>/usages/summary",
        )

    @task(1)
    def search(self):
        if not self.token:
            return
        self.client.get(
            "/api/students",
            params={"search": random.choice(["김", "이", "1", "박"])},
            headers={"x-admin-token": self.token},
            name="GET /api/students?search",
        )
