# scripts/test/simulate_reports.py
"""Send test activity and hazard reports to the backend, then print the resulting status."""

import argparse
import requests

BACKEND_URL = "http://localhost:8080/api/v1"

AREAS = ["pickleball", "basketball", "futsal", "volleyball", "parking"]


def submit_activity(area, level, count):
    for _ in range(count):
        resp = requests.post(f"{BACKEND_URL}/areas/{area}/activity",
                             json={"level": level}, timeout=10)
        print(f"✅ {area}={level} → HTTP {resp.status_code}: {resp.json()}")

    resp = requests.get(f"{BACKEND_URL}/areas/{area}/status", timeout=10)
    print(f"📊 {area} status now: {resp.json()}")


def submit_hazard(area, alert_type, description):
    resp = requests.post(f"{BACKEND_URL}/hazards",
                         json={"area_id": area, "alert_type": alert_type, "description": description},
                         timeout=10)
    print(f"⚠️  hazard {alert_type} in {area} → HTTP {resp.status_code}: {resp.json()}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simulate visitor reports for testing")
    parser.add_argument("--area", default="pickleball", choices=AREAS)
    parser.add_argument("--level", default="Busy")
    parser.add_argument("--count", type=int, default=1)
    parser.add_argument("--hazard", default=None, help="Send a hazard of this alert type instead")
    parser.add_argument("--description", default="Simulated hazard")
    args = parser.parse_args()

    if args.hazard:
        submit_hazard(args.area, args.hazard, args.description)
    else:
        submit_activity(args.area, args.level, args.count)
