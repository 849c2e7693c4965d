# debug_travel_plan.py
import asyncio
import json

from trip_logistics.orchestrator import orchestrate_travel_plan


async def main():
    payload = {
        "origin": "New York",
        "cities": ["Paris", "Brussels", "Amsterdam", "Berlin", "Prague"],
        "total_days": 14,
        "start_date": "2025-07-10",
    }

    # Hits the live geocoder
    result = await orchestrate_travel_plan(payload)
    print("➡️ Travel plan:\n")
    print(json.dumps(result.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
