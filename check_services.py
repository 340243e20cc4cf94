#!/usr/bin/env python3
"""Check connectivity to the OSRM and elevation services used by the API."""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from evsite.config import settings
from evsite.data.campus_repository import load_campus
from evsite.services.providers.elevation import ElevationClient
from evsite.services.providers.osrm_client import check_health, get_route, snap_to_nearest_road


def main():
    print("=" * 60)
    print("Routing / Elevation Connection Test")
    print("=" * 60)
    print()

    campus = load_campus()
    print(f"Campus: {campus.name} ({len(campus.locations)} locations, {len(campus.stations)} stations)")
    print()

    print("1. Checking OSRM configuration...")
    if not settings.osrm_base_url:
        print("   [ERROR] OSRM base URL is not configured")
        print("   Please set EVSITE_OSRM_BASE_URL in your .env file")
        return 1
    print(f"   [OK] OSRM Base URL: {settings.osrm_base_url}")
    print(f"   [OK] OSRM Profile: {settings.osrm_profile}")
    print()

    print("2. Testing OSRM health check...")
    if not check_health():
        print("   [ERROR] OSRM service is not responding")
        return 1
    print("   [OK] OSRM service is healthy and accessible!")
    print()

    print("3. Snapping the campus centre to a road...")
    snap = snap_to_nearest_road(campus.center.lat, campus.center.lng)
    if snap.snapped:
        print(f"   [OK] {snap.name}, {snap.distance:.1f} m away")
    else:
        print("   [WARN] No road within the snap radius")
    print()

    print("4. Requesting a route between the first two campus locations...")
    if len(campus.locations) >= 2:
        start, end = campus.locations[0], campus.locations[1]
        route = get_route(start.coordinate, end.coordinate)
        if route.success:
            print(f"   [OK] {start.name} -> {end.name}: {route.distance:.0f} m, {len(route.coordinates)} vertices")
        else:
            print(f"   [WARN] {route.error}")
    print()

    print("5. Looking up the campus centre elevation...")
    point = ElevationClient().lookup_point(campus.center.lat, campus.center.lng)
    label = "estimated" if point.estimated else "measured"
    print(f"   [OK] {point.elevation:.0f} m ({label})")
    print()

    print("=" * 60)
    print("[SUCCESS] External services checked")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
