#!/usr/bin/env python3
"""
Register an app from the command line and print its pixel snippet.

Usage:
    python scripts/create_app.py --user-id my-shop.myshopify.com --name "My Shop"
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pixeltrack.core.config import settings
from pixeltrack.core.database import SessionLocal
from pixeltrack.core.errors import PixelTrackError
from pixeltrack.services.app_service import AppService


def create_app(user_id: str, name: str, meta_app_id: str = None, meta_access_token: str = None):
    db = SessionLocal()
    try:
        app = AppService(db).create_app_with_settings(
            user_id=user_id,
            name=name,
            meta_app_id=meta_app_id,
            meta_access_token=meta_access_token,
        )
    except PixelTrackError as e:
        print(f"❌ {e.message}")
        sys.exit(1)
    finally:
        db.close()

    print(f"✅ Created app '{app.name}'")
    print(f"   id:     {app.id}")
    print(f"   appId:  {app.app_id}")
    print("\n📋 Storefront snippet:")
    print(f'   <script src="{settings.APP_URL}/pixel.js?id={app.app_id}" async></script>')


def main():
    parser = argparse.ArgumentParser(description="Create a PixelTrack app")
    parser.add_argument("--user-id", required=True, help="Owner id (shop domain)")
    parser.add_argument("--name", required=True, help="App name")
    parser.add_argument("--meta-app-id", help="Meta pixel/dataset id")
    parser.add_argument("--meta-access-token", help="Meta access token (stored encrypted)")

    args = parser.parse_args()
    create_app(args.user_id, args.name, args.meta_app_id, args.meta_access_token)


if __name__ == "__main__":
    main()
