#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the MongoDB connection and create indexes.
Usage: python scripts/check_connection.py
"""
import sys
sys.path.insert(0, '.')

from internship_portal.core.config import get_settings
from internship_portal.db.mongodb import (
    create_mongo_client, get_mongo_db, init_mongo_indexes, test_mongo_connection
)


def main():
    settings = get_settings()
    print("=" * 50)
    print("INTERNSHIP PORTAL - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    client = create_mongo_client(settings)
    try:
        if not test_mongo_connection(client):
            print("    ❌ MongoDB: FAILED")
            return 1
        print("    ✅ MongoDB: CONNECTED")

        print("\n[2] Creating indexes...")
        init_mongo_indexes(get_mongo_db(client, settings))
        print("    ✅ Indexes ready")
    finally:
        client.close()

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
