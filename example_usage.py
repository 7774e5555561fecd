#!/usr/bin/env python3
"""
Basic usage examples for the Publitio Python client library.

Credentials are read from the PUBLITIO_KEY and PUBLITIO_SECRET environment
variables. Pass a file path as the first argument to also upload it.
For the full API reference see https://publit.io/docs/
"""

import json
import logging
import os
import sys

from publitio_client import PublitioClient, PublitioClientError


def show(title, result):
    print(f"   {title}:")
    print("   " + json.dumps(result, indent=2).replace("\n", "\n   "))
    print()


def main():
    """Run basic usage examples."""

    key = os.environ.get("PUBLITIO_KEY")
    secret = os.environ.get("PUBLITIO_SECRET")
    if not key or not secret:
        print("Set PUBLITIO_KEY and PUBLITIO_SECRET first.")
        sys.exit(1)

    upload_path = sys.argv[1] if len(sys.argv) > 1 else None

    print("=== Publitio Python Client Usage Examples ===\n")

    with PublitioClient(key, secret, timeout=60) as api:
        try:
            # List at most 12 files
            print("1. Listing files...")
            show("files/list?limit=12", api.get("files/list", {"limit": ["12"]}))

            # Leading slash and no params work too
            show("/files/list", api.get("/files/list"))

            if upload_path:
                # Upload a file from memory and give it a title
                print("2. Uploading a local file...")
                with open(upload_path, "rb") as f:
                    result = api.upload_file(f, {"title": "My file"})
                show("files/create", result)

                file_id = result.get("id") if isinstance(result, dict) else None
                if file_id:
                    # Update the title
                    print("3. Updating the title...")
                    show("files/update", api.put(f"files/update/{file_id}", {"title": "New title"}))

                    # Delete it again
                    print("4. Deleting the file...")
                    show("files/delete", api.delete(f"files/delete/{file_id}"))

            # Upload a file from a remote URL and give it a custom ID
            print("5. Uploading from a remote URL...")
            show("files/create", api.upload_file(None, {
                "file_url": "https://example.org/image.png",
                "public_id": "xxGh332"
            }))

            # Service errors come back as JSON, not exceptions
            print("6. Requesting an unknown file...")
            result = api.get("files/show/does-not-exist")
            if isinstance(result, dict) and not result.get("success", True):
                print(f"   ✓ Service reported an error: {result.get('error')}")
            print()

        except PublitioClientError as e:
            print(f"Publitio Client Error: {e}")
            sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if os.environ.get("PUBLITIO_DEBUG") else logging.INFO)
    main()
