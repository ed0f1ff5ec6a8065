#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
from typing import Any

import httpx

SAMPLE_DEFINITION: dict[str, Any] = {
    "objectName": "Beat_Plan",
    "fields": [
        {"name": "Location", "label": "Location", "type": "Text"},
        {"name": "Date", "label": "Date", "type": "Date"},
        {"name": "Notes", "label": "Notes", "type": "TextArea"},
        {"name": "Priority", "label": "Priority", "type": "Picklist"},
        {"name": "Is_Active", "label": "Is Active", "type": "Checkbox"},
        {"name": "Contact_Email", "label": "Contact Email", "type": "Email"},
        {"name": "Phone_Number", "label": "Phone Number", "type": "Phone"},
    ],
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Smoke-test a running metadata API server.")
    parser.add_argument("--base-url", default="http://localhost:3000", help="Server base URL.")
    parser.add_argument("--org-alias", required=True, help="Org alias passed to the deploy CLI.")
    parser.add_argument("--object-name", default=SAMPLE_DEFINITION["objectName"], help="Custom object name.")
    parser.add_argument("--timeout", type=float, default=60.0, help="Deployment request timeout in seconds.")
    return parser.parse_args()


async def check_health(client: httpx.AsyncClient) -> bool:
    try:
        response = await client.get("/health")
        response.raise_for_status()
    except httpx.HTTPError as exc:
        print(f"[smoke] health failed: {exc}")
        return False
    print(f"[smoke] health ok: {response.json()}")
    return True


async def create_metadata(client: httpx.AsyncClient, payload: dict[str, Any], timeout: float) -> bool:
    fields = ", ".join(f"{item['name']} ({item['type']})" for item in payload["fields"])
    print(f"[smoke] creating object={payload['objectName']} fields={fields}")
    response = await client.post("/create-metadata", json=payload, timeout=timeout)
    body = response.json()
    if response.status_code != 200:
        print(f"[smoke] create failed status={response.status_code}")
        print(json.dumps(body, ensure_ascii=False, indent=2))
        return False
    print(f"[smoke] {body['message']} object={body['objectName']} fields={len(body['fields'])}")
    return True


async def main() -> int:
    args = parse_args()
    payload = {**SAMPLE_DEFINITION, "objectName": args.object_name, "orgAlias": args.org_alias}
    async with httpx.AsyncClient(base_url=args.base_url, timeout=10.0) as client:
        if not await check_health(client):
            print("[smoke] make sure the server is running: sf-metadata-api")
            return 1
        ok = await create_metadata(client, payload, args.timeout)
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
