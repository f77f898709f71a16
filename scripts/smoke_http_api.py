"""
Manual smoke runner for the Ops housekeeping HTTP endpoints.

Usage:
    python scripts/smoke_http_api.py
    python scripts/smoke_http_api.py --base-url http://127.0.0.1:8000
"""

from __future__ import annotations

import argparse
import json
from urllib import error, request


def _call(
    *,
    method: str,
    url: str,
    body: dict | None = None,
) -> tuple[int, dict]:
    encoded = None
    headers = {}
    if body is not None:
        encoded = json.dumps(body).encode("utf-8")
        headers["Content-Type"] = "application/json"

    req = request.Request(url=url, method=method, headers=headers, data=encoded)
    try:
        with request.urlopen(req) as response:
            return response.status, json.loads(response.read().decode("utf-8"))
    except error.HTTPError as exc:
        return exc.code, json.loads(exc.read().decode("utf-8"))


def _print_case(label: str, status: int, payload: dict) -> None:
    print(f"\n[{label}] status={status}")
    print(json.dumps(payload, indent=2, sort_keys=True))


def run(base_url: str) -> None:
    api = base_url.rstrip("/") + "/v1/housekeeping"

    status, payload = _call(method="POST", url=f"{api}/seed")
    _print_case("seed-today", status, payload)

    status, payload = _call(method="GET", url=f"{api}/today")
    _print_case("agenda-today", status, payload)

    rows = payload.get("data", {}).get("rows", []) if payload.get("ok") else []
    markable = [row for row in rows if row["is_markable_now"]]
    closed = [row for row in rows if not row["is_markable_now"]]

    if markable:
        target = markable[0]["id"]
        status, payload = _call(
            method="PATCH",
            url=f"{api}/mark",
            body={"instance_id": target, "completed": True, "remarks": "smoke"},
        )
        _print_case("mark-open-window", status, payload)

        status, payload = _call(
            method="PATCH",
            url=f"{api}/mark",
            body={"instance_id": target, "completed": False},
        )
        _print_case("mark-already-resolved", status, payload)
    else:
        print("\n[mark-open-window] skipped: no instance is markable right now")

    if closed:
        status, payload = _call(
            method="PATCH",
            url=f"{api}/mark",
            body={"instance_id": closed[0]["id"], "completed": True},
        )
        _print_case("mark-closed-window", status, payload)

    status, payload = _call(
        method="PATCH",
        url=f"{api}/mark",
        body={"instance_id": "00000000-0000-0000-0000-000000000000", "completed": True},
    )
    _print_case("mark-unknown-instance", status, payload)

    status, payload = _call(method="GET", url=f"{api}/today?date=not-a-date")
    _print_case("agenda-invalid-date", status, payload)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:8000",
        help="Server base URL.",
    )
    args = parser.parse_args()
    run(args.base_url)


if __name__ == "__main__":
    main()
