"""Serverless function acting as the spreadsheet-backed comparison store."""

import json
import sys
from pathlib import Path

# Add the project root to the path so we can import pievote modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from pievote.config import StoreSettings
from pievote.sheet import SheetTable

_table: SheetTable | None = None


def get_table() -> SheetTable:
    """Return the process-wide sheet, opening it on first use."""
    global _table
    if _table is None:
        sheet_path = StoreSettings().sheet_path
        _table = SheetTable.open(sheet_path) if sheet_path else SheetTable()
    return _table


def handler(request, table: SheetTable | None = None):
    """Handle the store's two actions.

    Accepts:
    - GET with query ?action=list: returns every record as a JSON array
    - POST with JSON body: {"action": "update", "data": [...]} replaces all records

    The request object needs ``method``, ``headers``, ``body`` (bytes) and
    ``query`` (a dict of query parameters).
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    if request.method not in ("GET", "POST"):
        return create_response(
            {"error": "Method not allowed. Use GET or POST."},
            status=405,
        )

    try:
        if request.method == "GET":
            action = (request.query or {}).get("action")
            if action != "list":
                return create_response({"error": f"Unknown action: {action}"}, status=400)
            table = table if table is not None else get_table()
            return create_response(table.records())

        try:
            data = json.loads(request.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            return create_response({"error": f"Invalid JSON: {e}"}, status=400)

        if not isinstance(data, dict) or data.get("action") != "update":
            action = data.get("action") if isinstance(data, dict) else None
            return create_response({"error": f"Unknown action: {action}"}, status=400)

        records = data.get("data")
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            return create_response(
                {"error": "'data' must be a list of records"},
                status=400,
            )

        table = table if table is not None else get_table()
        table.replace(records)
        return create_response({"ok": True, "count": len(records)})

    except Exception as e:
        return create_response(
            {"error": f"Internal error: {e}"},
            status=500,
        )


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, (dict, list)):
        body = json.dumps(body)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
