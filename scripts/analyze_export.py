#!/usr/bin/env python3
"""Analyze a Search Console export through the API.

Posts the CSV to /api/queries/parse, then /api/analyze, then /api/report
and prints (or writes) the combined JSON.

Usage:
    uv run python scripts/analyze_export.py queries.csv --provider anthropic
    uv run python scripts/analyze_export.py queries.csv --provider openai \\
        --brand "Acme" --sector "Escape game" --output analysis.json

The API key is read from --api-key, or from ANTHROPIC_API_KEY /
OPENAI_API_KEY / GEMINI_API_KEY depending on the provider.
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Any

import httpx

BASE_URL = os.getenv("ANALYZER_BASE_URL", "http://localhost:8000")

API_KEY_ENV_VARS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
}

# LLM calls are single, non-streaming and may take a while
ANALYZE_TIMEOUT_SECONDS = 300.0


class ApiCallError(Exception):
    """An API call returned a non-200 status."""

    def __init__(self, path: str, status_code: int, body: Any) -> None:
        super().__init__(f"{path} returned {status_code}")
        self.path = path
        self.status_code = status_code
        self.body = body


def _check(resp: httpx.Response, path: str) -> dict[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        body = resp.text
    if resp.status_code != 200:
        raise ApiCallError(path, resp.status_code, body)
    return body


async def analyze_export(
    csv_path: Path,
    provider: str,
    api_key: str,
    brand: str | None = None,
    sector: str | None = None,
    base_url: str = BASE_URL,
) -> dict[str, Any]:
    """Run parse -> analyze -> report against a running server."""
    async with httpx.AsyncClient(base_url=base_url, timeout=ANALYZE_TIMEOUT_SECONDS) as client:
        resp = await client.post(
            "/api/queries/parse",
            content=csv_path.read_bytes(),
            headers={"Content-Type": "text/csv"},
        )
        parsed = _check(resp, "/api/queries/parse")
        print(f"✅ {len(parsed['queries'])} queries loaded ({parsed['skippedRows']} skipped)", file=sys.stderr)

        resp = await client.post(
            "/api/analyze",
            json={
                "queries": parsed["queries"],
                "brand": brand,
                "sector": sector,
                "apiKey": api_key,
                "provider": provider,
            },
        )
        analyzed = _check(resp, "/api/analyze")
        print(f"✅ {len(analyzed['analysis'].get('intentions', []))} intentions discovered", file=sys.stderr)

        resp = await client.post(
            "/api/report",
            json={
                "analysis": analyzed["analysis"],
                "classifiedQueries": analyzed["classifiedQueries"],
            },
        )
        report = _check(resp, "/api/report")

    return {
        "columns": parsed["columns"],
        "analysis": analyzed["analysis"],
        "classifiedQueries": analyzed["classifiedQueries"],
        "report": report,
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Discover search intentions in a Search Console export")
    parser.add_argument("csv", type=Path, help="Search Console query export (CSV)")
    parser.add_argument("--provider", required=True, choices=sorted(API_KEY_ENV_VARS), help="LLM provider")
    parser.add_argument("--api-key", help="Provider API key (or set the provider's *_API_KEY env var)")
    parser.add_argument("--brand", help="Brand name")
    parser.add_argument("--sector", help="Business sector")
    parser.add_argument("--base-url", default=BASE_URL, help=f"API base URL (default: {BASE_URL})")
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    args = parser.parse_args()

    api_key = args.api_key or os.getenv(API_KEY_ENV_VARS[args.provider], "")
    if not api_key:
        print(f"Error: API key required (--api-key or {API_KEY_ENV_VARS[args.provider]})", file=sys.stderr)
        return 1

    if not args.csv.is_file():
        print(f"Error: file not found: {args.csv}", file=sys.stderr)
        return 1

    try:
        result = asyncio.run(
            analyze_export(
                args.csv,
                provider=args.provider,
                api_key=api_key,
                brand=args.brand,
                sector=args.sector,
                base_url=args.base_url,
            )
        )
    except ApiCallError as e:
        print(f"❌ {e}: {json.dumps(e.body, ensure_ascii=False)}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"❌ Request failed: {e}", file=sys.stderr)
        return 1

    output = json.dumps(result, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"✅ Written to {args.output}", file=sys.stderr)
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
