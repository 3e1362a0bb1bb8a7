#!/usr/bin/env python3
"""
Interactive client for the help desk server.

Modes:
- Chat (/ws): send text turns over the websocket and print the assistant's replies.
- Browse (http .../search): query the knowledge base and print matching entries.

Examples:
  python client.py --url ws://127.0.0.1:9000/ws --query "how do I start learning react"
  python client.py --url ws://127.0.0.1:9000/ws               # interactive chat
  python client.py --url http://127.0.0.1:9000/search --query docker --category DevOps
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, List, Optional

from websockets.asyncio.client import connect


def _build_headers(args: argparse.Namespace) -> List[tuple[str, str]]:
    headers: List[tuple[str, str]] = []
    if args.auth:
        headers.append(("Authorization", args.auth))
    return headers


async def _recv_reply(ws) -> Dict[str, Any]:
    raw = await ws.recv()
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return {"raw": raw}


async def chat_client(uri: str, query: Optional[str], headers: List[tuple[str, str]]) -> None:
    async with connect(uri, additional_headers=headers) as ws:
        greeting = await _recv_reply(ws)
        if query is not None:
            await ws.send(query)
            print(json.dumps(await _recv_reply(ws), ensure_ascii=False))
            return
        print("bot>", greeting.get("content", greeting))
        print("Connected. Type 'exit' to quit.")
        while True:
            try:
                text = input("you> ").strip()
            except (EOFError, KeyboardInterrupt):
                break
            if text.lower() in {"exit", "quit"}:
                break
            if not text:
                continue
            await ws.send(text)
            reply = await _recv_reply(ws)
            if "warning" in reply:
                print("bot> (still thinking about your last question)")
                continue
            print("bot>", reply.get("content", reply))


def search_client(url: str, query: Optional[str], category: Optional[str], headers: List[tuple[str, str]]) -> None:
    params = {"q": query or ""}
    if category:
        params["category"] = category
    req = urllib.request.Request(f"{url}?{urllib.parse.urlencode(params)}", method="GET")
    for key, value in headers:
        req.add_header(key, value)
    try:
        with urllib.request.urlopen(req) as resp:
            payload = json.loads(resp.read())
    except urllib.error.HTTPError as e:
        print(f"HTTP {e.code}: {e.read()[:200]!r}", file=sys.stderr)
        sys.exit(1)
    except urllib.error.URLError as e:
        print(f"HTTP request failed: {e.reason}", file=sys.stderr)
        sys.exit(1)

    print(f"{payload['count']} result(s)")
    for entry in payload["results"]:
        print(f"- [{entry['category']}] {entry['question']}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Client for the help desk server")
    parser.add_argument("--url", required=True, help="URL, e.g. ws://host:9000/ws or http://host:9000/search")
    parser.add_argument("--query", default=None, help="Chat: one-shot question. Search: text to look for.")
    parser.add_argument("--category", default=None, help="Search: restrict results to one category")
    parser.add_argument("--auth", default=None, help="Authorization header if needed, e.g. 'Bearer xxx'")
    args = parser.parse_args()

    headers = _build_headers(args)
    if args.url.endswith("/ws"):
        asyncio.run(chat_client(args.url, args.query, headers))
        return
    if args.url.startswith("http") and args.url.endswith("/search"):
        search_client(args.url, args.query, args.category, headers)
        return
    print("Unknown endpoint. Use ws(s)://.../ws for chat or http(s)://.../search for browsing.", file=sys.stderr)
    sys.exit(2)


if __name__ == "__main__":
    main()
