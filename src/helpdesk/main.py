"""Command-line help desk: chat with the assistant or browse the knowledge base."""

import argparse
import asyncio
import random
from typing import List, Optional

from .config import configure_logging, load_config, section
from .engine import HelpDeskEngine
from .loader import load_knowledge_base
from .types import ROLE_USER, ConversationMessage, KnowledgeEntry


async def _no_delay(_seconds: float) -> None:
    return None


def print_entries(entries: List[KnowledgeEntry]) -> None:
    if not entries:
        print("No entries found matching your search.")
        return
    for entry in entries:
        print(f"[{entry.category}] {entry.question}")
        print(f"  {entry.answer}")
        print(f"  tags: {', '.join(entry.tags)}")
        print()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Ask the learning assistant or browse its answers.")
    parser.add_argument("--config", default=None, help="Path to a JSON or YAML config file.")
    parser.add_argument("--data", default=None, help="Path to a knowledge base JSONL file.")
    parser.add_argument("--search", default=None, help="Print entries matching this text and exit.")
    parser.add_argument("--category", default=None, help="Restrict --search to one category.")
    parser.add_argument("--categories", action="store_true", help="List categories and exit.")
    parser.add_argument("--no-delay", action="store_true", help="Answer without the simulated thinking delay.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for delays and fallback picks.")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_logging(section(config, "logging").get("level", "WARNING"))
    entries = load_knowledge_base(args.data) if args.data else None
    rng = random.Random(args.seed)
    engine = HelpDeskEngine.from_config(config, entries=entries, choice=rng.choice)

    if args.categories:
        for category in engine.categories():
            print(category)
        return
    if args.search is not None or args.category:
        print_entries(engine.search(args.search or "", category=args.category))
        return

    scheduler = engine.create_scheduler(rng=rng, sleep=_no_delay if args.no_delay else None)
    print(f"bot> {engine.greeting}")
    print("Type 'exit' to quit.")
    while True:
        try:
            user_input = input("you> ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if user_input.lower() in {"exit", "quit"}:
            break
        if not user_input:
            continue
        print("bot is typing...")
        reply = asyncio.run(scheduler.reply(ConversationMessage.create(ROLE_USER, user_input)))
        if reply is not None:
            print(f"bot> {reply.content}")


if __name__ == "__main__":
    main()
