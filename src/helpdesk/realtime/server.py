from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ..config import configure_logging, load_config, section
from ..engine import HelpDeskEngine
from ..loader import load_knowledge_base
from ..scheduler import ResponseScheduler
from ..types import ROLE_ASSISTANT, ROLE_USER, ConversationMessage

logger = logging.getLogger(__name__)


class ClassifyRequest(BaseModel):
    text: str


def _assistant_frame(content: str) -> str:
    return json.dumps(ConversationMessage.create(ROLE_ASSISTANT, content).to_dict(), ensure_ascii=False)


async def _deliver(websocket: WebSocket, scheduler: ResponseScheduler, query: str) -> None:
    message = ConversationMessage.create(ROLE_USER, query)
    reply = await scheduler.reply(message)
    if reply is None:
        return
    await websocket.send_text(json.dumps(reply.to_dict(), ensure_ascii=False))


def create_app(
    config_path: Optional[str] = None,
    data_path: Optional[str] = None,
    engine: Optional[HelpDeskEngine] = None,
) -> FastAPI:
    cfg = load_config(config_path)
    if engine is None:
        entries = load_knowledge_base(data_path) if data_path else None
        engine = HelpDeskEngine.from_config(cfg, entries=entries)

    app = FastAPI(title="helpdesk")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.get("server", {}).get("cors_origins", ["*"]),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.engine = engine

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"status": "ok", "entries": len(engine.entries), "rules": len(engine.rules)}

    @app.post("/classify")
    async def classify(request: ClassifyRequest) -> Dict[str, Any]:
        result = engine.classify(request.text)
        return {"result": result.to_dict() if result else None}

    @app.get("/search")
    async def search(q: str = "", category: Optional[str] = None) -> Dict[str, Any]:
        results = engine.search(q, category=category)
        return {"count": len(results), "results": [entry.to_dict() for entry in results]}

    @app.get("/categories")
    async def categories() -> Dict[str, Any]:
        return {"categories": engine.categories()}

    @app.websocket("/ws")
    async def ws_chat(websocket: WebSocket) -> None:
        """Chat endpoint.

        Text frames are user turns. Each answer arrives as an assistant
        message after the scheduler's delay; frames sent while an answer is
        still pending are rejected with a warning.
        """
        await websocket.accept()
        logger.info("Chat connection opened")
        scheduler = engine.create_scheduler()
        pending: Optional[asyncio.Task] = None
        await websocket.send_text(_assistant_frame(engine.greeting))
        try:
            while True:
                query = (await websocket.receive_text()).strip()
                if not query:
                    continue
                if pending is not None and not pending.done():
                    await websocket.send_text(json.dumps({"warning": "response pending"}, ensure_ascii=False))
                    continue
                pending = asyncio.create_task(_deliver(websocket, scheduler, query))
        except WebSocketDisconnect:
            logger.info("Chat connection closed")
        finally:
            if pending is not None and not pending.done():
                pending.cancel()

    return app


if __name__ == "__main__":
    import uvicorn

    config = load_config()
    configure_logging(section(config, "logging").get("level", "INFO"))
    server_cfg = section(config, "server")
    uvicorn.run(create_app(), host=server_cfg.get("host", "0.0.0.0"), port=server_cfg.get("port", 9000))
