"""FastAPI web server exposing the chat-reply renderer.

The chat front-end sends the AI backend's raw response here and gets back
HTML ready to be inserted into a message bubble.  The server holds no state:
every request is rendered independently.

Usage:
    python -m wellness_chat.web.app
    # => Uvicorn running on http://localhost:8000
"""

import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from wellness_chat.config import HOST, MAX_MESSAGE_LENGTH, PORT
from wellness_chat.rendering.renderer import render
from wellness_chat.reply import reply_text, truncate_message

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class RenderRequest(BaseModel):
    text: str


class RenderResponse(BaseModel):
    html: str


class ReplyRequest(BaseModel):
    """A backend response as received by the front-end: HTTP status plus raw body."""

    status: int = Field(ge=100, le=599)
    body: str = ""


class ReplyResponse(BaseModel):
    text: str
    html: str


class TruncateRequest(BaseModel):
    message: str


class TruncateResponse(BaseModel):
    message: str
    truncated: bool


# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="Wellness Chat Renderer")


@app.post("/api/render", response_model=RenderResponse)
async def render_text(request: RenderRequest):
    """Render markdown text to an HTML fragment."""
    html = render(request.text)
    logger.info("Rendered %d chars -> %d chars of HTML", len(request.text), len(html))
    return RenderResponse(html=html)


@app.post("/api/reply", response_model=ReplyResponse)
async def render_reply(request: ReplyRequest):
    """Extract the AI reply from a raw backend response and render it."""
    text = reply_text(request.status, request.body)
    return ReplyResponse(text=text, html=render(text))


@app.post("/api/truncate", response_model=TruncateResponse)
async def truncate(request: TruncateRequest):
    """Trim an outgoing user message to the backend's size limit."""
    message = request.message.strip()
    if not message:
        raise HTTPException(status_code=400, detail="Message is required")
    message, truncated = truncate_message(message, MAX_MESSAGE_LENGTH)
    return TruncateResponse(message=message, truncated=truncated)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main():
    """Start the web server via uvicorn."""
    import uvicorn  # pylint: disable=import-outside-toplevel

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
