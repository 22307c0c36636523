import logging
import socket
import threading
import webbrowser
from importlib import resources
from typing import List

import typer
import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from textsplitter import __version__
from textsplitter.chunking import InvalidArgument, split_text
from textsplitter.config import Config

logger = logging.getLogger(__name__)


class SplitRequest(BaseModel):
    text: str
    max_size: int = 3000


class SplitResponse(BaseModel):
    chunks: List[str]
    count: int
    total_characters: int


def load_index_html() -> str:
    """Read the page shipped inside the package."""
    return resources.files("textsplitter").joinpath("static/index.html").read_text(encoding="utf-8")


def create_app() -> FastAPI:
    app = FastAPI(title="TextSplitter", version=__version__, docs_url=None, redoc_url=None)
    index_html = load_index_html()

    @app.get("/", response_class=HTMLResponse)
    @app.get("/index.html", response_class=HTMLResponse)
    def index():
        return HTMLResponse(content=index_html)

    @app.get("/healthz")
    def healthz():
        return {"ok": True, "version": __version__}

    @app.post("/api/split", response_model=SplitResponse)
    def split(req: SplitRequest):
        try:
            chunks = split_text(req.text, req.max_size)
        except InvalidArgument as e:
            raise HTTPException(status_code=400, detail=str(e))
        logger.debug("Split request: %d characters -> %d chunks", len(req.text), len(chunks))
        return SplitResponse(chunks=chunks, count=len(chunks), total_characters=len(req.text))

    return app


def find_available_port(start_port: int, search_range: int = 100, host: str = "") -> int:
    """Return the first port in [start_port, start_port + search_range) that can be bound."""
    for port in range(start_port, start_port + search_range):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            try:
                sock.bind((host, port))
            except OSError:
                continue
        if port != start_port:
            logger.warning("Port %d was busy, using port %d instead", start_port, port)
        return port
    # Nothing free in range; let the server fail on the original port
    logger.warning("No free port found in %d-%d", start_port, start_port + search_range - 1)
    return start_port


def open_browser(url: str) -> None:
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        logger.debug("Browser launch failed: %s", e)
        opened = False
    if not opened:
        typer.echo(f"Could not automatically open browser. Please open {url} manually")


def serve(config: Config, *, verbose: bool = False) -> None:
    """Run the local web UI until interrupted."""
    port = find_available_port(config.port, config.port_search_range, config.host)
    url = f"http://{'localhost' if config.host in ('127.0.0.1', '0.0.0.0', '') else config.host}:{port}"

    typer.echo("🌐 TextSplitter")
    typer.echo(f"📱 Starting web interface at {url}")
    typer.echo("💡 Split large text into parts that fit your chat window")
    if config.open_browser:
        typer.echo("🚀 Opening browser...")
        timer = threading.Timer(config.browser_delay, open_browser, args=(url,))
        timer.daemon = True
        timer.start()
    typer.echo("🛑 Press Ctrl+C to stop\n")

    logging.getLogger("uvicorn.access").setLevel(logging.INFO if verbose else logging.WARNING)
    logger.info("Starting server on %s", url)
    uvicorn.run(create_app(), host=config.host, port=port, log_level="info" if verbose else "warning")
