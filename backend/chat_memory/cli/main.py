"""CLI entrypoint for chat-memory."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

import requests
import typer

app = typer.Typer(name="chatmem", help="Chat memory command-line interface")
chats_app = typer.Typer(name="chats")
app.add_typer(chats_app, name="chats")

DEFAULT_HOST = "http://127.0.0.1:5180"


def _resolve_host(override: Optional[str]) -> str:
    if override:
        return override.rstrip('/')
    env_host = os.environ.get("CHMEM_HOST")
    if env_host:
        return env_host.rstrip('/')
    return DEFAULT_HOST


def _request(method: str, path: str, host: Optional[str] = None, **kwargs) -> requests.Response:
    base = _resolve_host(host)
    url = f"{base}{path}"
    resp = requests.request(method, url, timeout=60, **kwargs)
    if not resp.ok:
        try:
            detail = resp.json()
        except ValueError:
            detail = resp.text
        typer.echo(f"Request failed ({resp.status_code}): {detail}", err=True)
        raise typer.Exit(code=1)
    return resp


@app.command("export")
def export_bot(
    chat_id: str = typer.Argument(..., help="Chat to export"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write the bot file here instead of stdout"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Download a chat as a portable bot file."""
    resp = _request("GET", f"/bot/download/{chat_id}", host=host)
    payload = json.dumps(resp.json(), indent=2)
    if out is None:
        typer.echo(payload)
        return
    out.expanduser().write_text(payload, encoding="utf-8")
    typer.echo(f"Wrote {out}")


@app.command("import")
def import_bot(
    bot_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Bot file produced by export"),
    user_id: str = typer.Option(..., "--user-id", help="Owner of the new chat"),
    resume: Optional[str] = typer.Option(None, "--resume", help="Finish an interrupted import into this chat"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Upload a bot file as a new chat."""
    body = json.loads(bot_file.read_text(encoding="utf-8"))
    params = {"user_id": user_id}
    if resume:
        params["resume_chat_id"] = resume
    resp = _request("POST", "/bot/upload", host=host, params=params, json=body)
    typer.echo(json.dumps(resp.json(), indent=2))


@chats_app.command("list")
def list_chats(
    user_id: str = typer.Option(..., "--user-id", help="Owner of the chats"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """List chats of a user."""
    resp = _request("GET", "/chats", host=host, params={"user_id": user_id})
    typer.echo(json.dumps(resp.json(), indent=2))


@chats_app.command("create")
def create_chat(
    title: str = typer.Argument(..., help="Chat title"),
    user_id: str = typer.Option(..., "--user-id", help="Owner of the chat"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Create an empty chat."""
    resp = _request("POST", "/chats", host=host, json={"userId": user_id, "title": title})
    typer.echo(json.dumps(resp.json(), indent=2))


@app.command()
def serve(
    port: int = typer.Option(5180, "--port", help="Port to serve on"),
    bind: str = typer.Option("127.0.0.1", "--bind", help="Interface to bind to"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    typer.echo(f"Starting chat-memory on http://{bind}:{port}")
    uvicorn.run("chat_memory.app:app", host=bind, port=port, reload=False)


if __name__ == "__main__":
    app()
