# lorekeeper.py — append-only ledgers for the shop (chronicles, events, debug)
import json
import os
import sys
import traceback
from datetime import datetime

DIV = "=" * 79
EVENTS_MAX_BYTES = 20 * 1024 * 1024  # rotate at ~20 MB to keep tailing snappy

CHRONICLES_HEADER = f"""{DIV}
SHOPCART CHRONICLES - session and catalog history
{DIV}
note: append chronologically; never rewrite history
{DIV}
"""

# ---------- paths (resolved per call so the env can be redirected) ----------

def data_dir() -> str:
    return os.environ.get("SHOPCART_DATA_DIR") or os.path.join(
        os.path.expanduser("~"), ".shopcart"
    )

def lore_dir() -> str:
    return os.path.join(data_dir(), "lore")

def chronicles_path() -> str:
    return os.path.join(lore_dir(), "chronicles.txt")

def events_path() -> str:
    return os.path.join(lore_dir(), "Events.jsonl")

def debug_log_path() -> str:
    return os.path.join(data_dir(), "debug.log")

def debug_on() -> bool:
    return os.environ.get("SHOPCART_DEBUG", "0") not in ("0", "", "false", "False", "FALSE")

# ---------- chronicles ----------

def _ensure_dirs_and_headers():
    os.makedirs(lore_dir(), exist_ok=True)
    path = chronicles_path()
    if not os.path.exists(path):
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(CHRONICLES_HEADER)

def _append_block(path: str, title: str, lines: list[str]) -> None:
    _ensure_dirs_and_headers()
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    block = [DIV, f"{title} - {ts}", DIV]
    block.extend(lines)
    block.append(DIV)
    block.append("end of entry")
    block.append(DIV)
    with open(path, "a", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(block) + "\n")

def append_to_chronicles(title: str, lines: list[str]) -> None:
    _append_block(chronicles_path(), title, lines)

def log_app_event(event: str, details: list[str] | None = None) -> None:
    details = details or []
    lines = [f"event: {event}"]
    lines.extend([f"- {d}" for d in details])
    append_to_chronicles("shop log", lines)

def log_error(event: str, err: Exception) -> None:
    tb = "".join(traceback.format_exception(type(err), err, err.__traceback__))
    lines = [f"error: {event}", "traceback:", tb.strip()]
    append_to_chronicles("shop error", lines)

# ---------- events (jsonl) ----------

def _rotate_if_large(path: str, max_bytes: int) -> None:
    if os.path.exists(path) and os.path.getsize(path) >= max_bytes:
        root, ext = os.path.splitext(os.path.basename(path))
        ts = datetime.now().strftime("%Y%m%d-%H%M%S")
        rotated = os.path.join(os.path.dirname(path), f"{root}.{ts}{ext}")
        os.replace(path, rotated)  # atomic on same FS

def log_event(kind: str, event: str, data=None, *, max_bytes: int = EVENTS_MAX_BYTES) -> dict:
    """
    One JSON object per line:
      log_event("cart", "add", {"name": "Coffee Mug", "quantity": 2})
    Returns the payload written.
    """
    os.makedirs(lore_dir(), exist_ok=True)
    path = events_path()
    _rotate_if_large(path, max_bytes)
    payload = {
        "type": kind,
        "event": event,
        "schema": "1.0",
        "ts": datetime.now().isoformat(timespec="seconds"),
    }
    if data is not None:
        payload["data"] = data
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
    return payload

# ---------- debug ----------

def debug(exc: Exception, where: str = "") -> None:
    """
    Lightweight logger for diagnostics. Enable with SHOPCART_DEBUG=1.
    Writes to <data dir>/debug.log and stderr. Swallows its own errors.
    """
    if not debug_on():
        return
    try:
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        msg = f"[{stamp}] {where}: {exc}\n{tb}"
        print(msg, file=sys.stderr)
        os.makedirs(data_dir(), exist_ok=True)
        with open(debug_log_path(), "a", encoding="utf-8") as f:
            f.write(msg + "\n")
    except Exception:
        pass
