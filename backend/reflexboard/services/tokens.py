"""Single-use play tokens.

A token is handed out as part of a play link and authorizes exactly one
score submission for the channel/user it was issued to. Tokens live only in
process memory: a restart drops them and players request a new link.
"""

import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional
from urllib.parse import quote

TOKEN_ALPHABET = '0123456789abcdefghijklmnopqrstuvwxyz'
MIN_TOKEN_LENGTH = 20


@dataclass(frozen=True)
class HolderContext:
    channel_id: str
    user_id: str
    username: str


@dataclass(frozen=True)
class _Entry:
    holder: HolderContext
    expires_at: float


class TokenCache:
    """Thread-safe map of token -> holder with absolute expiry.

    ``consume`` is the correctness guard: it checks expiry itself and removes
    the entry under the lock, so of two concurrent consumers of the same token
    exactly one gets the holder back. ``sweep`` only keeps memory bounded.
    """

    def __init__(self, ttl_sec: float = 900, length: int = 24,
                 clock: Callable[[], float] = time.time):
        if length < MIN_TOKEN_LENGTH:
            raise ValueError(f'token length must be at least {MIN_TOKEN_LENGTH}')
        self.ttl_sec = ttl_sec
        self.length = length
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def _generate(self) -> str:
        return ''.join(secrets.choice(TOKEN_ALPHABET) for _ in range(self.length))

    def create(self, holder: HolderContext) -> str:
        token = self._generate()
        entry = _Entry(holder=holder, expires_at=self._clock() + self.ttl_sec)
        with self._lock:
            # a collision in a 36^24 space just overwrites the older entry
            self._entries[token] = entry
        return token

    def consume(self, token: str) -> Optional[HolderContext]:
        """Remove ``token`` and return its holder, or None if unknown or expired."""
        with self._lock:
            entry = self._entries.pop(token, None)
        if entry is None or entry.expires_at <= self._clock():
            return None
        return entry.holder

    def sweep(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [t for t, e in self._entries.items() if e.expires_at <= now]
            for t in expired:
                del self._entries[t]
        return len(expired)


def run_sweeper(app, cache: TokenCache, interval_sec: float, sleep=None, keep_running=None) -> None:
    """Sweep ``cache`` every ``interval_sec`` until ``keep_running()`` is false."""
    if sleep is None:
        from reflexboard import socketio
        sleep = socketio.sleep
    keep_running = keep_running or (lambda: True)
    while keep_running():
        sleep(interval_sec)
        removed = cache.sweep()
        if removed:
            app.logger.info(f"[token-sweep] removed={removed} remaining={len(cache)}")


def start_sweeper(app, cache: TokenCache, interval_sec: float) -> None:
    """Start ``run_sweeper`` in a Socket.IO background task.

    Called by the server entry point only, so one-shot CLI commands do not
    spawn it. No-ops in TESTING mode unless ENABLE_SWEEPER_IN_TESTS is set.
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_SWEEPER_IN_TESTS'):
        return

    from reflexboard import socketio
    socketio.start_background_task(run_sweeper, app, cache, interval_sec)


def build_play_link(public_url: str, token: str) -> str:
    return f"{public_url.rstrip('/')}/?t={quote(token, safe='')}"


def link_message(link: str, ttl_sec: float) -> str:
    minutes = max(1, int(round(ttl_sec / 60)))
    return f"Here is your private game link (valid for about {minutes} minutes):\n{link}"
