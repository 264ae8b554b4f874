"""Chat channel access used by the leaderboard synchronizer.

The synchronizer only needs four calls on a channel: fetch a message, send a
new one, edit one in place and pin one. Each call may fail independently and
raises ``ChannelError`` when it does.
"""

from typing import Any, Dict, Optional, Protocol

import requests

from reflexboard.errors import ChannelError

Embed = Dict[str, Any]


class Channel(Protocol):
    channel_id: str

    def fetch_message(self, message_id: str) -> Dict[str, Any]: ...

    def send_message(self, embed: Embed) -> str: ...

    def edit_message(self, message_id: str, embed: Embed) -> None: ...

    def pin_message(self, message_id: str) -> None: ...


class ChannelDirectory(Protocol):
    def resolve(self, channel_id: str) -> Optional[Channel]:
        """Return a channel handle, or None if the channel is gone or not visible."""


class NullChannelDirectory:
    """Used when no bot token is configured. Nothing resolves."""

    def resolve(self, channel_id: str) -> Optional[Channel]:
        return None


def _json(res: requests.Response) -> Dict[str, Any]:
    try:
        body = res.json()
    except ValueError as exc:
        raise ChannelError(f"unreadable response body: {exc}") from exc
    if not isinstance(body, dict):
        raise ChannelError(f"unexpected response body: {type(body).__name__}")
    return body


class DiscordChannel:
    def __init__(self, directory: 'DiscordChannelDirectory', channel_id: str):
        self._directory = directory
        self.channel_id = channel_id

    def fetch_message(self, message_id: str) -> Dict[str, Any]:
        return _json(self._directory.request('GET', f'/channels/{self.channel_id}/messages/{message_id}'))

    def send_message(self, embed: Embed) -> str:
        res = self._directory.request('POST', f'/channels/{self.channel_id}/messages', json={'embeds': [embed]})
        message_id = _json(res).get('id')
        if not message_id:
            raise ChannelError('sent message has no id')
        return str(message_id)

    def edit_message(self, message_id: str, embed: Embed) -> None:
        self._directory.request('PATCH', f'/channels/{self.channel_id}/messages/{message_id}', json={'embeds': [embed]})

    def pin_message(self, message_id: str) -> None:
        self._directory.request('PUT', f'/channels/{self.channel_id}/pins/{message_id}')


class DiscordChannelDirectory:
    """Discord REST v10 client. Every call carries a timeout."""

    def __init__(self, bot_token: str, api_base: str = 'https://discord.com/api/v10',
                 timeout: float = 5.0, session: Optional[requests.Session] = None):
        self.api_base = api_base.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'Bot {bot_token}',
            'User-Agent': 'DiscordBot (reflexboard, 0.1.0)',
        })

    def request(self, method: str, path: str, **kwargs) -> requests.Response:
        try:
            res = self.session.request(method, self.api_base + path, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as exc:
            raise ChannelError(f'{method} {path} failed: {exc}') from exc
        if res.status_code >= 400:
            raise ChannelError(f'{method} {path} returned {res.status_code}')
        return res

    def resolve(self, channel_id: str) -> Optional[DiscordChannel]:
        try:
            res = self.session.get(f'{self.api_base}/channels/{channel_id}', timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise ChannelError(f'resolve channel {channel_id} failed: {exc}') from exc
        if res.status_code in (401, 403, 404):
            return None
        if res.status_code >= 400:
            raise ChannelError(f'resolve channel {channel_id} returned {res.status_code}')
        return DiscordChannel(self, channel_id)


def build_channel_directory(config) -> ChannelDirectory:
    token = config.get('DISCORD_TOKEN')
    if not token:
        return NullChannelDirectory()
    return DiscordChannelDirectory(
        token,
        api_base=config.get('DISCORD_API_BASE', 'https://discord.com/api/v10'),
        timeout=float(config.get('CHANNEL_TIMEOUT_SEC', 5)),
    )
