import pytest
import requests

from reflexboard.channels import DiscordChannelDirectory, NullChannelDirectory, build_channel_directory
from reflexboard.errors import ChannelError
from stubs import StubResponse, StubSession


def _directory(*responses):
    session = StubSession(responses)
    return DiscordChannelDirectory('bot-token', api_base='https://discord.test/api', timeout=2.5, session=session), session


def test_session_carries_bot_authorization():
    _, session = _directory()
    assert session.headers['Authorization'] == 'Bot bot-token'


def test_resolve_missing_channel_returns_none():
    directory, session = _directory(StubResponse(404))
    assert directory.resolve('C1') is None
    assert session.calls[0][:3] == ('GET', 'https://discord.test/api/channels/C1', 2.5)


def test_resolve_forbidden_channel_returns_none():
    directory, _ = _directory(StubResponse(403))
    assert directory.resolve('C1') is None


def test_resolve_timeout_raises_channel_error():
    directory, _ = _directory(requests.exceptions.Timeout('read timed out'))
    with pytest.raises(ChannelError):
        directory.resolve('C1')


def test_send_edit_pin_round():
    directory, session = _directory(
        StubResponse(200, {'id': 'C1'}),
        StubResponse(200, {'id': 555}),
        StubResponse(204),
        StubResponse(200, {'id': '555'}),
        StubResponse(200, {'id': '555'}),
    )
    channel = directory.resolve('C1')
    embed = {'title': 't', 'description': 'd'}
    assert channel.send_message(embed) == '555'
    channel.pin_message('555')
    channel.fetch_message('555')
    channel.edit_message('555', embed)

    methods = [(c[0], c[1].replace('https://discord.test/api', '')) for c in session.calls[1:]]
    assert methods == [
        ('POST', '/channels/C1/messages'),
        ('PUT', '/channels/C1/pins/555'),
        ('GET', '/channels/C1/messages/555'),
        ('PATCH', '/channels/C1/messages/555'),
    ]
    assert session.calls[1][3]['json'] == {'embeds': [embed]}
    assert all(c[2] == 2.5 for c in session.calls)


def test_deleted_message_raises_channel_error():
    directory, _ = _directory(StubResponse(200), StubResponse(404))
    channel = directory.resolve('C1')
    with pytest.raises(ChannelError):
        channel.fetch_message('gone')


def test_connection_error_raises_channel_error():
    directory, _ = _directory(StubResponse(200), requests.exceptions.ConnectionError('reset'))
    channel = directory.resolve('C1')
    with pytest.raises(ChannelError):
        channel.send_message({})


def test_build_directory_without_token_is_null():
    assert isinstance(build_channel_directory({'DISCORD_TOKEN': ''}), NullChannelDirectory)
    assert NullChannelDirectory().resolve('C1') is None


def test_build_directory_with_token():
    directory = build_channel_directory({'DISCORD_TOKEN': 'abc', 'CHANNEL_TIMEOUT_SEC': 3})
    assert isinstance(directory, DiscordChannelDirectory)
    assert directory.timeout == 3.0


def test_send_with_non_json_body_raises_channel_error():
    directory, _ = _directory(StubResponse(200), StubResponse(200, text='<html>bad gateway</html>'))
    channel = directory.resolve('C1')
    with pytest.raises(ChannelError):
        channel.send_message({})


def test_send_without_message_id_raises_channel_error():
    directory, _ = _directory(StubResponse(200), StubResponse(200, {'content': ''}))
    channel = directory.resolve('C1')
    with pytest.raises(ChannelError):
        channel.send_message({})


def test_fetch_with_unexpected_body_raises_channel_error():
    directory, _ = _directory(StubResponse(200), StubResponse(200, ['not', 'a', 'message']))
    channel = directory.resolve('C1')
    with pytest.raises(ChannelError):
        channel.fetch_message('555')
