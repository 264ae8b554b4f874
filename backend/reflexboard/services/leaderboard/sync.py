from dataclasses import dataclass
from typing import Optional, Tuple

from flask import current_app

from reflexboard import socketio
from reflexboard.channels import ChannelDirectory
from reflexboard.errors import ChannelError
from reflexboard.services.ledger import ScoreLedger
from .handles import get_handle, set_handle
from .render import render_leaderboard

EDIT = 'edit'
CREATE = 'create'

EDITED = 'edited'
CREATED = 'created'
SKIPPED = 'skipped'


@dataclass(frozen=True)
class ReconcileResult:
    status: str
    message_id: Optional[str] = None


def plan_reconcile(handle: Optional[str], edited: bool) -> Tuple[str, Optional[str]]:
    """Decide what a reconcile ends with.

    A stored handle that was edited successfully stays. Anything else (no
    handle, or the edit failed) means a new message replaces it; the new
    handle is only known once the message is sent.
    """
    if handle and edited:
        return EDIT, handle
    return CREATE, None


class LeaderboardSynchronizer:
    """Keeps one leaderboard message per channel in step with the ledger.

    The stored message id is only a hint. Every reconcile re-checks it by
    fetching and editing the message, and posts (and pins) a fresh one when
    that fails. Two concurrent reconciles for one channel can both post;
    the handle then points at the later one and the next reconcile edits it.
    Chat failures are logged and never raised.
    """

    def __init__(self, ledger: ScoreLedger, directory: ChannelDirectory, size: int = 20):
        self.ledger = ledger
        self.directory = directory
        self.size = size

    def reconcile(self, channel_id: str) -> ReconcileResult:
        logger = current_app.logger
        try:
            channel = self.directory.resolve(channel_id)
        except ChannelError as exc:
            logger.warning(f"[lb-no-channel] channel={channel_id} error={exc}")
            return ReconcileResult(SKIPPED)
        if channel is None:
            logger.info(f"[lb-no-channel] channel={channel_id} not resolvable")
            return ReconcileResult(SKIPPED)

        embed = render_leaderboard(self.ledger.top_n(channel_id, self.size))

        handle = get_handle(channel_id)
        edited = False
        if handle:
            try:
                channel.fetch_message(handle)
                channel.edit_message(handle, embed)
                edited = True
            except ChannelError as exc:
                logger.info(f"[lb-edit-failed] channel={channel_id} message={handle} error={exc}")

        action, message_id = plan_reconcile(handle, edited)
        if action == CREATE:
            try:
                message_id = channel.send_message(embed)
            except ChannelError as exc:
                logger.warning(f"[lb-create-failed] channel={channel_id} error={exc}")
                return ReconcileResult(SKIPPED)
            try:
                channel.pin_message(message_id)
            except ChannelError as exc:
                logger.info(f"[lb-pin-failed] channel={channel_id} message={message_id} error={exc}")
            set_handle(channel_id, message_id)
            logger.info(f"[lb-create] channel={channel_id} message={message_id} replaced={handle}")
            status = CREATED
        else:
            logger.info(f"[lb-edit] channel={channel_id} message={message_id}")
            status = EDITED

        socketio.emit(
            'leaderboard_update',
            {'channel_id': channel_id, 'action': status, 'message_id': message_id},
            to=f"channel:{channel_id}",
            namespace='/ws',
        )
        return ReconcileResult(status, message_id)
