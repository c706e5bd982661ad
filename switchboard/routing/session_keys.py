"""
Session keys: the four-part address agent:channel:account:peer.

The order is fixed so keys can be parsed back into their parts. The peer
part may itself contain colons (e.g. "peer:thread"); everything after the
third colon belongs to it.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SessionKey:
    raw: str
    agent_id: Optional[str] = None
    channel_id: Optional[str] = None
    account_id: Optional[str] = None
    peer_id: Optional[str] = None


def build_session_key(agent_id: str, channel_id: str, account_id: str, peer_id: str) -> str:
    return f"{agent_id}:{channel_id}:{account_id}:{peer_id}"


def parse_session_key(raw: str) -> SessionKey:
    """
    Split a session key into its parts.

    "a:telegram:default:u1" → all four parts
    "a:telegram"            → agent and channel only
    "my-session"            → no parts, raw only
    """
    parts = raw.split(":", 3)
    if len(parts) == 1:
        return SessionKey(raw=raw)
    return SessionKey(
        raw=raw,
        agent_id=parts[0],
        channel_id=parts[1],
        account_id=parts[2] if len(parts) > 2 else None,
        peer_id=parts[3] if len(parts) > 3 else None,
    )
