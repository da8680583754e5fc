from fastapi import FastAPI, WebSocket, WebSocketDisconnect
import uvicorn
import json
from datetime import datetime
import logging
from betting import Actor, ChatEvent, Role, RoundRegistry
from command import CommandDispatcher
from utils import BotConfig

config = BotConfig.from_env()

logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI()


def get_timestamp() -> str:
    """Get current time in HH:mm:ss format"""
    return datetime.now().strftime("%H:%M:%S")


class ChannelHub:
    """Websocket connections grouped by channel; delivers bot output to them."""

    def __init__(self, bot_name: str):
        self.bot_name = bot_name
        self.channels: dict[str, dict[WebSocket, str]] = {}

    def users(self, channel: str) -> list[str]:
        return sorted(self.channels.get(channel, {}).values())

    def is_taken(self, channel: str, username: str) -> bool:
        """Names are unique per channel regardless of case, like role matching."""
        return username.lower() in {user.lower() for user in self.users(channel)}

    def join(self, channel: str, websocket: WebSocket, username: str) -> bool:
        """Add a user to a channel. Returns True when the channel was empty."""
        members = self.channels.setdefault(channel, {})
        first = not members
        members[websocket] = username
        logger.info(f"{username} joined {channel}")
        return first

    def leave(self, channel: str, websocket: WebSocket) -> str | None:
        members = self.channels.get(channel, {})
        username = members.pop(websocket, None)
        if not members:
            self.channels.pop(channel, None)
        if username:
            logger.info(f"{username} left {channel}")
        return username

    async def broadcast(self, channel: str, payload: dict) -> None:
        text = json.dumps(payload)
        for ws in list(self.channels.get(channel, {}).keys()):
            try:
                await ws.send_text(text)
            except Exception as e:
                logger.error(f"Failed to send to {channel}: {e}")
                self.leave(channel, ws)

    async def send(self, channel: str, text: str) -> None:
        await self.broadcast(channel, {
            "type": "bot",
            "from": self.bot_name,
            "text": text,
            "timestamp": get_timestamp()
        })


def build_actor(channel: str, username: str) -> Actor:
    """The channel's namesake is its owner; configured names are moderators."""
    roles = set()
    if username.lower() == channel.lower():
        roles.add(Role.OWNER)
    if username.lower() in {name.lower() for name in config.moderators}:
        roles.add(Role.MODERATOR)
    return Actor(display_name=username, roles=roles)


hub = ChannelHub(config.bot_name)
registry = RoundRegistry()
dispatcher = CommandDispatcher(registry, hub, config)

logger.info(config.introduction)


@app.get("/api/channels")
async def get_channels():
    """List channels with a betting round in progress."""
    return {"channels": registry.channels()}


@app.get("/api/channels/{channel}/round")
async def get_round(channel: str):
    """Snapshot of the channel's betting round."""
    betting_round = registry.get(channel)
    if betting_round is None:
        return {"channel": channel, "active": False}
    return {"channel": channel, "active": True, **betting_round.to_dict()}


@app.websocket("/ws/{channel}")
async def websocket_endpoint(websocket: WebSocket, channel: str):
    await websocket.accept()
    username = None
    try:
        while True:
            data = await websocket.receive_text()
            # First message is treated as username if not yet set
            if username is None:
                name = data.strip()
                if not name:
                    await websocket.send_text(json.dumps({"type":"error","text":"Username cannot be empty."}))
                    continue
                if hub.is_taken(channel, name):
                    await websocket.send_text(json.dumps({"type":"error","text":"Username already taken. Choose another."}))
                    continue
                username = name
                first = hub.join(channel, websocket, username)
                await websocket.send_text(json.dumps({"type":"info","text":f"Welcome to {channel}, {username}!"}))
                if first:
                    await hub.send(channel, config.introduction)
                continue

            message = data.strip()
            if not message:
                continue
            await hub.broadcast(channel, {
                "type": "message",
                "channel": channel,
                "text": f"{username}: {message}",
                "timestamp": get_timestamp()
            })
            event = ChatEvent(channel=channel, text=message, actor=build_actor(channel, username))
            await dispatcher.handle(event)
    except WebSocketDisconnect:
        logger.debug(f"Websocket on {channel} disconnected")
    finally:
        if username is not None:
            hub.leave(channel, websocket)


if __name__ == "__main__":
    uvicorn.run("main:app", host=config.host, port=config.port)
