import json
from channels.generic.websocket import AsyncWebsocketConsumer

from core.services.notify import UPDATES_GROUP


class UpdatesConsumer(AsyncWebsocketConsumer):
    GROUP = UPDATES_GROUP

    async def connect(self):
        await self.channel_layer.group_add(self.GROUP, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.GROUP, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        # read-only feed; answer pings so clients can keep the socket alive
        if text_data and text_data.strip() == "ping":
            await self.send(json.dumps({"type": "pong"}))

    async def records_changed(self, event):
        # event: {"type": "records.changed", "resource": "bills", "action": "updated", "id": 3, "ts": "..."}
        await self.send(json.dumps(event))
