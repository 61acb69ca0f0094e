"""
Realtime Subscription Client

Keeps one long-lived server-push connection to the record store's realtime
endpoint, tracks topic subscriptions and dispatches decoded events to the
handler registered for each topic.

Lifecycle: disconnected -> connecting -> connected(clientId). A dropped stream
(error or EOF) goes back to disconnected and reconnects after a fixed delay
with the last credential; registered topics are kept and re-sent on the next
handshake. Only an explicit disconnect() suppresses reconnection.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

import httpx
import logfire
from pydantic import ValidationError

from models.realtime import (
    CONNECT_EVENT,
    WILDCARD_TOPIC,
    ConnectionState,
    ConnectPayload,
    RealtimeEvent,
    SubscriptionRequest,
)
from services.sse_parser import SSEEvent, SSEStreamParser

DEFAULT_RECONNECT_DELAY = 3.0

Handler = Callable[[RealtimeEvent], Any]


class RealtimeClient:
    """
    Owned realtime connection; pass it around by reference.

    Handlers may be plain functions or coroutine functions. Coroutines are run
    as background tasks so slow handlers never stall the stream.
    """

    def __init__(self, base_url: str, reconnect_delay: float = DEFAULT_RECONNECT_DELAY,
                 http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.reconnect_delay = reconnect_delay

        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(10.0, read=None))

        self._parser = SSEStreamParser()
        self._handlers: Dict[str, Handler] = {}
        self._token: Optional[str] = None
        self._client_id: Optional[str] = None
        self._state = ConnectionState.disconnected

        self._stream_task: Optional[asyncio.Task] = None
        self._reconnect_task: Optional[asyncio.Task] = None
        self._background: Set[asyncio.Task] = set()
        self._stopped = False

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/realtime"

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def client_id(self) -> Optional[str]:
        return self._client_id

    @property
    def topics(self) -> List[str]:
        return list(self._handlers)

    async def __aenter__(self) -> "RealtimeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # Connection lifecycle

    async def connect(self, token: Optional[str] = None) -> None:
        """Replace any existing connection with a new stream (returns once scheduled)"""
        self._token = token
        await self._teardown()
        self._stopped = False
        self._state = ConnectionState.connecting
        logfire.info("realtime_connecting", endpoint=self.endpoint, authenticated=token is not None)
        self._stream_task = asyncio.create_task(self._listen())

    async def disconnect(self) -> None:
        """Explicit teardown; keeps registered topics and does not reconnect"""
        self._stopped = True
        await self._teardown()
        self._state = ConnectionState.disconnected
        logfire.info("realtime_disconnected", endpoint=self.endpoint)

    async def aclose(self) -> None:
        """Disconnect, cancel outstanding handler tasks and release the HTTP client"""
        await self.disconnect()
        pending = list(self._background)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        if self._owns_http:
            await self._http.aclose()

    # Subscriptions

    async def subscribe(self, topic: str, handler: Handler) -> None:
        """
        Register (or replace) the handler for a topic.

        Args:
            topic: Collection name, "collection/recordId", or "*" for every event
            handler: Called with each matching RealtimeEvent
        """
        self._handlers[topic] = handler
        if self._state == ConnectionState.connected and self._client_id:
            await self._send_subscriptions(self._client_id)

    async def unsubscribe(self, topic: str) -> None:
        """Remove a topic; best-effort update of the server side list"""
        if self._handlers.pop(topic, None) is None:
            return
        if self._state == ConnectionState.connected and self._client_id:
            await self._send_subscriptions(self._client_id)

    async def _send_subscriptions(self, client_id: str) -> bool:
        """POST the complete topic list; failures are logged, the next handshake resends"""
        body = SubscriptionRequest(client_id=client_id, subscriptions=self.topics)
        try:
            response = await self._http.post(
                self.endpoint,
                json=body.model_dump(by_alias=True),
                headers=self._auth_headers(),
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logfire.warn("realtime_subscription_failed", client_id=client_id, error=str(e))
            return False

        logfire.debug("realtime_subscriptions_sent", client_id=client_id, topics=body.subscriptions)
        return True

    # Stream handling

    async def _listen(self) -> None:
        headers = {"Accept": "text/event-stream", **self._auth_headers()}
        try:
            async with self._http.stream("GET", self.endpoint, headers=headers) as response:
                response.raise_for_status()
                async for chunk in response.aiter_bytes():
                    for event in self._parser.feed(chunk):
                        self._handle_event(event)
            logfire.info("realtime_stream_closed", endpoint=self.endpoint)
        except Exception as e:
            logfire.warn("realtime_stream_error", endpoint=self.endpoint,
                         error_type=type(e).__name__, error=str(e))
        self._on_stream_terminated()

    def _handle_event(self, event: SSEEvent) -> None:
        if event.name == CONNECT_EVENT:
            self._handle_handshake(event)
            return

        message = RealtimeEvent(name=event.name, data=event.data)
        for topic, handler in list(self._handlers.items()):
            if topic == WILDCARD_TOPIC or event.name.startswith(topic):
                self._invoke(topic, handler, message)

    def _handle_handshake(self, event: SSEEvent) -> None:
        try:
            payload = ConnectPayload.model_validate(event.data)
        except ValidationError:
            logfire.warn("realtime_handshake_invalid", data=event.data)
            return

        self._client_id = payload.client_id
        self._state = ConnectionState.connected
        logfire.info("realtime_connected", client_id=payload.client_id, topics=self.topics)
        if self._handlers:
            self._spawn(self._send_subscriptions(payload.client_id))

    def _invoke(self, topic: str, handler: Handler, message: RealtimeEvent) -> None:
        try:
            result = handler(message)
        except Exception as e:
            logfire.error("realtime_handler_failed", topic=topic, event=message.name, error=str(e))
            return
        if inspect.isawaitable(result):
            self._spawn(result)

    def _on_stream_terminated(self) -> None:
        self._state = ConnectionState.disconnected
        self._client_id = None
        self._parser.reset()
        if self._stopped:
            return
        logfire.info("realtime_reconnect_scheduled", delay=self.reconnect_delay)
        self._reconnect_task = asyncio.create_task(self._reconnect_later())

    async def _reconnect_later(self) -> None:
        await asyncio.sleep(self.reconnect_delay)
        await self.connect(self._token)

    async def _teardown(self) -> None:
        current = asyncio.current_task()
        tasks = [
            task for task in (self._stream_task, self._reconnect_task)
            if task is not None and task is not current and not task.done()
        ]
        self._stream_task = None
        self._reconnect_task = None
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._client_id = None
        self._parser.reset()

    # Helpers

    def _auth_headers(self) -> Dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    def _spawn(self, awaitable: Awaitable) -> None:
        task = asyncio.ensure_future(awaitable)
        self._background.add(task)
        task.add_done_callback(self._background_done)

    def _background_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logfire.error("realtime_background_task_failed", error_type=type(error).__name__, error=str(error))
