# region Docstring
"""
chatlink.services.bootstrap

Connection bootstrap controller.

Overview:
- Owns the session state of one "connect to a server" screen: the typed text, the
    history suggestions, the selected certificate and the phase.
- Turns a submit (typed text, history pick, deep link, open-workspace button) into
    exactly one ConnectionIntent dispatched to the connection manager.
- Offers the way back to the previous server when the screen was opened to add or
    switch servers.

Contents:
- BootstrapController:
    - start() / stop(): subscribe to deep links, auto-submit the default server,
        load the first suggestions; unsubscribe and settle background work.
    - change_text(text): store the text and refresh suggestions for it.
    - submit(text, username), select_history(entry), connect_open(),
        handle_deep_link(event): resolve and dispatch.
    - handle_back_press(), close(): return to the previous server.
    - choose_certificate(), remove_certificate(): certificate selection, removal
        behind a confirmation prompt.
    - delete_history(entry): delete a suggestion.
    - snapshot: frozen BootstrapState for rendering.
    - wait_idle(): await the tracked background tasks.
- build_controller(...): wire a controller from settings with the SQLite stores.

Design Notes:
- Phases: IDLE -> RESOLVING -> DISPATCHED per attempt, CLOSING once the user went
    back to the previous server. A closed controller ignores deep links, submits and
    open-workspace requests; close() without a previous server does nothing.
- Dispatch never waits on storage. Credential persistence and the history update are
    background tasks; the intent already carries the encoded credential. History is
    recorded only after connect() returned (or its awaitable completed) without error.
- Suggestion queries are numbered. Only the result of the most recently issued query
    is applied, whatever order they complete in. Entries deleted during the session
    are filtered out of late results.
"""
# endregion
# region Imports
import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from chatlink.clients import (
    ConfirmationPrompt,
    ConnectionManager,
    FilePicker,
    InviteLinkState,
    SessionSelector,
    SqliteCredentialStore,
)
from chatlink.config import BootstrapSettings, DatabaseSettings, get_settings
from chatlink.constants import Events
from chatlink.database import DatabaseSessionGenerator
from chatlink.events import DeepLinkChannel, DeepLinkEvent
from chatlink.logger import get_logger, log_event
from chatlink.models import (
    BootstrapPhase,
    BootstrapState,
    Certificate,
    ConnectionIntent,
    ServerHistoryEntry,
)
from chatlink.services.certificates import CertificateSelector
from chatlink.services.credentials import CredentialExtractor
from chatlink.services.history import ServerHistoryRepository
from chatlink.urls import normalize

# endregion

logger = get_logger(__name__)


class BootstrapController:
    """
    Sequences normalization, credential extraction, history update and dispatch
    for one server bootstrap screen.
    """

    def __init__(
        self,
        settings: BootstrapSettings,
        history: ServerHistoryRepository,
        credentials: CredentialExtractor,
        certificates: CertificateSelector,
        connection_manager: ConnectionManager,
        session_selector: SessionSelector,
        invite_links: InviteLinkState,
        confirmation: ConfirmationPrompt,
        deep_links: DeepLinkChannel,
        previous_server: Optional[str] = None,
    ):
        required = {
            "settings": settings,
            "history": history,
            "credentials": credentials,
            "certificates": certificates,
            "connection_manager": connection_manager,
            "session_selector": session_selector,
            "invite_links": invite_links,
            "confirmation": confirmation,
            "deep_links": deep_links,
        }
        missing = [name for name, value in required.items() if value is None]
        if missing:
            raise ValueError(f"Missing bootstrap collaborators: {', '.join(missing)}")

        self.settings = settings
        self.history = history
        self.credentials = credentials
        self.certificates = certificates
        self.connection_manager = connection_manager
        self.session_selector = session_selector
        self.invite_links = invite_links
        self.confirmation = confirmation
        self.deep_links = deep_links
        self.previous_server = previous_server

        self._phase = BootstrapPhase.IDLE
        self._text = settings.default_server
        self._connecting_open = False
        self._servers_history: tuple[ServerHistoryEntry, ...] = ()
        self._deleted_ids: set[int] = set()
        self._query_seq = 0
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribe: Optional[Callable[[], None]] = None

    # region State
    @property
    def phase(self) -> BootstrapPhase:
        return self._phase

    @property
    def snapshot(self) -> BootstrapState:
        return BootstrapState(
            phase=self._phase,
            text=self._text,
            connecting_open=self._connecting_open,
            certificate=self.certificates.certificate,
            servers_history=self._servers_history,
            previous_server=self.previous_server,
        )

    # endregion
    # region Lifecycle
    async def start(self) -> Optional[ConnectionIntent]:
        """
        Subscribe to deep links, load suggestions, and auto-submit the default server.

        Returns:
            Optional[ConnectionIntent]: The auto-submitted intent, if any.
        """
        if self._unsubscribe is None:
            self._unsubscribe = self.deep_links.subscribe(self.handle_deep_link)
        self.refresh_history()
        if self.settings.auto_connect and self._text:
            return await self.submit()
        return None

    async def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        await self.wait_idle()

    async def wait_idle(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _spawn(self, coro: Awaitable[Any], name: str) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        task.set_name(f"chatlink-{name}")
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Background task {task.get_name()} failed: {error!r}")

    # endregion
    # region History
    async def _run_query(
        self, seq: int, text: Optional[str]
    ) -> tuple[ServerHistoryEntry, ...]:
        entries = await self.history.query(text or None, limit=self.settings.history_limit)
        if seq != self._query_seq:
            logger.debug(f"Discarding stale history result for {text!r}")
            return self._servers_history
        self._servers_history = tuple(
            entry for entry in entries if entry.id not in self._deleted_ids
        )
        return self._servers_history

    def refresh_history(self, text: Optional[str] = None) -> asyncio.Task:
        """Issue a suggestion query for text. Results of older queries are dropped."""
        self._query_seq += 1
        return self._spawn(self._run_query(self._query_seq, text), "history-query")

    def change_text(self, text: str) -> asyncio.Task:
        """Store the typed text and refresh suggestions. Returns the query task."""
        self._text = text
        return self.refresh_history(text)

    async def delete_history(self, entry: ServerHistoryEntry) -> bool:
        if not await self.history.remove(entry):
            return False
        self._deleted_ids.add(entry.id)
        self._servers_history = tuple(
            server for server in self._servers_history if server.id != entry.id
        )
        return True

    # endregion
    # region Connect
    def _is_closing(self, action: str) -> bool:
        if self._phase != BootstrapPhase.CLOSING:
            return False
        logger.info(f"Ignoring {action}: bootstrap is closing")
        return True

    async def _connect_then_record(
        self, pending: Awaitable[Any], url: str, username: Optional[str]
    ) -> None:
        await pending
        await self.history.record(url, username)

    def _dispatch(self, raw: str, username: Optional[str] = None) -> ConnectionIntent:
        self._phase = BootstrapPhase.RESOLVING
        url = normalize(raw, self.settings.default_domain)
        credential = self.credentials.build(raw, url)
        intent = ConnectionIntent(
            url=url,
            certificate=self.certificates.certificate,
            username=username,
            basic_auth=credential.encoded_auth if credential else None,
        )

        logger.info(f"Connecting to {url}")
        try:
            result = self.connection_manager.connect(intent)
        except Exception:
            self._phase = BootstrapPhase.IDLE
            raise
        self._phase = BootstrapPhase.DISPATCHED

        if credential is not None:
            self._spawn(self.credentials.persist(credential), "credential-persist")
        # History is only touched once the connection manager accepted the attempt.
        if inspect.isawaitable(result):
            self._spawn(self._connect_then_record(result, url, username), "connect")
        else:
            self._spawn(self.history.record(url, username), "history-record")
        return intent

    async def submit(
        self, text: Optional[str] = None, username: Optional[str] = None
    ) -> Optional[ConnectionIntent]:
        """
        Resolve the current text (or text) and dispatch a connection intent.

        Args:
            text (Optional[str]): Replaces the current text when given.
            username (Optional[str]): Username hint, set when picked from history.

        Returns:
            Optional[ConnectionIntent]: The dispatched intent, None once the
                controller went back to the previous server.
        """
        if self._is_closing("submit"):
            return None
        log_event(Events.NEWSERVER_CONNECT_TO_WORKSPACE)
        if text is not None:
            self._text = text
        return self._dispatch(self._text, username)

    async def select_history(self, entry: ServerHistoryEntry) -> Optional[ConnectionIntent]:
        return await self.submit(entry.url, username=entry.username)

    async def connect_open(self) -> Optional[ConnectionIntent]:
        """Join the public open workspace."""
        if self._is_closing("open workspace"):
            return None
        log_event(Events.NEWSERVER_JOIN_OPEN_WORKSPACE)
        self._connecting_open = True
        return self._dispatch(self.settings.open_workspace_url)

    def handle_deep_link(self, event: DeepLinkEvent) -> Optional[asyncio.Task]:
        if not event.server:
            return None
        if self._is_closing(f"deep link to {event.server}"):
            return None
        return self._spawn(self.submit(event.server), "deep-link")

    # endregion
    # region Back navigation
    def handle_back_press(self) -> bool:
        """
        Go back to the previous server if there is one.

        Returns:
            bool: True when handled here, False to let outer navigation handle it.
        """
        if not self.previous_server:
            return False
        self.close()
        return True

    def close(self) -> None:
        """Return to the previous server. Does nothing without one or when already closing."""
        if not self.previous_server:
            logger.debug("No previous server to return to")
            return
        if self._phase == BootstrapPhase.CLOSING:
            return
        self.invite_links.clear_pending_invite()
        self.session_selector.select_previous_server(self.previous_server)
        self._phase = BootstrapPhase.CLOSING
        logger.info(f"Returning to {self.previous_server}")

    # endregion
    # region Certificate
    async def choose_certificate(self) -> Optional[Certificate]:
        return await self.certificates.pick()

    async def remove_certificate(self) -> bool:
        """Clear the certificate after the user confirms. True when it was cleared."""
        if self.certificates.certificate is None:
            return False
        try:
            accepted = await self.confirmation.confirm(
                self.settings.remove_certificate_message
            )
        except Exception as e:
            logger.warning(f"Certificate removal prompt failed: {e}")
            return False
        if not accepted:
            return False
        self.certificates.clear()
        return True

    # endregion


async def build_controller(
    *,
    connection_manager: ConnectionManager,
    session_selector: SessionSelector,
    invite_links: InviteLinkState,
    confirmation: ConfirmationPrompt,
    file_picker: FilePicker,
    deep_links: DeepLinkChannel,
    previous_server: Optional[str] = None,
    settings: Optional[BootstrapSettings] = None,
    db_settings: Optional[DatabaseSettings] = None,
) -> BootstrapController:
    """
    Wire a BootstrapController backed by the local SQLite stores.

    A history table that cannot be created only costs the suggestions.
    """
    settings = settings or get_settings(BootstrapSettings)
    db_settings = db_settings or get_settings(DatabaseSettings)

    history = ServerHistoryRepository(DatabaseSessionGenerator(db_settings))
    try:
        await history.init()
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Server history store could not be initialized: {e}")

    return BootstrapController(
        settings=settings,
        history=history,
        credentials=CredentialExtractor(SqliteCredentialStore(db_settings.credentials_db)),
        certificates=CertificateSelector(file_picker),
        connection_manager=connection_manager,
        session_selector=session_selector,
        invite_links=invite_links,
        confirmation=confirmation,
        deep_links=deep_links,
        previous_server=previous_server,
    )


__all__ = ["BootstrapController", "build_controller"]
