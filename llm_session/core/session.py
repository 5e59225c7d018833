"""
Conversation sessions.

A Session keeps the message history of one conversation with one client
configuration, together with an append-only ledger of interactions and
their cost.

State machine:
1. OPEN - accepting turns
2. CLOSED - terminal, every operation raises SessionClosed

A turn is all-or-nothing. The history and the ledger are only touched once
the provider call, text extraction, usage extraction and cost calculation
have all succeeded; any failure leaves the session exactly as it was.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

from ..sdk.client import ClientConfig
from ..sdk.transport import RequestsTransport, Transport
from .errors import NoInteractions, SessionClosed, UnknownModel
from .messages import Message
from .token_counter import TokenUsage

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Lifecycle state of a session."""
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class Interaction:
    """Immutable record of one successful turn.

    The interaction log is the audit trail for both content and cost; records
    are never edited or removed once appended.
    """
    messages: Tuple[Message, Message]  # (user, assistant)
    raw_response: Mapping[str, Any]
    cost: float
    usage: TokenUsage
    model: str

    @property
    def user_message(self) -> Message:
        return self.messages[0]

    @property
    def assistant_message(self) -> Message:
        return self.messages[1]


class Session:
    """Stateful conversation with a single LLM client configuration.

    All mutable state is guarded by one lock, held for the whole of a turn,
    so concurrent ``send_message`` calls on the same session run strictly
    one after another.
    """

    def __init__(self, config: ClientConfig, transport: Optional[Transport] = None):
        """Open a session.

        Args:
            config: Client configuration with resolved options
            transport: HTTP transport, defaults to RequestsTransport
        """
        if not isinstance(config, ClientConfig):
            raise TypeError("config must be a ClientConfig")

        self.config = config
        self.transport = transport if transport is not None else RequestsTransport()
        self._history: List[Message] = []
        self._interactions: List[Interaction] = []
        self._state = SessionState.OPEN
        self._lock = threading.Lock()
        logger.info("Opened session for %s", config.display_name)

    @property
    def display_name(self) -> str:
        return self.config.display_name

    @property
    def state(self) -> SessionState:
        return self._state

    def _check_open(self) -> None:
        if self._state is SessionState.CLOSED:
            raise SessionClosed(f"Session for {self.display_name} is closed")

    def send_message(self, content: str) -> str:
        """Send a user message and return the assistant's reply.

        On success the user and assistant messages are appended to the
        history and one Interaction is appended to the ledger.

        Args:
            content: User message text

        Returns:
            Assistant response text

        Raises:
            SessionClosed: If the session has been closed
            MissingCredentials: If the provider API key is not set
            TransportFailure: Connection-level failure
            ProviderError: Non-200 response from the provider
            MalformedResponse: Success payload without the expected fields
            UnknownModel: No pricing for the resolved model; carries the
                response text
        """
        user_message = Message.user(content)

        with self._lock:
            self._check_open()

            messages = self._history + [user_message]
            response = self.config.chat(messages, self.transport)

            adapter = self.config.adapter
            text = adapter.extract_response_text(response)
            usage = adapter.extract_usage(response)

            # Priced by the resolved model name, never the caller's alias.
            model = self.config.model
            try:
                cost = adapter.calculate_cost(model, usage)
            except UnknownModel as e:
                raise UnknownModel(e.model, response_text=text) from e

            assistant_message = Message.assistant(text)
            interaction = Interaction(
                messages=(user_message, assistant_message),
                raw_response=response,
                cost=cost,
                usage=usage,
                model=model,
            )

            self._history = messages + [assistant_message]
            self._interactions = self._interactions + [interaction]
            logger.debug(
                "%s turn %d: %d input / %d output tokens, cost %.6f",
                self.display_name, len(self._interactions),
                usage.input_tokens, usage.output_tokens, cost,
            )

        return text

    def get_history(self) -> Tuple[Message, ...]:
        """Full message history, oldest first."""
        with self._lock:
            self._check_open()
            return tuple(self._history)

    @property
    def interactions(self) -> Tuple[Interaction, ...]:
        with self._lock:
            self._check_open()
            return tuple(self._interactions)

    def get_latest_cost(self) -> float:
        """Cost of the most recent successful interaction.

        Raises:
            NoInteractions: If no turn has succeeded yet
        """
        with self._lock:
            self._check_open()
            if not self._interactions:
                raise NoInteractions()
            return self._interactions[-1].cost

    def get_total_cost(self) -> float:
        """Sum of all recorded interaction costs, 0.0 when there are none."""
        with self._lock:
            self._check_open()
            return sum((interaction.cost for interaction in self._interactions), 0.0)

    def close(self) -> None:
        """Close the session and release its history. Idempotent."""
        with self._lock:
            if self._state is SessionState.CLOSED:
                return
            self._state = SessionState.CLOSED
            self._history = []
            self._interactions = []
        logger.info("Closed session for %s", self.display_name)

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Session {self.display_name} {self._state.value}, {len(self._history)} messages>"


def open_session(config: ClientConfig, transport: Optional[Transport] = None) -> Session:
    """Open a new session on ``config``."""
    return Session(config, transport=transport)
