"""Capability availability by connectivity state.

Every user-facing capability has a fixed offline behavior. While online
everything is available; while offline the OFFLINE_BEHAVIOR table decides.
The table is a product decision, not derived from active issues.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Protocol


class Capability(str, Enum):
    """User-facing units of functionality."""

    # Work from local data
    VIEW_CHAT_HISTORY = "view_chat_history"
    VIEW_TRANSCRIPTS = "view_transcripts"
    BROWSE_SETTINGS = "browse_settings"
    VIEW_LEGAL_PAGES = "view_legal_pages"

    # Degraded offline
    COMPOSE_MESSAGES = "compose_messages"
    SEARCH_HISTORY = "search_history"
    EXPORT_DATA = "export_data"

    # Need the network
    SEND_MESSAGES = "send_messages"
    VOICE_CHAT = "voice_chat"
    AI_RESPONSES = "ai_responses"
    REAL_TIME_SYNC = "real_time_sync"
    ACCOUNT_MANAGEMENT = "account_management"


class CapabilityState(str, Enum):
    """Availability of a capability.

    Values:
        AVAILABLE: Works normally
        LIMITED: Works on local data only
        QUEUED: Accepted now, executed when connectivity returns
        UNAVAILABLE: Cannot be used until connectivity returns
    """

    AVAILABLE = "available"
    LIMITED = "limited"
    QUEUED = "queued"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class CapabilityDefinition:
    """Static catalog entry describing a capability."""

    capability: Capability
    title: str
    description: str
    limitation: Optional[str] = None
    alternative_action: Optional[str] = None


@dataclass(frozen=True)
class CapabilityStatus:
    """Computed availability of one capability.

    Attributes:
        capability: Capability id
        status: Current CapabilityState
        title, description, limitation, alternative_action: Copied from the catalog
    """

    capability: Capability
    status: CapabilityState
    title: str
    description: str
    limitation: Optional[str] = None
    alternative_action: Optional[str] = None


CAPABILITY_CATALOG: Dict[Capability, CapabilityDefinition] = {
    Capability.VIEW_CHAT_HISTORY: CapabilityDefinition(
        capability=Capability.VIEW_CHAT_HISTORY,
        title="View Chat History",
        description="Browse your previously loaded conversations",
    ),
    Capability.VIEW_TRANSCRIPTS: CapabilityDefinition(
        capability=Capability.VIEW_TRANSCRIPTS,
        title="View Transcripts",
        description="Access your cached conversation transcripts",
    ),
    Capability.BROWSE_SETTINGS: CapabilityDefinition(
        capability=Capability.BROWSE_SETTINGS,
        title="Browse Settings",
        description="View and modify local application settings",
        limitation="Changes will sync when reconnected",
    ),
    Capability.VIEW_LEGAL_PAGES: CapabilityDefinition(
        capability=Capability.VIEW_LEGAL_PAGES,
        title="View Legal Pages",
        description="Access privacy policy and terms of service",
    ),
    Capability.COMPOSE_MESSAGES: CapabilityDefinition(
        capability=Capability.COMPOSE_MESSAGES,
        title="Compose Messages",
        description="Write messages that will be sent when reconnected",
        limitation="Messages will be queued for sending",
        alternative_action="Messages are saved as drafts",
    ),
    Capability.SEARCH_HISTORY: CapabilityDefinition(
        capability=Capability.SEARCH_HISTORY,
        title="Search History",
        description="Search through your cached conversations",
        limitation="Only searches locally cached data",
    ),
    Capability.EXPORT_DATA: CapabilityDefinition(
        capability=Capability.EXPORT_DATA,
        title="Export Data",
        description="Export your cached conversation data",
        limitation="Only includes locally cached data",
    ),
    Capability.SEND_MESSAGES: CapabilityDefinition(
        capability=Capability.SEND_MESSAGES,
        title="Send Messages",
        description="Send messages to the assistant",
    ),
    Capability.VOICE_CHAT: CapabilityDefinition(
        capability=Capability.VOICE_CHAT,
        title="Voice Chat",
        description="Voice conversations with the assistant",
        alternative_action="Use text chat when reconnected",
    ),
    Capability.AI_RESPONSES: CapabilityDefinition(
        capability=Capability.AI_RESPONSES,
        title="AI Responses",
        description="Get responses from the assistant",
        alternative_action="Messages will be answered when reconnected",
    ),
    Capability.REAL_TIME_SYNC: CapabilityDefinition(
        capability=Capability.REAL_TIME_SYNC,
        title="Real-time Sync",
        description="Sync data across devices in real time",
        alternative_action="Data will sync when reconnected",
    ),
    Capability.ACCOUNT_MANAGEMENT: CapabilityDefinition(
        capability=Capability.ACCOUNT_MANAGEMENT,
        title="Account Management",
        description="Manage account settings and billing",
        alternative_action="Access account settings when reconnected",
    ),
}


# One row per capability. Sending stays unavailable; only composing is queued.
OFFLINE_BEHAVIOR: Dict[Capability, CapabilityState] = {
    Capability.VIEW_CHAT_HISTORY: CapabilityState.AVAILABLE,
    Capability.VIEW_TRANSCRIPTS: CapabilityState.AVAILABLE,
    Capability.VIEW_LEGAL_PAGES: CapabilityState.AVAILABLE,
    Capability.BROWSE_SETTINGS: CapabilityState.LIMITED,
    Capability.SEARCH_HISTORY: CapabilityState.LIMITED,
    Capability.EXPORT_DATA: CapabilityState.LIMITED,
    Capability.COMPOSE_MESSAGES: CapabilityState.QUEUED,
    Capability.SEND_MESSAGES: CapabilityState.UNAVAILABLE,
    Capability.VOICE_CHAT: CapabilityState.UNAVAILABLE,
    Capability.AI_RESPONSES: CapabilityState.UNAVAILABLE,
    Capability.REAL_TIME_SYNC: CapabilityState.UNAVAILABLE,
    Capability.ACCOUNT_MANAGEMENT: CapabilityState.UNAVAILABLE,
}


def evaluate_capabilities(is_offline: bool) -> List[CapabilityStatus]:
    """Compute the status of every declared capability.

    Args:
        is_offline: Current connectivity state

    Returns:
        One CapabilityStatus per Capability, in declaration order
    """
    statuses = []
    for capability in Capability:
        definition = CAPABILITY_CATALOG[capability]
        if is_offline:
            status = OFFLINE_BEHAVIOR.get(capability, CapabilityState.UNAVAILABLE)
        else:
            status = CapabilityState.AVAILABLE
        statuses.append(
            CapabilityStatus(
                capability=capability,
                status=status,
                title=definition.title,
                description=definition.description,
                limitation=definition.limitation,
                alternative_action=definition.alternative_action,
            )
        )
    return statuses


class ConnectivitySignal(Protocol):
    """Anything that reports the runtime's online state."""

    @property
    def is_online(self) -> bool: ...


class CapabilityGate:
    """Capability checks against a live connectivity signal.

    Example:
        gate = CapabilityGate(monitor)
        if gate.can_queue(Capability.COMPOSE_MESSAGES):
            queue.enqueue("send_message", draft)
    """

    def __init__(self, signal: ConnectivitySignal) -> None:
        self._signal = signal

    @property
    def is_offline(self) -> bool:
        return not self._signal.is_online

    def statuses(self) -> List[CapabilityStatus]:
        """Statuses of all capabilities for the current connectivity state."""
        return evaluate_capabilities(self.is_offline)

    def status_of(self, capability: Capability) -> CapabilityStatus:
        """Status of a single capability."""
        for status in self.statuses():
            if status.capability == capability:
                return status
        raise KeyError(f"Unknown capability: {capability}")

    def is_available(self, capability: Capability) -> bool:
        return self.status_of(capability).status == CapabilityState.AVAILABLE

    def is_limited(self, capability: Capability) -> bool:
        return self.status_of(capability).status == CapabilityState.LIMITED

    def can_queue(self, capability: Capability) -> bool:
        return self.status_of(capability).status == CapabilityState.QUEUED
