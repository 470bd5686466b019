"""
Agent Brain - Event timeline, reflection and pluggable memory

WHAT: In-process memory/cognition core for a software agent
WHERE: agentcore/brain/ - the only subsystem with concurrency invariants
WHO: Agents recording what happens to them and persisting durable facts
TIME: log_event/add return after an in-memory update; I/O only in stores

Components:
- memory_store / sqlite_store: volatile and durable key/value memory
- brain: timeline, reflection policy, summarization, module registry
- reflection: analyzer contract and the bounded background worker
- security: access-control/encryption contract (pass-through default)
- modules: conversation, knowledge, preferences, todo
- agent: explicit assembly of all of the above

Boundary Notes:
- Absent keys are reported as NOT_FOUND, never raised
- Hook and sink failures are logged, never propagated
- Summary keys follow ``summary:<YYYYMMDDThhmmss>`` (UTC)
"""

from .agent import AgentBrain, create_agent_brain  # noqa: F401
from .brain import Brain  # noqa: F401
from .callbacks import CallbackResult, invoke_callback  # noqa: F401
from .config import AgentBrainConfig, BrainConfig  # noqa: F401
from .errors import (  # noqa: F401
    MemoryBackendError,
    MemorySerializationError,
    MemoryStoreClosedError,
    ModuleNotRegisteredError,
)
from .memory_store import NOT_FOUND, MemoryStore, VolatileMemoryStore  # noqa: F401
from .models import Event, KnowledgeEntry, StoredValue, TodoItem  # noqa: F401
from .reflection import ReflectionAnalyzer, ReflectionWorker, SelfReflectionAnalyzer  # noqa: F401
from .security import PassThroughSecurity, SecurityPolicy  # noqa: F401
from .sqlite_store import SQLiteMemoryStore, open_long_term_store  # noqa: F401
from .telemetry import BrainSpan, LoggingTelemetryClient, NoOpTelemetryClient, TelemetryClient  # noqa: F401

__all__ = [
    "AgentBrain",
    "AgentBrainConfig",
    "Brain",
    "BrainConfig",
    "BrainSpan",
    "CallbackResult",
    "Event",
    "KnowledgeEntry",
    "LoggingTelemetryClient",
    "MemoryBackendError",
    "MemorySerializationError",
    "MemoryStore",
    "MemoryStoreClosedError",
    "ModuleNotRegisteredError",
    "NOT_FOUND",
    "NoOpTelemetryClient",
    "PassThroughSecurity",
    "ReflectionAnalyzer",
    "ReflectionWorker",
    "SQLiteMemoryStore",
    "SecurityPolicy",
    "SelfReflectionAnalyzer",
    "StoredValue",
    "TelemetryClient",
    "TodoItem",
    "VolatileMemoryStore",
    "create_agent_brain",
    "invoke_callback",
    "open_long_term_store",
]
