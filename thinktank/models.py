"""Pure dataclasses and enums for the debate engine. No logic, no deps."""

from dataclasses import dataclass, field
from enum import Enum


class DebateRole(str, Enum):
    HOST = "host"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    BLUE = "blue"
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    WHITE = "white"
    BLACK = "black"
    CUSTOM = "custom"


class DebateMode(str, Enum):
    DEBATE = "debate"
    SIX_HATS = "sixHats"
    ROUNDTABLE = "roundtable"
    SMART = "smart"
    OKR = "okr"
    FEYNMAN = "feynman"
    SWOT = "swot"
    PEST = "pest"
    PREMORTEM = "premortem"
    FIVE_WHYS = "fivewhys"
    FISHBONE = "fishbone"
    RUBBER_DUCK = "rubberduck"
    SCAMPER = "scamper"
    LATERAL_THINKING = "lateralthinking"
    PMI = "pmi"
    DOUBLE_DIAMOND = "doublediamond"
    GROW = "grow"


@dataclass(frozen=True)
class AgentConfig:
    id: str
    name: str
    role: DebateRole
    role_prompt: str
    model_id: str
    active: bool = True


@dataclass(frozen=True)
class DebateConfig:
    id: str
    title: str
    topic: str
    mode: DebateMode
    agents: tuple[AgentConfig, ...]   # roster order is turn order
    host_agent: AgentConfig | None
    max_rounds: int = 3
    max_tokens_per_response: int = 1000
    created_at: float = 0.0
    active: bool = True
    language: str = "English"


@dataclass
class DebateMessage:
    id: str
    agent_id: str
    agent_name: str
    content: str
    timestamp: float
    round: int             # 0 = introduction, max_rounds + 1 = conclusion
    streaming: bool = True


@dataclass(frozen=True)
class DebateStatus:
    current_round: int
    current_agent_index: int
    is_complete: bool
    is_running: bool
    messages: list[DebateMessage] = field(default_factory=list)


@dataclass
class ModelResponse:
    provider: str          # "openai", "anthropic", "gemini", "xai", "ollama"
    model: str             # actual model string used
    content: str
    latency_sec: float
    token_count: int | None
